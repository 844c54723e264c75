"""Local team logo listing, one sub-directory per league."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

LOGO_EXTENSIONS = frozenset({".svg", ".png"})


def scan_local_logos(root: str | Path) -> dict[str, list[str]]:
    """Return ``{league_dir: [logo file names]}`` for logos under *root*.

    Only ``.svg`` and ``.png`` files are listed. A missing root yields ``{}``.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        logger.warning("Logo directory %s not found", root_path)
        return {}

    logos: dict[str, list[str]] = {}
    for league_dir in sorted(root_path.iterdir()):
        if not league_dir.is_dir():
            continue
        logos[league_dir.name] = sorted(
            entry.name
            for entry in league_dir.iterdir()
            if entry.is_file() and entry.suffix.lower() in LOGO_EXTENSIONS
        )
    return logos

