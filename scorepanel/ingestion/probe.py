"""Quick probe for ESPN scorepanel availability."""

from __future__ import annotations

import argparse
import logging

from scorepanel.ingestion.espn_client import fetch_scorepanel
from scorepanel.ingestion.leagues import classify_league
from scorepanel.ingestion.sync import split_score_groups


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Probe ESPN scorepanel for a league/date and print group counts.",
    )
    parser.add_argument(
        "--league",
        type=str,
        default="ALL_SOCCER",
        help="League key (e.g., ALL_SOCCER, RUGBY).",
    )
    parser.add_argument(
        "--date",
        type=str,
        default="today",
        help="Date in YYYY-MM-DD or YYYYMMDD format (default: today).",
    )
    return parser.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = _parse_args()
    league = args.league.strip()
    descriptor = classify_league(league)
    logging.info(
        "League %s: family=%s path=%s",
        descriptor.id,
        descriptor.sport_family.value,
        descriptor.api_path,
    )

    payload = fetch_scorepanel(league, args.date)
    if payload.get("error"):
        logging.error("ESPN error: %s", payload.get("error"))
        details = payload.get("details")
        if details:
            logging.error("Details: %s", details)
        raise SystemExit(1)

    groups = split_score_groups(payload, league)
    for label, group in groups:
        logging.info("%s: %s events", label, len(group.get("events") or []))
    logging.info("Fetched %s groups for league=%s date=%s", len(groups), league, args.date)


if __name__ == "__main__":
    main()
