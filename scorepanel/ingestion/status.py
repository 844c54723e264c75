"""Status classification for ESPN ``status.type.id`` codes.

Every code maps to exactly one ``StatusRule``. Codes missing from
``STATUS_RULES`` use ``DEFAULT_RULE``, so classification never fails.
Some ids belong to sports this feed does not carry and are left to the
default row on purpose.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from scorepanel.ingestion.leagues import LeagueClassifier, default_classifier
from scorepanel.ingestion.schema import GameMode


class StatusText(Enum):
    DETAIL = "detail"
    SHORT_DETAIL = "shortDetail"
    DESCRIPTION = "description"
    KICKOFF = "kickoff"
    FIXED = "fixed"
    SHOOTOUT = "shootout"


@dataclass(frozen=True)
class StatusRule:
    phase: GameMode
    text: StatusText
    fixed: str | None = None
    shows_broadcast: bool = False
    css_class: str | None = None


@dataclass
class StatusResult:
    phase: GameMode
    status: list[str]
    classes: set[str] = field(default_factory=set)
    shows_broadcast: bool = False


_SCHEDULED_DETAIL = StatusRule(GameMode.SCHEDULED, StatusText.DETAIL)
_LIVE_SHORT = StatusRule(GameMode.LIVE, StatusText.SHORT_DETAIL, shows_broadcast=True)
_DELAY = StatusRule(
    GameMode.LIVE, StatusText.FIXED, "Delay", shows_broadcast=True, css_class="delay"
)
_FINAL_DESCRIPTION = StatusRule(GameMode.FINAL, StatusText.DESCRIPTION)
_FINAL_AET = StatusRule(GameMode.FINAL, StatusText.FIXED, "FT (AET)")
_FORFEIT = StatusRule(GameMode.FINAL, StatusText.FIXED, "Forfeit")

DEFAULT_RULE = _SCHEDULED_DETAIL

STATUS_RULES: Mapping[str, StatusRule] = MappingProxyType(
    {
        # Not started
        "5": _SCHEDULED_DETAIL,  # cancelled
        "6": _SCHEDULED_DETAIL,  # postponed
        "0": StatusRule(GameMode.SCHEDULED, StatusText.FIXED, "TBD"),
        "8": StatusRule(GameMode.SCHEDULED, StatusText.FIXED, "Suspended"),
        "1": StatusRule(GameMode.SCHEDULED, StatusText.KICKOFF, shows_broadcast=True),
        # In progress
        "2": _LIVE_SHORT,  # in progress
        "21": _LIVE_SHORT,  # beginning of period
        "22": _LIVE_SHORT,  # end of period
        "24": _LIVE_SHORT,  # overtime
        "25": _LIVE_SHORT,  # soccer first half
        "26": _LIVE_SHORT,  # soccer second half
        "43": _LIVE_SHORT,  # soccer golden time
        "44": _LIVE_SHORT,  # shootout
        "48": _LIVE_SHORT,  # soccer end of extra time
        "23": StatusRule(GameMode.LIVE, StatusText.DESCRIPTION, shows_broadcast=True),
        "7": _DELAY,  # delayed
        "17": _DELAY,  # rain delay
        "49": StatusRule(
            GameMode.LIVE, StatusText.FIXED, "HALFTIME (ET)", shows_broadcast=True
        ),
        # Completed
        "3": _FINAL_DESCRIPTION,  # final
        "28": _FINAL_DESCRIPTION,  # soccer full time
        "45": _FINAL_AET,  # soccer final after extra time
        "46": _FINAL_AET,  # soccer final after golden goal
        "47": StatusRule(GameMode.FINAL, StatusText.SHOOTOUT, "FT (PK) "),
        "4": _FORFEIT,
        "9": _FORFEIT,  # home team forfeit
        "10": _FORFEIT,  # away team forfeit
    }
)


def rule_for(code: Any) -> StatusRule:
    if code is None:
        return DEFAULT_RULE
    return STATUS_RULES.get(str(code).strip(), DEFAULT_RULE)


def format_kickoff(kickoff: datetime, time_format: int, tz: tzinfo) -> str:
    local = kickoff.astimezone(tz)
    if time_format == 24:
        return f"{local.hour}:{local.minute:02d}"
    hour = local.hour % 12 or 12
    suffix = "am" if local.hour < 12 else "pm"
    return f"{hour}:{local.minute:02d} {suffix}"


def get_final_pk(home: dict[str, Any], visitor: dict[str, Any]) -> str:
    # Literal home x visitor order.
    return f"{_shootout_score(home)}x{_shootout_score(visitor)}"


def _shootout_score(competitor: dict[str, Any]) -> str:
    value = competitor.get("shootoutScore") if isinstance(competitor, dict) else None
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _status_type(status: Any) -> dict[str, Any]:
    if not isinstance(status, dict):
        return {}
    status_type = status.get("type")
    return status_type if isinstance(status_type, dict) else {}


def _feed_text(status_type: dict[str, Any], key: str) -> str:
    value = status_type.get(key)
    return value if isinstance(value, str) else ""


def classify_status(
    status: Any,
    home: dict[str, Any],
    visitor: dict[str, Any],
    kickoff: datetime | None,
    time_format: int,
    tz: tzinfo,
) -> StatusResult:
    """Resolve a feed ``status`` object into phase, status text and classes."""

    status_type = _status_type(status)
    rule = rule_for(status_type.get("id"))

    if rule.text is StatusText.FIXED:
        text = rule.fixed or ""
    elif rule.text is StatusText.SHOOTOUT:
        text = (rule.fixed or "") + get_final_pk(home, visitor)
    elif rule.text is StatusText.KICKOFF:
        if kickoff is not None:
            text = format_kickoff(kickoff, time_format, tz)
        else:
            text = _feed_text(status_type, StatusText.DETAIL.value)
    else:
        text = _feed_text(status_type, rule.text.value)

    classes = {rule.css_class} if rule.css_class else set()
    return StatusResult(
        phase=rule.phase,
        status=[text],
        classes=classes,
        shows_broadcast=rule.shows_broadcast,
    )


def get_ordinal(p: int) -> str:
    mod10 = p % 10
    mod100 = p % 100

    if mod10 == 1 and mod100 != 11:
        return f"{p}<sup>ST</sup>"
    if mod10 == 2 and mod100 != 12:
        return f"{p}<sup>ND</sup>"
    if mod10 == 3 and mod100 != 13:
        return f"{p}<sup>RD</sup>"
    return f"{p}<sup>TH</sup>"


def get_period(
    league: str, p: int, classifier: LeagueClassifier | None = None
) -> str:
    """Label for period *p*: extra time for soccer, overtime for the rest."""

    classifier = classifier or default_classifier()
    if classifier.is_soccer(league):
        # Halves are not labelled.
        return "ET" if p > 2 else ""
    if p == 5:
        return "OT"
    if p > 5:
        return f"{p - 4}OT"
    return get_ordinal(p)


def get_final_ot(
    league: str, p: int, classifier: LeagueClassifier | None = None
) -> str:
    """Suffix appended to a final score that went past regulation."""

    classifier = classifier or default_classifier()
    if classifier.is_soccer(league):
        return " (ET)" if p > 2 else ""
    if league == "MLB":
        return f" ({p})" if p > 9 else ""
    if p == 5:
        return " (OT)"
    if p > 5:
        return f" ({p - 4}OT)"
    return ""
