from __future__ import annotations

import unittest
from datetime import timezone
from zoneinfo import ZoneInfo

from scorepanel.ingestion.filters import (
    TOP_25_TOKEN,
    filter_by_date,
    filter_by_teams,
    select_events,
    sort_events,
)

NEW_YORK = ZoneInfo("America/New_York")


def _competitor(abbr: str, side: str, rank: int | None = None) -> dict:
    competitor = {"homeAway": side, "team": {"abbreviation": abbr}}
    if rank is not None:
        competitor["curatedRank"] = {"current": rank}
    return competitor


def _event(event_id: str, date: str, home: dict, away: dict) -> dict:
    return {
        "id": event_id,
        "date": date,
        "competitions": [{"date": date, "competitors": [home, away]}],
    }


class TeamFilterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dal_usc = _event(
            "1", "2024-01-01T18:00Z", _competitor("DAL", "home", 99), _competitor("USC", "away", 10)
        )
        self.unranked = _event(
            "2", "2024-01-01T18:00Z", _competitor("ABC", "home", 99), _competitor("XYZ", "away")
        )
        self.ranked_only = _event(
            "3", "2024-01-01T18:00Z", _competitor("OSU", "home", 3), _competitor("MSU", "away", 30)
        )

    def test_no_team_list_keeps_everything(self) -> None:
        events = [self.dal_usc, self.unranked]

        self.assertEqual(events, filter_by_teams(events, None))

    def test_team_code_and_top_25_wildcard(self) -> None:
        kept = filter_by_teams(
            [self.dal_usc, self.unranked, self.ranked_only], ["DAL", TOP_25_TOKEN]
        )

        self.assertEqual(["1", "3"], [event["id"] for event in kept])

    def test_ranked_teams_need_the_wildcard(self) -> None:
        kept = filter_by_teams([self.ranked_only, self.unranked], ["DAL"])

        self.assertEqual([], kept)

    def test_rank_bounds(self) -> None:
        for rank, expected in ((0, []), (26, []), (1, ["r"]), (25, ["r"])):
            event = _event(
                "r", "2024-01-01T18:00Z", _competitor("A", "home", rank), _competitor("B", "away")
            )
            kept = filter_by_teams([event], [TOP_25_TOKEN])
            self.assertEqual(expected, [e["id"] for e in kept], rank)


class DateFilterTests(unittest.TestCase):
    def test_local_date_wins_over_utc_date(self) -> None:
        evening = _event(
            "evening", "2024-01-01T23:30Z", _competitor("A", "home"), _competitor("B", "away")
        )
        late = _event(
            "late", "2024-01-02T03:00Z", _competitor("C", "home"), _competitor("D", "away")
        )
        early = _event(
            "early", "2024-01-01T04:00Z", _competitor("E", "home"), _competitor("F", "away")
        )
        events = [evening, late, early]

        jan_1 = filter_by_date(events, "20240101", NEW_YORK)
        jan_2 = filter_by_date(events, "20240102", NEW_YORK)
        dec_31 = filter_by_date(events, "20231231", NEW_YORK)

        self.assertEqual(["evening", "late"], [event["id"] for event in jan_1])
        self.assertEqual([], jan_2)
        self.assertEqual(["early"], [event["id"] for event in dec_31])

    def test_same_events_in_utc(self) -> None:
        late = _event(
            "late", "2024-01-02T03:00Z", _competitor("C", "home"), _competitor("D", "away")
        )

        self.assertEqual([late], filter_by_date([late], "20240102", timezone.utc))

    def test_events_without_valid_date_are_dropped(self) -> None:
        event = {"id": "x", "date": "not-a-date", "competitions": [{}]}

        self.assertEqual([], filter_by_date([event], "20240101", timezone.utc))

    def test_out_of_range_start_is_dropped(self) -> None:
        ancient = _event(
            "ancient", "0001-01-01T00:00Z", _competitor("A", "home"), _competitor("B", "away")
        )
        normal = _event(
            "normal", "2024-01-01T18:00Z", _competitor("C", "home"), _competitor("D", "away")
        )

        kept = filter_by_date([ancient, normal], "20240101", NEW_YORK)

        self.assertEqual(["normal"], [event["id"] for event in kept])


class SortTests(unittest.TestCase):
    def test_sort_by_time_then_away_code(self) -> None:
        # Away team listed first in the feed for "b" to check flag-based lookup.
        a = _event("a", "2024-01-01T18:00Z", _competitor("H1", "home"), _competitor("ZZZ", "away"))
        b = {
            "id": "b",
            "date": "2024-01-01T18:00Z",
            "competitions": [
                {
                    "date": "2024-01-01T18:00Z",
                    "competitors": [_competitor("AAA", "away"), _competitor("H2", "home")],
                }
            ],
        }
        c = _event("c", "2024-01-01T15:00Z", _competitor("H3", "home"), _competitor("MMM", "away"))

        ordered = sort_events([a, b, c])

        self.assertEqual(["c", "b", "a"], [event["id"] for event in ordered])

    def test_sort_is_deterministic(self) -> None:
        events = [
            _event(str(i), f"2024-01-01T1{i % 3}:00Z", _competitor("H", "home"), _competitor(f"A{i}", "away"))
            for i in range(9)
        ]

        first = [event["id"] for event in sort_events(events)]
        second = [event["id"] for event in sort_events(list(reversed(events)))]

        self.assertEqual(first, second)

    def test_out_of_range_start_sorts_last(self) -> None:
        ancient = _event(
            "ancient", "0001-01-01T00:00+05:00", _competitor("A", "home"), _competitor("B", "away")
        )
        normal = _event(
            "normal", "2024-01-01T18:00Z", _competitor("C", "home"), _competitor("D", "away")
        )

        ordered = sort_events([ancient, normal])

        self.assertEqual(["normal", "ancient"], [event["id"] for event in ordered])

    def test_select_events_chains_filters(self) -> None:
        keep = _event("keep", "2024-01-01T18:00Z", _competitor("DAL", "home"), _competitor("B", "away"))
        other_team = _event("team", "2024-01-01T17:00Z", _competitor("X", "home"), _competitor("Y", "away"))
        other_day = _event("day", "2024-01-02T18:00Z", _competitor("DAL", "home"), _competitor("B", "away"))

        selected = select_events(
            [keep, other_team, other_day, None, "junk"], ["DAL"], "20240101", timezone.utc
        )

        self.assertEqual([keep], selected)
        self.assertEqual([], select_events(None, None, "20240101", timezone.utc))


if __name__ == "__main__":
    unittest.main()
