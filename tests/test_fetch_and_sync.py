from __future__ import annotations

import asyncio
import json
import unittest
from datetime import date, datetime
from unittest.mock import MagicMock, patch
from urllib.error import URLError
from zoneinfo import ZoneInfo

from scorepanel.ingestion.espn_client import (
    build_scorepanel_url,
    fetch_scorepanel,
    normalize_date,
)
from scorepanel.ingestion.schema import DisplayConfig
from scorepanel.ingestion.sync import (
    ScoresRequest,
    collect_scores,
    expand_which_day,
    get_scores,
    split_score_groups,
)
from scorepanel.settings import Settings

UTC_SETTINGS = Settings(time_format=24, timezone="UTC")
# UTC+14 and UTC-11 are always on different calendar days.
KIRITIMATI = ZoneInfo("Pacific/Kiritimati")
PAGO_PAGO = ZoneInfo("Pacific/Pago_Pago")


def _event(event_id: str, kickoff: str, home: str, away: str) -> dict:
    return {
        "id": event_id,
        "date": kickoff,
        "status": {"type": {"id": "1"}},
        "competitions": [
            {
                "date": kickoff,
                "competitors": [
                    {"homeAway": "home", "team": {"abbreviation": home}, "score": "0"},
                    {"homeAway": "away", "team": {"abbreviation": away}, "score": "0"},
                ],
                "broadcasts": [],
            }
        ],
    }


SCOREPANEL_BODY = {
    "scores": [
        {
            "leagues": [{"name": "English Premier League"}],
            "events": [_event("1", "2024-01-01T15:00Z", "ARS", "CHE")],
        },
        {
            "leagues": [{"name": "Spanish LALIGA"}],
            "events": [
                _event("2", "2024-01-01T20:00Z", "RMA", "BAR"),
                _event("3", "2024-01-01T18:00Z", "SEV", "BET"),
            ],
        },
    ]
}


def _fake_urlopen(body: dict, status: int = 200) -> MagicMock:
    response = MagicMock()
    response.status = status
    response.read.return_value = json.dumps(body).encode("utf-8")
    context = MagicMock()
    context.__enter__.return_value = response
    context.__exit__.return_value = False
    return context


class NormalizeDateTests(unittest.TestCase):
    def test_accepted_formats(self) -> None:
        self.assertEqual("20240101", normalize_date("20240101"))
        self.assertEqual("20240101", normalize_date("2024-01-01"))
        self.assertEqual("20240101", normalize_date(date(2024, 1, 1)))
        utc_today = datetime.now(ZoneInfo("UTC")).strftime("%Y%m%d")
        self.assertEqual(utc_today, normalize_date("today", ZoneInfo("UTC")))
        self.assertEqual(utc_today, normalize_date(None, ZoneInfo("UTC")))

    def test_today_follows_the_given_zone(self) -> None:
        east = normalize_date(None, KIRITIMATI)
        west = normalize_date("today", PAGO_PAGO)

        self.assertEqual(datetime.now(KIRITIMATI).strftime("%Y%m%d"), east)
        self.assertEqual(datetime.now(PAGO_PAGO).strftime("%Y%m%d"), west)
        self.assertNotEqual(east, west)

    def test_rejects_garbage(self) -> None:
        with self.assertRaises(ValueError):
            normalize_date("01/01/2024")


class FetchScorepanelTests(unittest.TestCase):
    def test_build_url(self) -> None:
        url = build_scorepanel_url(
            "rugby/scorepanel", "2024-01-01", 200, base_url="https://espn.test/"
        )

        self.assertEqual(
            "https://espn.test/apis/site/v2/sports/rugby/scorepanel?dates=20240101&limit=200",
            url,
        )

    def test_fetch_uses_league_endpoint(self) -> None:
        with patch(
            "scorepanel.ingestion.espn_client.urlopen",
            return_value=_fake_urlopen(SCOREPANEL_BODY),
        ) as mock_urlopen:
            body = fetch_scorepanel("SIX_NATIONS", "20240101")

        self.assertEqual(SCOREPANEL_BODY, body)
        request = mock_urlopen.call_args.args[0]
        self.assertIn("/apis/site/v2/sports/rugby/scorepanel?dates=20240101", request.full_url)

    def test_fetch_returns_error_after_retries(self) -> None:
        with patch(
            "scorepanel.ingestion.espn_client.urlopen",
            side_effect=URLError("boom"),
        ) as mock_urlopen, patch("scorepanel.ingestion.espn_client.time.sleep") as mock_sleep:
            body = fetch_scorepanel("ALL_SOCCER", "20240101")

        self.assertFalse(body["ok"])
        self.assertEqual("Failed to fetch ESPN scorepanel", body["error"])
        self.assertEqual("20240101", body["date"])
        self.assertEqual(3, mock_urlopen.call_count)
        self.assertEqual(2, mock_sleep.call_count)

    def test_fetch_non_200(self) -> None:
        with patch(
            "scorepanel.ingestion.espn_client.urlopen",
            return_value=_fake_urlopen({"message": "nope"}, status=503),
        ):
            body = fetch_scorepanel("ALL_SOCCER", "20240101")

        self.assertEqual(503, body["status"])
        self.assertEqual("ESPN returned non-200 response", body["error"])

    def test_fetch_bad_date_does_not_hit_network(self) -> None:
        with patch("scorepanel.ingestion.espn_client.urlopen") as mock_urlopen:
            body = fetch_scorepanel("ALL_SOCCER", "yesterday-ish")

        self.assertFalse(body["ok"])
        mock_urlopen.assert_not_called()


class SyncTests(unittest.TestCase):
    def test_split_score_groups(self) -> None:
        groups = split_score_groups(SCOREPANEL_BODY, "ALL_SOCCER")

        self.assertEqual(
            ["English Premier League", "Spanish LALIGA"], [label for label, _ in groups]
        )

    def test_split_scoreboard_body_is_one_group(self) -> None:
        body = {"leagues": [{"name": "South African First Division"}], "events": []}

        groups = split_score_groups(body, "RSA_FIRST_DIV")

        self.assertEqual([("South African First Division", body)], groups)
        self.assertEqual([], split_score_groups({}, "RSA_FIRST_DIV"))

    def test_get_scores_formats_each_group(self) -> None:
        with patch(
            "scorepanel.ingestion.sync.fetch_scorepanel", return_value=SCOREPANEL_BODY
        ):
            groups = get_scores(DisplayConfig(league="ALL_SOCCER"), "20240101", UTC_SETTINGS)

        self.assertEqual(2, len(groups))
        self.assertEqual("Spanish LALIGA", groups[1].label)
        self.assertEqual(["BET", "BAR"], [g.visitor_team.code for g in groups[1].games])
        self.assertEqual(["18:00"], groups[1].games[0].status)

    def test_get_scores_fetch_error_yields_empty_list(self) -> None:
        with patch(
            "scorepanel.ingestion.sync.fetch_scorepanel",
            return_value={"ok": False, "error": "Failed to fetch ESPN scorepanel"},
        ):
            groups = get_scores(DisplayConfig(league="ALL_SOCCER"), "20240101", UTC_SETTINGS)

        self.assertEqual([], groups)

    def test_get_scores_non_object_body_yields_empty_list(self) -> None:
        with patch("scorepanel.ingestion.sync.fetch_scorepanel", return_value=[{"events": []}]):
            groups = get_scores(DisplayConfig(league="ALL_SOCCER"), "20240101", UTC_SETTINGS)

        self.assertEqual([], groups)

    def test_expand_which_day(self) -> None:
        config = DisplayConfig(league="RUGBY")

        both = expand_which_day(config, "20200101", "both", today=date(2024, 1, 2))
        single = expand_which_day(config, "20200101")

        self.assertEqual([date(2024, 1, 2), date(2024, 1, 1)], [r.game_date for r in both])
        self.assertEqual(["20200101"], [r.game_date for r in single])

    def test_both_days_use_the_display_zone(self) -> None:
        east = expand_which_day(
            DisplayConfig(league="RUGBY", timezone="Pacific/Kiritimati"), None, "both", settings=UTC_SETTINGS
        )
        west = expand_which_day(
            DisplayConfig(league="RUGBY"), None, "both", settings=Settings(timezone="Pacific/Pago_Pago")
        )

        self.assertEqual(datetime.now(KIRITIMATI).date(), east[0].game_date)
        self.assertEqual(datetime.now(PAGO_PAGO).date(), west[0].game_date)
        self.assertNotEqual(east[0].game_date, west[0].game_date)

    def test_today_request_uses_the_display_zone(self) -> None:
        with patch("scorepanel.ingestion.sync.fetch_scorepanel", return_value={"events": []}) as mock_fetch:
            response = asyncio.run(
                collect_scores(
                    [ScoresRequest(DisplayConfig(league="RUGBY", timezone="Pacific/Kiritimati"), "today")],
                    UTC_SETTINGS,
                )
            )

        expected = datetime.now(KIRITIMATI).strftime("%Y%m%d")
        self.assertEqual(expected, response[0].date)
        mock_fetch.assert_called_once_with("RUGBY", expected)

    def test_collect_scores_isolates_failures(self) -> None:
        def fake_fetch(league_key, game_date):
            if league_key == "BROKEN":
                raise RuntimeError("socket closed")
            return SCOREPANEL_BODY

        requests = [
            ScoresRequest(DisplayConfig(league="ALL_SOCCER"), "20240101"),
            ScoresRequest(DisplayConfig(league="BROKEN"), "20240101"),
            ScoresRequest(DisplayConfig(league="RUGBY"), "2024-01-01"),
            ScoresRequest(DisplayConfig(league="ALL_SOCCER"), "bad date"),
        ]

        with patch("scorepanel.ingestion.sync.fetch_scorepanel", side_effect=fake_fetch):
            responses = asyncio.run(collect_scores(requests, UTC_SETTINGS))

        self.assertEqual(["ALL_SOCCER", "BROKEN", "RUGBY", "ALL_SOCCER"], [r.league for r in responses])
        self.assertEqual([True, False, True, False], [r.ok for r in responses])
        self.assertEqual("socket closed", responses[1].error)
        self.assertEqual([], responses[1].groups)
        self.assertEqual(2, len(responses[0].groups))
        self.assertEqual("20240101", responses[2].date)

    def test_collect_scores_empty(self) -> None:
        self.assertEqual([], asyncio.run(collect_scores([])))


if __name__ == "__main__":
    unittest.main()
