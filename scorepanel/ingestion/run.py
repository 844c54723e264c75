"""CLI entrypoint printing formatted scores as JSON."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from pydantic import ValidationError

from scorepanel.ingestion.espn_client import normalize_date
from scorepanel.ingestion.schema import DisplayConfig
from scorepanel.ingestion.sync import ScoresRequest, collect_scores, expand_which_day


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch and format ESPN scorepanel games for leagues and a date.",
    )

    date_group = parser.add_mutually_exclusive_group()
    date_group.add_argument(
        "--today",
        action="store_true",
        help="Use today's date.",
    )
    date_group.add_argument(
        "--both",
        action="store_true",
        help="Fetch today and yesterday.",
    )
    date_group.add_argument(
        "--date",
        type=str,
        help="Date in YYYY-MM-DD or YYYYMMDD format.",
    )

    parser.add_argument(
        "--leagues",
        type=str,
        required=True,
        help="Comma-separated list of leagues (e.g., ALL_SOCCER,RUGBY).",
    )
    parser.add_argument(
        "--teams",
        type=str,
        default=None,
        help="Comma-separated team abbreviations; @T25 adds ranked teams.",
    )
    parser.add_argument("--hide-broadcasts", action="store_true")
    parser.add_argument("--show-local-broadcasts", action="store_true")
    parser.add_argument(
        "--skip-channels",
        type=str,
        default="",
        help="Comma-separated channel names never to show.",
    )
    parser.add_argument("--time-format", type=int, choices=(12, 24), default=None)
    parser.add_argument("--timezone", type=str, default=None)

    return parser.parse_args(argv)


def _split(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [value.strip() for value in raw.split(",") if value.strip()]


def _parse_leagues(raw: str) -> list[str]:
    leagues = _split(raw)
    if not leagues:
        raise SystemExit("No leagues provided. Use --leagues ALL_SOCCER,RUGBY,...")
    return leagues


def build_requests(args: argparse.Namespace) -> list[ScoresRequest]:
    if args.date:
        try:
            normalize_date(args.date)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc

    teams = _split(args.teams) or None
    requests: list[ScoresRequest] = []
    for league in _parse_leagues(args.leagues):
        try:
            config = DisplayConfig(
                league=league,
                teams=teams,
                hide_broadcasts=args.hide_broadcasts,
                show_local_broadcasts=args.show_local_broadcasts,
                skip_channels=_split(args.skip_channels),
                time_format=args.time_format,
                timezone=args.timezone,
            )
        except ValidationError as exc:
            raise SystemExit(f"Invalid configuration for {league}: {exc}") from exc
        requests.extend(
            expand_which_day(config, args.date, "both" if args.both else None)
        )
    return requests


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    args = _parse_args(argv)
    requests = build_requests(args)

    logging.info("Starting scorepanel run requests=%s", len(requests))
    responses = asyncio.run(collect_scores(requests))

    output = [
        {
            "league": response.league,
            "date": response.date,
            "ok": response.ok,
            "error": response.error,
            "groups": [
                {
                    "label": group.label,
                    "games": [game.to_display_dict() for game in group.games],
                }
                for group in response.groups
            ],
        }
        for response in responses
    ]
    print(json.dumps(output, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
