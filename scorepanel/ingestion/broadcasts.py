"""Broadcast channel resolution for scorepanel events."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from scorepanel.ingestion.schema import DisplayConfig

NATIONAL_MARKET = "national"


@dataclass(frozen=True)
class ChannelRewrite:
    """Collapse a family of feed channel names into one short name.

    ``label`` is a fixed sub-label; otherwise the sub-label is the feed name
    with each ``strip`` fragment removed once, in order.
    """

    match: str
    canonical: str
    css_class: str
    exact: bool = False
    label: str | None = None
    strip: tuple[str, ...] = ()

    def matches(self, name: str) -> bool:
        if self.exact:
            return name == self.match
        return name.startswith(self.match)

    def sub_label(self, name: str) -> str:
        if self.label is not None:
            return self.label
        derived = name
        for fragment in self.strip:
            derived = derived.replace(fragment, "", 1)
        return "" if derived == name else derived


# Evaluated in order, first match wins.
CHANNEL_REWRITES: tuple[ChannelRewrite, ...] = (
    ChannelRewrite("FanDuel", "FanDuel", "FanDuel", strip=("FanDuel ", "SN ")),
    ChannelRewrite("NBC Sports", "NBC Sports", "NBCSports", strip=("NBC Sports ",)),
    ChannelRewrite(
        "Space City Home (Alt.)",
        "Space City Home Network",
        "SpaceCityHome",
        exact=True,
        label="(Alt.)",
    ),
    ChannelRewrite("MSGB", "MSG", "MSG", exact=True, label="B"),
)

BROADCAST_ICONS: Mapping[str, str] = MappingProxyType(
    {
        "ABC": "icons/ABC.svg",
        "CBS": "icons/CBS.svg",
        "CBSSN": "icons/CBSSN.svg",
        "ESPN": "icons/ESPN.svg",
        "ESPN2": "icons/ESPN2.svg",
        "ESPNU": "icons/ESPNU.svg",
        "ESPN+": "icons/ESPNPlus.svg",
        "ESPN Deportes": "icons/ESPNDeportes.svg",
        "FOX": "icons/FOX.svg",
        "FS1": "icons/FS1.svg",
        "FS2": "icons/FS2.svg",
        "FOX Deportes": "icons/FOXDeportes.svg",
        "NBC": "icons/NBC.svg",
        "Peacock": "icons/Peacock.svg",
        "USA Net": "icons/USA.svg",
        "TNT": "icons/TNT.svg",
        "TBS": "icons/TBS.svg",
        "truTV": "icons/truTV.svg",
        "beIN SPORTS": "icons/beIN.svg",
        "Univision": "icons/Univision.svg",
        "UniMás": "icons/UniMas.svg",
        "Telemundo": "icons/Telemundo.svg",
        "FanDuel": "icons/FanDuelSN.svg",
    }
)

# Dark logos that need a color inversion on a black background.
BROADCAST_ICONS_INVERT: Mapping[str, str] = MappingProxyType(
    {
        "Apple TV": "icons/AppleTV.svg",
        "Paramount+": "icons/ParamountPlus.svg",
        "TUDN": "icons/TUDN.svg",
        "NBC Sports": "icons/NBCSports.svg",
        "MSG": "icons/MSG.svg",
        "Space City Home Network": "icons/SpaceCityHome.svg",
        "Prime Video": "icons/PrimeVideo.svg",
    }
)


@dataclass
class BroadcastResult:
    channels: list[str] = field(default_factory=list)
    # Local channels not admitted by the current configuration.
    rejected: list[str] = field(default_factory=list)


def rewrite_channel(name: str) -> tuple[str, str]:
    """Return ``(canonical_name, sub_label_html)`` for a feed channel name."""
    for rule in CHANNEL_REWRITES:
        if rule.matches(name):
            label = rule.sub_label(name)
            if not label:
                return rule.canonical, ""
            return rule.canonical, f'<span class="{rule.css_class}">{label}</span>'
    return name, ""


def render_channel(
    name: str,
    sub_label: str = "",
    icons: Mapping[str, str] = BROADCAST_ICONS,
    inverted_icons: Mapping[str, str] = BROADCAST_ICONS_INVERT,
) -> str:
    icon = icons.get(name)
    if icon is not None:
        return f'<img src="{icon}" class="broadcastIcon">{sub_label}'
    icon = inverted_icons.get(name)
    if icon is not None:
        return f'<img src="{icon}" class="broadcastIcon broadcastIconInvert">{sub_label}'
    return name


def dedupe(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _market_type(market: dict[str, Any]) -> str:
    value = market.get("market")
    if isinstance(value, dict):
        value = value.get("type")
    return value.lower() if isinstance(value, str) else ""


def _market_names(market: dict[str, Any]) -> list[str]:
    names = market.get("names")
    if not isinstance(names, list):
        return []
    return [name for name in names if isinstance(name, str) and name]


def _wanted_sides(competitors: list[dict[str, Any]], local_markets: list[str]) -> set[str]:
    sides: set[str] = set()
    for competitor in competitors:
        if not isinstance(competitor, dict):
            continue
        team = competitor.get("team") if isinstance(competitor.get("team"), dict) else {}
        if team.get("abbreviation") in local_markets:
            side = competitor.get("homeAway")
            if isinstance(side, str):
                sides.add(side.lower())
    return sides


def resolve_broadcasts(
    markets: Any,
    competitors: list[dict[str, Any]],
    config: DisplayConfig,
) -> BroadcastResult:
    """Resolve the broadcast markets of one competition into display entries.

    National channels are always admitted unless skipped. Home/away channels
    are admitted when local broadcasts are on, when the side's team is one
    of ``local_markets``, or when the channel is named in
    ``display_local_channels``. The skip list always wins.
    """

    result = BroadcastResult()
    if config.hide_broadcasts or not isinstance(markets, list) or not markets:
        return result

    skip = set(config.skip_channels)
    display_local = set(config.display_local_channels)
    wanted_sides = _wanted_sides(competitors, config.local_markets)
    channels: list[str] = []

    local_markets: list[tuple[str, list[str]]] = []
    for market in markets:
        if not isinstance(market, dict):
            continue
        market_type = _market_type(market)
        names = _market_names(market)
        if market_type == NATIONAL_MARKET:
            for raw_name in names:
                name, sub_label = rewrite_channel(raw_name)
                if name not in skip:
                    channels.append(render_channel(name, sub_label))
        else:
            local_markets.append((market_type, names))

    for market_type, names in local_markets:
        for raw_name in names:
            name, sub_label = rewrite_channel(raw_name)
            if name in skip:
                continue
            if (
                config.show_local_broadcasts
                or market_type in wanted_sides
                or name in display_local
            ):
                channels.append(render_channel(name, sub_label))
            else:
                result.rejected.append(name)

    result.channels = dedupe(channels)
    result.rejected = dedupe(result.rejected)
    return result
