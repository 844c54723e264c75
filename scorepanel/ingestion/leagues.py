"""League membership tables and classification for ESPN scorepanel feeds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class SportFamily(Enum):
    SOCCER = "soccer"
    RUGBY = "rugby"
    OTHER = "other"


DEFAULT_SPORT = "soccer"

LEAGUE_PATHS: Mapping[str, str] = MappingProxyType(
    {
        "ALL_SOCCER": "soccer/scorepanel",
        "SOCCER_ON_TV": "soccer/scorepanel",
        "RSA_FIRST_DIV": "soccer/rsa.2",
        "RUGBY": "rugby/scorepanel",
    }
)

SOCCER_LEAGUES: frozenset[str] = frozenset(
    {
        # International
        "AFC_ASIAN_CUP",
        "AFC_ASIAN_CUP_Q",
        "AFF_CUP",
        "AFR_NATIONS_CUP",
        "AFR_NATIONS_CUP_Q",
        "CONCACAF_GOLD_CUP",
        "CONCACAF_NATIONS_Q",
        "CONCACAF_WOMENS_CHAMPIONSHIP",
        "CONMEBOL_COPA_AMERICA",
        "FIFA_CLUB_WORLD_CUP",
        "FIFA_CONFEDERATIONS_CUP",
        "FIFA_MENS_FRIENDLIES",
        "FIFA_MENS_OLYMPICS",
        "FIFA_WOMENS_FRIENDLIES",
        "FIFA_WOMENS_WORLD_CUP",
        "FIFA_WOMENS_OLYMPICS",
        "FIFA_WORLD_CUP",
        "FIFA_WORLD_CUP_Q_AFC",
        "FIFA_WORLD_CUP_Q_CAF",
        "FIFA_WORLD_CUP_Q_CONCACAF",
        "FIFA_WORLD_CUP_Q_CONMEBOL",
        "FIFA_WORLD_CUP_Q_OFC",
        "FIFA_WORLD_CUP_Q_UEFA",
        "FIFA_WORLD_U17",
        "FIFA_WORLD_U20",
        "UEFA_CHAMPIONS",
        "UEFA_EUROPA",
        "UEFA_EUROPEAN_CHAMPIONSHIP",
        "UEFA_EUROPEAN_CHAMPIONSHIP_Q",
        "UEFA_EUROPEAN_CHAMPIONSHIP_U19",
        "UEFA_EUROPEAN_CHAMPIONSHIP_U21",
        "UEFA_NATIONS",
        "SAFF_CHAMPIONSHIP",
        "WOMENS_EUROPEAN_CHAMPIONSHIP",
        # UK / Ireland
        "ENG_CARABAO_CUP",
        "ENG_CHAMPIONSHIP",
        "ENG_EFL",
        "ENG_FA_CUP",
        "ENG_LEAGUE_1",
        "ENG_LEAGUE_2",
        "ENG_NATIONAL",
        "ENG_PREMIERE_LEAGUE",
        "IRL_PREM",
        "NIR_PREM",
        "SCO_PREM",
        "SCO_CHAMPIONSHIP",
        "SCO_CHALLENGE_CUP",
        "SCO_CIS",
        "SCO_CUP",
        "SCO_LEAGUE_1",
        "SCO_LEAGUE_2",
        "WAL_PREM",
        # Europe
        "AUT_BUNDESLIGA",
        "BEL_DIV_A",
        "DEN_SAS_LIGAEN",
        "ESP_COPA_DEL_REY",
        "ESP_LALIGA",
        "ESP_SEGUNDA_DIV",
        "FRA_COUPE_DE_FRANCE",
        "FRA_COUPE_DE_LA_LIGUE",
        "FRA_LIGUE_1",
        "FRA_LIGUE_2",
        "GER_2_BUNDESLIGA",
        "GER_BUNDESLIGA",
        "GER_DFB_POKAL",
        "GRE_SUPER_LEAGUE",
        "ISR_PREMIER_LEAGUE",
        "ITA_COPPA_ITALIA",
        "ITA_SERIE_A",
        "ITA_SERIE_B",
        "MLT_PREMIER_LEAGUE",
        "NED_EERSTE_DIVISIE",
        "NED_EREDIVISIE",
        "NED_KNVB_BEKER",
        "NOR_ELITESERIEN",
        "POR_LIGA",
        "ROU_FIRST_DIV",
        "RUS_PREMIER_LEAGUE",
        "TUR_SUPER_LIG",
        "SUI_SUPER_LEAGUE",
        "SWE_ALLSVENSKANLIGA",
        # South America
        "ARG_COPA",
        "ARG_NACIONAL_B",
        "ARG_PRIMERA_DIV_B",
        "ARG_PRIMERA_DIV_C",
        "ARG_PRIMERA_DIV_D",
        "ARG_SUPERLIGA",
        "BOL_LIGA_PRO",
        "BRA_CAMP_CARIOCA",
        "BRA_CAMP_GAUCHO",
        "BRA_CAMP_MINEIRO",
        "BRA_CAMP_PAULISTA",
        "BRA_COPA",
        "BRA_SERIE_A",
        "BRA_SERIE_B",
        "BRA_SERIE_C",
        "CHI_COPA",
        "CHI_PRIMERA_DIV",
        "COL_COPA",
        "COL_PRIMERA_A",
        "COL_PRIMERA_B",
        "CONMEBOL_COPA_LIBERTADORES",
        "CONMEBOL_COPA_SUDAMERICANA",
        "ECU_PRIMERA_A",
        "PAR_PRIMERA_DIV",
        "PER_PRIMERA_PRO",
        "URU_PRIMERA_DIV",
        "VEN_PRIMERA_PRO",
        # North America
        "CONCACAF_CHAMPIONS",
        "CONCACAF_LEAGUE",
        "CRC_PRIMERA_DIV",
        "GUA_LIGA_NACIONAL",
        "HON_PRIMERA_DIV",
        "JAM_PREMIER_LEAGUE",
        "MEX_ASCENSO_MX",
        "MEX_COPA_MX",
        "MEX_LIGA_BANCOMER",
        "SLV_PRIMERA_DIV",
        "USA_MLS",
        "USA_NCAA_SL_M",
        "USA_NCAA_SL_W",
        "USA_NASL",
        "USA_NWSL",
        "USA_OPEN",
        "USA_USL",
        # Asia
        "AFC_CHAMPIONS",
        "AUS_A_LEAGUE",
        "CHN_SUPER_LEAGUE",
        "IDN_SUPER_LEAGUE",
        "IND_I_LEAGUE",
        "IND_SUPER_LEAGUE",
        "JPN_J_LEAGUE",
        "MYS_SUPER_LEAGUE",
        "SGP_PREMIER_LEAGUE",
        "THA_PREMIER_LEAGUE",
        # Africa
        "CAF_CHAMPIONS",
        "CAF_CONFED_CUP",
        "GHA_PREMIERE_LEAGUE",
        "KEN_PREMIERE_LEAGUE",
        "NGA_PRO_LEAGUE",
        "RSA_FIRST_DIV",
        "RSA_NEDBANK_CUP",
        "RSA_PREMIERSHIP",
        "RSA_TELKOM_KNOCKOUT",
        "UGA_SUPER_LEAGUE",
        "ZAM_SUPER_LEAGUE",
        "ZIM_PREMIER_LEAGUE",
    }
)

# League key -> display name used by the feed for its score groups.
RUGBY_LEAGUES: Mapping[str, str] = MappingProxyType(
    {
        "RUGBY": "Rugby",
        "PREMIERSHIP_RUGBY": "Premiership Rugby",
        "RUGBY_WORLD_CUP": "Rugby World Cup",
        "SIX_NATIONS": "Six Nations",
        "THE_RUGBY_CHAMPIONSHIP": "The Rugby Championship",
        "EUROPEAN_RUGBY_CHAMPIONS_CUP": "European Rugby Champions Cup",
        "UNITED_RUGBY_CHAMPIONSHIP": "United Rugby Championship",
        "SUPER_RUGBY_PACIFIC": "Super Rugby Pacific",
        "OLYMPIC_MENS_7S": "Olympic Men's 7s",
        "OLYMPIC_WOMENS_RUGBY_SEVENS": "Olympic Women's Rugby Sevens",
        "INTERNATIONAL_TEST_MATCH": "International Test Match",
        "URBA_TOP_12": "URBA Top 12",
        "MITRE_10_CUP": "Mitre 10 Cup",
        "Major League Rugby": "Major League Rugby",
    }
)


@dataclass(frozen=True)
class LeagueDescriptor:
    id: str
    sport_family: SportFamily
    api_path: str


class LeagueClassifier:
    """Read-only league lookup built from static tables.

    Leagues missing from every table classify as ``SportFamily.OTHER`` and are
    fetched from the default sport endpoint.
    """

    def __init__(
        self,
        soccer_leagues: frozenset[str] = SOCCER_LEAGUES,
        rugby_leagues: Mapping[str, str] = RUGBY_LEAGUES,
        league_paths: Mapping[str, str] = LEAGUE_PATHS,
    ) -> None:
        self._soccer = frozenset(soccer_leagues)
        self._rugby_keys = frozenset(rugby_leagues)
        self._rugby_names = frozenset(rugby_leagues.values())
        self._paths = MappingProxyType(dict(league_paths))

    def is_soccer(self, league: str | None) -> bool:
        return league in self._soccer

    def is_rugby(self, league: str | None) -> bool:
        return league in self._rugby_keys or league in self._rugby_names

    def sport_family(self, league: str | None) -> SportFamily:
        if self.is_soccer(league):
            return SportFamily.SOCCER
        if self.is_rugby(league):
            return SportFamily.RUGBY
        return SportFamily.OTHER

    def get_league_path(self, league: str | None) -> str | None:
        if league is None:
            return None
        return self._paths.get(league)

    def classify(self, league: str) -> LeagueDescriptor:
        family = self.sport_family(league)
        api_path = self.get_league_path(league)
        if api_path is None:
            sport = "rugby" if family is SportFamily.RUGBY else DEFAULT_SPORT
            api_path = f"{sport}/scorepanel"
        return LeagueDescriptor(id=league, sport_family=family, api_path=api_path)


_DEFAULT_CLASSIFIER = LeagueClassifier()


def default_classifier() -> LeagueClassifier:
    return _DEFAULT_CLASSIFIER


def is_soccer(league: str | None) -> bool:
    return _DEFAULT_CLASSIFIER.is_soccer(league)


def is_rugby(league: str | None) -> bool:
    return _DEFAULT_CLASSIFIER.is_rugby(league)


def sport_family(league: str | None) -> SportFamily:
    return _DEFAULT_CLASSIFIER.sport_family(league)


def get_league_path(league_key: str) -> str | None:
    """Return the explicit ESPN path segment for a league key.

    Returns None when the league has no dedicated path.
    """

    return _DEFAULT_CLASSIFIER.get_league_path(league_key)


def classify_league(league_key: str) -> LeagueDescriptor:
    return _DEFAULT_CLASSIFIER.classify(league_key)
