"""
Sport Configuration for cross-source event matching.

This module centralizes all sport-specific configuration:
- Display names (the "League" part of canonical index keys)
- Prediction market listing URL
- The Odds API sport keys (h2h markets and outright/futures)
- Team maps: lowercase abbreviation → official full name
- Detection patterns used to classify free text into a sport

The table is plain immutable data loaded once at import; every matching
component reads it, none writes it. Abbreviation keys may repeat across
sports ("phi" is a different team in each); the sport code disambiguates.

Core sports (SPORTS_CONFIG) are the ones the matching engine indexes.
Extended sports (EXTENDED_SPORTS_CONFIG) supplement them for sport
detection, endpoint building and fuzzy matching.
"""
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Pattern, Tuple


@dataclass(frozen=True)
class SportConfig:
    """
    Complete configuration for a sport.

    Attributes:
        name: Display name, also used as the league in index keys ("NHL")
        polymarket_url: Prediction market listing page for the sport
        odds_api_sport: Sport key for The Odds API (e.g., "icehockey_nhl")
        odds_api_markets: Comma-separated market keys requested for games
        odds_api_outright: Sport key for futures/outright markets
        team_map: abbreviation (lowercase) → official full name
        detection_patterns: Compiled regexes that identify the sport in free text
    """
    name: str
    polymarket_url: str
    odds_api_sport: str
    odds_api_markets: str
    odds_api_outright: str
    team_map: Mapping[str, str]
    detection_patterns: Tuple[Pattern, ...]

    def __post_init__(self):
        object.__setattr__(self, 'team_map', MappingProxyType(dict(self.team_map)))
        object.__setattr__(self, 'detection_patterns', tuple(self.detection_patterns))

    @property
    def official_names(self) -> List[str]:
        """Unique official names in team map order."""
        return list(dict.fromkeys(self.team_map.values()))


def _patterns(*patterns: str) -> Tuple[Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


# =============================================================================
# CORE SPORT CONFIGURATIONS
# =============================================================================

SPORTS_CONFIG: Dict[str, SportConfig] = {
    # NHL must come first in detection order (Blackhawks before Hawks)
    "nhl": SportConfig(
        name="NHL",
        polymarket_url="https://polymarket.com/sports/nhl/games",
        odds_api_sport="icehockey_nhl",
        odds_api_markets="h2h",
        odds_api_outright="icehockey_nhl_championship_winner",
        team_map={
            "ana": "Anaheim Ducks", "ari": "Arizona Coyotes", "bos": "Boston Bruins",
            "buf": "Buffalo Sabres", "cgy": "Calgary Flames", "car": "Carolina Hurricanes",
            "chi": "Chicago Blackhawks", "col": "Colorado Avalanche", "cbj": "Columbus Blue Jackets",
            "dal": "Dallas Stars", "det": "Detroit Red Wings", "edm": "Edmonton Oilers",
            "fla": "Florida Panthers", "la": "Los Angeles Kings", "lak": "Los Angeles Kings",
            "min": "Minnesota Wild", "mtl": "Montreal Canadiens", "nsh": "Nashville Predators",
            "njd": "New Jersey Devils", "nyi": "New York Islanders", "nyr": "New York Rangers",
            "ott": "Ottawa Senators", "phi": "Philadelphia Flyers", "pit": "Pittsburgh Penguins",
            "sjs": "San Jose Sharks", "sea": "Seattle Kraken", "stl": "St. Louis Blues",
            "tb": "Tampa Bay Lightning", "tbl": "Tampa Bay Lightning", "tor": "Toronto Maple Leafs",
            "van": "Vancouver Canucks", "vgk": "Vegas Golden Knights", "wsh": "Washington Capitals",
            "wpg": "Winnipeg Jets", "uta": "Utah Hockey Club",
        },
        detection_patterns=_patterns(
            r"\bnhl\b",
            # Multi-word patterns prevent false positives ("Rangers" vs QPR)
            r"blackhawks|maple leafs|canadiens|habs|bruins|new york rangers|ny rangers|nyr|islanders|"
            r"devils|flyers|penguins|capitals|caps|hurricanes|canes|florida panthers|lightning|bolts|"
            r"red wings|senators|sens|sabres|blue jackets|blues|wild|avalanche|avs|dallas stars|"
            r"predators|preds|winnipeg jets|flames|oilers|canucks|kraken|golden knights|vegas knights|"
            r"coyotes|sharks|ducks|la kings|los angeles kings",
        ),
    ),

    "nba": SportConfig(
        name="NBA",
        polymarket_url="https://polymarket.com/sports/nba/games",
        odds_api_sport="basketball_nba",
        odds_api_markets="h2h,totals",
        odds_api_outright="basketball_nba_championship_winner",
        team_map={
            "atl": "Atlanta Hawks", "bos": "Boston Celtics", "bkn": "Brooklyn Nets",
            "cha": "Charlotte Hornets", "chi": "Chicago Bulls", "cle": "Cleveland Cavaliers",
            "dal": "Dallas Mavericks", "den": "Denver Nuggets", "det": "Detroit Pistons",
            "gsw": "Golden State Warriors", "hou": "Houston Rockets", "ind": "Indiana Pacers",
            "lac": "LA Clippers", "lal": "Los Angeles Lakers", "mem": "Memphis Grizzlies",
            "mia": "Miami Heat", "mil": "Milwaukee Bucks", "min": "Minnesota Timberwolves",
            "nop": "New Orleans Pelicans", "nyk": "New York Knicks", "okc": "Oklahoma City Thunder",
            "orl": "Orlando Magic", "phi": "Philadelphia 76ers", "phx": "Phoenix Suns",
            "por": "Portland Trail Blazers", "sac": "Sacramento Kings", "sas": "San Antonio Spurs",
            "tor": "Toronto Raptors", "uta": "Utah Jazz", "was": "Washington Wizards",
        },
        detection_patterns=_patterns(
            r"\bnba\b",
            r"lakers|celtics|warriors|heat|bulls|knicks|nets|bucks|76ers|sixers|suns|nuggets|clippers|"
            r"mavericks|rockets|grizzlies|timberwolves|pelicans|spurs|thunder|jazz|blazers|trail blazers|"
            r"hornets|atlanta hawks|wizards|magic|pistons|cavaliers|raptors|pacers",
        ),
    ),

    "nfl": SportConfig(
        name="NFL",
        polymarket_url="https://polymarket.com/sports/nfl/games",
        odds_api_sport="americanfootball_nfl",
        odds_api_markets="h2h",
        odds_api_outright="americanfootball_nfl_super_bowl_winner",
        team_map={
            "ari": "Arizona Cardinals", "atl": "Atlanta Falcons", "bal": "Baltimore Ravens",
            "buf": "Buffalo Bills", "car": "Carolina Panthers", "chi": "Chicago Bears",
            "cin": "Cincinnati Bengals", "cle": "Cleveland Browns", "dal": "Dallas Cowboys",
            "den": "Denver Broncos", "det": "Detroit Lions", "gb": "Green Bay Packers",
            "hou": "Houston Texans", "ind": "Indianapolis Colts", "jax": "Jacksonville Jaguars",
            "kc": "Kansas City Chiefs", "lac": "LA Chargers", "lar": "LA Rams",
            "lv": "Las Vegas Raiders", "mia": "Miami Dolphins", "min": "Minnesota Vikings",
            "ne": "New England Patriots", "no": "New Orleans Saints", "nyg": "New York Giants",
            "nyj": "New York Jets", "phi": "Philadelphia Eagles", "pit": "Pittsburgh Steelers",
            "sf": "San Francisco 49ers", "sea": "Seattle Seahawks", "tb": "Tampa Bay Buccaneers",
            "ten": "Tennessee Titans", "was": "Washington Commanders",
        },
        detection_patterns=_patterns(
            r"\bnfl\b",
            r"chiefs|eagles|49ers|niners|cowboys|bills|ravens|bengals|dolphins|lions|packers|patriots|"
            r"broncos|chargers|raiders|steelers|browns|texans|colts|jaguars|titans|commanders|giants|"
            r"saints|panthers|falcons|buccaneers|bucs|seahawks|rams|cardinals|bears|vikings",
        ),
    ),

    "epl": SportConfig(
        name="EPL",
        polymarket_url="https://polymarket.com/sports/soccer/epl/games",
        odds_api_sport="soccer_epl",
        odds_api_markets="h2h",
        odds_api_outright="soccer_epl_winner",
        team_map={
            "ars": "Arsenal", "avl": "Aston Villa", "bou": "Bournemouth", "bre": "Brentford",
            "bha": "Brighton", "che": "Chelsea", "cry": "Crystal Palace", "eve": "Everton",
            "ful": "Fulham", "ips": "Ipswich", "lei": "Leicester", "liv": "Liverpool",
            "mci": "Man City", "mun": "Man United", "new": "Newcastle", "nfo": "Nottm Forest",
            "sou": "Southampton", "tot": "Tottenham", "whu": "West Ham", "wol": "Wolves",
        },
        detection_patterns=_patterns(
            r"\bepl\b",
            r"\bpremier league\b",
            r"arsenal|aston villa|bournemouth|brentford|brighton|chelsea|crystal palace|everton|fulham|"
            r"ipswich|leicester|liverpool|man city|manchester city|man united|manchester united|"
            r"newcastle|nottingham forest|southampton|tottenham|spurs|west ham|wolves",
        ),
    ),

    "laliga": SportConfig(
        name="La Liga",
        polymarket_url="https://polymarket.com/sports/soccer/laliga/games",
        odds_api_sport="soccer_spain_la_liga",
        odds_api_markets="h2h",
        odds_api_outright="soccer_spain_la_liga_winner",
        team_map={
            "rma": "Real Madrid", "bar": "Barcelona", "atm": "Atletico Madrid",
            "sev": "Sevilla", "vil": "Villarreal", "bet": "Real Betis", "soc": "Real Sociedad",
            "ath": "Athletic Bilbao", "val": "Valencia", "get": "Getafe", "osa": "Osasuna",
            "cel": "Celta Vigo", "ray": "Rayo Vallecano", "mal": "Mallorca", "ala": "Alaves",
            "las": "Las Palmas", "gir": "Girona", "esp": "Espanyol", "leg": "Leganes",
            "vld": "Valladolid",
        },
        detection_patterns=_patterns(
            r"\bla liga\b",
            r"\blaliga\b",
            r"real madrid|barcelona|barca|atletico madrid|sevilla|villarreal|real betis|real sociedad|"
            r"athletic bilbao|valencia|getafe|osasuna|celta vigo|rayo vallecano|mallorca|alaves|"
            r"las palmas|girona|espanyol|leganes|valladolid",
        ),
    ),

    "seriea": SportConfig(
        name="Serie A",
        polymarket_url="https://polymarket.com/sports/soccer/serie-a/games",
        odds_api_sport="soccer_italy_serie_a",
        odds_api_markets="h2h",
        odds_api_outright="soccer_italy_serie_a_winner",
        team_map={
            "juv": "Juventus", "int": "Inter Milan", "mil": "AC Milan", "nap": "Napoli",
            "rom": "Roma", "laz": "Lazio", "fio": "Fiorentina", "ata": "Atalanta",
            "bol": "Bologna", "tor": "Torino", "udi": "Udinese", "sas": "Sassuolo",
            "emp": "Empoli", "ver": "Verona", "lec": "Lecce", "mon": "Monza",
            "gen": "Genoa", "cal": "Cagliari", "com": "Como", "par": "Parma", "ven": "Venezia",
        },
        detection_patterns=_patterns(
            r"\bserie a\b",
            r"\bseriea\b",
            r"juventus|juve|inter milan|ac milan|napoli|roma|lazio|fiorentina|atalanta|bologna|torino|"
            r"udinese|sassuolo|empoli|verona|lecce|monza|genoa|cagliari|como|parma|venezia",
        ),
    ),

    "bundesliga": SportConfig(
        name="Bundesliga",
        polymarket_url="https://polymarket.com/sports/soccer/bundesliga/games",
        odds_api_sport="soccer_germany_bundesliga",
        odds_api_markets="h2h",
        odds_api_outright="soccer_germany_bundesliga_winner",
        team_map={
            "bay": "Bayern Munich", "bvb": "Dortmund", "rbl": "RB Leipzig", "lev": "Leverkusen",
            "fra": "Frankfurt", "wob": "Wolfsburg", "bmg": "Gladbach", "fre": "Freiburg",
            "hof": "Hoffenheim", "mai": "Mainz", "aug": "Augsburg", "uni": "Union Berlin",
            "koe": "Koln", "wer": "Werder Bremen", "boc": "Bochum", "hei": "Heidenheim",
            "stg": "Stuttgart", "hol": "Holstein Kiel", "stm": "St. Pauli",
        },
        detection_patterns=_patterns(
            r"\bbundesliga\b",
            r"bayern munich|bayern|dortmund|rb leipzig|leverkusen|bayer leverkusen|frankfurt|eintracht|"
            r"wolfsburg|gladbach|monchengladbach|freiburg|hoffenheim|mainz|augsburg|union berlin|koln|"
            r"cologne|werder bremen|bremen|bochum|heidenheim|stuttgart|holstein kiel|st pauli",
        ),
    ),

    "ucl": SportConfig(
        name="UCL",
        polymarket_url="https://polymarket.com/sports/soccer/ucl/games",
        odds_api_sport="soccer_uefa_champs_league",
        odds_api_markets="h2h",
        odds_api_outright="soccer_uefa_champs_league_winner",
        team_map={
            "rma": "Real Madrid", "bar": "Barcelona", "bay": "Bayern Munich", "mci": "Man City",
            "liv": "Liverpool", "che": "Chelsea", "psg": "PSG", "juv": "Juventus",
            "int": "Inter Milan", "mil": "AC Milan", "bvb": "Dortmund", "ars": "Arsenal",
            "atm": "Atletico Madrid", "ben": "Benfica", "por": "Porto", "aja": "Ajax",
            "cel": "Celtic", "spo": "Sporting CP", "nap": "Napoli", "lev": "Leverkusen",
            "ata": "Atalanta", "fey": "Feyenoord", "psv": "PSV", "gal": "Galatasaray",
            "fen": "Fenerbahce", "bru": "Club Brugge", "sal": "RB Salzburg", "sha": "Shakhtar",
        },
        detection_patterns=_patterns(
            r"\bucl\b",
            r"\bchampions league\b",
            r"\buefa champions\b",
        ),
    ),

    "cbb": SportConfig(
        name="NCAA",
        polymarket_url="https://polymarket.com/sports/cbb/games",
        odds_api_sport="basketball_ncaab",
        odds_api_markets="h2h",
        odds_api_outright="basketball_ncaab_championship_winner",
        team_map={
            "duke": "Duke Blue Devils", "unc": "North Carolina Tar Heels",
            "uk": "Kentucky Wildcats", "ku": "Kansas Jayhawks",
            "ucla": "UCLA Bruins", "usc": "USC Trojans",
            "bama": "Alabama Crimson Tide", "aub": "Auburn Tigers",
            "gonz": "Gonzaga Bulldogs", "purdue": "Purdue Boilermakers",
            "uconn": "UConn Huskies", "hou": "Houston Cougars",
            "tenn": "Tennessee Volunteers", "arz": "Arizona Wildcats",
            "msu": "Michigan State Spartans", "mich": "Michigan Wolverines",
            "osu": "Ohio State Buckeyes", "wisc": "Wisconsin Badgers",
            "iowa": "Iowa Hawkeyes", "ill": "Illinois Fighting Illini",
            "ark": "Arkansas Razorbacks", "fla": "Florida Gators",
            "lsu": "LSU Tigers", "tex": "Texas Longhorns",
            "bay": "Baylor Bears", "tcu": "TCU Horned Frogs",
            # Scraper abbreviations seen in the wild
            "vtech": "Virginia Tech Hokies", "vt": "Virginia Tech Hokies",
            "mst": "Michigan State Spartans", "michst": "Michigan State Spartans",
            "hiost": "Ohio State Buckeyes", "ohst": "Ohio State Buckeyes",
            "kst": "Kansas State Wildcats", "kstate": "Kansas State Wildcats",
            "okst": "Oklahoma State Cowboys", "okstate": "Oklahoma State Cowboys",
            "wvu": "West Virginia Mountaineers",
            "sc": "South Carolina Gamecocks",
            "gt": "Georgia Tech Yellow Jackets",
            "clem": "Clemson Tigers",
            "cuse": "Syracuse Orange", "syr": "Syracuse Orange",
            "nd": "Notre Dame Fighting Irish",
            "pitt": "Pittsburgh Panthers",
            "nc": "North Carolina Tar Heels", "carolina": "North Carolina Tar Heels",
            "wake": "Wake Forest Demon Deacons",
            "lou": "Louisville Cardinals", "louisville": "Louisville Cardinals",
            "md": "Maryland Terrapins", "umd": "Maryland Terrapins",
            "ind": "Indiana Hoosiers",
            "neb": "Nebraska Cornhuskers",
            "minn": "Minnesota Golden Gophers",
            "nw": "Northwestern Wildcats",
            "psu": "Penn State Nittany Lions",
            "rut": "Rutgers Scarlet Knights",
            "ore": "Oregon Ducks", "uoregon": "Oregon Ducks",
            "uw": "Washington Huskies", "wash": "Washington Huskies",
            "wsu": "Washington State Cougars",
            "colo": "Colorado Buffaloes",
            "utah": "Utah Utes",
            "ariz": "Arizona Wildcats", "zona": "Arizona Wildcats",
            "asu": "Arizona State Sun Devils",
            "stan": "Stanford Cardinal",
            "cal": "California Golden Bears",
            "cin": "Cincinnati Bearcats",
            "ucf": "UCF Knights",
            "byu": "BYU Cougars",
            "isu": "Iowa State Cyclones",
            "ttu": "Texas Tech Red Raiders",
        },
        detection_patterns=_patterns(
            r"\bncaa\b",
            r"\bcbb\b",
            r"march madness|college basketball|final four",
        ),
    ),
}


# =============================================================================
# EXTENDED SPORT CONFIGURATIONS
# =============================================================================

EXTENDED_SPORTS_CONFIG: Dict[str, SportConfig] = {
    "mls": SportConfig(
        name="MLS",
        polymarket_url="https://polymarket.com/sports/soccer/mls/games",
        odds_api_sport="soccer_usa_mls",
        odds_api_markets="h2h",
        odds_api_outright="soccer_usa_mls_winner",
        team_map={
            "atl": "Atlanta United", "aus": "Austin FC", "cha": "Charlotte FC", "chi": "Chicago Fire",
            "cin": "Cincinnati", "col": "Colorado Rapids", "clb": "Columbus Crew", "dal": "FC Dallas",
            "dc": "D.C. United", "hou": "Houston Dynamo", "la": "LAFC", "lag": "LA Galaxy",
            "mia": "Inter Miami", "min": "Minnesota United", "mon": "Montreal Impact",
            "nsh": "Nashville SC", "ne": "New England Revolution", "nyc": "New York City FC",
            "ny": "New York Red Bulls", "orl": "Orlando City", "phi": "Philadelphia Union",
            "por": "Portland Timbers", "rsl": "Real Salt Lake", "sj": "San Jose Earthquakes",
            "sea": "Seattle Sounders", "skc": "Sporting Kansas City", "tor": "Toronto FC",
            "van": "Vancouver Whitecaps",
        },
        detection_patterns=_patterns(
            r"\bmls\b",
            r"major league soccer",
            r"atlanta united|austin fc|charlotte fc|chicago fire|fc cincinnati|colorado rapids|"
            r"columbus crew|fc dallas|dc united|houston dynamo|lafc|la galaxy|inter miami|"
            r"minnesota united|cf montreal|nashville sc|new england revolution|new york city fc|"
            r"new york red bulls|orlando city|philadelphia union|portland timbers|real salt lake|"
            r"san jose earthquakes|seattle sounders|sporting kansas city|toronto fc|vancouver whitecaps",
        ),
    ),

    "facup": SportConfig(
        name="FA Cup",
        polymarket_url="https://polymarket.com/sports/soccer/fa-cup/games",
        odds_api_sport="soccer_fa_cup",
        odds_api_markets="h2h",
        odds_api_outright="soccer_fa_cup_winner",
        team_map={
            "ars": "Arsenal", "che": "Chelsea", "liv": "Liverpool", "mci": "Man City",
            "mun": "Man United", "tot": "Tottenham", "new": "Newcastle", "whu": "West Ham",
            "avl": "Aston Villa", "bha": "Brighton", "eve": "Everton", "ful": "Fulham",
            "lei": "Leicester City", "wol": "Wolves", "cry": "Crystal Palace", "bou": "Bournemouth",
            "bre": "Brentford", "nfo": "Nottm Forest", "sou": "Southampton", "ips": "Ipswich Town",
        },
        detection_patterns=_patterns(
            r"\bfa cup\b",
            r"\benglish fa cup\b",
            r"\bcup\b.*\benglish\b",
        ),
    ),

    # Fighter and player sports have no team codes
    "ufc": SportConfig(
        name="UFC",
        polymarket_url="https://polymarket.com/sports/ufc/fights",
        odds_api_sport="mma_mixed_martial_arts",
        odds_api_markets="h2h",
        odds_api_outright="mma_mixed_martial_arts_championship_winner",
        team_map={},
        detection_patterns=_patterns(
            r"\bufc\b",
            r"\bmma\b",
            r"mixed martial arts",
            r"ultimate fighting",
        ),
    ),

    "atp": SportConfig(
        name="ATP",
        polymarket_url="https://polymarket.com/sports/tennis/atp/matches",
        odds_api_sport="tennis_atp_australian_open",
        odds_api_markets="h2h",
        odds_api_outright="tennis_atp_australian_open_winner",
        team_map={},
        detection_patterns=_patterns(
            r"\batp\b",
            r"\btennis\b",
            r"australian open|french open|wimbledon|us open|indian wells|miami open|monte carlo|"
            r"madrid open|italian open|cincinnati open|shanghai masters|paris masters|rotterdam open|"
            r"dallas open|argentina open",
        ),
    ),

    "wta": SportConfig(
        name="WTA",
        polymarket_url="https://polymarket.com/sports/tennis/wta/matches",
        odds_api_sport="tennis_wta_australian_open",
        odds_api_markets="h2h",
        odds_api_outright="tennis_wta_australian_open_winner",
        team_map={},
        detection_patterns=_patterns(
            r"\bwta\b",
            r"womens tennis",
            r"women.*tennis",
        ),
    ),

    "ligue1": SportConfig(
        name="Ligue 1",
        polymarket_url="https://polymarket.com/sports/soccer/ligue1/games",
        odds_api_sport="soccer_france_ligue_one",
        odds_api_markets="h2h",
        odds_api_outright="soccer_france_ligue_one_winner",
        team_map={
            "psg": "PSG", "mar": "Marseille", "mon": "Monaco", "lyo": "Lyon",
            "nic": "Nice", "ren": "Rennes", "lil": "Lille", "len": "Lens",
            "str": "Strasbourg", "rei": "Reims", "lor": "Lorient", "bre": "Brest",
            "mpl": "Montpellier", "cle": "Clermont", "tro": "Troyes", "met": "Metz",
            "ang": "Angers", "bor": "Bordeaux", "nan": "Nantes", "tou": "Toulouse",
        },
        detection_patterns=_patterns(
            r"\bligue 1\b",
            r"\bligue1\b",
            r"french league",
            r"psg|marseille|monaco|lyon|nice|rennes|lille|lens|strasbourg|reims|lorient|brest|"
            r"montpellier|clermont|troyes|metz|angers|bordeaux|nantes|toulouse",
        ),
    ),

    "eredivisie": SportConfig(
        name="Eredivisie",
        polymarket_url="https://polymarket.com/sports/soccer/eredivisie/games",
        odds_api_sport="soccer_netherlands_eredivisie",
        odds_api_markets="h2h",
        odds_api_outright="soccer_netherlands_eredivisie_winner",
        team_map={
            "aja": "Ajax", "psv": "PSV", "fey": "Feyenoord", "az": "AZ Alkmaar",
            "vit": "Vitesse", "fcg": "FC Groningen", "twe": "Twente", "her": "Heracles",
            "spa": "Sparta Rotterdam", "for": "Fortuna Sittard", "wil": "Willem II",
            "pec": "PEC Zwolle", "ado": "ADO Den Haag", "vvv": "VVV-Venlo",
            "utm": "Utrecht", "hee": "Heerenveen", "cam": "Cambuur", "nme": "NEC Nijmegen",
        },
        detection_patterns=_patterns(
            r"\beredivisie\b",
            r"dutch league",
            r"ajax|psv|feyenoord|az alkmaar|vitesse|groningen|twente|heracles|sparta|fortuna|willem|"
            r"zwolle|utrecht|heerenveen|cambuur|nijmegen",
        ),
    ),

    "ligaportugal": SportConfig(
        name="Liga Portugal",
        polymarket_url="https://polymarket.com/sports/soccer/portugal/games",
        odds_api_sport="soccer_portugal_primeira_liga",
        odds_api_markets="h2h",
        odds_api_outright="soccer_portugal_primeira_liga_winner",
        team_map={
            "por": "Porto", "ben": "Benfica", "spo": "Sporting CP", "bra": "Braga",
            "vit": "Vitoria Guimaraes", "boa": "Boavista", "mor": "Moreirense",
            "ave": "Avs", "est": "Estoril", "far": "Famalicao", "rio": "Rio Ave",
            "aro": "Arouca", "cas": "Casa Pia", "gil": "Gil Vicente", "ptm": "Portimonense",
            "cha": "Chaves", "viz": "Vizela", "ton": "Tondela", "mar": "Maritimo",
        },
        detection_patterns=_patterns(
            r"\bliga portugal\b",
            r"primeira liga",
            r"portuguese league",
            r"porto|benfica|sporting|braga|guimaraes|boavista|moreirense|estoril|famalicao|arouca|"
            r"gil vicente|portimonense|chaves|vizela|tondela|maritimo",
        ),
    ),
}

ALL_SPORTS_CONFIG: Dict[str, SportConfig] = {**SPORTS_CONFIG, **EXTENDED_SPORTS_CONFIG}


# =============================================================================
# DERIVED VALUES
# =============================================================================

SPORT_CODES: List[str] = list(SPORTS_CONFIG.keys())
SPORT_NAMES: List[str] = [SPORTS_CONFIG[code].name for code in SPORT_CODES]

ALL_SPORT_CODES: List[str] = list(ALL_SPORTS_CONFIG.keys())
ALL_SPORT_NAMES: List[str] = [ALL_SPORTS_CONFIG[code].name for code in ALL_SPORT_CODES]

# League shorthands that are not display names
LEAGUE_ALIASES: Dict[str, str] = {
    "CBB": "cbb",
    "ATP": "atp",
    "WTA": "atp",
    "UFC": "ufc",
    "MMA": "ufc",
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_sport_config(sport_code: Optional[str]) -> Optional[SportConfig]:
    """Get the configuration for any sport code (core or extended)."""
    if not sport_code:
        return None
    return ALL_SPORTS_CONFIG.get(sport_code.lower())


def get_team_map(sport_code: Optional[str]) -> Mapping[str, str]:
    """Get the team map for a sport code, empty if the sport is unknown."""
    config = get_sport_config(sport_code)
    return config.team_map if config else MappingProxyType({})


def get_league_name(sport_code: str) -> str:
    """Display name used as the league in index keys ("nhl" → "NHL")."""
    config = get_sport_config(sport_code)
    return config.name if config else sport_code.upper()


def get_sport_code_from_league(league: Optional[str], include_extended: bool = False) -> Optional[str]:
    """
    Get sport code from league display name (case-insensitive exact match).

    Examples:
        >>> get_sport_code_from_league("NHL")
        'nhl'
        >>> get_sport_code_from_league("la liga")
        'laliga'
        >>> get_sport_code_from_league("CBB")
        'cbb'
    """
    if not league:
        return None

    wanted = league.strip().upper()
    codes = ALL_SPORT_CODES if include_extended else SPORT_CODES

    for code in codes:
        if ALL_SPORTS_CONFIG[code].name.upper() == wanted:
            return code

    alias = LEAGUE_ALIASES.get(wanted)
    if alias and alias in codes:
        return alias

    return None


def get_sport_code_from_name(name: str, include_extended: bool = False) -> Optional[str]:
    """Get sport code from an exact (case-sensitive) display name."""
    codes = ALL_SPORT_CODES if include_extended else SPORT_CODES
    for code in codes:
        if ALL_SPORTS_CONFIG[code].name == name:
            return code
    return None


def detect_sport_from_text(text: str, include_extended: bool = False) -> Optional[str]:
    """
    Detect sport from free text using the configured patterns.

    Sports are checked in table order (NHL first, so "Blackhawks" is not
    claimed by NBA's "hawks"; core sports before extended ones).

    Returns:
        Sport display name (e.g., "NHL", "EPL") or None
    """
    if not text:
        return None

    codes = ALL_SPORT_CODES if include_extended else SPORT_CODES
    for code in codes:
        config = ALL_SPORTS_CONFIG[code]
        if any(p.search(text) for p in config.detection_patterns):
            return config.name

    return None


def build_sport_endpoints(include_extended: bool = False) -> Dict[str, Dict[str, str]]:
    """
    Build Odds API endpoints keyed by display name.

    Format: {"NHL": {"sport": "icehockey_nhl", "markets": "h2h"}, ...}
    """
    codes = ALL_SPORT_CODES if include_extended else SPORT_CODES
    return {
        ALL_SPORTS_CONFIG[code].name: {
            "sport": ALL_SPORTS_CONFIG[code].odds_api_sport,
            "markets": ALL_SPORTS_CONFIG[code].odds_api_markets,
        }
        for code in codes
    }


def build_outright_endpoints(include_extended: bool = False) -> Dict[str, str]:
    """
    Build futures endpoints keyed by the game sport key.

    Format: {"basketball_nba": "basketball_nba_championship_winner", ...}
    """
    codes = ALL_SPORT_CODES if include_extended else SPORT_CODES
    return {
        ALL_SPORTS_CONFIG[code].odds_api_sport: ALL_SPORTS_CONFIG[code].odds_api_outright
        for code in codes
    }


def get_all_h2h_sports() -> List[str]:
    """Odds API sport keys for every sport that offers h2h markets."""
    return [
        ALL_SPORTS_CONFIG[code].odds_api_sport
        for code in ALL_SPORT_CODES
        if "h2h" in ALL_SPORTS_CONFIG[code].odds_api_markets
    ]


def get_all_outright_sports() -> List[str]:
    """Odds API outright keys for every configured sport."""
    return [
        ALL_SPORTS_CONFIG[code].odds_api_outright
        for code in ALL_SPORT_CODES
        if ALL_SPORTS_CONFIG[code].odds_api_outright
    ]
