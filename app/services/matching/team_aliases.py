"""
Curated team alias dictionary used by the fuzzy matcher.

Maps each sport code to {canonical lowercase name: [aliases]}. Aliases are
lowercase and cover abbreviations, nicknames and common fan shorthand
("buds", "bolts", "dubs"). Broader than the official team maps in
sports_config, which only key on broadcaster abbreviations.
"""
import re
from typing import Dict, List, Pattern, Tuple


TEAM_ALIASES: Dict[str, Dict[str, List[str]]] = {
    "nhl": {
        "boston bruins": ["bruins", "bos", "boston", "bs", "bruin"],
        "toronto maple leafs": ["leafs", "maple leafs", "tor", "toronto", "buds", "leaves", "leaf"],
        "new york rangers": ["rangers", "nyr", "ny rangers", "broadway blueshirts", "blueshirts"],
        "new york islanders": ["islanders", "nyi", "ny islanders", "isles"],
        "philadelphia flyers": ["flyers", "phi", "philadelphia", "philly"],
        "pittsburgh penguins": ["penguins", "pens", "pit", "pittsburgh", "pitt"],
        "washington capitals": ["capitals", "caps", "wsh", "washington", "dc"],
        "tampa bay lightning": ["lightning", "tb", "tbl", "tampa bay", "tampa", "bolts"],
        "florida panthers": ["panthers", "fla", "florida", "cats"],
        "carolina hurricanes": ["hurricanes", "car", "carolina", "canes", "whalers"],
        "chicago blackhawks": ["blackhawks", "chi", "chicago", "hawks"],
        "detroit red wings": ["red wings", "det", "detroit", "wings"],
        "nashville predators": ["predators", "nsh", "nashville", "preds"],
        "st louis blues": ["blues", "stl", "st louis", "saint louis"],
        "minnesota wild": ["wild", "min", "minnesota"],
        "colorado avalanche": ["avalanche", "col", "colorado", "avs"],
        "dallas stars": ["stars", "dal", "dallas"],
        "vegas golden knights": ["golden knights", "vgk", "vegas", "knights"],
        "los angeles kings": ["kings", "la", "lak", "los angeles"],
        "san jose sharks": ["sharks", "sjs", "san jose"],
        "calgary flames": ["flames", "cgy", "calgary"],
        "edmonton oilers": ["oilers", "edm", "edmonton"],
        "vancouver canucks": ["canucks", "van", "vancouver", "nucks"],
        "seattle kraken": ["kraken", "sea", "seattle"],
        "winnipeg jets": ["jets", "wpg", "winnipeg"],
    },
    "nba": {
        "los angeles lakers": ["lakers", "lal", "la lakers"],
        "boston celtics": ["celtics", "bos", "boston", "cs"],
        "golden state warriors": ["warriors", "gsw", "golden state", "dubs"],
        "miami heat": ["heat", "mia", "miami"],
        "chicago bulls": ["bulls", "chi", "chicago"],
        "new york knicks": ["knicks", "nyk", "ny knicks", "new york"],
        "brooklyn nets": ["nets", "bkn", "brooklyn"],
        "milwaukee bucks": ["bucks", "mil", "milwaukee"],
        "philadelphia 76ers": ["76ers", "phi", "philadelphia", "sixers"],
        "phoenix suns": ["suns", "phx", "phoenix"],
        "denver nuggets": ["nuggets", "den", "denver", "nugs"],
        "la clippers": ["clippers", "lac", "la clippers"],
        "dallas mavericks": ["mavericks", "dal", "dallas", "mavs"],
        "houston rockets": ["rockets", "hou", "houston"],
        "memphis grizzlies": ["grizzlies", "mem", "memphis", "grizz"],
        "minnesota timberwolves": ["timberwolves", "min", "minnesota", "wolves", "twolves"],
        "new orleans pelicans": ["pelicans", "nop", "new orleans", "pels"],
        "san antonio spurs": ["spurs", "sas", "san antonio"],
        "oklahoma city thunder": ["thunder", "okc", "oklahoma city"],
        "utah jazz": ["jazz", "uta", "utah"],
        "portland trail blazers": ["trail blazers", "por", "portland", "blazers"],
        "sacramento kings": ["kings", "sac", "sacramento"],
        "atlanta hawks": ["hawks", "atl", "atlanta"],
        "charlotte hornets": ["hornets", "cha", "charlotte"],
        "cleveland cavaliers": ["cavaliers", "cle", "cleveland", "cavs"],
        "detroit pistons": ["pistons", "det", "detroit"],
        "indiana pacers": ["pacers", "ind", "indiana"],
        "orlando magic": ["magic", "orl", "orlando"],
        "toronto raptors": ["raptors", "tor", "toronto", "raps"],
        "washington wizards": ["wizards", "was", "washington"],
    },
    "nfl": {
        "kansas city chiefs": ["chiefs", "kc", "kansas city"],
        "philadelphia eagles": ["eagles", "phi", "philadelphia", "philly"],
        "san francisco 49ers": ["49ers", "sf", "san francisco", "niners"],
        "dallas cowboys": ["cowboys", "dal", "dallas"],
        "buffalo bills": ["bills", "buf", "buffalo"],
        "baltimore ravens": ["ravens", "bal", "baltimore"],
        "cincinnati bengals": ["bengals", "cin", "cincinnati"],
        "miami dolphins": ["dolphins", "mia", "miami", "fins"],
        "detroit lions": ["lions", "det", "detroit"],
        "green bay packers": ["packers", "gb", "green bay"],
        "new england patriots": ["patriots", "ne", "new england", "pats"],
        "denver broncos": ["broncos", "den", "denver"],
        "los angeles chargers": ["chargers", "lac", "la chargers"],
        "las vegas raiders": ["raiders", "lv", "las vegas"],
        "pittsburgh steelers": ["steelers", "pit", "pittsburgh"],
        "cleveland browns": ["browns", "cle", "cleveland"],
        "houston texans": ["texans", "hou", "houston"],
        "indianapolis colts": ["colts", "ind", "indianapolis"],
        "jacksonville jaguars": ["jaguars", "jax", "jacksonville", "jags"],
        "tennessee titans": ["titans", "ten", "tennessee"],
        "new york giants": ["giants", "nyg", "ny giants"],
        "new orleans saints": ["saints", "no", "new orleans"],
        "carolina panthers": ["panthers", "car", "carolina"],
        "atlanta falcons": ["falcons", "atl", "atlanta"],
        "tampa bay buccaneers": ["buccaneers", "tb", "tampa bay", "bucs"],
        "seattle seahawks": ["seahawks", "sea", "seattle", "hawks"],
        "los angeles rams": ["rams", "lar", "la rams"],
        "arizona cardinals": ["cardinals", "ari", "arizona", "cards"],
        "chicago bears": ["bears", "chi", "chicago"],
        "minnesota vikings": ["vikings", "min", "minnesota", "vikes"],
        "washington commanders": ["commanders", "was", "washington"],
    },
    "epl": {
        "arsenal": ["arsenal", "ars", "gunners"],
        "aston villa": ["aston villa", "avl", "villa"],
        "bournemouth": ["bournemouth", "bou", "cherries"],
        "brentford": ["brentford", "bre", "bees"],
        "brighton": ["brighton", "bha", "seagulls", "brighton hove albion"],
        "chelsea": ["chelsea", "che", "blues"],
        "crystal palace": ["crystal palace", "cry", "palace", "eagles"],
        "everton": ["everton", "eve", "toffees"],
        "fulham": ["fulham", "ful", "cottagers"],
        "ipswich": ["ipswich", "ips", "ipswich town", "tractor boys"],
        "leicester": ["leicester", "lei", "leicester city", "foxes"],
        "liverpool": ["liverpool", "liv", "reds"],
        "manchester city": ["manchester city", "mci", "man city", "city", "citizens"],
        "manchester united": ["manchester united", "mun", "man united", "united", "red devils"],
        "newcastle": ["newcastle", "new", "newcastle united", "magpies"],
        "nottingham forest": ["nottingham forest", "nfo", "forest", "nottm forest"],
        "southampton": ["southampton", "sou", "saints"],
        "tottenham": ["tottenham", "tot", "spurs", "tottenham hotspur"],
        "west ham": ["west ham", "whu", "west ham united", "hammers"],
        "wolverhampton": ["wolverhampton", "wol", "wolves", "wolverhampton wanderers"],
    },
    "laliga": {
        "real madrid": ["real madrid", "rma", "madrid", "real"],
        "barcelona": ["barcelona", "bar", "barca", "fc barcelona"],
        "atletico madrid": ["atletico madrid", "atm", "atletico", "atleti"],
        "sevilla": ["sevilla", "sev", "fc sevilla"],
        "villarreal": ["villarreal", "vil", "yellow submarine"],
        "real betis": ["real betis", "bet", "betis"],
        "real sociedad": ["real sociedad", "soc", "sociedad"],
        "athletic bilbao": ["athletic bilbao", "ath", "bilbao", "athletic"],
        "valencia": ["valencia", "val", "cf valencia"],
        "getafe": ["getafe", "get", "cf getafe"],
        "osasuna": ["osasuna", "osa", "ca osasuna"],
        "celta vigo": ["celta vigo", "cel", "celta", "vigo"],
        "rayo vallecano": ["rayo vallecano", "ray", "rayo"],
        "mallorca": ["mallorca", "mal", "rcd mallorca"],
        "alaves": ["alaves", "ala", "deportivo alaves"],
        "las palmas": ["las palmas", "las", "ud las palmas"],
        "girona": ["girona", "gir", "girona fc"],
        "espanyol": ["espanyol", "esp", "rcd espanyol"],
        "leganes": ["leganes", "leg", "cd leganes"],
        "valladolid": ["valladolid", "vld", "real valladolid"],
    },
    "seriea": {
        "juventus": ["juventus", "juv", "juve", "bianconeri"],
        "inter milan": ["inter milan", "int", "inter", "internazionale"],
        "ac milan": ["ac milan", "mil", "milan", "rossoneri"],
        "napoli": ["napoli", "nap", "ssc napoli"],
        "roma": ["roma", "rom", "as roma", "giallorossi"],
        "lazio": ["lazio", "laz", "ss lazio", "biancocelesti"],
        "fiorentina": ["fiorentina", "fio", "acf fiorentina", "viola"],
        "atalanta": ["atalanta", "ata", "atalanta bc"],
        "bologna": ["bologna", "bol", "bologna fc"],
        "torino": ["torino", "tor", "torino fc"],
        "udinese": ["udinese", "udi", "udinese calcio"],
        "sassuolo": ["sassuolo", "sas", "us sassuolo"],
        "empoli": ["empoli", "emp", "empoli fc"],
        "verona": ["verona", "ver", "hellas verona"],
        "lecce": ["lecce", "lec", "us lecce"],
        "monza": ["monza", "mon", "ac monza"],
        "genoa": ["genoa", "gen", "genoa cfc"],
        "cagliari": ["cagliari", "cal", "cagliari calcio"],
        "como": ["como", "com", "como 1907"],
        "parma": ["parma", "par", "parma calcio"],
        "venezia": ["venezia", "ven", "venezia fc"],
    },
    "bundesliga": {
        "bayern munich": ["bayern munich", "bay", "bayern", "fc bayern"],
        "borussia dortmund": ["borussia dortmund", "bvb", "dortmund"],
        "rb leipzig": ["rb leipzig", "rbl", "leipzig"],
        "bayer leverkusen": ["bayer leverkusen", "lev", "leverkusen"],
        "eintracht frankfurt": ["eintracht frankfurt", "fra", "frankfurt"],
        "vfl wolfsburg": ["vfl wolfsburg", "wob", "wolfsburg"],
        "borussia monchengladbach": ["borussia monchengladbach", "bmg", "gladbach", "monchengladbach"],
        "sc freiburg": ["sc freiburg", "fre", "freiburg"],
        "tsg hoffenheim": ["tsg hoffenheim", "hof", "hoffenheim"],
        "fsv mainz": ["fsv mainz", "mai", "mainz", "mainz 05"],
        "fc augsburg": ["fc augsburg", "aug", "augsburg"],
        "union berlin": ["union berlin", "uni", "fc union berlin"],
        "fc koln": ["fc koln", "koe", "koln", "cologne"],
        "werder bremen": ["werder bremen", "wer", "bremen"],
        "vfl bochum": ["vfl bochum", "boc", "bochum"],
        "fc heidenheim": ["fc heidenheim", "hei", "heidenheim"],
        "vfb stuttgart": ["vfb stuttgart", "stg", "stuttgart"],
        "holstein kiel": ["holstein kiel", "hol", "kiel"],
        "fc st pauli": ["fc st pauli", "stm", "st pauli"],
    },
    "mls": {
        "atlanta united": ["atlanta united", "atl", "atlanta", "united"],
        "austin fc": ["austin fc", "aus", "austin"],
        "charlotte fc": ["charlotte fc", "cha", "charlotte"],
        "chicago fire": ["chicago fire", "chi", "fire"],
        "fc cincinnati": ["fc cincinnati", "cin", "cincinnati"],
        "colorado rapids": ["colorado rapids", "col", "rapids"],
        "columbus crew": ["columbus crew", "clb", "crew"],
        "fc dallas": ["fc dallas", "dal", "dallas"],
        "dc united": ["dc united", "dc", "united"],
        "houston dynamo": ["houston dynamo", "hou", "dynamo"],
        "lafc": ["lafc", "la", "los angeles fc"],
        "la galaxy": ["la galaxy", "lag", "galaxy"],
        "inter miami": ["inter miami", "mia", "miami"],
        "minnesota united": ["minnesota united", "min", "minnesota", "loons"],
        "cf montreal": ["cf montreal", "mon", "montreal", "impact"],
        "nashville sc": ["nashville sc", "nsh", "nashville"],
        "new england revolution": ["new england revolution", "ne", "revolution", "revs"],
        "new york city fc": ["new york city fc", "nyc", "nycfc", "city"],
        "new york red bulls": ["new york red bulls", "ny", "red bulls", "rbny"],
        "orlando city": ["orlando city", "orl", "orlando"],
        "philadelphia union": ["philadelphia union", "phi", "union"],
        "portland timbers": ["portland timbers", "por", "timbers"],
        "real salt lake": ["real salt lake", "rsl", "salt lake"],
        "san jose earthquakes": ["san jose earthquakes", "sj", "earthquakes", "quakes"],
        "seattle sounders": ["seattle sounders", "sea", "sounders"],
        "sporting kansas city": ["sporting kansas city", "skc", "sporting kc"],
        "toronto fc": ["toronto fc", "tor", "toronto"],
        "vancouver whitecaps": ["vancouver whitecaps", "van", "whitecaps"],
    },
}


def _rules(*rules: Tuple[str, str]) -> List[Tuple[Pattern, str]]:
    return [(re.compile(pattern, re.IGNORECASE), replacement) for pattern, replacement in rules]


# Abbreviation expansions applied before retrying the alias table
PATTERN_REPLACEMENTS: Dict[str, List[Tuple[Pattern, str]]] = {
    "common": _rules(
        (r"\bny\b", "new york"),
        (r"\bla\b", "los angeles"),
        (r"\btb\b", "tampa bay"),
        (r"\bsf\b", "san francisco"),
        (r"\bno\b", "new orleans"),
        (r"\bgb\b", "green bay"),
        (r"\bne\b", "new england"),
        (r"\blv\b", "las vegas"),
    ),
    "nhl": _rules(
        (r"\btbl\b", "tampa bay lightning"),
        (r"\bvgk\b", "vegas golden knights"),
        (r"\blak\b", "los angeles kings"),
    ),
    "nba": _rules(
        (r"\bgsw\b", "golden state warriors"),
        (r"\bloc\b", "la clippers"),
        (r"76ers", "philadelphia 76ers"),
    ),
    # Club prefixes are dropped, then common shorthand expanded
    "soccer": _rules(
        (r"\bfc\b", ""),
        (r"\bcf\b", ""),
        (r"\bafc\b", ""),
        (r"\bsc\b", ""),
        (r"\bus\b", ""),
        (r"\bac\b", ""),
        (r"\bcd\b", ""),
        (r"\brcd\b", ""),
        (r"\bssc\b", ""),
        (r"\bman\s+city\b", "manchester city"),
        (r"\bman\s+united\b", "manchester united"),
    ),
}

SOCCER_SPORT_CODES = frozenset({
    "epl", "laliga", "seriea", "bundesliga", "ucl", "mls", "facup",
    "ligue1", "eredivisie", "ligaportugal",
})


def get_aliases(sport_code: str) -> Dict[str, List[str]]:
    """Alias table for a sport code, empty if none is curated."""
    return TEAM_ALIASES.get(sport_code.lower(), {}) if sport_code else {}


def get_pattern_rules(sport_code: str) -> List[Tuple[Pattern, str]]:
    """Common expansions followed by the sport (or soccer family) rules."""
    code = (sport_code or "").lower()
    rules = list(PATTERN_REPLACEMENTS["common"])
    if code in PATTERN_REPLACEMENTS:
        rules.extend(PATTERN_REPLACEMENTS[code])
    elif code in SOCCER_SPORT_CODES:
        rules.extend(PATTERN_REPLACEMENTS["soccer"])
    return rules


def expand_patterns(value: str, sport_code: str) -> str:
    """Apply every pattern rule for the sport and re-collapse whitespace."""
    for pattern, replacement in get_pattern_rules(sport_code):
        value = pattern.sub(replacement, value)
    return ' '.join(value.split())
