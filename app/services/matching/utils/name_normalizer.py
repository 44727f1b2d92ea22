"""Name normalization utilities for team name matching.

Handles common variations across feeds:
- Case: "TORONTO MAPLE LEAFS" → "toronto maple leafs"
- Punctuation: "St. Louis Blues" → "st louis blues"
- Extra spaces: "New  York   Rangers" → "new york rangers"

Also builds the stable identifiers used in canonical event keys:
- Slugs: "Toronto Maple Leafs" → "toronto_maple_leafs"
- Team set keys: ("toronto_maple_leafs", "carolina_hurricanes")
  → "carolina_hurricanes|toronto_maple_leafs"
"""
import re


_NON_ALNUM_RE = re.compile(r'[^a-z0-9\s]')
_SLUG_RE = re.compile(r'^[a-z0-9_]*$')


def normalize(raw: str) -> str:
    """
    Normalize a raw team name for comparison.

    Steps:
    1. Convert to lowercase
    2. Remove every character outside [a-z0-9] and whitespace
    3. Collapse whitespace runs to one space and trim

    Total: empty or None input yields an empty string.

    Examples:
        >>> normalize("St. Louis Blues")
        'st louis blues'
        >>> normalize("  N.Y.  Rangers ")
        'ny rangers'
        >>> normalize("")
        ''
    """
    if not raw:
        return ""

    name = _NON_ALNUM_RE.sub('', raw.lower())
    return ' '.join(name.split())


def slugify(full_name: str) -> str:
    """
    Slugify a resolved team name into a canonical ID.

    Same character stripping as normalize(), but words are joined with
    underscores. Used to build identifiers, not for fuzzy comparison.

    Examples:
        >>> slugify("Toronto Maple Leafs")
        'toronto_maple_leafs'
        >>> slugify("St. Louis Blues")
        'st_louis_blues'
    """
    if not full_name:
        return ""

    name = _NON_ALNUM_RE.sub('', full_name.lower())
    return '_'.join(name.split())


# Canonical identifiers are slugs of official names
team_id = slugify


def is_slug(value: str) -> bool:
    """Check that a value only contains slug characters."""
    return isinstance(value, str) and bool(_SLUG_RE.match(value))


def team_set_key(id_a: str, id_b: str) -> str:
    """
    Create an order-independent team set key from two slugified IDs.

    The smaller ID always comes first, so the key is identical whichever
    side a source calls "home".

    Raises:
        ValueError: If either argument is not already a slug

    Examples:
        >>> team_set_key("toronto_maple_leafs", "carolina_hurricanes")
        'carolina_hurricanes|toronto_maple_leafs'
    """
    if not is_slug(id_a) or not is_slug(id_b):
        raise ValueError(f"team_set_key expects slugified IDs, got {id_a!r} and {id_b!r}")

    return f"{id_a}|{id_b}" if id_a < id_b else f"{id_b}|{id_a}"


def extract_nickname(full_name: str) -> str:
    """
    Extract the nickname (last word longer than two characters).

    Examples:
        >>> extract_nickname("Toronto Maple Leafs")
        'leafs'
        >>> extract_nickname("LA")
        ''
    """
    if not full_name:
        return ""

    parts = [w for w in full_name.lower().split() if len(w) > 2]
    return parts[-1] if parts else ""


def extract_city(full_name: str) -> str:
    """
    Extract the city (every word except a trailing nickname).

    A trailing word counts as a nickname when it is longer than two
    characters; otherwise only the first word is returned.

    Examples:
        >>> extract_city("Los Angeles Kings")
        'los angeles'
        >>> extract_city("Toronto")
        'toronto'
    """
    parts = full_name.split() if full_name else []
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0].lower()

    if len(parts[-1]) > 2:
        return ' '.join(parts[:-1]).lower()

    return parts[0].lower()
