from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional
import math
import re


# Canonical brand fields and their known aliases, highest priority first.
BRAND_ALIAS_MAP = {
    'brandName': ('brandName', 'name'),
    'yearFounded': ('yearFounded', 'established'),
    'headquarters': ('headquarters', 'hqAddress', 'mainOffice'),
    'numberOfLocations': ('numberOfLocations', 'storeCount'),
}

CANONICAL_FIELDS = tuple(BRAND_ALIAS_MAP.keys())

MIN_YEAR_FOUNDED = 1600
MIN_LOCATIONS = 1
# Largest integer BSON can store (int64)
MAX_LOCATIONS = 2 ** 63 - 1
UNKNOWN_HEADQUARTERS = 'Unknown'
UNKNOWN_BRAND_NAME = 'Unknown Brand'

_int_prefix_re = re.compile(r'^\s*([+-]?)0*([0-9]+)')

# Digit prefixes longer than this are beyond every bound used here
_MAX_PREFIX_DIGITS = 19
_OVERLONG = 10 ** _MAX_PREFIX_DIGITS


def is_empty(v: Any) -> bool:
    return v is None or (isinstance(v, str) and str(v).strip() == '')


def first_present(d: Mapping, keys: Iterable[str]) -> Any:
    """Return the first non-empty value for the provided keys in the dict."""
    for k in keys:
        if k in d and not is_empty(d.get(k)):
            return d.get(k)
    return None


def parse_int_prefix(v: Any) -> Optional[int]:
    """Parse a base-10 integer from the leading digits of ``v``.

    '1999abc' -> 1999, '  42' -> 42, 'abc' -> None. Floats truncate toward
    zero; booleans, NaN and infinities are not numbers. Returns None for
    anything that does not start with a number. Only ASCII digits count, and
    prefixes longer than 19 digits come back as 10**19 (keeping their sign)
    so they clamp like any other out-of-range value.
    """
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        if math.isnan(v) or math.isinf(v):
            return None
        return int(v)
    m = _int_prefix_re.match(str(v))
    if not m:
        return None
    sign, digits = m.groups()
    # overlong prefixes never reach int(), which caps string conversions
    value = _OVERLONG if len(digits) > _MAX_PREFIX_DIGITS else int(digits)
    return -value if sign == '-' else value


def coerce_text(v: Any, fallback: str) -> str:
    if is_empty(v):
        return fallback
    try:
        text = str(v).strip()
    except ValueError:
        # int too large for str()
        return fallback
    return text or fallback


def clamp_year(year: Optional[int], current_year: int) -> int:
    if year is None or year < MIN_YEAR_FOUNDED:
        return MIN_YEAR_FOUNDED
    if year > current_year:
        return current_year
    return year


def clamp_locations(count: Optional[int]) -> int:
    if count is None or count < MIN_LOCATIONS:
        return MIN_LOCATIONS
    if count > MAX_LOCATIONS:
        return MAX_LOCATIONS
    return count


def normalize_brand(raw: Mapping, current_year: int) -> Dict[str, Any]:
    """Map one loosely-shaped brand record onto the canonical brand schema.

    Never raises for a mapping input: missing or malformed fields fall back
    to the floor defaults (1600, 1) or the 'Unknown' placeholders. The result
    only contains the four canonical fields; ``_id`` and alias keys are left
    to the caller.
    """
    if not isinstance(raw, Mapping):
        raw = {}

    brand_name = first_present(raw, BRAND_ALIAS_MAP['brandName'])
    headquarters = first_present(raw, BRAND_ALIAS_MAP['headquarters'])
    year = parse_int_prefix(first_present(raw, BRAND_ALIAS_MAP['yearFounded']))
    locations = parse_int_prefix(first_present(raw, BRAND_ALIAS_MAP['numberOfLocations']))

    return {
        'brandName': coerce_text(brand_name, UNKNOWN_BRAND_NAME),
        'yearFounded': clamp_year(year, current_year),
        'headquarters': coerce_text(headquarters, UNKNOWN_HEADQUARTERS),
        'numberOfLocations': clamp_locations(locations),
    }


def alias_keys_to_unset(raw: Dict[str, Any]) -> list:
    """Alias keys present on ``raw`` that are not canonical field names."""
    aliases = {a for keys in BRAND_ALIAS_MAP.values() for a in keys} - set(CANONICAL_FIELDS)
    return sorted(k for k in raw if k in aliases)


__all__ = [
    'BRAND_ALIAS_MAP', 'CANONICAL_FIELDS', 'MIN_YEAR_FOUNDED', 'MIN_LOCATIONS', 'MAX_LOCATIONS',
    'UNKNOWN_HEADQUARTERS', 'UNKNOWN_BRAND_NAME', 'is_empty', 'first_present',
    'parse_int_prefix', 'coerce_text', 'clamp_year', 'clamp_locations',
    'normalize_brand', 'alias_keys_to_unset',
]
