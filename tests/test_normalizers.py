from types import MappingProxyType

import bson
import pytest

from brand_migrator.utils.normalizers import (
    normalize_brand, parse_int_prefix, first_present, alias_keys_to_unset,
    UNKNOWN_BRAND_NAME, UNKNOWN_HEADQUARTERS, MAX_LOCATIONS,
)

YEAR = 2024


@pytest.mark.parametrize('value, expected', [
    ('1999', 1999),
    ('1999abc', 1999),
    ('  42 stores', 42),
    ('-3', -3),
    ('+7', 7),
    (1850, 1850),
    (2011.6, 2011),
    ('abc', None),
    ('', None),
    ('12.5', 12),
    (None, None),
    (True, None),
    (float('nan'), None),
    (float('inf'), None),
    ([1999], None),
])
def test_parse_int_prefix(value, expected):
    assert parse_int_prefix(value) == expected


def test_first_present_skips_empty_values():
    assert first_present({'a': '', 'b': None, 'c': 'x'}, ('a', 'b', 'c')) == 'x'
    assert first_present({'a': '  '}, ('a',)) is None
    assert first_present({}, ('a',)) is None


def test_acme_scenario():
    raw = {'brandName': 'Acme', 'established': '1899', 'storeCount': '0'}
    assert normalize_brand(raw, YEAR) == {
        'brandName': 'Acme',
        'yearFounded': 1899,
        'headquarters': 'Unknown',
        'numberOfLocations': 1,
    }


def test_zed_co_scenario():
    raw = {'name': 'Zed Co', 'yearFounded': '3000', 'numberOfLocations': '12'}
    assert normalize_brand(raw, YEAR) == {
        'brandName': 'Zed Co',
        'yearFounded': 2024,
        'headquarters': 'Unknown',
        'numberOfLocations': 12,
    }


def test_unparseable_numbers_fall_to_floor_defaults():
    out = normalize_brand({'brandName': 'Old Inc', 'yearFounded': 'abc', 'storeCount': 'xyz'}, YEAR)
    assert out['yearFounded'] == 1600
    assert out['numberOfLocations'] == 1


def test_missing_numeric_aliases_use_floor_defaults():
    out = normalize_brand({'brandName': 'Bare'}, YEAR)
    assert out['yearFounded'] == 1600
    assert out['numberOfLocations'] == 1


@pytest.mark.parametrize('year', ['1', '1599', -50, '0'])
def test_year_below_floor_clamps_to_1600(year):
    assert normalize_brand({'yearFounded': year}, YEAR)['yearFounded'] == 1600


@pytest.mark.parametrize('year', ['2025', 9999, '2100 AD'])
def test_future_year_clamps_to_current_year(year):
    assert normalize_brand({'yearFounded': year}, YEAR)['yearFounded'] == YEAR


@pytest.mark.parametrize('year', [1600, 1776, '1999', 2024])
def test_year_in_range_is_kept(year):
    assert normalize_brand({'established': year}, YEAR)['yearFounded'] == int(year)


def test_current_year_is_injected():
    raw = {'yearFounded': '2030'}
    assert normalize_brand(raw, 2030)['yearFounded'] == 2030
    assert normalize_brand(raw, 2026)['yearFounded'] == 2026


def test_first_priority_alias_wins():
    raw = {
        'brandName': 'Primary', 'name': 'Secondary',
        'yearFounded': '1988', 'established': '1950',
        'hqAddress': 'Pittsburgh, PA', 'mainOffice': 'Cleveland, OH',
        'numberOfLocations': '250', 'storeCount': '9',
    }
    assert normalize_brand(raw, YEAR) == {
        'brandName': 'Primary',
        'yearFounded': 1988,
        'headquarters': 'Pittsburgh, PA',
        'numberOfLocations': 250,
    }


def test_unparseable_first_alias_does_not_fall_through():
    out = normalize_brand({'yearFounded': 'abc', 'established': '1950'}, YEAR)
    assert out['yearFounded'] == 1600


def test_empty_first_alias_falls_through_to_next():
    out = normalize_brand({'brandName': '', 'name': 'Lumen Labs', 'hqAddress': '  ', 'mainOffice': 'Denver, CO'}, YEAR)
    assert out['brandName'] == 'Lumen Labs'
    assert out['headquarters'] == 'Denver, CO'


def test_missing_name_and_location_use_placeholders():
    out = normalize_brand({'established': '1920'}, YEAR)
    assert out['brandName'] == UNKNOWN_BRAND_NAME
    assert out['headquarters'] == UNKNOWN_HEADQUARTERS


def test_text_fields_are_trimmed_and_coerced():
    out = normalize_brand({'brandName': '  Blue Harbor  ', 'hqAddress': 12345}, YEAR)
    assert out['brandName'] == 'Blue Harbor'
    assert out['headquarters'] == '12345'


def test_already_canonical_record_is_unchanged():
    canonical = {'brandName': 'Blue Harbor Coffee', 'yearFounded': 1994,
                 'headquarters': 'Seattle, WA', 'numberOfLocations': 87}
    assert normalize_brand(canonical, YEAR) == canonical
    assert normalize_brand(normalize_brand(canonical, YEAR), YEAR) == canonical


@pytest.mark.parametrize('raw', [{}, {'_id': 1}, {'brandName': None, 'yearFounded': {'x': 1}}, None, ['a']])
def test_never_raises_and_output_is_valid(raw):
    out = normalize_brand(raw, YEAR)
    assert out['brandName'].strip()
    assert out['headquarters'].strip()
    assert 1600 <= out['yearFounded'] <= YEAR
    assert out['numberOfLocations'] >= 1


def test_alias_keys_to_unset_ignores_canonical_names():
    raw = {'_id': 1, 'brandName': 'A', 'name': 'B', 'established': '1', 'hqAddress': 'x', 'storeCount': 2, 'other': 3}
    assert alias_keys_to_unset(raw) == ['established', 'hqAddress', 'name', 'storeCount']


def test_very_long_digit_strings_clamp_instead_of_raising():
    out = normalize_brand({'brandName': 'Big', 'yearFounded': '9' * 5000, 'storeCount': '9' * 5000}, YEAR)
    assert out['yearFounded'] == YEAR
    assert out['numberOfLocations'] == MAX_LOCATIONS

    out = normalize_brand({'established': '-' + '9' * 5000, 'numberOfLocations': '-' + '1' * 5000}, YEAR)
    assert out['yearFounded'] == 1600
    assert out['numberOfLocations'] == 1


@pytest.mark.parametrize('value', ['99999999999999999999', 10 ** 30, 1e30])
def test_location_count_stays_within_int64(value):
    out = normalize_brand({'brandName': 'Big', 'storeCount': value}, YEAR)
    assert out['numberOfLocations'] == MAX_LOCATIONS
    bson.encode(out)


def test_leading_zeros_do_not_count_toward_length():
    assert parse_int_prefix('0' * 40 + '1999') == 1999


def test_only_ascii_digits_are_parsed():
    assert parse_int_prefix('١٩٩٩') is None
    assert normalize_brand({'yearFounded': '١٩٩٩'}, YEAR)['yearFounded'] == 1600


def test_any_mapping_is_accepted():
    raw = MappingProxyType({'name': 'Proxy Co', 'established': '1950', 'storeCount': '4'})
    out = normalize_brand(raw, YEAR)
    assert (out['brandName'], out['yearFounded'], out['numberOfLocations']) == ('Proxy Co', 1950, 4)
