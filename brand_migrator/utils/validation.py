from brand_migrator.utils.normalizers import MIN_YEAR_FOUNDED, MIN_LOCATIONS, MAX_LOCATIONS


def _is_int(v):
    return isinstance(v, int) and not isinstance(v, bool)


def _is_text(v):
    return isinstance(v, str) and v.strip() != ''


def validate_brand(data, current_year, partial=False):
    """Validate a canonical brand payload before it is written.

    With partial=True only the fields present in ``data`` are checked (used
    for $set updates). Returns (ok: bool, errors: dict).
    """
    errors = {}

    def _check(field):
        return not partial or field in data

    if _check('brandName') and not _is_text(data.get('brandName')):
        errors['brandName'] = 'Brand name is required.'

    if _check('yearFounded'):
        year = data.get('yearFounded')
        if not _is_int(year):
            errors['yearFounded'] = 'Year founded is required and must be an integer.'
        elif year < MIN_YEAR_FOUNDED:
            errors['yearFounded'] = f'Year founded seems too old (minimum {MIN_YEAR_FOUNDED}).'
        elif year > current_year:
            errors['yearFounded'] = 'Year founded cannot be in the future.'

    if _check('headquarters') and not _is_text(data.get('headquarters')):
        errors['headquarters'] = 'Headquarters location is required.'

    if _check('numberOfLocations'):
        count = data.get('numberOfLocations')
        if not _is_int(count):
            errors['numberOfLocations'] = 'Number of locations is required and must be an integer.'
        elif count < MIN_LOCATIONS:
            errors['numberOfLocations'] = 'There should be at least one location.'
        elif count > MAX_LOCATIONS:
            errors['numberOfLocations'] = f'Number of locations cannot exceed {MAX_LOCATIONS}.'

    return (len(errors) == 0, errors)


def trim_text_fields(data):
    """Strip surrounding whitespace from the string fields of a brand payload (returns a copy)."""
    out = dict(data)
    for field in ('brandName', 'headquarters'):
        if isinstance(out.get(field), str):
            out[field] = out[field].strip()
    return out
