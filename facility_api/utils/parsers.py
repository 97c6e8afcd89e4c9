from typing import Optional


def parse_boolean(value) -> Optional[bool]:
    """Parse a query-string boolean into True, False or None (absent/unknown)."""
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return None

    value = value.strip().lower()
    if value == 'true':
        return True
    if value == 'false':
        return False
    return None


def split_query_list(values) -> list[str]:
    """Flatten repeated and comma separated query values (?a=1&a=2,3)."""
    result = []
    for value in values:
        for part in value.split(','):
            part = part.strip()
            if part:
                result.append(part)
    return result
