"""Date helpers for the date-family rules."""

from datetime import datetime, timedelta

EXAMPLE_FORMAT = "%Y-%m-%d %H:%M:%S"

# PHP date() format characters -> strftime directives
PHP_FORMAT = {
    "d": "%d",
    "D": "%a",
    "j": "%-d",
    "l": "%A",
    "N": "%u",
    "w": "%w",
    "z": "%j",
    "W": "%V",
    "F": "%B",
    "m": "%m",
    "M": "%b",
    "n": "%-m",
    "o": "%G",
    "Y": "%Y",
    "y": "%y",
    "a": "%p",
    "A": "%p",
    "g": "%-I",
    "G": "%-H",
    "h": "%I",
    "H": "%H",
    "i": "%M",
    "s": "%S",
    "u": "%f",
    "e": "%Z",
    "T": "%Z",
    "O": "%z",
    "P": "%z",
    "U": "%s",
}


def parse_reference_date(value: str, now: datetime) -> datetime | None:
    """Parse a rule's reference date, None when it names another field."""
    keyword = value.strip().lower()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if keyword == "now":
        return now
    if keyword == "today":
        return today
    if keyword == "tomorrow":
        return today + timedelta(days=1)
    if keyword == "yesterday":
        return today - timedelta(days=1)
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def format_example(value: datetime) -> str:
    return value.strftime(EXAMPLE_FORMAT)


def php_to_strftime(fmt: str) -> str:
    """Translate a PHP date format, honouring backslash escapes."""
    if "%" in fmt:
        return fmt
    out = []
    escaped = False
    for char in fmt:
        if escaped:
            out.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            out.append(PHP_FORMAT.get(char, char))
    return "".join(out)


def render_format(fmt: str, now: datetime) -> str:
    return now.strftime(php_to_strftime(fmt))
