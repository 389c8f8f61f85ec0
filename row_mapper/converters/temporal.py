"""Date/time format patterns and string parsing.

Formats are either ``strptime`` directive strings (anything containing
``%``) or Java-style patterns such as ``dd/MM/yyyy HH:mm:ss``, which are
translated once and cached.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from functools import lru_cache

# (letter, run length) -> strptime directive; None length matches any run.
_DIRECTIVES: dict[tuple[str, int | None], str] = {
    ("y", 2): "%y",
    ("y", None): "%Y",
    ("u", None): "%Y",
    ("M", 1): "%m",
    ("M", 2): "%m",
    ("M", 3): "%b",
    ("M", None): "%B",
    ("d", None): "%d",
    ("D", None): "%j",
    ("H", None): "%H",
    ("k", None): "%H",
    ("h", None): "%I",
    ("K", None): "%I",
    ("m", None): "%M",
    ("s", None): "%S",
    ("S", None): "%f",
    ("n", None): "%f",
    ("a", None): "%p",
    ("E", 1): "%a",
    ("E", 2): "%a",
    ("E", 3): "%a",
    ("E", None): "%A",
    ("X", None): "%z",
    ("x", None): "%z",
    ("Z", None): "%z",
    ("z", None): "%Z",
}


@lru_cache(maxsize=256)
def to_strptime(pattern: str) -> str:
    """Translate a Java-style date pattern into a ``strptime`` format.

    Patterns that already contain ``%`` are returned unchanged. Text in
    single quotes is literal; ``''`` is a literal quote.

    Raises:
        ValueError: If the pattern uses an unsupported letter or leaves a
            quote unterminated.
    """
    if "%" in pattern:
        return pattern

    parts: list[str] = []
    i = 0
    length = len(pattern)
    while i < length:
        char = pattern[i]
        if char == "'":
            end = pattern.find("'", i + 1)
            if end == -1:
                raise ValueError(f"Unterminated quote in pattern {pattern!r}")
            literal = pattern[i + 1 : end]
            parts.append(literal or "'")
            i = end + 1
            continue
        if char.isascii() and char.isalpha():
            run = 1
            while i + run < length and pattern[i + run] == char:
                run += 1
            directive = _DIRECTIVES.get((char, run)) or _DIRECTIVES.get((char, None))
            if directive is None:
                raise ValueError(f"Unsupported pattern letter {char!r} in {pattern!r}")
            parts.append(directive)
            i += run
            continue
        parts.append(char)
        i += 1
    return "".join(parts)


def parse_datetime(value: str, pattern: str) -> datetime:
    return datetime.strptime(value.strip(), to_strptime(pattern))


def parse_date(value: str, pattern: str) -> date:
    return parse_datetime(value, pattern).date()


def parse_time(value: str, pattern: str) -> time:
    return parse_datetime(value, pattern).time()


def parse_aware_datetime(value: str, pattern: str) -> datetime:
    """Parse a date-time with an offset and normalise it to UTC.

    Raises:
        ValueError: If the parsed value carries no offset.
    """
    parsed = parse_datetime(value, pattern)
    if parsed.tzinfo is None:
        raise ValueError(f"{value!r} has no UTC offset for pattern {pattern!r}")
    return parsed.astimezone(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Normalise a datetime to UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
