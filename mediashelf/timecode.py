"""HH:MM:SS timecode parsing."""

from mediashelf.errors import InvalidTimeFormatError


def parse_timecode(text: str) -> int:
    """Return the total number of seconds in an ``HH:MM:SS`` timecode.

    Field ranges are not checked, so ``00:75:00`` is 4500 seconds.
    """
    if not isinstance(text, str):
        raise InvalidTimeFormatError(f"timecode must be a string, got {text!r}")

    fields = text.split(":")
    if len(fields) != 3:
        raise InvalidTimeFormatError(f"expected HH:MM:SS, got {text!r}")

    for field in fields:
        if not (field.isascii() and field.isdigit()):
            raise InvalidTimeFormatError(f"non-numeric field in timecode {text!r}")

    hours, minutes, seconds = (int(f) for f in fields)
    return hours * 3600 + minutes * 60 + seconds


def duration(start: str, end: str) -> int:
    """Seconds from *start* to *end*. May be zero or negative."""
    return parse_timecode(end) - parse_timecode(start)
