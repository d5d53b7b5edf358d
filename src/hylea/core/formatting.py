"""Display formatting: JSON pretty-printing and duration strings."""

from __future__ import annotations

import json

JSON_INDENT = 4


def prettify(body: str) -> str:
    """Re-serialize a JSON object body with 4-space indentation.

    Anything that is not a JSON object (malformed JSON, arrays, scalars)
    is returned unmodified.
    """
    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return body
    if not isinstance(parsed, dict):
        return body
    return json.dumps(parsed, indent=JSON_INDENT, sort_keys=True, ensure_ascii=False)


def format_duration(seconds: float) -> str:
    """Render a duration rounded to the millisecond.

    0 -> "0s", 0.015 -> "15ms", 1.2344 -> "1.234s", 123.4567 -> "2m3.457s".
    """
    total_ms = int(round(max(0.0, seconds) * 1000))
    if total_ms == 0:
        return "0s"
    if total_ms < 1000:
        return f"{total_ms}ms"

    hours, rem_ms = divmod(total_ms, 3_600_000)
    minutes, rem_ms = divmod(rem_ms, 60_000)
    secs, millis = divmod(rem_ms, 1000)

    sec_part = f"{secs}.{millis:03d}".rstrip("0").rstrip(".") + "s"
    if hours:
        return f"{hours}h{minutes}m{sec_part}"
    if minutes:
        return f"{minutes}m{sec_part}"
    return sec_part
