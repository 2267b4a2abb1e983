# elements.py
import math
from numbers import Real


def _numeric_field(raw):
    """Return the numeric `value` carried by a record, or None."""
    if isinstance(raw, dict):
        candidate = raw.get("value")
    else:
        candidate = getattr(raw, "value", None)
    if isinstance(candidate, Real) and not isinstance(candidate, bool):
        return candidate
    return None


def coerce_value(raw):
    """
    Turn an arbitrary raw input into a number.
    - real numbers pass through unchanged (bools become 0/1)
    - records exposing a numeric `value` contribute that value
    - everything else is parsed; anything unparsable becomes 0
    Never raises.
    """
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, Real):
        return raw

    field = _numeric_field(raw)
    if field is not None:
        return field

    if raw is None or isinstance(raw, (dict, list, tuple, set)):
        return 0

    text = str(raw).strip()
    # digit-group underscores are Python literal syntax, not input syntax
    if not text or "_" in text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        parsed = float(text)
    except ValueError:
        return 0
    return 0 if math.isnan(parsed) else parsed


def normalize_elements(values):
    """Attach a positional identity to every raw value: [{"id": i, "value": v}, ...]."""
    return [
        {"id": idx, "value": coerce_value(raw)}
        for idx, raw in enumerate(values or [])
    ]


def format_value(value):
    """Render 5.0 as "5" so messages read the way the numbers were typed."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
