import json
import math
from decimal import Decimal
from typing import Any, Iterable, Mapping
from urllib.parse import urlencode

from ._params import (
    BoolValue,
    FloatValue,
    IntegerValue,
    ListValue,
    ParamValue,
    StringValue,
    UnsupportedValue,
    classify,
)
from .models.errors import BuildError

# decimal exponents outside this range keep the exponent form
_POSITIONAL_MIN_EXP = -4
_POSITIONAL_MAX_EXP = 21


def format_float(value: float) -> str:
    """Shortest round-trip decimal text of ``value``.

    Integral values drop the fraction (``5.0`` -> ``"5"``) and the exponent
    form is only used for very large or very small magnitudes.

    Examples:
        >>> format_float(0.1)
        '0.1'
        >>> format_float(1e16)
        '10000000000000000'
        >>> format_float(1.5e-05)
        '1.5e-05'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    text = repr(value)
    if "e" in text:
        exponent = int(text.split("e", 1)[1])
        if _POSITIONAL_MIN_EXP <= exponent < _POSITIONAL_MAX_EXP:
            text = format(Decimal(text), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def render(value: ParamValue) -> list[str]:
    """Return the form values of a classified parameter, possibly none."""
    match value:
        case StringValue(value=text):
            return [text]
        case BoolValue(value=flag):
            return ["true" if flag else "false"]
        case IntegerValue(value=number):
            return [str(number)]
        case FloatValue(value=number):
            return [format_float(number)]
        case ListValue(items=items):
            return [text for item in items for text in render(item)]
        case UnsupportedValue():
            return []
    return []


def form_pairs(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Flatten a parameter mapping into form pairs, sorted by key.

    List values produce one pair per element in list order; unsupported
    values produce none.
    """
    pairs = []
    for key in sorted(params):
        for text in render(classify(params[key])):
            pairs.append((key, text))
    return pairs


def encode_pairs(pairs: Iterable[tuple[str, str]]) -> str:
    """URL-encode pairs after a stable sort on the key."""
    return urlencode(sorted(pairs, key=lambda pair: pair[0]))


def encode_form(params: Mapping[str, Any]) -> str:
    """Encode a parameter mapping as ``application/x-www-form-urlencoded``."""
    return encode_pairs(form_pairs(params))


def encode_json(params: Mapping[str, Any]) -> bytes:
    """Encode a parameter mapping as a JSON object."""
    try:
        return json.dumps(dict(params), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise BuildError(f"parameters are not JSON serializable: {e}") from e
