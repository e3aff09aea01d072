"""Parameter sources and the merge of several sources into one flat mapping.

A parameter source is anything that can describe itself as flat key/value
pairs: a ``Pair``, a plain ``Mapping``, or an object implementing
``ParamSource.to_params()``. Pydantic models get this for free by inheriting
from ``ParamModel``; other pydantic models are dumped the same way.

Values are classified into a closed set of variants before FORM encoding.
Anything outside the supported kinds becomes ``UnsupportedValue`` and is left
out of the encoded output.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Protocol, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict

from .models.errors import BuildError


@runtime_checkable
class ParamSource(Protocol):
    def to_params(self) -> Mapping[str, Any]:
        ...


@dataclass(frozen=True)
class Pair:
    """A parameter source holding a single key/value pair."""

    key: str
    value: Any

    def to_params(self) -> Mapping[str, Any]:
        return {self.key: self.value}


class ParamModel(BaseModel):
    """Base class for pydantic models used as parameter sources.

    Every field becomes a key, named by its alias when one is declared and by
    the field name otherwise. Values are dumped in JSON mode, so dates, enums
    and UUIDs arrive as strings.

    Examples:
        >>> from pydantic import Field
        >>> class Search(ParamModel):
        ...     query: str = Field(alias="q")
        ...     page: int = 1
        >>> Search(q="cats").to_params()
        {'q': 'cats', 'page': 1}
    """

    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    def to_params(self) -> Mapping[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class IntegerValue:
    value: int


@dataclass(frozen=True)
class FloatValue:
    value: float


Scalar = Union[StringValue, BoolValue, IntegerValue, FloatValue]


@dataclass(frozen=True)
class ListValue:
    items: tuple[Scalar, ...]


@dataclass(frozen=True)
class UnsupportedValue:
    value: Any
    reason: str


ParamValue = Union[
    StringValue, BoolValue, IntegerValue, FloatValue, ListValue, UnsupportedValue
]


def classify_scalar(value: Any) -> Scalar | None:
    # bool before int: bool is an int subclass
    if isinstance(value, str):
        return StringValue(value)
    if isinstance(value, bool):
        return BoolValue(value)
    if isinstance(value, int):
        return IntegerValue(value)
    if isinstance(value, float) and math.isfinite(value):
        return FloatValue(value)
    return None


def classify(value: Any) -> ParamValue:
    """Map a raw parameter value onto its variant.

    Lists and tuples are accepted when every element is a scalar of the same
    kind; an empty list is a ``ListValue`` with no items.
    """
    scalar = classify_scalar(value)
    if scalar is not None:
        return scalar
    if isinstance(value, float):
        return UnsupportedValue(value, "non-finite float has no form encoding")

    if isinstance(value, (list, tuple)):
        items = [classify_scalar(item) for item in value]
        if any(item is None for item in items):
            return UnsupportedValue(value, "list contains a non-scalar element")
        if len({type(item) for item in items}) > 1:
            return UnsupportedValue(value, "list mixes value kinds")
        return ListValue(tuple(items))  # type: ignore[arg-type]

    if value is None:
        return UnsupportedValue(value, "None has no form encoding")
    return UnsupportedValue(value, f"unsupported type {type(value).__name__}")


def source_params(source: Any) -> Mapping[str, Any]:
    """Return the flat key/value mapping contributed by one source."""
    if isinstance(source, ParamSource):
        params = source.to_params()
    elif isinstance(source, BaseModel):
        params = source.model_dump(mode="json", by_alias=True)
    elif isinstance(source, Mapping):
        params = source
    else:
        raise BuildError(
            f"parameter source of type {type(source).__name__} "
            "is neither a mapping nor provides to_params()"
        )

    for key in params:
        if not isinstance(key, str):
            raise BuildError(f"parameter keys must be strings, got {key!r}")
    return params


def merge_params(sources: Iterable[Any]) -> dict[str, Any]:
    """Merge sources left to right; a later source overwrites earlier keys."""
    merged: dict[str, Any] = {}
    for source in sources:
        merged.update(source_params(source))
    return merged
