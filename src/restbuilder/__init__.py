"""Fluent HTTP request builder on top of httpx."""

from ._client import HttpMethod, RestClient, SerializationMode
from ._config import Config
from ._encoding import encode_form, encode_json, format_float
from ._executor import Executor, default_executor
from ._params import (
    BoolValue,
    FloatValue,
    IntegerValue,
    ListValue,
    Pair,
    ParamModel,
    ParamSource,
    ParamValue,
    StringValue,
    UnsupportedValue,
    classify,
    merge_params,
)
from ._utils import RequestSpec, setup_logging
from .models.errors import (
    APIError,
    BuildError,
    DecodeError,
    ReadError,
    RestBuilderError,
    TransportError,
)

__all__ = [
    "APIError",
    "BoolValue",
    "BuildError",
    "Config",
    "DecodeError",
    "Executor",
    "FloatValue",
    "HttpMethod",
    "IntegerValue",
    "ListValue",
    "Pair",
    "ParamModel",
    "ParamSource",
    "ParamValue",
    "ReadError",
    "RequestSpec",
    "RestBuilderError",
    "RestClient",
    "SerializationMode",
    "StringValue",
    "TransportError",
    "UnsupportedValue",
    "classify",
    "default_executor",
    "encode_form",
    "encode_json",
    "format_float",
    "merge_params",
    "setup_logging",
]
