from .errors import (
    APIError,
    BuildError,
    DecodeError,
    ReadError,
    RestBuilderError,
    TransportError,
)

__all__ = [
    "APIError",
    "BuildError",
    "DecodeError",
    "ReadError",
    "RestBuilderError",
    "TransportError",
]
