"""
Helpers for decoding JSON payloads into model dataclasses.

Decoders raise KeyError, TypeError or ValueError on malformed payloads; the
request executor reports any of these as a decoding failure.
"""
from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Type, Union

TypeSpec = Union[Type, Tuple[Type, ...]]


def require_mapping(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def require_list(data: Any) -> list:
    if not isinstance(data, list):
        raise TypeError(f"Expected a JSON array, got {type(data).__name__}")
    return data


def _check_type(key: str, value: Any, expected: TypeSpec) -> Any:
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool) and bool not in _as_tuple(expected):
        raise TypeError(f"Field '{key}' has unexpected type bool")
    if not isinstance(value, expected):
        raise TypeError(f"Field '{key}' has unexpected type {type(value).__name__}")
    return value


def _as_tuple(expected: TypeSpec) -> Tuple[Type, ...]:
    return expected if isinstance(expected, tuple) else (expected,)


def required(data: Dict[str, Any], key: str, expected: TypeSpec) -> Any:
    """Return ``data[key]``, which must be present, non-null and typed."""
    if data.get(key) is None:
        raise KeyError(key)
    return _check_type(key, data[key], expected)


def optional(data: Dict[str, Any], key: str, expected: TypeSpec) -> Optional[Any]:
    """Return ``data[key]`` or None when absent or null."""
    value = data.get(key)
    if value is None:
        return None
    return _check_type(key, value, expected)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp as sent by the backend."""
    return datetime.fromisoformat(value.replace('Z', '+00:00'))
