"""
Parameter encoding for http_pipeline.

This module selects a body encoding from a declared content type and
serializes parameter sets into JSON bodies, URL-encoded bodies, or
query items for GET requests.
"""

import dataclasses
import json
import math
import string
from typing import Any, Dict, Mapping, Union
from urllib.parse import quote

from pydantic import BaseModel

from .exceptions import EncodingError
from .http_primitives import (
    ContentEncoding,
    ContentType,
    ParameterSet,
    ParameterValue,
    QueryItems,
)


# Query-safe characters plus literal space. "+", "/" and "?" are left out
# so they are always percent-encoded.
ALLOWED_CHARACTERS = frozenset(
    string.ascii_letters + string.digits + "-._~" + "!$&'()*,;=:@" + " "
)
_SAFE_CHARACTERS = "".join(sorted(ALLOWED_CHARACTERS))


def select_encoding(content_type: Union[ContentType, str]) -> ContentEncoding:
    """
    Map a declared content type to its body encoding.
    
    Args:
        content_type: A ContentType member or its header value
        
    Returns:
        The ContentEncoding for that content type
        
    Raises:
        EncodingError: If the header value is not a supported content type
    """
    try:
        return ContentType(content_type).encoding
    except ValueError as e:
        raise EncodingError(f"unsupported content type {content_type!r}", cause=e) from e


def _check_value(key: Any, value: Any) -> ParameterValue:
    if not isinstance(key, str):
        raise EncodingError(f"parameter name must be str, got {type(key).__name__}")
    
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise EncodingError(f"parameter {key!r} is not a finite number")
        return value
    if isinstance(value, str):
        return value
    
    raise EncodingError(
        f"parameter {key!r} has unsupported type {type(value).__name__}"
    )


def stringify(value: ParameterValue) -> str:
    """Natural string form of a parameter value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def escape(value: str) -> str:
    """
    Escape a string for a URL-encoded form body.
    
    Line breaks are normalized to CRLF, every character outside
    ALLOWED_CHARACTERS is percent-encoded as UTF-8, and spaces
    become "+".
    """
    normalized = value.replace("\r\n", "\n").replace("\n", "\r\n")
    return quote(normalized, safe=_SAFE_CHARACTERS).replace(" ", "+")


def _encode_json(params: ParameterSet) -> bytes:
    checked = {key: _check_value(key, value) for key, value in params.items()}
    try:
        return json.dumps(checked, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodingError(f"cannot serialize parameters as JSON: {e}", cause=e) from e


def _encode_url(params: ParameterSet) -> bytes:
    pairs = []
    for key, value in params.items():
        checked = _check_value(key, value)
        pairs.append(f"{escape(key)}={escape(stringify(checked))}")
    
    return "&".join(pairs).encode("utf-8")


def encode_body(params: ParameterSet, encoding: ContentEncoding) -> bytes:
    """
    Serialize a parameter set into a request body.
    
    Args:
        params: Mapping of names to str, int, float or bool values
        encoding: The body encoding to apply
        
    Returns:
        Encoded body bytes (b"{}" or b"" for an empty set)
        
    Raises:
        EncodingError: If a value is outside the parameter value model
    """
    if encoding is ContentEncoding.JSON:
        return _encode_json(params)
    if encoding is ContentEncoding.URL_ENCODED:
        return _encode_url(params)
    
    raise EncodingError(f"unsupported encoding: {encoding!r}")


def encode_query(params: ParameterSet) -> QueryItems:
    """
    Turn a parameter set into ordered query items for a GET request.
    
    Values are stringified but not escaped; the query-string serializer
    of the request descriptor owns final escaping.
    """
    return tuple(
        (key, stringify(_check_value(key, value))) for key, value in params.items()
    )


def parameters_from_model(value: Any) -> Dict[str, ParameterValue]:
    """
    Build a parameter set from a model, dataclass or mapping.
    
    Fields set to None are omitted. Nested values are rejected.
    
    Raises:
        EncodingError: If the value cannot be flattened into parameters
    """
    if isinstance(value, BaseModel):
        raw = value.model_dump(mode="json")
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        raw = dataclasses.asdict(value)
    elif isinstance(value, Mapping):
        raw = dict(value)
    else:
        raise EncodingError(f"cannot build parameters from {type(value).__name__}")
    
    return {
        key: _check_value(key, item) for key, item in raw.items() if item is not None
    }
