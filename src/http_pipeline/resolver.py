"""
Response resolution for http_pipeline.

This module validates response status codes and decodes JSON bodies
into caller-specified result types using pydantic TypeAdapters.
"""

import logging
from functools import lru_cache
from typing import Any, Tuple, Type, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticUserError

from .exceptions import DecodingError, InvalidStatusCodeError
from .http_primitives import ResponseOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Inclusive on both ends: a 300 response is accepted.
SUCCESS_STATUS_RANGE: Tuple[int, int] = (200, 300)

ADAPTER_CACHE_SIZE = 128


@lru_cache(maxsize=ADAPTER_CACHE_SIZE)
def _cached_adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


def _get_adapter(result_type: Any) -> TypeAdapter:
    try:
        hash(result_type)
    except TypeError:
        # Unhashable type expression
        return TypeAdapter(result_type)
    return _cached_adapter(result_type)


def is_success(status_code: int) -> bool:
    """Check a status code against SUCCESS_STATUS_RANGE."""
    low, high = SUCCESS_STATUS_RANGE
    return low <= status_code <= high


def validate_status(outcome: ResponseOutcome) -> None:
    """
    Reject responses outside the success range.
    
    Raises:
        InvalidStatusCodeError: If the status code is not in [200, 300]
    """
    if not is_success(outcome.status_code):
        logger.warning(f"Rejecting response with status {outcome.status_code}")
        raise InvalidStatusCodeError(outcome.status_code, outcome.body)


def decode(body: bytes, result_type: Type[T]) -> T:
    """
    Decode a JSON body into result_type without type coercion.
    
    Raises:
        DecodingError: If the body is not JSON or does not match the type
    """
    try:
        adapter = _get_adapter(result_type)
    except (TypeError, PydanticUserError) as e:
        raise DecodingError(f"unsupported result type {result_type!r}", cause=e) from e
    
    try:
        return adapter.validate_json(body, strict=True)
    except ValidationError as e:
        raise DecodingError(
            f"body does not decode as {getattr(result_type, '__name__', result_type)}: "
            f"{e.error_count()} error(s)",
            cause=e,
        ) from e


def resolve(outcome: ResponseOutcome, result_type: Type[T]) -> T:
    """
    Validate an outcome and decode its body.
    
    Args:
        outcome: The raw transport outcome
        result_type: Any type pydantic can validate (models, dataclasses,
                     TypedDicts, builtins and generics of them)
        
    Returns:
        The decoded result
        
    Raises:
        InvalidStatusCodeError: If the status code is rejected
        DecodingError: If the body cannot be decoded
    """
    validate_status(outcome)
    return decode(outcome.body, result_type)
