"""
Common response envelopes.

The pipeline decodes bodies directly into the requested type. Services
that wrap their payload in an envelope can request one of these
generic models instead.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Envelope of the form {"data": ...}."""
    
    model_config = ConfigDict(frozen=True)
    
    data: T


class ApiResponse(BaseModel, Generic[T]):
    """Envelope of the form {"code": ..., "data": ..., "message": ...}."""
    
    model_config = ConfigDict(frozen=True)
    
    code: int
    data: T
    message: str


class EmptyResponse(BaseModel):
    """Envelope without a payload: {"code": ..., "message": ...}."""
    
    model_config = ConfigDict(frozen=True)
    
    code: int
    message: str
