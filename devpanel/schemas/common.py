"""
Shared schema primitives used across the API.

Wire field names are camelCase to match the stored documents
(`categoryScores`, `vetoRule`, `zeroCount`, ...). Python code uses the
snake_case field names; both are accepted on input.
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Standard error envelope returned for all 4xx/5xx responses."""
    model_config = ConfigDict(from_attributes=True)

    code: str
    message: str
    details: Optional[dict[str, Any]] = None
