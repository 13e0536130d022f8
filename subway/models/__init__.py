"""
pydantic models for 요청, 응답, 도메인 객체
"""


from subway.models.requests import (
    StationCreateRequest,
    StationUpdateRequest,
    LineCreateRequest,
    LineUpdateRequest,
    SectionCreateRequest,
)
from subway.models.responses import (
    StationResponse,
    LineResponse,
    ErrorResponse,
)
from subway.models.domain import Station, Line, Section

__all__ = [
    "StationCreateRequest",
    "StationUpdateRequest",
    "LineCreateRequest",
    "LineUpdateRequest",
    "SectionCreateRequest",
    "StationResponse",
    "LineResponse",
    "ErrorResponse",
    "Station",
    "Line",
    "Section",
]
