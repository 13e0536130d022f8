"""
Core 설정 및 utilities, 커스텀 예외
"""

from subway.core.config import settings

from subway.core.exceptions import (
    SubwayException,
    DuplicateNameError,
    StationNotFoundError,
    LineNotFoundError,
    InvalidSectionError,
    StationInUseError,
    RouteConsistencyError,
)

__all__ = [
    "settings",
    "SubwayException",
    "DuplicateNameError",
    "StationNotFoundError",
    "LineNotFoundError",
    "InvalidSectionError",
    "StationInUseError",
    "RouteConsistencyError",
]
