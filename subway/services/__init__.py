"""
Business logic services
"""

from subway.services.station_service import StationService
from subway.services.line_service import LineService
from subway.services.section_service import SectionService

__all__ = [
    "StationService",
    "LineService",
    "SectionService",
]
