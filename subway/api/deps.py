from functools import lru_cache
from typing import NamedTuple
import logging

from fastapi import HTTPException, status

from subway.core.config import settings
from subway.core.exceptions import (
    DuplicateNameError,
    InvalidSectionError,
    LineNotFoundError,
    RouteConsistencyError,
    StationInUseError,
    StationNotFoundError,
    SubwayException,
)
from subway.db.repository import LineRepository, SectionRepository, StationRepository
from subway.services.line_service import LineService
from subway.services.section_service import SectionService
from subway.services.station_service import StationService

logger = logging.getLogger(__name__)


class Repositories(NamedTuple):
    station: StationRepository
    line: LineRepository
    section: SectionRepository


# lru_cache 사용하여 싱글톤 패턴과 유사한 효과, 의존성 주입
@lru_cache()
def get_repositories() -> Repositories:
    if settings.use_memory_store:
        from subway.db.memory_repository import create_memory_repositories

        logger.info("메모리 저장소 사용")
        return Repositories(*create_memory_repositories())

    from subway.db.postgres_repository import (
        PostgresLineRepository,
        PostgresSectionRepository,
        PostgresStationRepository,
    )

    logger.info("PostgreSQL 저장소 사용")
    return Repositories(
        station=PostgresStationRepository(),
        line=PostgresLineRepository(),
        section=PostgresSectionRepository(),
    )


@lru_cache()
def get_station_service() -> StationService:
    repositories = get_repositories()
    return StationService(repositories.station, repositories.section)


@lru_cache()
def get_line_service() -> LineService:
    repositories = get_repositories()
    return LineService(repositories.line, repositories.station, repositories.section)


@lru_cache()
def get_section_service() -> SectionService:
    repositories = get_repositories()
    return SectionService(
        repositories.line,
        repositories.station,
        repositories.section,
        get_line_service(),
    )


# 예외 종류 -> HTTP 상태 코드
ERROR_STATUS_CODES = {
    DuplicateNameError: status.HTTP_409_CONFLICT,
    StationNotFoundError: status.HTTP_404_NOT_FOUND,
    LineNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidSectionError: status.HTTP_400_BAD_REQUEST,
    StationInUseError: status.HTTP_400_BAD_REQUEST,
    RouteConsistencyError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_exception(e: SubwayException) -> HTTPException:
    status_code = ERROR_STATUS_CODES.get(
        type(e), status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return HTTPException(
        status_code=status_code, detail={"message": e.message, "code": e.code}
    )
