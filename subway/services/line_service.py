"""
노선 서비스

노선 생성/조회/수정/삭제와 조회 시 구간 -> 역 순서 복원
"""

from typing import List
import logging

from subway.algorithms.line_route import LineRoute
from subway.core.exceptions import (
    DuplicateNameError,
    InvalidSectionError,
    LineNotFoundError,
    RouteConsistencyError,
    StationNotFoundError,
)
from subway.db.repository import LineRepository, SectionRepository, StationRepository
from subway.models.domain import Line, Station
from subway.models.responses import LineResponse

logger = logging.getLogger(__name__)


class LineService:
    def __init__(
        self,
        line_repository: LineRepository,
        station_repository: StationRepository,
        section_repository: SectionRepository,
    ):
        self.line_repository = line_repository
        self.station_repository = station_repository
        self.section_repository = section_repository

    def create(
        self,
        name: str,
        color: str,
        up_station_id: int,
        down_station_id: int,
        distance: int,
    ) -> LineResponse:
        self._validate_duplicate_name(name)
        up_station = self._get_station(up_station_id, "입력하신 상행역이 존재하지 않습니다.")
        down_station = self._get_station(
            down_station_id, "입력하신 하행역이 존재하지 않습니다."
        )
        if up_station_id == down_station_id:
            raise InvalidSectionError("상행과 하행 종점은 같을 수 없습니다.")
        if distance <= 0:
            raise InvalidSectionError("구간 거리는 0보다 커야 합니다.")

        line, section = self.line_repository.save_with_section(
            name, color, up_station_id, down_station_id, distance
        )
        logger.info(
            f"노선 생성: id={line.id}, name={line.name}, "
            f"구간 {section.up_station_id} → {section.down_station_id} ({section.distance})"
        )
        return LineResponse.of(line, [up_station, down_station])

    def find_all(self) -> List[LineResponse]:
        return [LineResponse.of(line) for line in self.line_repository.find_all()]

    def find(self, line_id: int) -> LineResponse:
        line = self._get_line(line_id, "해당하는 노선이 존재하지 않습니다.")
        return LineResponse.of(line, self.find_route_stations(line.id))

    def find_route_stations(self, line_id: int) -> List[Station]:
        """상행 종점부터 하행 종점까지 정렬된 역 목록"""
        route = LineRoute(self.section_repository.find_all_by_line_id(line_id))

        stations = []
        for station_id in route.station_ids:
            station = self.station_repository.find_by_id(station_id)
            if station is None:
                logger.error(f"노선 {line_id}의 구간이 존재하지 않는 역을 참조: {station_id}")
                raise RouteConsistencyError(
                    f"노선 구간이 존재하지 않는 역을 참조합니다: {station_id}"
                )
            stations.append(station)
        return stations

    def update(self, line_id: int, name: str, color: str) -> LineResponse:
        self._get_line(line_id, "수정하려는 노선이 존재하지 않습니다")
        self._validate_duplicate_name_except_myself(line_id, name)

        line = Line(id=line_id, name=name, color=color)
        self.line_repository.update(line)
        logger.info(f"노선 수정: id={line_id}, name={name}, color={color}")
        return self.find(line_id)

    def delete(self, line_id: int):
        self._get_line(line_id, "삭제하려는 노선이 존재하지 않습니다")
        # 소속 구간도 함께 삭제됨
        self.line_repository.delete(line_id)
        logger.info(f"노선 삭제: id={line_id}")

    def _validate_duplicate_name(self, name: str):
        if self.line_repository.find_by_name(name) is not None:
            logger.warning(f"노선 생성 거부 - 중복 이름: {name}")
            raise DuplicateNameError("같은 이름의 노선이 있습니다.")

    def _validate_duplicate_name_except_myself(self, line_id: int, name: str):
        same_name = self.line_repository.find_by_name(name)
        if same_name is not None and same_name.id != line_id:
            logger.warning(f"노선 수정 거부 - 중복 이름: {name}")
            raise DuplicateNameError("같은 이름의 노선이 있습니다.")

    def _get_line(self, line_id: int, message: str) -> Line:
        line = self.line_repository.find_by_id(line_id)
        if line is None:
            raise LineNotFoundError(message)
        return line

    def _get_station(self, station_id: int, message: str) -> Station:
        station = self.station_repository.find_by_id(station_id)
        if station is None:
            raise StationNotFoundError(message)
        return station
