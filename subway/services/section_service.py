"""
구간 서비스

노선에 구간을 추가하거나 역을 제외한다.
변경 후에도 노선의 구간들은 항상 하나의 단일 경로를 유지해야 함

구간 추가 규칙
- 새 구간의 두 역 중 정확히 하나만 노선에 등록되어 있어야 함
- 상행 종점 앞 / 하행 종점 뒤에 붙이면 노선 연장
- 중간에 끼워 넣으면 기존 구간을 나누며, 새 구간 거리는 기존 구간보다 짧아야 함

역 제외 규칙
- 구간이 하나뿐인 노선에서는 역을 제외할 수 없음
- 종점 제외 => 해당 구간 삭제
- 중간역 제외 => 앞뒤 구간을 하나로 합치고 거리는 합산
"""

import logging

from subway.algorithms.line_route import LineRoute
from subway.core.exceptions import (
    InvalidSectionError,
    LineNotFoundError,
    StationNotFoundError,
)
from subway.db.repository import LineRepository, SectionRepository, StationRepository
from subway.models.domain import Section
from subway.models.responses import LineResponse
from subway.services.line_service import LineService

logger = logging.getLogger(__name__)


class SectionService:
    def __init__(
        self,
        line_repository: LineRepository,
        station_repository: StationRepository,
        section_repository: SectionRepository,
        line_service: LineService,
    ):
        self.line_repository = line_repository
        self.station_repository = station_repository
        self.section_repository = section_repository
        self.line_service = line_service

    def add(
        self, line_id: int, up_station_id: int, down_station_id: int, distance: int
    ) -> LineResponse:
        self._validate_line_exists(line_id)
        for station_id in (up_station_id, down_station_id):
            if self.station_repository.find_by_id(station_id) is None:
                raise StationNotFoundError(f"해당하는 역이 존재하지 않습니다: {station_id}")

        new_section = Section(
            line_id=line_id,
            up_station_id=up_station_id,
            down_station_id=down_station_id,
            distance=distance,
        )
        if new_section.is_same_stations():
            raise InvalidSectionError("상행역과 하행역은 같을 수 없습니다.")
        if distance <= 0:
            raise InvalidSectionError("구간 거리는 0보다 커야 합니다.")

        route = LineRoute(self.section_repository.find_all_by_line_id(line_id))
        removed, added = self._plan_add(route, new_section)
        self.section_repository.replace(removed, added)

        logger.info(
            f"구간 추가: line={line_id}, {up_station_id} → {down_station_id} ({distance}), "
            f"기존 구간 {len(removed)}개 분할"
        )
        return self.line_service.find(line_id)

    def _plan_add(self, route: LineRoute, new_section: Section):
        if route.is_empty():
            return [], [new_section]

        up_id = new_section.up_station_id
        down_id = new_section.down_station_id
        up_on_line = route.contains(up_id)
        down_on_line = route.contains(down_id)

        if up_on_line and down_on_line:
            raise InvalidSectionError("상행역과 하행역이 이미 노선에 모두 등록되어 있습니다.")
        if not up_on_line and not down_on_line:
            raise InvalidSectionError("노선에 등록된 역과 연결되지 않는 구간입니다.")

        # 종점 연장
        if up_id == route.down_terminal or down_id == route.up_terminal:
            return [], [new_section]

        if up_on_line:
            # A → C 사이에 A → B 추가 => A → B, B → C
            existing = route.section_from(up_id)
            self._validate_split_distance(existing, new_section)
            remainder = Section(
                line_id=existing.line_id,
                up_station_id=down_id,
                down_station_id=existing.down_station_id,
                distance=existing.distance - new_section.distance,
            )
            return [existing], [new_section, remainder]

        # A → C 사이에 B → C 추가 => A → B, B → C
        existing = route.section_to(down_id)
        self._validate_split_distance(existing, new_section)
        remainder = Section(
            line_id=existing.line_id,
            up_station_id=existing.up_station_id,
            down_station_id=up_id,
            distance=existing.distance - new_section.distance,
        )
        return [existing], [remainder, new_section]

    @staticmethod
    def _validate_split_distance(existing: Section, new_section: Section):
        if new_section.distance >= existing.distance:
            raise InvalidSectionError(
                f"역 사이에 추가하는 구간의 거리는 기존 구간 거리({existing.distance})보다 짧아야 합니다."
            )

    def remove(self, line_id: int, station_id: int):
        self._validate_line_exists(line_id)

        route = LineRoute(self.section_repository.find_all_by_line_id(line_id))
        if not route.contains(station_id):
            raise StationNotFoundError(f"노선에 등록되지 않은 역입니다: {station_id}")
        if len(route) <= 1:
            raise InvalidSectionError("구간이 하나인 노선에서는 역을 제외할 수 없습니다.")

        before = route.section_to(station_id)
        after = route.section_from(station_id)

        if before is not None and after is not None:
            merged = Section(
                line_id=line_id,
                up_station_id=before.up_station_id,
                down_station_id=after.down_station_id,
                distance=before.distance + after.distance,
            )
            self.section_repository.replace([before, after], [merged])
        else:
            # 종점
            self.section_repository.replace([before or after], [])

        logger.info(f"구간에서 역 제외: line={line_id}, station={station_id}")

    def _validate_line_exists(self, line_id: int):
        if self.line_repository.find_by_id(line_id) is None:
            raise LineNotFoundError("해당하는 노선이 존재하지 않습니다.")
