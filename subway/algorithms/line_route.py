"""
노선 경로 복원

한 노선에 속한 구간(상행역 → 하행역)들은 순서 없이 저장된다.
구간 집합은 분기/순환이 없는 단일 경로여야 하며,
조회 시점에 상행 종점부터 하행 종점까지의 역 순서를 복원한다.
"""

from typing import Dict, Iterable, List, Optional
import logging

from subway.core.exceptions import RouteConsistencyError
from subway.models.domain import Section

logger = logging.getLogger(__name__)


class LineRoute:
    """
    단일 노선의 구간 집합으로부터 만든 정렬된 경로

    생성 시점에 단일 경로 조건을 검증하며,
    조건을 만족하지 않으면 RouteConsistencyError 발생
    """

    def __init__(self, sections: Iterable[Section]):
        self._sections: List[Section] = list(sections)

        # 상행역 -> 구간, 하행역 -> 구간
        self._by_up: Dict[int, Section] = {}
        self._by_down: Dict[int, Section] = {}

        for section in self._sections:
            self._index(section)

        self._ordered_sections = self._walk()
        self._station_ids = self._to_station_ids(self._ordered_sections)

    def _index(self, section: Section):
        if section.is_same_stations():
            raise RouteConsistencyError(
                f"상행역과 하행역이 같은 구간이 있습니다: {section.up_station_id}"
            )
        # 같은 역에서 두 갈래로 나가는 경우 => 분기
        if section.up_station_id in self._by_up:
            raise RouteConsistencyError(
                f"분기된 노선입니다: 역 {section.up_station_id}의 하행 구간이 둘 이상입니다"
            )
        # 두 갈래가 한 역으로 합쳐지는 경우
        if section.down_station_id in self._by_down:
            raise RouteConsistencyError(
                f"분기된 노선입니다: 역 {section.down_station_id}의 상행 구간이 둘 이상입니다"
            )
        self._by_up[section.up_station_id] = section
        self._by_down[section.down_station_id] = section

    def _find_start(self) -> int:
        # 상행역으로만 등장하고 하행역으로는 등장하지 않는 역 => 상행 종점
        candidates = sorted(
            station_id for station_id in self._by_up if station_id not in self._by_down
        )
        if not candidates:
            raise RouteConsistencyError("순환 노선입니다: 상행 종점을 찾을 수 없습니다")
        if len(candidates) > 1:
            raise RouteConsistencyError(
                f"연결되지 않은 구간이 있습니다: 상행 종점 후보 {candidates}"
            )
        return candidates[0]

    def _walk(self) -> List[Section]:
        if not self._sections:
            return []

        current = self._find_start()
        visited = {current}
        ordered: List[Section] = []

        while current in self._by_up:
            section = self._by_up[current]
            current = section.down_station_id
            if current in visited:
                raise RouteConsistencyError(f"순환 구간이 있습니다: 역 {current}")
            visited.add(current)
            ordered.append(section)

        # 분리된 순환 구간이 남아 있으면 방문하지 못한 구간이 생김
        if len(ordered) != len(self._sections):
            raise RouteConsistencyError(
                f"연결되지 않은 구간이 있습니다: "
                f"전체 {len(self._sections)}개 중 {len(ordered)}개만 연결됨"
            )
        return ordered

    @staticmethod
    def _to_station_ids(ordered_sections: List[Section]) -> List[int]:
        if not ordered_sections:
            return []
        station_ids = [ordered_sections[0].up_station_id]
        station_ids.extend(s.down_station_id for s in ordered_sections)
        return station_ids

    @property
    def station_ids(self) -> List[int]:
        return list(self._station_ids)

    @property
    def up_terminal(self) -> Optional[int]:
        """상행 종점"""
        return self._station_ids[0] if self._station_ids else None

    @property
    def down_terminal(self) -> Optional[int]:
        """하행 종점"""
        return self._station_ids[-1] if self._station_ids else None

    def is_empty(self) -> bool:
        return not self._sections

    def contains(self, station_id: int) -> bool:
        return station_id in self._by_up or station_id in self._by_down

    def section_from(self, station_id: int) -> Optional[Section]:
        """station_id를 상행역으로 하는 구간"""
        return self._by_up.get(station_id)

    def section_to(self, station_id: int) -> Optional[Section]:
        """station_id를 하행역으로 하는 구간"""
        return self._by_down.get(station_id)

    def ordered_sections(self) -> List[Section]:
        return list(self._ordered_sections)

    def total_distance(self) -> int:
        return sum(s.distance for s in self._sections)

    def __len__(self) -> int:
        return len(self._sections)


def assemble_route(sections: Iterable[Section]) -> List[int]:
    """
    구간 집합 -> 상행 종점부터 하행 종점까지의 역 ID 목록

    Args:
        sections: 한 노선에 속한 구간들 (순서 무관)

    Returns:
        정렬된 역 ID 목록, 구간이 없으면 빈 목록

    Raises:
        RouteConsistencyError: 분기, 순환, 끊어진 구간이 있는 경우
    """
    return LineRoute(sections).station_ids
