"""
메모리 저장소 구현 (로컬 개발, 테스트용)

세 저장소가 하나의 MemoryStore를 공유하며
모든 읽기/쓰기는 store.lock 안에서 처리 => 단일 호출 단위 원자성 보장
반환 객체는 복사본이므로 호출자가 수정해도 저장된 값은 바뀌지 않음
"""

from copy import copy
from itertools import count
from threading import Lock
from typing import Dict, List, Optional, Tuple
import logging

from subway.core.exceptions import DuplicateNameError
from subway.db.repository import LineRepository, SectionRepository, StationRepository
from subway.models.domain import Line, Section, Station

logger = logging.getLogger(__name__)


class MemoryStore:
    def __init__(self):
        self.lock = Lock()
        self.stations: Dict[int, Station] = {}
        self.lines: Dict[int, Line] = {}
        self.sections: Dict[int, Section] = {}

        self._station_seq = count(1)
        self._line_seq = count(1)
        self._section_seq = count(1)

    def next_station_id(self) -> int:
        return next(self._station_seq)

    def next_line_id(self) -> int:
        return next(self._line_seq)

    def next_section_id(self) -> int:
        return next(self._section_seq)

    def clear(self):
        with self.lock:
            self.stations.clear()
            self.lines.clear()
            self.sections.clear()
            self._station_seq = count(1)
            self._line_seq = count(1)
            self._section_seq = count(1)


class MemoryStationRepository(StationRepository):
    def __init__(self, store: MemoryStore):
        self.store = store

    def _name_taken(self, name: str, exclude_id: Optional[int] = None) -> bool:
        return any(
            s.name == name and s.id != exclude_id for s in self.store.stations.values()
        )

    def save(self, name: str) -> Station:
        with self.store.lock:
            if self._name_taken(name):
                raise DuplicateNameError(f"같은 이름의 역이 있습니다: {name}")
            station = Station(id=self.store.next_station_id(), name=name)
            self.store.stations[station.id] = station
            return copy(station)

    def find_by_id(self, station_id: int) -> Optional[Station]:
        with self.store.lock:
            station = self.store.stations.get(station_id)
            return copy(station) if station else None

    def find_by_name(self, name: str) -> Optional[Station]:
        with self.store.lock:
            for station in self.store.stations.values():
                if station.name == name:
                    return copy(station)
            return None

    def find_all(self) -> List[Station]:
        with self.store.lock:
            return [copy(s) for s in self.store.stations.values()]

    def update(self, station: Station) -> None:
        with self.store.lock:
            if station.id not in self.store.stations:
                return
            if self._name_taken(station.name, exclude_id=station.id):
                raise DuplicateNameError(f"같은 이름의 역이 있습니다: {station.name}")
            self.store.stations[station.id] = copy(station)

    def delete(self, station_id: int) -> None:
        with self.store.lock:
            self.store.stations.pop(station_id, None)


class MemoryLineRepository(LineRepository):
    def __init__(self, store: MemoryStore):
        self.store = store

    def _name_taken(self, name: str, exclude_id: Optional[int] = None) -> bool:
        return any(
            line.name == name and line.id != exclude_id
            for line in self.store.lines.values()
        )

    def save_with_section(
        self,
        name: str,
        color: str,
        up_station_id: int,
        down_station_id: int,
        distance: int,
    ) -> Tuple[Line, Section]:
        with self.store.lock:
            if self._name_taken(name):
                raise DuplicateNameError(f"같은 이름의 노선이 있습니다: {name}")

            line = Line(id=self.store.next_line_id(), name=name, color=color)
            section = Section(
                id=self.store.next_section_id(),
                line_id=line.id,
                up_station_id=up_station_id,
                down_station_id=down_station_id,
                distance=distance,
            )
            self.store.lines[line.id] = line
            self.store.sections[section.id] = section
            return copy(line), copy(section)

    def find_by_id(self, line_id: int) -> Optional[Line]:
        with self.store.lock:
            line = self.store.lines.get(line_id)
            return copy(line) if line else None

    def find_by_name(self, name: str) -> Optional[Line]:
        with self.store.lock:
            for line in self.store.lines.values():
                if line.name == name:
                    return copy(line)
            return None

    def find_all(self) -> List[Line]:
        with self.store.lock:
            return [copy(line) for line in self.store.lines.values()]

    def update(self, line: Line) -> None:
        with self.store.lock:
            if line.id not in self.store.lines:
                return
            if self._name_taken(line.name, exclude_id=line.id):
                raise DuplicateNameError(f"같은 이름의 노선이 있습니다: {line.name}")
            self.store.lines[line.id] = copy(line)

    def delete(self, line_id: int) -> None:
        with self.store.lock:
            section_ids = [
                s.id for s in self.store.sections.values() if s.line_id == line_id
            ]
            for section_id in section_ids:
                del self.store.sections[section_id]
            self.store.lines.pop(line_id, None)

        logger.debug(f"노선 {line_id} 삭제: 구간 {len(section_ids)}개 함께 삭제")


class MemorySectionRepository(SectionRepository):
    def __init__(self, store: MemoryStore):
        self.store = store

    def _insert(self, section: Section) -> Section:
        saved = section.with_id(self.store.next_section_id())
        self.store.sections[saved.id] = saved
        return copy(saved)

    def save(self, section: Section) -> Section:
        with self.store.lock:
            return self._insert(section)

    def find_all_by_line_id(self, line_id: int) -> List[Section]:
        with self.store.lock:
            return [
                copy(s) for s in self.store.sections.values() if s.line_id == line_id
            ]

    def exists_by_station_id(self, station_id: int) -> bool:
        with self.store.lock:
            return any(
                station_id in (s.up_station_id, s.down_station_id)
                for s in self.store.sections.values()
            )

    def replace(self, removed: List[Section], added: List[Section]) -> List[Section]:
        with self.store.lock:
            for section in removed:
                self.store.sections.pop(section.id, None)
            return [self._insert(section) for section in added]


def create_memory_repositories(
    store: Optional[MemoryStore] = None,
) -> Tuple[MemoryStationRepository, MemoryLineRepository, MemorySectionRepository]:
    store = store or MemoryStore()
    return (
        MemoryStationRepository(store),
        MemoryLineRepository(store),
        MemorySectionRepository(store),
    )
