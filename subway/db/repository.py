"""
엔티티별 저장소 인터페이스

서비스 계층은 이 인터페이스에만 의존하며
PostgreSQL / 메모리 구현체는 설정에 따라 주입된다.
조회 메서드는 값이 없으면 None 반환 => 호출자가 예외 여부 결정
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from subway.models.domain import Line, Section, Station


class StationRepository(ABC):
    @abstractmethod
    def save(self, name: str) -> Station: ...

    @abstractmethod
    def find_by_id(self, station_id: int) -> Optional[Station]: ...

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[Station]: ...

    @abstractmethod
    def find_all(self) -> List[Station]: ...

    @abstractmethod
    def update(self, station: Station) -> None: ...

    @abstractmethod
    def delete(self, station_id: int) -> None: ...


class LineRepository(ABC):
    @abstractmethod
    def save_with_section(
        self,
        name: str,
        color: str,
        up_station_id: int,
        down_station_id: int,
        distance: int,
    ) -> Tuple[Line, Section]:
        """노선과 첫 구간을 하나의 트랜잭션으로 저장"""

    @abstractmethod
    def find_by_id(self, line_id: int) -> Optional[Line]: ...

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[Line]: ...

    @abstractmethod
    def find_all(self) -> List[Line]: ...

    @abstractmethod
    def update(self, line: Line) -> None: ...

    @abstractmethod
    def delete(self, line_id: int) -> None:
        """노선 삭제 - 소속 구간도 함께 삭제"""


class SectionRepository(ABC):
    @abstractmethod
    def save(self, section: Section) -> Section: ...

    @abstractmethod
    def find_all_by_line_id(self, line_id: int) -> List[Section]: ...

    @abstractmethod
    def exists_by_station_id(self, station_id: int) -> bool: ...

    @abstractmethod
    def replace(self, removed: List[Section], added: List[Section]) -> List[Section]:
        """구간 삭제와 추가를 하나의 트랜잭션으로 처리, 추가된 구간 반환"""
