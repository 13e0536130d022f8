from typing import Optional
from dataclasses import dataclass, replace

# domain 정의
# id는 저장소에 저장된 이후에 부여됨


@dataclass
class Station:
    name: str
    id: Optional[int] = None


@dataclass
class Line:
    name: str
    color: str
    id: Optional[int] = None


@dataclass
class Section:
    line_id: int
    up_station_id: int  # 상행역
    down_station_id: int  # 하행역
    distance: int
    id: Optional[int] = None

    def is_same_stations(self) -> bool:
        return self.up_station_id == self.down_station_id

    def with_id(self, section_id: int) -> "Section":
        return replace(self, id=section_id)
