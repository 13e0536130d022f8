from typing import List, Optional
from pydantic import BaseModel, Field

from subway.models.domain import Line, Station

# service 별 응답 구조 정의


class StationResponse(BaseModel):
    id: int = Field(..., description="역 ID")
    name: str = Field(..., description="역 이름")

    @classmethod
    def of(cls, station: Station) -> "StationResponse":
        return cls(id=station.id, name=station.name)


# 노선 응답 - 목록 조회 시에는 stations가 비어 있음
class LineResponse(BaseModel):
    id: int = Field(..., description="노선 ID")
    name: str = Field(..., description="노선 이름")
    color: str = Field(..., description="노선 색상")
    stations: List[StationResponse] = Field(
        default_factory=list, description="상행 종점부터 하행 종점까지 정렬된 역 목록"
    )

    @classmethod
    def of(cls, line: Line, stations: Optional[List[Station]] = None) -> "LineResponse":
        return cls(
            id=line.id,
            name=line.name,
            color=line.color,
            stations=[StationResponse.of(s) for s in stations or []],
        )


# 에러 응답
class ErrorResponse(BaseModel):
    message: str = Field(..., description="에러 메시지")
    code: Optional[str] = Field(None, description="에러 코드")
