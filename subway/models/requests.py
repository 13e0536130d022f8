from pydantic import BaseModel, ConfigDict, Field

# service별 requests 구조 정의
# 기존 클라이언트는 camelCase(upStationId)로 요청 => alias로 둘 다 허용


class StationCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="역 이름")


class StationUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="변경할 역 이름")


class LineCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255, description="노선 이름")
    color: str = Field(..., min_length=1, max_length=50, description="노선 색상")
    up_station_id: int = Field(..., alias="upStationId", description="상행 종점 역 ID")
    down_station_id: int = Field(
        ..., alias="downStationId", description="하행 종점 역 ID"
    )
    distance: int = Field(..., gt=0, description="구간 거리")


class LineUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="노선 이름")
    color: str = Field(..., min_length=1, max_length=50, description="노선 색상")


# 노선에 구간 추가
class SectionCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    up_station_id: int = Field(..., alias="upStationId", description="상행역 ID")
    down_station_id: int = Field(..., alias="downStationId", description="하행역 ID")
    distance: int = Field(..., gt=0, description="구간 거리")
