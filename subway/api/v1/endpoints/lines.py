"""
노선 / 구간 관리 REST API 엔드포인트
"""

from fastapi import APIRouter, Depends, Query, Response, status
from typing import List
import logging

from subway.api.deps import get_line_service, get_section_service, to_http_exception
from subway.core.exceptions import SubwayException
from subway.models.requests import (
    LineCreateRequest,
    LineUpdateRequest,
    SectionCreateRequest,
)
from subway.models.responses import LineResponse
from subway.services.line_service import LineService
from subway.services.section_service import SectionService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=LineResponse, status_code=status.HTTP_201_CREATED)
def create_line(
    request: LineCreateRequest,
    response: Response,
    service: LineService = Depends(get_line_service),
):
    """
    노선 생성 (상행 종점 → 하행 종점 첫 구간 포함)

    Example:
        POST /lines
        {
            "name": "2호선",
            "color": "bg-green-600",
            "upStationId": 1,
            "downStationId": 2,
            "distance": 10
        }
    """
    try:
        line = service.create(
            name=request.name,
            color=request.color,
            up_station_id=request.up_station_id,
            down_station_id=request.down_station_id,
            distance=request.distance,
        )
    except SubwayException as e:
        logger.error(f"노선 생성 실패: {e.message}")
        raise to_http_exception(e)

    response.headers["Location"] = f"/lines/{line.id}"
    return line


@router.get("", response_model=List[LineResponse])
def get_lines(service: LineService = Depends(get_line_service)):
    """전체 노선 목록 조회 (역 목록 제외)"""
    return service.find_all()


@router.get("/{line_id}", response_model=LineResponse)
def get_line(line_id: int, service: LineService = Depends(get_line_service)):
    """
    노선 조회

    stations: 상행 종점부터 하행 종점까지 정렬된 역 목록
    """
    try:
        return service.find(line_id)
    except SubwayException as e:
        logger.error(f"노선 조회 실패: {e.message}")
        raise to_http_exception(e)


@router.put("/{line_id}", response_model=LineResponse)
def update_line(
    line_id: int,
    request: LineUpdateRequest,
    service: LineService = Depends(get_line_service),
):
    try:
        return service.update(line_id, request.name, request.color)
    except SubwayException as e:
        logger.error(f"노선 수정 실패: {e.message}")
        raise to_http_exception(e)


@router.delete("/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_line(line_id: int, service: LineService = Depends(get_line_service)):
    """노선 삭제 (소속 구간 포함)"""
    try:
        service.delete(line_id)
    except SubwayException as e:
        logger.error(f"노선 삭제 실패: {e.message}")
        raise to_http_exception(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ========== 구간 ==========


@router.post("/{line_id}/sections", response_model=LineResponse)
def add_section(
    line_id: int,
    request: SectionCreateRequest,
    service: SectionService = Depends(get_section_service),
):
    """
    노선에 구간 추가

    Example:
        POST /lines/1/sections
        {"upStationId": 2, "downStationId": 3, "distance": 5}
    """
    try:
        return service.add(
            line_id,
            request.up_station_id,
            request.down_station_id,
            request.distance,
        )
    except SubwayException as e:
        logger.error(f"구간 추가 실패: {e.message}")
        raise to_http_exception(e)


@router.delete("/{line_id}/sections", status_code=status.HTTP_204_NO_CONTENT)
def remove_section_station(
    line_id: int,
    station_id: int = Query(..., alias="stationId", description="제외할 역 ID"),
    service: SectionService = Depends(get_section_service),
):
    """
    노선에서 역 제외

    Example:
        DELETE /lines/1/sections?stationId=2
    """
    try:
        service.remove(line_id, station_id)
    except SubwayException as e:
        logger.error(f"구간 제외 실패: {e.message}")
        raise to_http_exception(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
