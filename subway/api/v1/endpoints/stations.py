"""
역 관리 REST API 엔드포인트
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List
import logging

from subway.api.deps import get_station_service, to_http_exception
from subway.core.exceptions import SubwayException
from subway.models.requests import StationCreateRequest, StationUpdateRequest
from subway.models.responses import StationResponse
from subway.services.station_service import StationService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=StationResponse, status_code=status.HTTP_201_CREATED)
def create_station(
    request: StationCreateRequest,
    response: Response,
    service: StationService = Depends(get_station_service),
):
    """
    역 생성

    Example:
        POST /stations
        {"name": "강남역"}
    """
    try:
        station = service.create(request.name)
    except SubwayException as e:
        logger.error(f"역 생성 실패: {e.message}")
        raise to_http_exception(e)

    response.headers["Location"] = f"/stations/{station.id}"
    return station


@router.get("", response_model=List[StationResponse])
def get_stations(service: StationService = Depends(get_station_service)):
    """전체 역 목록 조회"""
    return service.find_all()


@router.get("/{station_id}", response_model=StationResponse)
def get_station(station_id: int, service: StationService = Depends(get_station_service)):
    try:
        return service.find(station_id)
    except SubwayException as e:
        logger.error(f"역 조회 실패: {e.message}")
        raise to_http_exception(e)


@router.put("/{station_id}", response_model=StationResponse)
def update_station(
    station_id: int,
    request: StationUpdateRequest,
    service: StationService = Depends(get_station_service),
):
    """역 이름 수정"""
    try:
        return service.update(station_id, request.name)
    except SubwayException as e:
        logger.error(f"역 수정 실패: {e.message}")
        raise to_http_exception(e)


@router.delete("/{station_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_station(
    station_id: int, service: StationService = Depends(get_station_service)
):
    """
    역 삭제

    노선 구간에 등록된 역은 삭제할 수 없음 (400)
    """
    try:
        service.delete(station_id)
    except SubwayException as e:
        logger.error(f"역 삭제 실패: {e.message}")
        raise to_http_exception(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
