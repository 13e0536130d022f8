from typing import List
import logging

from subway.core.exceptions import (
    DuplicateNameError,
    StationInUseError,
    StationNotFoundError,
)
from subway.db.repository import SectionRepository, StationRepository
from subway.models.domain import Station
from subway.models.responses import StationResponse

logger = logging.getLogger(__name__)


class StationService:
    def __init__(
        self, station_repository: StationRepository, section_repository: SectionRepository
    ):
        self.station_repository = station_repository
        self.section_repository = section_repository

    def create(self, name: str) -> StationResponse:
        if self.station_repository.find_by_name(name) is not None:
            logger.warning(f"역 생성 거부 - 중복 이름: {name}")
            raise DuplicateNameError("같은 이름의 역이 있습니다.")

        station = self.station_repository.save(name)
        logger.info(f"역 생성: id={station.id}, name={station.name}")
        return StationResponse.of(station)

    def find_all(self) -> List[StationResponse]:
        return [StationResponse.of(s) for s in self.station_repository.find_all()]

    def find(self, station_id: int) -> StationResponse:
        return StationResponse.of(self._get_station(station_id))

    def update(self, station_id: int, name: str) -> StationResponse:
        self._get_station(station_id)

        same_name = self.station_repository.find_by_name(name)
        if same_name is not None and same_name.id != station_id:
            logger.warning(f"역 수정 거부 - 중복 이름: {name}")
            raise DuplicateNameError("같은 이름의 역이 있습니다.")

        station = Station(id=station_id, name=name)
        self.station_repository.update(station)
        logger.info(f"역 수정: id={station_id}, name={name}")
        return StationResponse.of(station)

    def delete(self, station_id: int):
        self._get_station(station_id)

        if self.section_repository.exists_by_station_id(station_id):
            logger.warning(f"역 삭제 거부 - 구간에서 사용 중: id={station_id}")
            raise StationInUseError("노선에 등록된 역은 삭제할 수 없습니다.")

        self.station_repository.delete(station_id)
        logger.info(f"역 삭제: id={station_id}")

    def _get_station(self, station_id: int) -> Station:
        station = self.station_repository.find_by_id(station_id)
        if station is None:
            raise StationNotFoundError(f"해당하는 역이 존재하지 않습니다: {station_id}")
        return station
