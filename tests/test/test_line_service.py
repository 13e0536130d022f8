"""
LineService 테스트
"""

import pytest

from subway.core.exceptions import (
    DuplicateNameError,
    InvalidSectionError,
    LineNotFoundError,
    RouteConsistencyError,
    StationNotFoundError,
)
from subway.models.domain import Section


class TestLineCreation:
    """노선 생성 테스트"""

    def test_create_line_success(self, line_service, sample_stations):
        """노선 생성 - 상행/하행 종점이 역 목록으로 반환"""
        # Given
        gangnam = sample_stations["강남역"]
        yeoksam = sample_stations["역삼역"]

        # When
        line = line_service.create("2호선", "green", gangnam.id, yeoksam.id, 10)

        # Then
        assert line.id is not None
        assert line.name == "2호선"
        assert line.color == "green"
        assert [s.name for s in line.stations] == ["강남역", "역삼역"]

    def test_create_line_persists_first_section(
        self, line_service, repositories, sample_stations
    ):
        """노선 생성 시 첫 구간도 함께 저장"""
        gangnam = sample_stations["강남역"]
        yeoksam = sample_stations["역삼역"]

        line = line_service.create("2호선", "green", gangnam.id, yeoksam.id, 10)

        sections = repositories["section"].find_all_by_line_id(line.id)
        assert len(sections) == 1
        assert sections[0].up_station_id == gangnam.id
        assert sections[0].down_station_id == yeoksam.id
        assert sections[0].distance == 10

    def test_create_duplicate_name(self, line_service, sample_stations):
        """같은 이름의 노선을 두 번 생성하면 두 번째는 실패"""
        gangnam = sample_stations["강남역"]
        yeoksam = sample_stations["역삼역"]
        line_service.create("2호선", "green", gangnam.id, yeoksam.id, 10)

        with pytest.raises(DuplicateNameError):
            line_service.create("2호선", "red", gangnam.id, yeoksam.id, 5)

    def test_create_with_same_up_and_down(self, line_service, sample_stations):
        """상행 종점 == 하행 종점"""
        gangnam = sample_stations["강남역"]

        with pytest.raises(InvalidSectionError):
            line_service.create("2호선", "green", gangnam.id, gangnam.id, 10)

    @pytest.mark.parametrize("distance", [0, -3])
    def test_create_with_non_positive_distance(
        self, line_service, sample_stations, distance
    ):
        gangnam = sample_stations["강남역"]
        yeoksam = sample_stations["역삼역"]

        with pytest.raises(InvalidSectionError):
            line_service.create("2호선", "green", gangnam.id, yeoksam.id, distance)

    def test_create_with_missing_up_station(self, line_service, sample_stations):
        yeoksam = sample_stations["역삼역"]

        with pytest.raises(StationNotFoundError) as exc_info:
            line_service.create("2호선", "green", 999, yeoksam.id, 10)

        assert "상행역" in exc_info.value.message

    def test_create_with_missing_down_station(self, line_service, sample_stations):
        gangnam = sample_stations["강남역"]

        with pytest.raises(StationNotFoundError) as exc_info:
            line_service.create("2호선", "green", gangnam.id, 999, 10)

        assert "하행역" in exc_info.value.message

    def test_failed_create_leaves_nothing(
        self, line_service, repositories, sample_stations
    ):
        """검증 실패 시 노선도 구간도 저장되지 않음"""
        gangnam = sample_stations["강남역"]

        with pytest.raises(InvalidSectionError):
            line_service.create("2호선", "green", gangnam.id, gangnam.id, 10)

        assert repositories["line"].find_all() == []
        assert repositories["section"].exists_by_station_id(gangnam.id) is False


class TestLineQuery:
    """노선 조회 테스트"""

    def test_find_all_without_stations(self, line_service, sample_stations):
        """목록 조회는 역 목록 없이 반환"""
        gangnam = sample_stations["강남역"]
        yeoksam = sample_stations["역삼역"]
        seolleung = sample_stations["선릉역"]
        line_service.create("2호선", "green", gangnam.id, yeoksam.id, 10)
        line_service.create("분당선", "yellow", yeoksam.id, seolleung.id, 10)

        lines = line_service.find_all()

        assert [line.name for line in lines] == ["2호선", "분당선"]
        assert all(line.stations == [] for line in lines)

    def test_find_assembles_ordered_stations(
        self, line_service, repositories, sample_stations
    ):
        """구간이 어떤 순서로 저장되어 있어도 상행 → 하행 순서로 반환"""
        # Given: 역삼 → 선릉 으로 노선 생성 후 강남 → 역삼, 선릉 → 삼성 구간 추가
        gangnam = sample_stations["강남역"]
        yeoksam = sample_stations["역삼역"]
        seolleung = sample_stations["선릉역"]
        samsung = sample_stations["삼성역"]
        line = line_service.create("2호선", "green", yeoksam.id, seolleung.id, 10)
        repositories["section"].save(Section(line.id, seolleung.id, samsung.id, 4))
        repositories["section"].save(Section(line.id, gangnam.id, yeoksam.id, 3))

        # When
        found = line_service.find(line.id)

        # Then
        assert [s.name for s in found.stations] == [
            "강남역",
            "역삼역",
            "선릉역",
            "삼성역",
        ]

    def test_find_not_found(self, line_service):
        with pytest.raises(LineNotFoundError):
            line_service.find(999)

    def test_find_with_dangling_station(
        self, line_service, repositories, memory_store, sample_stations
    ):
        """구간이 사라진 역을 참조하면 RouteConsistencyError"""
        gangnam = sample_stations["강남역"]
        yeoksam = sample_stations["역삼역"]
        line = line_service.create("2호선", "green", gangnam.id, yeoksam.id, 10)
        # 서비스 검증을 우회하여 직접 삭제
        del memory_store.stations[yeoksam.id]

        with pytest.raises(RouteConsistencyError):
            line_service.find(line.id)

    def test_find_with_branching_sections(
        self, line_service, repositories, sample_stations
    ):
        """저장된 구간이 분기되어 있으면 RouteConsistencyError"""
        gangnam = sample_stations["강남역"]
        yeoksam = sample_stations["역삼역"]
        seolleung = sample_stations["선릉역"]
        line = line_service.create("2호선", "green", gangnam.id, yeoksam.id, 10)
        repositories["section"].save(Section(line.id, gangnam.id, seolleung.id, 4))

        with pytest.raises(RouteConsistencyError):
            line_service.find(line.id)


class TestLineUpdate:
    """노선 수정 테스트"""

    @pytest.fixture
    def two_lines(self, line_service, sample_stations):
        gangnam = sample_stations["강남역"]
        yeoksam = sample_stations["역삼역"]
        seolleung = sample_stations["선릉역"]
        line2 = line_service.create("2호선", "green", gangnam.id, yeoksam.id, 10)
        bundang = line_service.create("분당선", "yellow", yeoksam.id, seolleung.id, 10)
        return line2, bundang

    def test_update_success(self, line_service, two_lines):
        line2, _ = two_lines

        line_service.update(line2.id, "신2호선", "blue")

        found = line_service.find(line2.id)
        assert found.name == "신2호선"
        assert found.color == "blue"

    def test_update_to_other_lines_name(self, line_service, two_lines):
        """다른 노선이 사용 중인 이름으로 변경 불가"""
        line2, bundang = two_lines

        with pytest.raises(DuplicateNameError):
            line_service.update(line2.id, bundang.name, "green")

    def test_update_to_own_name(self, line_service, two_lines):
        """자기 자신의 이름으로는 변경 가능 (색상만 변경)"""
        line2, _ = two_lines

        updated = line_service.update(line2.id, line2.name, "lime")

        assert updated.name == "2호선"
        assert updated.color == "lime"
        assert [s.name for s in updated.stations] == ["강남역", "역삼역"]

    def test_update_not_found(self, line_service):
        with pytest.raises(LineNotFoundError):
            line_service.update(999, "9호선", "gold")


class TestLineDeletion:
    """노선 삭제 테스트"""

    def test_delete_cascades_sections(
        self, line_service, repositories, sample_stations
    ):
        """노선 삭제 시 소속 구간도 삭제"""
        gangnam = sample_stations["강남역"]
        yeoksam = sample_stations["역삼역"]
        line = line_service.create("2호선", "green", gangnam.id, yeoksam.id, 10)

        line_service.delete(line.id)

        assert repositories["line"].find_by_id(line.id) is None
        assert repositories["section"].find_all_by_line_id(line.id) == []
        assert repositories["section"].exists_by_station_id(gangnam.id) is False

    def test_delete_not_found(self, line_service):
        with pytest.raises(LineNotFoundError):
            line_service.delete(999)

    def test_name_reusable_after_delete(self, line_service, sample_stations):
        gangnam = sample_stations["강남역"]
        yeoksam = sample_stations["역삼역"]
        line = line_service.create("2호선", "green", gangnam.id, yeoksam.id, 10)
        line_service.delete(line.id)

        recreated = line_service.create("2호선", "green", gangnam.id, yeoksam.id, 10)

        assert recreated.id != line.id
