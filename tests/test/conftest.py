"""
Pytest 설정 및 공통 Fixture
"""

import os
import pytest
import sys
from pathlib import Path

# 테스트 모드 환경 변수 설정 (모듈 임포트 전에 설정해야 함)
# => 실제 PostgreSQL 대신 메모리 저장소 사용
os.environ["STORAGE_BACKEND"] = "memory"

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from subway.db.memory_repository import MemoryStore, create_memory_repositories
from subway.models.domain import Section
from subway.services.line_service import LineService
from subway.services.section_service import SectionService
from subway.services.station_service import StationService


@pytest.fixture
def memory_store():
    """테스트마다 새로운 메모리 저장소"""
    return MemoryStore()


@pytest.fixture
def repositories(memory_store):
    station_repository, line_repository, section_repository = (
        create_memory_repositories(memory_store)
    )
    return {
        "station": station_repository,
        "line": line_repository,
        "section": section_repository,
    }


@pytest.fixture
def station_service(repositories):
    return StationService(repositories["station"], repositories["section"])


@pytest.fixture
def line_service(repositories):
    return LineService(
        repositories["line"], repositories["station"], repositories["section"]
    )


@pytest.fixture
def section_service(repositories, line_service):
    return SectionService(
        repositories["line"],
        repositories["station"],
        repositories["section"],
        line_service,
    )


@pytest.fixture
def sample_stations(repositories):
    """테스트용 샘플 역 데이터 (2호선 강남 일대)"""
    names = ["강남역", "역삼역", "선릉역", "삼성역", "종합운동장역"]
    return {name: repositories["station"].save(name) for name in names}


@pytest.fixture
def make_section():
    """Section 생성 헬퍼 - 노선 ID는 1로 고정"""

    def _make(up: int, down: int, distance: int = 10, section_id: int = None):
        return Section(
            line_id=1,
            up_station_id=up,
            down_station_id=down,
            distance=distance,
            id=section_id,
        )

    return _make


@pytest.fixture
def client(repositories, station_service, line_service, section_service):
    """FastAPI TestClient fixture - 서비스 의존성을 테스트용 저장소로 교체"""
    from fastapi.testclient import TestClient

    from subway.api.deps import (
        get_line_service,
        get_section_service,
        get_station_service,
    )
    from subway.main import app

    app.dependency_overrides[get_station_service] = lambda: station_service
    app.dependency_overrides[get_line_service] = lambda: line_service
    app.dependency_overrides[get_section_service] = lambda: section_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def mock_db_cursor(mocker):
    """PostgreSQL 저장소 테스트를 위한 Mock 커서"""
    mock_cursor = mocker.MagicMock()
    mock_cursor.fetchone.return_value = None
    mock_cursor.fetchall.return_value = []

    # get_db_cursor() 는 context manager
    mock_context = mocker.MagicMock()
    mock_context.__enter__ = mocker.MagicMock(return_value=mock_cursor)
    mock_context.__exit__ = mocker.MagicMock(return_value=None)

    mock_get_cursor = mocker.patch(
        "subway.db.postgres_repository.get_db_cursor", return_value=mock_context
    )

    return {"cursor": mock_cursor, "get_db_cursor": mock_get_cursor}
