"""
데이터베이스 연결 및 저장소 구현
"""

from subway.db.database import (
    initialize_pool,
    close_pool,
    get_db_connection,
    get_db_cursor,
    initialize_schema,
)
from subway.db.repository import StationRepository, LineRepository, SectionRepository
from subway.db.memory_repository import MemoryStore, create_memory_repositories

__all__ = [
    "initialize_pool",
    "close_pool",
    "get_db_connection",
    "get_db_cursor",
    "initialize_schema",
    "StationRepository",
    "LineRepository",
    "SectionRepository",
    "MemoryStore",
    "create_memory_repositories",
]
