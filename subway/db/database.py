from psycopg2 import pool
from psycopg2.extras import RealDictCursor
from contextlib import contextmanager
import logging

from subway.core.config import settings

logger = logging.getLogger(__name__)

_connection_pool = None


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS station (
    id BIGSERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS line (
    id BIGSERIAL PRIMARY KEY,
    name VARCHAR(255) NOT NULL UNIQUE,
    color VARCHAR(50) NOT NULL
);

CREATE TABLE IF NOT EXISTS section (
    id BIGSERIAL PRIMARY KEY,
    line_id BIGINT NOT NULL REFERENCES line (id) ON DELETE CASCADE,
    up_station_id BIGINT NOT NULL REFERENCES station (id),
    down_station_id BIGINT NOT NULL REFERENCES station (id),
    distance INT NOT NULL CHECK (distance > 0),
    CHECK (up_station_id <> down_station_id)
);

CREATE INDEX IF NOT EXISTS idx_section_line_id ON section (line_id);
"""


def initialize_pool():
    global _connection_pool
    if _connection_pool is None:
        _connection_pool = pool.ThreadedConnectionPool(
            minconn=settings.DB_POOL_MIN,
            maxconn=settings.DB_POOL_MAX,
            **settings.DB_CONFIG,
        )
        logger.info("Database connection pool initialized")


def close_pool():
    global _connection_pool
    if _connection_pool:
        _connection_pool.closeall()
        _connection_pool = None
        logger.info("Database connection pool closed")


@contextmanager
def get_db_connection():
    if _connection_pool is None:
        raise RuntimeError("Connection pool이 초기화되지 않았습니다")

    # rollback / 에러 로깅은 get_db_cursor 에서 처리
    connection = _connection_pool.getconn()
    try:
        yield connection
    finally:
        _connection_pool.putconn(connection)


# cursor 하나 = 트랜잭션 하나
# 블록 안의 모든 쿼리는 함께 commit, 예외 발생 시 함께 rollback
@contextmanager
def get_db_cursor(cursor_factory=RealDictCursor):
    with get_db_connection() as connection:
        cursor = connection.cursor(cursor_factory=cursor_factory)
        try:
            yield cursor
            connection.commit()
        except Exception as e:
            connection.rollback()
            logger.error(f"Transaction rolled back: {e}")
            raise
        finally:
            cursor.close()


def initialize_schema():
    """테이블이 없으면 생성"""
    with get_db_cursor() as cursor:
        cursor.execute(SCHEMA_SQL)
    logger.info("Database schema ready")


def check_connection() -> bool:
    with get_db_cursor() as cursor:
        cursor.execute("SELECT 1 AS ok")
        row = cursor.fetchone()
    return bool(row and row["ok"] == 1)
