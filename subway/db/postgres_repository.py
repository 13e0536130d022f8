"""
PostgreSQL 저장소 구현

모든 쿼리는 get_db_cursor 블록 안에서 실행 => 블록 단위 commit / rollback
"""

from typing import Dict, List, Optional, Tuple
import logging

from psycopg2 import errors

from subway.core.exceptions import (
    DuplicateNameError,
    LineNotFoundError,
    StationInUseError,
    StationNotFoundError,
)
from subway.db.database import get_db_cursor
from subway.db.repository import LineRepository, SectionRepository, StationRepository
from subway.models.domain import Line, Section, Station

logger = logging.getLogger(__name__)


def _to_station(row: Dict) -> Station:
    return Station(id=row["id"], name=row["name"])


def _to_line(row: Dict) -> Line:
    return Line(id=row["id"], name=row["name"], color=row["color"])


def _to_section(row: Dict) -> Section:
    return Section(
        id=row["id"],
        line_id=row["line_id"],
        up_station_id=row["up_station_id"],
        down_station_id=row["down_station_id"],
        distance=row["distance"],
    )


# section 의 FK 위반 => 참조 대상(노선 / 역)이 사라진 경우
def _section_reference_error(e: errors.ForeignKeyViolation):
    constraint = getattr(getattr(e, "diag", None), "constraint_name", None) or ""
    if "line_id" in constraint:
        return LineNotFoundError("구간의 노선이 존재하지 않습니다")
    return StationNotFoundError("구간의 역이 존재하지 않습니다")


class PostgresStationRepository(StationRepository):
    def save(self, name: str) -> Station:
        query = """
        INSERT INTO station (name)
        VALUES (%(name)s)
        RETURNING id, name
        """
        try:
            with get_db_cursor() as cursor:
                cursor.execute(query, {"name": name})
                return _to_station(cursor.fetchone())
        except errors.UniqueViolation:
            raise DuplicateNameError(f"같은 이름의 역이 있습니다: {name}")

    def find_by_id(self, station_id: int) -> Optional[Station]:
        with get_db_cursor() as cursor:
            cursor.execute(
                "SELECT id, name FROM station WHERE id = %(id)s", {"id": station_id}
            )
            row = cursor.fetchone()
        return _to_station(row) if row else None

    def find_by_name(self, name: str) -> Optional[Station]:
        with get_db_cursor() as cursor:
            cursor.execute(
                "SELECT id, name FROM station WHERE name = %(name)s", {"name": name}
            )
            row = cursor.fetchone()
        return _to_station(row) if row else None

    def find_all(self) -> List[Station]:
        with get_db_cursor() as cursor:
            cursor.execute("SELECT id, name FROM station ORDER BY id")
            return [_to_station(row) for row in cursor.fetchall()]

    def update(self, station: Station) -> None:
        try:
            with get_db_cursor() as cursor:
                cursor.execute(
                    "UPDATE station SET name = %(name)s WHERE id = %(id)s",
                    {"id": station.id, "name": station.name},
                )
        except errors.UniqueViolation:
            raise DuplicateNameError(f"같은 이름의 역이 있습니다: {station.name}")

    def delete(self, station_id: int) -> None:
        try:
            with get_db_cursor() as cursor:
                cursor.execute(
                    "DELETE FROM station WHERE id = %(id)s", {"id": station_id}
                )
        except errors.ForeignKeyViolation:
            raise StationInUseError(f"구간에 등록된 역은 삭제할 수 없습니다: {station_id}")


class PostgresLineRepository(LineRepository):
    def save_with_section(
        self,
        name: str,
        color: str,
        up_station_id: int,
        down_station_id: int,
        distance: int,
    ) -> Tuple[Line, Section]:
        line_query = """
        INSERT INTO line (name, color)
        VALUES (%(name)s, %(color)s)
        RETURNING id, name, color
        """
        section_query = """
        INSERT INTO section (line_id, up_station_id, down_station_id, distance)
        VALUES (%(line_id)s, %(up_station_id)s, %(down_station_id)s, %(distance)s)
        RETURNING id, line_id, up_station_id, down_station_id, distance
        """
        try:
            # 노선 + 첫 구간 => 같은 트랜잭션
            with get_db_cursor() as cursor:
                cursor.execute(line_query, {"name": name, "color": color})
                line = _to_line(cursor.fetchone())

                cursor.execute(
                    section_query,
                    {
                        "line_id": line.id,
                        "up_station_id": up_station_id,
                        "down_station_id": down_station_id,
                        "distance": distance,
                    },
                )
                section = _to_section(cursor.fetchone())
        except errors.UniqueViolation:
            raise DuplicateNameError(f"같은 이름의 노선이 있습니다: {name}")
        except errors.ForeignKeyViolation as e:
            raise _section_reference_error(e)

        return line, section

    def find_by_id(self, line_id: int) -> Optional[Line]:
        with get_db_cursor() as cursor:
            cursor.execute(
                "SELECT id, name, color FROM line WHERE id = %(id)s", {"id": line_id}
            )
            row = cursor.fetchone()
        return _to_line(row) if row else None

    def find_by_name(self, name: str) -> Optional[Line]:
        with get_db_cursor() as cursor:
            cursor.execute(
                "SELECT id, name, color FROM line WHERE name = %(name)s",
                {"name": name},
            )
            row = cursor.fetchone()
        return _to_line(row) if row else None

    def find_all(self) -> List[Line]:
        with get_db_cursor() as cursor:
            cursor.execute("SELECT id, name, color FROM line ORDER BY id")
            return [_to_line(row) for row in cursor.fetchall()]

    def update(self, line: Line) -> None:
        try:
            with get_db_cursor() as cursor:
                cursor.execute(
                    "UPDATE line SET name = %(name)s, color = %(color)s WHERE id = %(id)s",
                    {"id": line.id, "name": line.name, "color": line.color},
                )
        except errors.UniqueViolation:
            raise DuplicateNameError(f"같은 이름의 노선이 있습니다: {line.name}")

    def delete(self, line_id: int) -> None:
        # 소속 구간 -> 노선 순서로 삭제 (같은 트랜잭션)
        with get_db_cursor() as cursor:
            cursor.execute("DELETE FROM section WHERE line_id = %(id)s", {"id": line_id})
            cursor.execute("DELETE FROM line WHERE id = %(id)s", {"id": line_id})


class PostgresSectionRepository(SectionRepository):
    INSERT_QUERY = """
    INSERT INTO section (line_id, up_station_id, down_station_id, distance)
    VALUES (%(line_id)s, %(up_station_id)s, %(down_station_id)s, %(distance)s)
    RETURNING id, line_id, up_station_id, down_station_id, distance
    """

    @staticmethod
    def _params(section: Section) -> Dict:
        return {
            "line_id": section.line_id,
            "up_station_id": section.up_station_id,
            "down_station_id": section.down_station_id,
            "distance": section.distance,
        }

    def save(self, section: Section) -> Section:
        try:
            with get_db_cursor() as cursor:
                cursor.execute(self.INSERT_QUERY, self._params(section))
                return _to_section(cursor.fetchone())
        except errors.ForeignKeyViolation as e:
            raise _section_reference_error(e)

    def find_all_by_line_id(self, line_id: int) -> List[Section]:
        query = """
        SELECT id, line_id, up_station_id, down_station_id, distance
        FROM section
        WHERE line_id = %(line_id)s
        """
        with get_db_cursor() as cursor:
            cursor.execute(query, {"line_id": line_id})
            return [_to_section(row) for row in cursor.fetchall()]

    def exists_by_station_id(self, station_id: int) -> bool:
        query = """
        SELECT 1 FROM section
        WHERE up_station_id = %(id)s OR down_station_id = %(id)s
        LIMIT 1
        """
        with get_db_cursor() as cursor:
            cursor.execute(query, {"id": station_id})
            return cursor.fetchone() is not None

    def replace(self, removed: List[Section], added: List[Section]) -> List[Section]:
        saved = []
        try:
            with get_db_cursor() as cursor:
                for section in removed:
                    cursor.execute(
                        "DELETE FROM section WHERE id = %(id)s", {"id": section.id}
                    )
                for section in added:
                    cursor.execute(self.INSERT_QUERY, self._params(section))
                    saved.append(_to_section(cursor.fetchone()))
        except errors.ForeignKeyViolation as e:
            raise _section_reference_error(e)

        logger.debug(f"구간 교체: 삭제 {len(removed)}개, 추가 {len(saved)}개")
        return saved
