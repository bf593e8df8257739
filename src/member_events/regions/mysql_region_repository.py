from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import RecordStatus, RegionKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Region
from .repository import RegionRepository

# Table and key column per kind; never built from user input.
_TABLES = {
    RegionKind.ZONE: ("zones", "zone_id"),
    RegionKind.DISTRICT: ("districts", "district_id"),
}


def _row_to_region(kind: RegionKind, r: dict) -> Region:
    return Region(
        region_id=int(r["region_id"]),
        kind=kind,
        name=r["name"],
        status=RecordStatus(r.get("status") or "Y"),
    )


class MySQLRegionRepository(RegionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, kind: RegionKind, region_id: int) -> Optional[Region]:
        table, key = _TABLES[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {key} AS region_id, name, status FROM {table} WHERE {key}=%s", (region_id,))
            r = fetchone(cur)
            return _row_to_region(kind, r) if r else None

    def create(self, kind: RegionKind, name: str) -> int:
        table, _ = _TABLES[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"INSERT INTO {table}(name) VALUES(%s)", (name,))
            return int(cur.lastrowid)

    def rename(self, kind: RegionKind, region_id: int, name: str) -> bool:
        table, key = _TABLES[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE {table} SET name=%s WHERE {key}=%s", (name, region_id))
            return cur.rowcount > 0

    def disable(self, kind: RegionKind, region_id: int) -> bool:
        table, key = _TABLES[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE {table} SET status=%s WHERE {key}=%s", (RecordStatus.DISABLED.value, region_id))
            return cur.rowcount > 0

    def list_active(self, kind: RegionKind) -> Sequence[Region]:
        table, key = _TABLES[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {key} AS region_id, name, status FROM {table} WHERE status=%s ORDER BY name",
                (RecordStatus.ACTIVE.value,),
            )
            return [_row_to_region(kind, r) for r in fetchall(cur)]

    def search_active(self, kind: RegionKind, term: str) -> Sequence[Region]:
        table, key = _TABLES[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {key} AS region_id, name, status FROM {table}
                WHERE status=%s AND name LIKE %s
                ORDER BY name
                """,
                (RecordStatus.ACTIVE.value, f"%{term}%"),
            )
            return [_row_to_region(kind, r) for r in fetchall(cur)]
