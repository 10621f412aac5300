from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ResourceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ActivityType, Resource, Work
from .repository import CatalogRepository


def _to_resource(r: dict) -> Resource:
    return Resource(
        resource_id=int(r["id"]),
        code=r["codigo"],
        name=r["nombre"],
        resource_type=ResourceType(r["tipo"]),
        active=bool(r["activo"]),
        cost_group=r.get("agr_coste"),
    )


class MySQLCatalogRepository(CatalogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_resource(self, resource_id: int) -> Optional[Resource]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, codigo, nombre, tipo, activo, agr_coste
                FROM recursos
                WHERE id=%s
                """,
                (int(resource_id),),
            )
            r = fetchone(cur)
            return _to_resource(r) if r else None

    def list_active_resources(self) -> Sequence[Resource]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, codigo, nombre, tipo, activo, agr_coste
                FROM recursos
                WHERE activo=1
                ORDER BY tipo, codigo
                """
            )
            return [_to_resource(r) for r in fetchall(cur)]

    def get_work(self, work_id: int) -> Optional[Work]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, codigo, descripcion, activo FROM obras WHERE id=%s", (int(work_id),))
            r = fetchone(cur)
            if not r:
                return None
            return Work(
                work_id=int(r["id"]),
                code=r["codigo"],
                description=r["descripcion"],
                active=bool(r["activo"]),
            )

    def get_activity_type(self, activity_type_id: int) -> Optional[ActivityType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, nombre FROM tipos_actividad WHERE id=%s", (int(activity_type_id),))
            r = fetchone(cur)
            if not r:
                return None
            return ActivityType(activity_type_id=int(r["id"]), name=r["nombre"])
