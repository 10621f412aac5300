from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ShiftState
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_time_to_clock, normalize_mysql_date
from ..scheduling.model import Activity, Interval
from ..scheduling.time_grid import offset_minutes, split_minutes, to_minutes
from .repository import ActivityFilters, ActivityRepository

_COLUMNS = """
    id, obra_id, recurso_id, tipo_actividad_id,
    fecha_inicio, hora_inicio, fecha_fin, hora_fin,
    observaciones, usuario_creacion, usuario_modificacion
"""


def _to_activity(r: dict) -> Activity:
    work_date = normalize_mysql_date(r["fecha_inicio"])
    start = to_minutes(mysql_time_to_clock(r["hora_inicio"]))

    end: Optional[int] = None
    end_date = normalize_mysql_date(r.get("fecha_fin"))
    end_clock = mysql_time_to_clock(r.get("hora_fin"))
    # A row missing either half of its end is still an open shift.
    if end_date is not None and end_clock is not None:
        end = offset_minutes(work_date, end_date, end_clock)

    return Activity(
        activity_id=int(r["id"]),
        resource_id=int(r["recurso_id"]),
        work_date=work_date,
        interval=Interval(start, end),
        work_id=int(r["obra_id"]),
        activity_type_id=int(r["tipo_actividad_id"]),
        notes=r.get("observaciones"),
        created_by=int(r["usuario_creacion"]) if r.get("usuario_creacion") is not None else None,
        modified_by=int(r["usuario_modificacion"]) if r.get("usuario_modificacion") is not None else None,
    )


def _end_columns(activity: Activity) -> tuple[Optional[date], Optional[str]]:
    if activity.interval.end is None:
        return None, None
    return split_minutes(activity.work_date, activity.interval.end)


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_resource_date(
        self, resource_id: int, work_date: date, exclude_id: Optional[int] = None
    ) -> Sequence[Activity]:
        clauses = ["recurso_id=%s", "fecha_inicio=%s"]
        params: list[object] = [int(resource_id), work_date]
        if exclude_id is not None:
            clauses.append("id<>%s")
            params.append(int(exclude_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM actividades WHERE {' AND '.join(clauses)} ORDER BY hora_inicio, id",
                tuple(params),
            )
            return [_to_activity(r) for r in fetchall(cur)]

    def get_by_id(self, activity_id: int) -> Optional[Activity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM actividades WHERE id=%s", (int(activity_id),))
            r = fetchone(cur)
            return _to_activity(r) if r else None

    def search(self, *, filters: ActivityFilters, offset: int, limit: int) -> tuple[Sequence[Activity], int]:
        clauses: list[str] = []
        params: list[object] = []

        if filters.work_id is not None:
            clauses.append("obra_id=%s")
            params.append(int(filters.work_id))
        if filters.resource_id is not None:
            clauses.append("recurso_id=%s")
            params.append(int(filters.resource_id))
        if filters.activity_type_id is not None:
            clauses.append("tipo_actividad_id=%s")
            params.append(int(filters.activity_type_id))
        if filters.created_by is not None:
            clauses.append("usuario_creacion=%s")
            params.append(int(filters.created_by))
        if filters.date_from is not None:
            clauses.append("fecha_inicio>=%s")
            params.append(filters.date_from)
        if filters.date_to is not None:
            clauses.append("fecha_inicio<=%s")
            params.append(filters.date_to)
        if filters.state == ShiftState.ABIERTA:
            clauses.append("(fecha_fin IS NULL OR hora_fin IS NULL)")
        elif filters.state == ShiftState.CERRADA:
            clauses.append("(fecha_fin IS NOT NULL AND hora_fin IS NOT NULL)")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM actividades {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total") or 0)

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM actividades
                {where}
                ORDER BY fecha_inicio DESC, hora_inicio DESC, id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(limit), int(offset)),
            )
            return [_to_activity(r) for r in fetchall(cur)], total

    def list_open(self, *, resource_id: Optional[int] = None) -> Sequence[Activity]:
        clauses = ["(fecha_fin IS NULL OR hora_fin IS NULL)"]
        params: list[object] = []
        if resource_id is not None:
            clauses.append("recurso_id=%s")
            params.append(int(resource_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM actividades
                WHERE {' AND '.join(clauses)}
                ORDER BY fecha_inicio DESC, hora_inicio DESC
                """,
                tuple(params),
            )
            return [_to_activity(r) for r in fetchall(cur)]

    def create(self, activity: Activity) -> int:
        end_date, end_time = _end_columns(activity)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO actividades(
                    obra_id, recurso_id, tipo_actividad_id,
                    fecha_inicio, hora_inicio, fecha_fin, hora_fin,
                    observaciones, usuario_creacion
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    activity.work_id,
                    activity.resource_id,
                    activity.activity_type_id,
                    activity.work_date,
                    activity.start_time,
                    end_date,
                    end_time,
                    activity.notes,
                    activity.created_by,
                ),
            )
            return int(cur.lastrowid)

    def update(self, activity: Activity) -> bool:
        end_date, end_time = _end_columns(activity)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE actividades
                SET obra_id=%s, recurso_id=%s, tipo_actividad_id=%s,
                    fecha_inicio=%s, hora_inicio=%s, fecha_fin=%s, hora_fin=%s,
                    observaciones=%s, usuario_modificacion=%s
                WHERE id=%s
                """,
                (
                    activity.work_id,
                    activity.resource_id,
                    activity.activity_type_id,
                    activity.work_date,
                    activity.start_time,
                    end_date,
                    end_time,
                    activity.notes,
                    activity.modified_by,
                    int(activity.activity_id),
                ),
            )
            # MySQL reports 0 affected rows when nothing changed, so check existence.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT id FROM actividades WHERE id=%s", (int(activity.activity_id),))
            return fetchone(cur) is not None

    def delete(self, activity_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM actividades WHERE id=%s", (int(activity_id),))
            return cur.rowcount > 0
