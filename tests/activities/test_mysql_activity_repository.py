from __future__ import annotations

from datetime import date, timedelta

from src.activity_tracking.activity_tracking.activities.mysql_activity_repository import MySQLActivityRepository
from src.activity_tracking.activity_tracking.activities.repository import ActivityFilters
from src.activity_tracking.activity_tracking.core.enums import ShiftState
from src.activity_tracking.activity_tracking.scheduling.model import Activity, Interval


class FakeCursor:
    def __init__(self, results):
        self._results = list(results)
        self.executed = []
        self.rowcount = 1
        self.lastrowid = 41

    def execute(self, sql, params=None):
        self.executed.append((" ".join(sql.split()), params))

    def fetchone(self):
        rows = self._results.pop(0) if self._results else []
        return rows[0] if rows else None

    def fetchall(self):
        return self._results.pop(0) if self._results else []

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class FakeFactory:
    def __init__(self, *results):
        self.cursor = FakeCursor(results)

    def connect(self):
        return FakeConnection(self.cursor)


def row(**overrides):
    data = {
        "id": 3,
        "obra_id": 10,
        "recurso_id": 1,
        "tipo_actividad_id": 20,
        "fecha_inicio": date(2026, 3, 2),
        "hora_inicio": timedelta(hours=22),
        "fecha_fin": date(2026, 3, 3),
        "hora_fin": timedelta(hours=6),
        "observaciones": None,
        "usuario_creacion": 5,
        "usuario_modificacion": None,
    }
    data.update(overrides)
    return data


def test_rows_map_to_minutes_from_the_start_date():
    factory = FakeFactory([row(), row(id=4, hora_inicio="07:00:00", fecha_fin=None, hora_fin=None)])

    found = MySQLActivityRepository(factory).find_for_resource_date(1, date(2026, 3, 2), exclude_id=9)

    assert found[0].interval == Interval(1320, 1800)
    assert found[0].created_by == 5
    assert found[1].is_open
    sql, params = factory.cursor.executed[0]
    assert "id<>%s" in sql
    assert params == (1, date(2026, 3, 2), 9)


def test_search_builds_state_filter_and_paging():
    factory = FakeFactory([{"total": 1}], [row()])

    items, total = MySQLActivityRepository(factory).search(
        filters=ActivityFilters(resource_id=1, state=ShiftState.ABIERTA), offset=20, limit=10
    )

    assert total == 1 and len(items) == 1
    count_sql, count_params = factory.cursor.executed[0]
    assert "(fecha_fin IS NULL OR hora_fin IS NULL)" in count_sql
    assert count_params == (1,)
    assert factory.cursor.executed[1][1] == (1, 10, 20)


def test_create_splits_end_across_midnight():
    factory = FakeFactory()
    activity = Activity(
        activity_id=None,
        resource_id=1,
        work_date=date(2026, 3, 2),
        interval=Interval(1320, 1800),
        work_id=10,
        activity_type_id=20,
    )

    assert MySQLActivityRepository(factory).create(activity) == 41
    params = factory.cursor.executed[0][1]
    assert params[3:7] == (date(2026, 3, 2), "22:00", date(2026, 3, 3), "06:00")


def test_update_of_unchanged_row_checks_existence():
    factory = FakeFactory([{"id": 3}])
    factory.cursor.rowcount = 0
    activity = Activity(activity_id=3, resource_id=1, work_date=date(2026, 3, 2), interval=Interval(480), work_id=10, activity_type_id=20)

    assert MySQLActivityRepository(factory).update(activity) is True
    assert factory.cursor.executed[0][1][5:7] == (None, None)
