from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

import pytest

from src.activity_tracking.activity_tracking.catalog.model import ActivityType, Resource, Work
from src.activity_tracking.activity_tracking.container import build_services
from src.activity_tracking.activity_tracking.core.enums import ResourceType, ShiftState
from src.activity_tracking.activity_tracking.scheduling.model import Activity


class InMemoryActivities:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Activity] = {}

    def add(self, activity: Activity) -> Activity:
        """Seed a row directly, bypassing the service."""
        new_id = self.create(activity)
        return self.rows[new_id]

    def find_for_resource_date(self, resource_id, work_date, exclude_id=None):
        return [
            a
            for a in self.rows.values()
            if a.resource_id == int(resource_id) and a.work_date == work_date and a.activity_id != exclude_id
        ]

    def get_by_id(self, activity_id):
        return self.rows.get(int(activity_id))

    def search(self, *, filters, offset, limit):
        found = []
        for a in self.rows.values():
            if filters.work_id is not None and a.work_id != filters.work_id:
                continue
            if filters.resource_id is not None and a.resource_id != filters.resource_id:
                continue
            if filters.activity_type_id is not None and a.activity_type_id != filters.activity_type_id:
                continue
            if filters.created_by is not None and a.created_by != filters.created_by:
                continue
            if filters.date_from is not None and a.work_date < filters.date_from:
                continue
            if filters.date_to is not None and a.work_date > filters.date_to:
                continue
            if filters.state is not None and a.state != ShiftState(filters.state):
                continue
            found.append(a)
        found.sort(key=lambda a: (a.work_date, a.interval.start, a.activity_id), reverse=True)
        return found[offset : offset + limit], len(found)

    def list_open(self, *, resource_id=None):
        return [
            a for a in self.rows.values() if a.is_open and (resource_id is None or a.resource_id == resource_id)
        ]

    def create(self, activity):
        new_id = self._next_id
        self._next_id += 1
        self.rows[new_id] = replace(activity, activity_id=new_id)
        return new_id

    def update(self, activity):
        if activity.activity_id not in self.rows:
            return False
        self.rows[activity.activity_id] = activity
        return True

    def delete(self, activity_id):
        return self.rows.pop(int(activity_id), None) is not None


class InMemoryCatalog:
    def __init__(self):
        self.resources = {
            1: Resource(1, "OP-01", "Juan Pérez", ResourceType.OPERARIO, cost_group="Oficiales"),
            2: Resource(2, "MQ-07", "Retroexcavadora", ResourceType.MAQUINA),
            3: Resource(3, "OP-02", "Ana Ruiz", ResourceType.OPERARIO, active=False),
        }
        self.works = {
            10: Work(10, "OB-2026-01", "Nave industrial", True),
            11: Work(11, "OB-2025-09", "Reforma finalizada", False),
        }
        self.activity_types = {20: ActivityType(20, "Excavación")}

    def get_resource(self, resource_id) -> Optional[Resource]:
        return self.resources.get(int(resource_id))

    def list_active_resources(self):
        return [r for r in self.resources.values() if r.active]

    def get_work(self, work_id):
        return self.works.get(int(work_id))

    def get_activity_type(self, activity_type_id):
        return self.activity_types.get(int(activity_type_id))


WORK_DATE = date(2026, 3, 2)


@pytest.fixture
def activities_repo():
    return InMemoryActivities()


@pytest.fixture
def catalog_repo():
    return InMemoryCatalog()


@pytest.fixture
def container(activities_repo, catalog_repo):
    return build_services(activities_repo, catalog_repo, options={"LOCK_TIMEOUT_SECONDS": 0.5})


@pytest.fixture
def service(container):
    return container.activity_service
