from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ActivityType, Resource, Work


class CatalogRepository(Protocol):
    def get_resource(self, resource_id: int) -> Optional[Resource]:
        raise NotImplementedError

    def list_active_resources(self) -> Sequence[Resource]:
        raise NotImplementedError

    def get_work(self, work_id: int) -> Optional[Work]:
        raise NotImplementedError

    def get_activity_type(self, activity_type_id: int) -> Optional[ActivityType]:
        raise NotImplementedError
