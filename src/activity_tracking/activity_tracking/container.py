from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .activities.mysql_activity_repository import MySQLActivityRepository
from .activities.repository import ActivityRepository
from .activities.service import ActivityService
from .catalog.mysql_catalog_repository import MySQLCatalogRepository
from .catalog.repository import CatalogRepository
from .core.constants import (
    DEFAULT_LOCK_TIMEOUT_SECONDS,
    DEFAULT_OPEN_SHIFT_MINUTES,
    DEFAULT_SUGGEST_DAY_END,
    DEFAULT_SUGGEST_DAY_START,
    DEFAULT_SUGGEST_LIMIT,
)
from .database.connection import DBConfig, DatabaseConnection
from .scheduling.facade import ValidationFacade
from .scheduling.lock import ResourceDateLock
from .scheduling.model import OpenShiftPolicy
from .scheduling.overlap import OverlapResolver
from .scheduling.slots import SlotSuggester
from .scheduling.time_grid import to_minutes


@dataclass(frozen=True)
class Container:
    activities_repo: ActivityRepository
    catalog_repo: CatalogRepository

    facade: ValidationFacade
    activity_service: ActivityService


def build_services(
    activities_repo: ActivityRepository,
    catalog_repo: CatalogRepository,
    *,
    options: Mapping[str, Any] | None = None,
) -> Container:
    """Wire the scheduling rules and services on top of any repositories."""
    options = options or {}

    policy = OpenShiftPolicy(
        default_duration_minutes=int(options.get("OPEN_SHIFT_MINUTES", DEFAULT_OPEN_SHIFT_MINUTES))
    )
    suggester = SlotSuggester(
        day_start=to_minutes(options.get("SUGGEST_DAY_START", DEFAULT_SUGGEST_DAY_START)),
        day_end=to_minutes(options.get("SUGGEST_DAY_END", DEFAULT_SUGGEST_DAY_END)),
        policy=policy,
    )
    facade = ValidationFacade(activities_repo, resolver=OverlapResolver(policy), suggester=suggester)

    activity_service = ActivityService(
        activities_repo,
        catalog_repo,
        facade=facade,
        locks=ResourceDateLock(timeout=float(options.get("LOCK_TIMEOUT_SECONDS", DEFAULT_LOCK_TIMEOUT_SECONDS))),
        auto_adjust=bool(options.get("AUTO_ADJUST_OVERLAPS", True)),
        suggest_limit=int(options.get("SUGGEST_LIMIT", DEFAULT_SUGGEST_LIMIT)),
    )

    return Container(
        activities_repo=activities_repo,
        catalog_repo=catalog_repo,
        facade=facade,
        activity_service=activity_service,
    )


def build_container(*, db_config: Mapping[str, Any], options: Mapping[str, Any] | None = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return build_services(
        MySQLActivityRepository(conn),
        MySQLCatalogRepository(conn),
        options=options,
    )
