from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ResourceType


@dataclass(frozen=True)
class Resource:
    """Entidad de dominio: recurso (operario o máquina)."""

    resource_id: int
    code: str
    name: str
    resource_type: ResourceType
    active: bool = True
    cost_group: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.code} - {self.name}"


@dataclass(frozen=True)
class Work:
    """Obra a la que se imputan las actividades."""

    work_id: int
    code: str
    description: str
    active: bool = True


@dataclass(frozen=True)
class ActivityType:
    activity_type_id: int
    name: str
