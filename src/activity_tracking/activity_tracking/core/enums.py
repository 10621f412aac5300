from __future__ import annotations

from enum import Enum


class ResourceType(str, Enum):
    """Tipo de recurso asignable a una obra."""

    OPERARIO = "operario"
    MAQUINA = "maquina"


class ShiftState(str, Enum):
    """Estado de la jornada: abierta (sin hora de fin) o cerrada."""

    ABIERTA = "abierta"
    CERRADA = "cerrada"


class ResolveMode(str, Enum):
    """How the overlap resolver treats a collision."""

    VALIDATE_ONLY = "validate_only"
    AUTO_ADJUST = "auto_adjust"
