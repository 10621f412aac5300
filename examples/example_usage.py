"""Ejemplo: usar la capa de servicios sin pasar por Flask.

Los controladores son una capa fina; las reglas de solapamiento viven en los servicios.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.activity_tracking.activity_tracking.container import build_container
from src.activity_tracking.activity_tracking.scheduling.time_grid import to_clock


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    slots = container.activity_service.suggest_slots(resource_id=1, work_date=date.today(), duration_minutes=120)
    for slot in slots:
        print(f"{to_clock(slot.start)} - {to_clock(slot.end)}")


if __name__ == "__main__":
    main()
