"""Example: drive the service layer directly, without Flask.

Controllers are thin; everything below is what the HTTP routes call.
"""

import importlib
import sys

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.container import build_container
from src.attendance_tracker.attendance_tracker.core.exceptions import DomainError


def main(employee_id: str = "1"):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    try:
        result = container.attendance_service.mark_attendance(employee_id)
        print(result.to_dict())
    except DomainError as e:
        print(e.message, e.payload)

    print(container.attendance_service.get_stats(employee_id).to_dict())


if __name__ == "__main__":
    main(*sys.argv[1:2])
