"""Example: drive the session ledger directly (no Flask).

Controllers are a thin layer; the check-in/check-out rules live in the service.
"""

import importlib

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    ledger = container.attendance_service

    if not ledger.is_working("user_001"):
        print(ledger.check_in("user_001").to_dict())
    print(ledger.check_out("user_001").to_dict())
    print(ledger.list_history("user_001", page=1, limit=5).to_dict())


if __name__ == "__main__":
    main()
