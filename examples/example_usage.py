"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.techie_workspace.techie_workspace.common.authorization import Caller
from src.techie_workspace.techie_workspace.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    usage = container.plan_service.weekly_usage(user_id=1)
    print(f"Week so far: {usage.total_minutes}/{usage.weekly_limit} min ({usage.utilization_percent}%)")

    report = container.report_service.usage_report(Caller(user_id=1), 1, "monthly", date.today())
    print(report.to_dict())


if __name__ == "__main__":
    main()
