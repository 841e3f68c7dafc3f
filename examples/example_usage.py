"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the services.
"""

import importlib
from datetime import datetime

from config import get_settings_module

from src.rotc_system.rotc_system.container import build_container
from src.rotc_system.rotc_system.geo.model import GeoPoint
from src.rotc_system.rotc_system.grades.model import GradeInputs


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    session = container.session_service.create_session(
        center=GeoPoint(latitude=13.6151, longitude=123.4835),
        radius_meters=50,
        start_time=datetime.now(),
        time_limit_minutes=30,
        created_by=1,
    )
    record = container.session_service.check_in(
        session_id=session.session_id,
        cadet_id=1,
        submitted_location=GeoPoint(latitude=13.6152, longitude=123.4836),
    )
    print(record.status.value, f"{record.distance_meters:.1f}m")

    result = container.grade_service.preview(GradeInputs(attendance_days_present=15, exam_score_raw=80))
    print(result.to_dict())


if __name__ == "__main__":
    main()
