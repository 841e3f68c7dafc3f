from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.http import json_body, optional_datetime, require_field, require_int
from ..core.constants import DEFAULT_POLYGON_SEGMENTS
from ..core.exceptions import InvalidParameter, ValidationError
from ..container import Container
from ..geo.model import GeoPoint

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.session_service
    ledger = container.attendance_ledger
    clock = container.clock

    @app.route("/api/sessions", methods=["POST"], endpoint="create_session")
    def create_session():
        data = json_body()
        center = GeoPoint(
            latitude=require_field(data, "latitude", error=InvalidParameter),
            longitude=require_field(data, "longitude", error=InvalidParameter),
        )
        battalion_id = data.get("battalion_id")
        session = service.create_session(
            center=center,
            radius_meters=require_field(data, "radius_meters", error=InvalidParameter),
            start_time=optional_datetime(data, "start_time", error=InvalidParameter) or clock.now(),
            time_limit_minutes=require_field(data, "time_limit_minutes", error=InvalidParameter),
            created_by=require_int(require_field(data, "created_by"), "created_by"),
            battalion_id=require_int(battalion_id, "battalion_id") if battalion_id is not None else None,
        )
        return jsonify({"success": True, "session_id": session.session_id, "session": session.to_dict(clock.now())}), 201

    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    def list_sessions():
        now = clock.now()
        return jsonify({"sessions": [s.to_dict(now) for s in service.list_sessions()]})

    @app.route("/api/sessions/active", methods=["GET"], endpoint="active_session")
    def active_session():
        session = service.get_active_session()
        return jsonify({"session": session.to_dict(clock.now()) if session else None})

    @app.route("/api/sessions/<int:session_id>", methods=["GET"], endpoint="get_session")
    def get_session(session_id: int):
        return jsonify({"session": service.get_session(session_id).to_dict(clock.now())})

    @app.route("/api/sessions/<int:session_id>", methods=["DELETE"], endpoint="delete_session")
    def delete_session(session_id: int):
        service.delete_session(session_id)
        return jsonify({"success": True})

    @app.route("/api/sessions/<int:session_id>/end", methods=["POST"], endpoint="end_session")
    def end_session(session_id: int):
        session = service.end_session(session_id)
        return jsonify({"success": True, "session": session.to_dict(clock.now())})

    @app.route("/api/sessions/<int:session_id>/check-in", methods=["POST"], endpoint="check_in")
    def check_in(session_id: int):
        data = json_body()
        location = GeoPoint(
            latitude=require_field(data, "latitude", error=InvalidParameter),
            longitude=require_field(data, "longitude", error=InvalidParameter),
        )
        # Server clock only: a client-reported time or "within range" flag is never trusted.
        record = service.check_in(
            session_id=session_id,
            cadet_id=require_int(require_field(data, "cadet_id"), "cadet_id"),
            submitted_location=location,
        )
        return jsonify({"success": True, "status": record.status.value, "record": record.to_dict()}), 201

    @app.route("/api/sessions/<int:session_id>/records", methods=["GET"], endpoint="session_records")
    def session_records(session_id: int):
        service.get_session(session_id)
        records = ledger.list_for_session(session_id)
        summary = ledger.session_summary(session_id)
        return jsonify(
            {
                "records": [r.to_dict() for r in records],
                "summary": {
                    "present": summary.present,
                    "late": summary.late,
                    "absent": summary.absent,
                    "total": summary.total,
                },
            }
        )

    @app.route("/api/sessions/<int:session_id>/polygon", methods=["GET"], endpoint="session_polygon")
    def session_polygon(session_id: int):
        try:
            segments = int(request.args.get("segments", DEFAULT_POLYGON_SEGMENTS))
        except ValueError:
            raise ValidationError("segments must be an integer")
        ring = service.session_polygon(session_id, segments=segments)
        # GeoJSON order is [longitude, latitude].
        return jsonify({"type": "Polygon", "coordinates": [[[p.longitude, p.latitude] for p in ring]]})
