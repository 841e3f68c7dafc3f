from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, require_field
from ..core.constants import DEFAULT_DEMERIT, DEFAULT_LEADERBOARD_SIZE, DEFAULT_MERIT
from ..core.exceptions import InvalidGradeInput, ValidationError
from ..container import Container
from .model import GradeInputs


def _inputs_from(data: dict) -> GradeInputs:
    return GradeInputs(
        attendance_days_present=require_field(data, "attendance_days_present", error=InvalidGradeInput),
        merit=data.get("merit", DEFAULT_MERIT),
        demerit=data.get("demerit", DEFAULT_DEMERIT),
        exam_score_raw=require_field(data, "exam_score_raw", error=InvalidGradeInput),
    )


def register(app: Flask, container: Container) -> None:
    service = container.grade_service

    @app.route("/api/grades/preview", methods=["POST"], endpoint="grade_preview")
    def grade_preview():
        result = service.preview(_inputs_from(json_body()))
        return jsonify({"result": result.to_dict()})

    @app.route("/api/cadets/<int:cadet_id>/terms/<int:term_id>/grade", methods=["PUT"], endpoint="compute_grade")
    def compute_grade(cadet_id: int, term_id: int):
        data = json_body()
        notes = data.get("notes")
        if data.get("attendance_days_present") is None:
            # Attendance comes from the ledger unless an instructor overrides it.
            result = service.compute_grade_from_attendance(
                cadet_id=cadet_id,
                term_id=term_id,
                merit=data.get("merit", DEFAULT_MERIT),
                demerit=data.get("demerit", DEFAULT_DEMERIT),
                exam_score_raw=require_field(data, "exam_score_raw", error=InvalidGradeInput),
                notes=notes,
            )
        else:
            result = service.compute_grade(cadet_id=cadet_id, term_id=term_id, inputs=_inputs_from(data), notes=notes)
        return jsonify({"success": True, "result": result.to_dict()})

    @app.route("/api/cadets/<int:cadet_id>/terms/<int:term_id>/grade", methods=["GET"], endpoint="get_grade")
    def get_grade(cadet_id: int, term_id: int):
        return jsonify({"grade": service.get_grade(cadet_id=cadet_id, term_id=term_id).to_dict()})

    @app.route("/api/terms/<int:term_id>/grades", methods=["GET"], endpoint="term_grades")
    def term_grades(term_id: int):
        try:
            top = int(request.args.get("top", DEFAULT_LEADERBOARD_SIZE))
        except ValueError:
            raise ValidationError("top must be an integer")
        data = service.build_term_report(term_id, top=top)
        return jsonify({"rows": data.rows, "summary": data.summary, "leaderboard": data.leaderboard})
