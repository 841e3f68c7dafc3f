from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    ledger = container.attendance_ledger

    @app.route(
        "/api/cadets/<int:cadet_id>/terms/<int:term_id>/attendance",
        methods=["GET"],
        endpoint="attendance_aggregate",
    )
    def attendance_aggregate(cadet_id: int, term_id: int):
        records = ledger.list_for_cadet_in_term(cadet_id, term_id)
        days = ledger.attendance_days_present(cadet_id, term_id)
        return jsonify(
            {
                "cadet_id": cadet_id,
                "term_id": term_id,
                "attendance_days_present": days,
                "records": [r.to_dict() for r in records],
            }
        )
