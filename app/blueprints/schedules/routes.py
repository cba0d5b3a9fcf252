from flask import jsonify, request
from flask_login import login_required, current_user
from . import bp
from ...errors import ValidationError
from ...services import scheduling


def _json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("JSON ボディが必要です")
    return body


def _candidate_id(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("candidateId は必須です")


@bp.get("")
@login_required
def list_schedules():
    candidate_id = _candidate_id(request.args.get("candidateId"))
    return jsonify(scheduling.list_slots(candidate_id, current_user.email))


@bp.post("")
@login_required
def create_schedule():
    body = _json_body()
    candidate_id = _candidate_id(body.get("candidateId"))
    return jsonify(scheduling.create_slot(candidate_id, body, current_user.email)), 201


@bp.post("/bulk")
@login_required
def bulk_create_schedules():
    body = _json_body()
    candidate_id = _candidate_id(body.get("candidateId"))
    return jsonify(scheduling.bulk_create_slots(candidate_id, body.get("slots"), current_user.email))


@bp.put("/<int:schedule_id>")
@login_required
def update_schedule(schedule_id):
    return jsonify(scheduling.update_slot(schedule_id, _json_body(), current_user.email))


@bp.post("/<int:schedule_id>/cancel")
@login_required
def cancel_schedule(schedule_id):
    return jsonify(scheduling.cancel_slot(schedule_id, current_user.email))


@bp.post("/<int:schedule_id>/cancel-booking")
@login_required
def cancel_booking(schedule_id):
    body = request.get_json(silent=True) or {}
    reason = body.get("cancelReason") if isinstance(body, dict) else None
    if reason is not None and not isinstance(reason, str):
        raise ValidationError("cancelReason は文字列で指定してください")
    return jsonify(scheduling.cancel_booking(schedule_id, reason, current_user.email))
