from flask import jsonify, request
from . import bp
from ...errors import ValidationError
from ...services import public_booking


@bp.get("/schedule/<token>")
def public_schedule(token):
    return jsonify(public_booking.public_schedule(token))


@bp.post("/schedule/<token>/book")
def book(token):
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("JSON ボディが必要です", code="INVALID_REQUEST")
    return jsonify(public_booking.book_slot(token, body))
