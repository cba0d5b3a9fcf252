from flask import jsonify
from flask_login import login_required, current_user
from . import bp
from ...services import scheduling


@bp.get("/<int:candidate_id>/bookings")
@login_required
def list_bookings(candidate_id):
    return jsonify(scheduling.list_bookings(candidate_id, current_user.email))


@bp.post("/<int:candidate_id>/refresh-url")
@login_required
def refresh_url(candidate_id):
    return jsonify(scheduling.refresh_schedule_url(candidate_id, current_user.email))
