from flask import current_app, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from . import bp
from .forms import LoginForm
from ...errors import ValidationError
from ...models.user import User

@bp.post("/login")
def login():
    form = LoginForm()
    if not form.validate_on_submit():
        raise ValidationError("メールアドレスとパスワードを入力してください")
    user = User.query.filter_by(email=form.email.data).first()
    if not user or not user.check_password(form.password.data):
        current_app.logger.info("login failed email=%s", form.email.data)
        return jsonify({"error": "INVALID_CREDENTIALS", "message": "Invalid credentials"}), 401
    login_user(user)
    return jsonify({"id": user.id, "email": user.email})

@bp.post("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"success": True})

@bp.get("/me")
@login_required
def me():
    return jsonify({"id": current_user.id, "email": current_user.email, "role": current_user.role})
