"""Domain errors and their JSON rendering.

Every error raised by the scheduling services carries an HTTP status and a
stable machine-readable code. ``register_error_handlers`` turns them into
``{"error": <code>, "message": <text>}`` responses; nothing from the
underlying exception (stack, SQL) is sent to the client.
"""
from flask import jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .extensions import db


class SchedulingError(Exception):
    status_code = 400
    code = "BAD_REQUEST"
    message = "リクエストが不正です"

    def __init__(self, message=None, code=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        if code:
            self.code = code

    def to_dict(self):
        return {"error": self.code, "message": self.message}


class ValidationError(SchedulingError):
    status_code = 400
    code = "VALIDATION_ERROR"
    message = "入力内容に誤りがあります"


class NotFoundError(SchedulingError):
    status_code = 404
    code = "NOT_FOUND"
    message = "見つかりません"


class AuthorizationError(SchedulingError):
    status_code = 403
    code = "FORBIDDEN"
    message = "アクセス権限がありません"


class ConflictError(SchedulingError):
    status_code = 400
    code = "INVALID_STATUS"
    message = "現在の状態ではこの操作はできません"


class StorageError(SchedulingError):
    status_code = 500
    code = "STORAGE_ERROR"
    message = "データの保存に失敗しました"


def register_error_handlers(app):
    @app.errorhandler(SchedulingError)
    def handle_scheduling_error(exc):
        if isinstance(exc, StorageError):
            current_app.logger.exception("storage failure: %s", exc.message)
        elif isinstance(exc, AuthorizationError):
            current_app.logger.info("access denied: %s", exc.message)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(exc):
        db.session.rollback()
        current_app.logger.exception("unhandled database error")
        err = StorageError()
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        code = (exc.name or "error").upper().replace(" ", "_")
        return jsonify({"error": code, "message": exc.description}), exc.code
