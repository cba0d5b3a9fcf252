from flask import Flask
from flask_migrate import Migrate
from .extensions import db, login_manager, rq
from .errors import register_error_handlers
from .services.access import OwnerAccessPolicy, install_access_policy

migrate = Migrate()

def create_app(config_object='config.Config'):
    """App factory for the interview scheduling API.

    ``config_object`` is anything ``app.config.from_object`` accepts;
    tests pass ``config.TestConfig``.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    from . import models  # noqa: F401  register all tables on db.metadata

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    rq.init_app(app)
    install_access_policy(app, OwnerAccessPolicy())
    register_error_handlers(app)

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        return User.query.get(int(user_id))

    from .blueprints.auth import bp as auth_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")

    from .blueprints.schedules import bp as schedules_bp
    app.register_blueprint(schedules_bp, url_prefix="/schedules")

    from .blueprints.candidates import bp as candidates_bp
    app.register_blueprint(candidates_bp, url_prefix="/candidates")

    from .blueprints.public import bp as public_bp
    app.register_blueprint(public_bp, url_prefix="/public")

    @app.get('/health')
    def health():
        return {"status": "ok"}

    return app
