import os

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from .config import Config

db = SQLAlchemy()
login_manager = LoginManager()
login_manager.login_view = "auth.login"

def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # Ensure folders exist (SQLite + data root)
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    os.makedirs(os.path.join(project_root, "instance"), exist_ok=True)
    os.makedirs(app.config["DATAROOT"], exist_ok=True)

    db.init_app(app)
    login_manager.init_app(app)

    from .models import User

    @login_manager.user_loader
    def load_user(user_id: str):
        return db.session.get(User, user_id)

    from .modules import default_registry
    app.extensions["coursefiles.modules"] = default_registry()

    from .routes.auth import bp as auth_bp
    from .routes.files import bp as files_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(files_bp, url_prefix="/files")

    with app.app_context():
        db.create_all()
        app.logger.info("Serving course files from %s", app.config["DATAROOT"])
        if app.config.get("SEED_DEMO_DATA"):
            from .seed import ensure_seed_data
            ensure_seed_data()

    return app
