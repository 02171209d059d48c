import os
from datetime import timedelta

from .utils import env_flag

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def normalize_database_url(url: str | None) -> str | None:
    """Normalize DATABASE_URL for SQLAlchemy.

    Some hosts use postgres:// which may not be accepted by SQLAlchemy drivers.
    """
    if not url:
        return None
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def default_dataroot() -> str:
    # Course files live under DATAROOT/<courseid>/..., blog attachments under DATAROOT/blog/...
    # Point DATAROOT at a persistent disk in production.
    return os.environ.get("DATAROOT", os.path.join(BASE_DIR, "..", "instance", "dataroot"))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "CHANGE_ME_IN_ENV")

    SQLALCHEMY_DATABASE_URI = normalize_database_url(os.environ.get("DATABASE_URL")) or (
        "sqlite:///" + os.path.join(BASE_DIR, "..", "instance", "app.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    DATAROOT = default_dataroot()

    # Seconds for files to remain in caches
    FILE_LIFETIME = int(os.environ.get("FILE_LIFETIME", "86400"))

    # Site-wide default course (front page files)
    SITE_ID = int(os.environ.get("SITE_ID", "1"))
    FORCE_LOGIN = env_flag("FORCE_LOGIN", False)

    # 0 disabled, 1 user, 2 group, 3 course, 4 site, 5 global
    BLOG_LEVEL = int(os.environ.get("BLOG_LEVEL", "4"))

    PREVENT_ACCESS_TO_HIDDEN_FILES = env_flag("PREVENT_ACCESS_TO_HIDDEN_FILES", False)

    SEED_DEMO_DATA = env_flag("SEED_DEMO_DATA", True)

    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)
