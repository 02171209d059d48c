import sys
from pathlib import Path

import pytest


# Ensure `coursefiles` package is importable when running pytest from repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from coursefiles import create_app, db  # noqa: E402
from coursefiles.models import Course, CourseModule, Enrolment, Resource, User  # noqa: E402


def _user(uid: str, role: str = "user") -> User:
    u = User(id=uid, role=role, name=uid.upper())
    u.set_pin("1234")
    return u


@pytest.fixture
def dataroot(tmp_path):
    root = tmp_path / "dataroot"
    root.mkdir()
    return root


@pytest.fixture
def make_file(dataroot):
    def _make(relpath: str, content: bytes = b"data") -> Path:
        p = dataroot / relpath
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
        return p
    return _make


@pytest.fixture
def app(dataroot):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "DATAROOT": str(dataroot),
        "SEED_DEMO_DATA": False,
        "FILE_LIFETIME": 86400,
        "SITE_ID": 1,
        "FORCE_LOGIN": False,
        "BLOG_LEVEL": 4,
        "PREVENT_ACCESS_TO_HIDDEN_FILES": False,
    })

    with app.app_context():
        db.session.add_all([
            Course(id=1, shortname="site", fullname="Site home"),
            Course(id=2, shortname="BIO101", fullname="Biology"),
            Course(id=3, shortname="HID", fullname="Hidden course", visible=False),
            Course(id=7, shortname="SEVEN", fullname="Course seven"),
            _user("admin", role="admin"),
            _user("t001"),
            _user("ta01"),
            _user("s001"),
            _user("s002"),
            _user("out01"),
        ])
        db.session.commit()
        db.session.add_all([
            Enrolment(user_id="t001", course_id=2, role="editingteacher"),
            Enrolment(user_id="ta01", course_id=2, role="teacher"),
            Enrolment(user_id="s001", course_id=2, role="student"),
            Enrolment(user_id="s002", course_id=2, role="student"),
            Enrolment(user_id="s001", course_id=3, role="student"),
            Enrolment(user_id="t001", course_id=3, role="editingteacher"),
            CourseModule(course_id=2, module="assignment", instance=1),
            Resource(id=1, course_id=2, name="Secret handout", type="file", reference="handouts/secret.pdf"),
            Resource(id=2, course_id=2, name="Public handout", type="file", reference="handouts/public.pdf"),
            CourseModule(course_id=2, module="resource", instance=1, visible=False),
            CourseModule(course_id=2, module="resource", instance=2, visible=True),
        ])
        db.session.commit()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: str, pin: str = "1234"):
        resp = client.post("/login", data={"user_id": user_id, "pin": pin})
        assert resp.status_code == 302
        return resp
    return _login
