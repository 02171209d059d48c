from __future__ import annotations
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from . import db

class User(UserMixin, db.Model):
    id = db.Column(db.String(64), primary_key=True)
    role = db.Column(db.String(16), nullable=False, default="user")  # user / admin
    name = db.Column(db.String(128), nullable=False)
    pin_hash = db.Column(db.String(256), nullable=False)

    def set_pin(self, pin: str) -> None:
        self.pin_hash = generate_password_hash(pin)

    def check_pin(self, pin: str) -> bool:
        return check_password_hash(self.pin_hash, pin)

    def get_id(self) -> str:
        return self.id

    @property
    def is_site_admin(self) -> bool:
        return self.role == "admin"

class Course(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    shortname = db.Column(db.String(100), nullable=False)
    fullname = db.Column(db.String(254), nullable=False)
    visible = db.Column(db.Boolean, default=True, nullable=False)

class Enrolment(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), db.ForeignKey("user.id"), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey("course.id"), nullable=False)
    role = db.Column(db.String(32), nullable=False)  # student / teacher / editingteacher / manager

    user = db.relationship("User")
    course = db.relationship("Course")

class CourseModule(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey("course.id"), nullable=False)
    module = db.Column(db.String(64), nullable=False)  # assignment / resource / forum ...
    instance = db.Column(db.Integer, nullable=False)
    visible = db.Column(db.Boolean, default=True, nullable=False)

    course = db.relationship("Course")

class Resource(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey("course.id"), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(30), nullable=False, default="file")
    reference = db.Column(db.String(255), nullable=False, default="")
