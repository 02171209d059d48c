"""Capability checks and course login.

A deliberately small stand-in for a host permission system: each course
enrolment role grants a fixed set of capabilities, site admins hold all of them.
"""
from __future__ import annotations
from typing import Optional

from .errors import Forbidden, LoginRequired
from .models import Course, CourseModule, Enrolment

BACKUP = "course:backup"
VIEW_HIDDEN_ACTIVITIES = "course:viewhiddenactivities"
VIEW_HIDDEN_COURSES = "course:viewhiddencourses"
ASSIGNMENT_GRADE = "assignment:grade"

ROLE_CAPABILITIES = {
    "student": frozenset(),
    "teacher": frozenset({ASSIGNMENT_GRADE, VIEW_HIDDEN_ACTIVITIES, VIEW_HIDDEN_COURSES}),
    "editingteacher": frozenset({ASSIGNMENT_GRADE, VIEW_HIDDEN_ACTIVITIES, VIEW_HIDDEN_COURSES, BACKUP}),
    "manager": frozenset({ASSIGNMENT_GRADE, VIEW_HIDDEN_ACTIVITIES, VIEW_HIDDEN_COURSES, BACKUP}),
}


def _enrolment(user, course_id: int) -> Optional[Enrolment]:
    return Enrolment.query.filter_by(user_id=user.id, course_id=course_id).first()


def has_capability(user, capability: str, scope) -> bool:
    """Evaluate ``capability`` for ``user`` in a Course or CourseModule scope."""
    if isinstance(scope, CourseModule):
        course_id = scope.course_id
    elif isinstance(scope, Course):
        course_id = scope.id
    else:
        raise TypeError(f"unsupported capability scope: {scope!r}")

    if user is None or not user.is_authenticated:
        return False
    if user.is_site_admin:
        return True

    enrol = _enrolment(user, course_id)
    if not enrol:
        return False
    return capability in ROLE_CAPABILITIES.get(enrol.role, frozenset())


def require_login(user, course: Optional[Course] = None) -> None:
    """Require a signed-in user, and when ``course`` is given, access to it.

    Anonymous users get ``LoginRequired``; callers redirect to the login form
    without remembering the requested URL.
    """
    if user is None or not user.is_authenticated:
        raise LoginRequired()
    if course is None or user.is_site_admin:
        return

    if not course.visible and not has_capability(user, VIEW_HIDDEN_COURSES, course):
        raise Forbidden("This course is not available")
    if not _enrolment(user, course.id):
        raise Forbidden("You are not enrolled in this course")
