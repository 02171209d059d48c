from __future__ import annotations
from typing import Optional

from sqlalchemy import and_

from . import db
from .models import Course, CourseModule, Resource


# Largest value an INTEGER column holds on every supported backend
MAX_ID = 2**31 - 1


class CourseRepository:
    """Database lookups the file gate depends on."""

    def find_course(self, course_id: int) -> Optional[Course]:
        if course_id > MAX_ID:
            return None
        return db.session.get(Course, course_id)

    def find_course_module(self, module: str, instance: int, course_id: int) -> Optional[CourseModule]:
        if instance > MAX_ID or course_id > MAX_ID:
            return None
        return CourseModule.query.filter_by(module=module, instance=instance, course_id=course_id).first()

    def hidden_resource_exists(self, course_id: int, reference: str) -> bool:
        """True when a hidden file resource in the course points at ``reference``."""
        q = (
            db.session.query(Resource.id)
            .join(CourseModule, and_(CourseModule.instance == Resource.id, CourseModule.module == "resource"))
            .filter(
                Resource.course_id == course_id,
                Resource.type == "file",
                Resource.reference == reference,
                CourseModule.visible.is_(False),
            )
        )
        return db.session.query(q.exists()).scalar()
