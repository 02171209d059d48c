from werkzeug.security import generate_password_hash
from . import db
from .models import User, Course, Enrolment, CourseModule, Resource

def ensure_seed_data():
    # site front page course
    if not db.session.get(Course, 1):
        db.session.add(Course(id=1, shortname="site", fullname="Site home"))
    if not db.session.get(Course, 2):
        db.session.add(Course(id=2, shortname="DEMO101", fullname="Demo course"))

    for uid, role, name in [
        ("admin", "admin", "Site Administrator"),
        ("t001", "user", "Teacher A"),
        ("s001", "user", "Student One"),
    ]:
        if not db.session.get(User, uid):
            db.session.add(User(id=uid, role=role, name=name, pin_hash=generate_password_hash("1234")))
    db.session.commit()

    for uid, role in [("t001", "editingteacher"), ("s001", "student")]:
        if not Enrolment.query.filter_by(user_id=uid, course_id=2).first():
            db.session.add(Enrolment(user_id=uid, course_id=2, role=role))

    # one assignment for student submissions: 2/moddata/assignment/1/<userid>/...
    if not CourseModule.query.filter_by(course_id=2, module="assignment", instance=1).first():
        db.session.add(CourseModule(course_id=2, module="assignment", instance=1))

    if Resource.query.filter_by(course_id=2).count() == 0:
        syllabus = Resource(course_id=2, name="Syllabus", type="file", reference="syllabus.pdf")
        db.session.add(syllabus)
        db.session.flush()
        db.session.add(CourseModule(course_id=2, module="resource", instance=syllabus.id))
    db.session.commit()
