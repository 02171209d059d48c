import dataclasses

import pytest

from coursefiles import db
from coursefiles.decision import AccessDecision
from coursefiles.errors import Forbidden, NotFound
from coursefiles.gate import (
    GateEnv,
    GateState,
    STAGES,
    check_backup_namespace,
    check_module_trust,
    resolve_owner_scope,
    run_gate,
)
from coursefiles.models import User
from coursefiles.modules import ModuleRegistry
from coursefiles.paths import parse_virtual_path
from coursefiles.responder import resolve_file


def _env(app, user_id):
    user = db.session.get(User, user_id)
    return GateEnv.from_app(app, user)


def test_stage_order_starts_with_owner_scope():
    assert STAGES[0] is resolve_owner_scope
    assert [s.__name__ for s in STAGES] == [
        "resolve_owner_scope",
        "check_blog_feature",
        "check_course_login",
        "check_backup_namespace",
        "resolve_directory_index",
        "check_submission_owner",
        "check_module_trust",
        "force_blog_download",
        "check_hidden_resource",
    ]


def test_course_stage_refuses_to_run_without_scope(app):
    state = GateState(
        path=parse_virtual_path("/2/backupdata/b.zip"),
        fs_path="/nonexistent",
        decision=AccessDecision(cache_lifetime=60),
    )
    with app.test_request_context():
        env = _env(app, "t001")
        with pytest.raises(RuntimeError):
            check_backup_namespace(state, env)


def test_zero_padded_course_id_is_not_found(app, make_file):
    make_file("7/a.txt")
    with app.test_request_context():
        env = _env(app, "admin")
        with pytest.raises(NotFound):
            run_gate(parse_virtual_path("/007/a.txt"), env, AccessDecision(cache_lifetime=60))
        state = run_gate(parse_virtual_path("/7/a.txt"), env, AccessDecision(cache_lifetime=60))
        assert state.scope.id == 7


def test_same_request_twice_gives_identical_outcome(app, make_file):
    make_file("2/moddata/assignment/1/s001/essay.txt", b"my essay")
    with app.test_request_context():
        env = _env(app, "s001")
        path = parse_virtual_path("/2/moddata/assignment/1/s001/essay.txt")
        first = run_gate(path, env, AccessDecision(cache_lifetime=86400))
        second = run_gate(path, env, AccessDecision(cache_lifetime=86400))
        assert first.decision == second.decision == AccessDecision(cache_lifetime=0, force_download=True)
        assert resolve_file(first) == resolve_file(second)
        assert resolve_file(first).filename == "essay.txt"


def test_foreign_submission_denied_with_zero_lifetime(app, make_file):
    make_file("2/moddata/assignment/1/s001/essay.txt")
    with app.test_request_context():
        env = _env(app, "s002")
        with pytest.raises(Forbidden) as exc:
            run_gate(
                parse_virtual_path("/2/moddata/assignment/1/s001/essay.txt"),
                env,
                AccessDecision(cache_lifetime=86400),
            )
        assert exc.value.decision.cache_lifetime == 0


def test_backup_lifetime_is_zero_whatever_the_default(app, make_file):
    make_file("2/backupdata/course.zip")
    with app.test_request_context():
        env = _env(app, "t001")
        for lifetime in (0, 60, 86400, 10**9):
            state = run_gate(
                parse_virtual_path("/2/backupdata/course.zip"), env, AccessDecision(cache_lifetime=lifetime)
            )
            assert state.decision.cache_lifetime == 0


def test_custom_trust_predicate_is_consulted(app):
    registry = ModuleRegistry()
    registry.register("wiki", lambda: True)
    registry.register("book")
    calls = []

    def spy():
        calls.append(1)
        return False

    registry.register("lesson", spy)
    with app.test_request_context():
        env = dataclasses.replace(_env(app, "s001"), modules=registry)
        decision = AccessDecision(cache_lifetime=60)

        def trust(path, d=decision):
            state = GateState(path=parse_virtual_path(path), fs_path="", decision=d)
            return check_module_trust(state, env).decision

        assert not trust("/2/moddata/wiki/1/page.html").force_download
        assert trust("/2/moddata/book/1/page.html").force_download
        assert trust("/2/moddata/lesson/1/page.html").force_download
        assert calls == [1]

        # already forcing download: predicate is not asked again
        trust("/2/moddata/lesson/1/page.html", d=decision.forcing_download())
        assert calls == [1]

        with pytest.raises(NotFound):
            trust("/2/moddata/quiz/1/page.html")
