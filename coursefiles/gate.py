"""Authorization gate for course file requests.

The checks run as an ordered pipeline of stages. Each stage takes the current
``GateState`` and returns the next one, or raises one of the errors in
``coursefiles.errors``. The state is immutable, so a stage can only narrow the
``AccessDecision`` it was handed.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

from flask import current_app
from werkzeug.security import safe_join

from .decision import AccessDecision
from .errors import Forbidden, NotFound
from .models import Course
from .modules import ModuleRegistry
from .paths import VirtualPath
from .permissions import (
    ASSIGNMENT_GRADE,
    BACKUP,
    VIEW_HIDDEN_ACTIVITIES,
    has_capability,
    require_login,
)
from .repository import CourseRepository
from .utils import clean_safedir, to_int

BLOG_GLOBAL_LEVEL = 5
INDEX_FILES = ("index.html", "index.htm", "Default.htm")


@dataclass(frozen=True)
class GateEnv:
    """Collaborators and settings shared by all stages of one request."""

    user: Any
    dataroot: str
    site_id: int
    force_login: bool
    blog_level: int
    prevent_hidden_files: bool
    modules: ModuleRegistry
    courses: CourseRepository
    require_login: Callable[..., None] = require_login
    has_capability: Callable[..., bool] = has_capability

    @classmethod
    def from_app(cls, app, user) -> "GateEnv":
        cfg = app.config
        return cls(
            user=user,
            dataroot=cfg["DATAROOT"],
            site_id=cfg["SITE_ID"],
            force_login=cfg["FORCE_LOGIN"],
            blog_level=cfg["BLOG_LEVEL"],
            prevent_hidden_files=cfg["PREVENT_ACCESS_TO_HIDDEN_FILES"],
            modules=app.extensions["coursefiles.modules"],
            courses=CourseRepository(),
        )


@dataclass(frozen=True)
class GateState:
    path: VirtualPath
    fs_path: str
    decision: AccessDecision
    scope: Optional[Course] = None

    @property
    def course(self) -> Course:
        if self.scope is None:
            raise RuntimeError("owner scope must be resolved before course checks run")
        return self.scope


def filesystem_path(dataroot: str, path: VirtualPath) -> str:
    joined = safe_join(dataroot, *path.segments)
    if joined is None:
        raise NotFound()
    return joined


def resolve_owner_scope(state: GateState, env: GateEnv) -> GateState:
    if state.path.is_blog:
        site = env.courses.find_course(env.site_id)
        if site is None:
            raise NotFound("Site course is missing")
        return replace(state, scope=site)

    course = env.courses.find_course(state.path.owner_id)
    # "007" must not reach course 7
    if course is None or str(course.id) != state.path.owner_segment:
        raise NotFound("Invalid course ID")
    return replace(state, scope=course)


def check_blog_feature(state: GateState, env: GateEnv) -> GateState:
    if not state.path.is_blog:
        return state
    if not env.blog_level:
        raise Forbidden("Blogging is disabled!")
    if env.blog_level < BLOG_GLOBAL_LEVEL or env.force_login:
        env.require_login(env.user)
    return state


def check_course_login(state: GateState, env: GateEnv) -> GateState:
    if state.path.is_blog:
        return state
    if state.course.id != env.site_id:
        env.require_login(env.user, state.course)
    elif env.force_login:
        env.require_login(env.user)
    return state


def check_backup_namespace(state: GateState, env: GateEnv) -> GateState:
    if state.path.namespace != "backupdata":
        return state
    if not env.has_capability(env.user, BACKUP, state.course):
        raise Forbidden(decision=state.decision)
    # Backups are never served from a cache
    return replace(state, decision=state.decision.limit_lifetime(0))


def resolve_directory_index(state: GateState, env: GateEnv) -> GateState:
    if not os.path.isdir(state.fs_path):
        return state
    for name in INDEX_FILES:
        candidate = os.path.join(state.fs_path, name)
        if os.path.exists(candidate):
            current_app.logger.debug("Serving %s for directory /%s", name, state.path.relative)
            return replace(state, path=state.path.appended(name), fs_path=candidate)
    # Never hand out a directory listing
    raise NotFound()


def check_submission_owner(state: GateState, env: GateEnv) -> GateState:
    path = state.path
    if path.namespace != "moddata" or path.module_type != "assignment":
        return state

    # Students may re-upload, so submissions are never cached
    state = replace(state, decision=state.decision.limit_lifetime(0))
    if env.user.is_authenticated and path.owner_uid == env.user.get_id():
        return state

    instance = to_int(path.instance_segment)
    cm = None
    if instance is not None:
        cm = env.courses.find_course_module("assignment", instance, state.course.id)
    if cm is None:
        raise NotFound(decision=state.decision)
    if not env.has_capability(env.user, ASSIGNMENT_GRADE, cm):
        raise Forbidden(decision=state.decision)
    return state


def check_module_trust(state: GateState, env: GateEnv) -> GateState:
    path = state.path
    if path.namespace != "moddata" or path.module_type is None:
        return state

    module = clean_safedir(path.module_type)
    if not module or not env.modules.is_installed(module):
        # Module is not installed, better not serve the file at all
        raise NotFound(decision=state.decision)
    if state.decision.force_download:
        return state

    trusted = env.modules.trust_predicate(module)
    if trusted is not None and trusted():
        return state
    return replace(state, decision=state.decision.forcing_download())


def force_blog_download(state: GateState, env: GateEnv) -> GateState:
    if not state.path.is_blog:
        return state
    return replace(state, decision=state.decision.forcing_download())


def check_hidden_resource(state: GateState, env: GateEnv) -> GateState:
    """Block files referenced by hidden resources.

    Only the resource module is covered; files of other modules pass.
    """
    path = state.path
    if not env.prevent_hidden_files or path.namespace is None:
        return state
    if path.namespace == "moddata" and path.module_type != "resource":
        return state
    if env.has_capability(env.user, VIEW_HIDDEN_ACTIVITIES, state.course):
        return state

    if env.courses.hidden_resource_exists(state.course.id, path.reference):
        raise Forbidden(decision=state.decision)
    return state


STAGES = (
    resolve_owner_scope,
    check_blog_feature,
    check_course_login,
    check_backup_namespace,
    resolve_directory_index,
    check_submission_owner,
    check_module_trust,
    force_blog_download,
    check_hidden_resource,
)


def run_gate(path: VirtualPath, env: GateEnv, decision: AccessDecision) -> GateState:
    state = GateState(path=path, fs_path=filesystem_path(env.dataroot, path), decision=decision)
    for stage in STAGES:
        state = stage(state, env)
    return state
