from __future__ import annotations
import os
from datetime import datetime, timedelta, timezone

from flask import send_file

from . import db
from .decision import AccessDecision, ResolvedFile
from .errors import NotFound
from .gate import GateState

EXPIRED = datetime(1970, 1, 1, tzinfo=timezone.utc)


def resolve_file(state: GateState) -> ResolvedFile:
    # The gate may have swapped a directory for its index page, so check again
    if not os.path.isfile(state.fs_path):
        raise NotFound(decision=state.decision)
    return ResolvedFile(path=state.fs_path, filename=state.path.filename)


def release_session() -> None:
    """Give the database session back before a possibly long transfer."""
    db.session.close()


def apply_cache_policy(response, decision: AccessDecision):
    cc = response.cache_control
    if decision.cache_lifetime > 0:
        cc.no_cache = None
        cc.max_age = decision.cache_lifetime
        response.expires = datetime.now(timezone.utc) + timedelta(seconds=decision.cache_lifetime)
    else:
        cc.private = True
        cc.no_cache = True
        cc.must_revalidate = True
        cc.max_age = 0
        response.expires = EXPIRED
        response.headers["Pragma"] = "no-cache"
    return response


def send_resolved_file(resolved: ResolvedFile, decision: AccessDecision):
    response = send_file(
        resolved.path,
        as_attachment=decision.force_download,
        download_name=resolved.filename,
        conditional=True,
        max_age=None,
    )
    return apply_cache_policy(response, decision)
