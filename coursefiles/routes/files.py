from __future__ import annotations
from flask import Blueprint, current_app, redirect, request, url_for
from flask_login import current_user
from ..decision import AccessDecision
from ..errors import FileAccessError, LoginRequired
from ..gate import GateEnv, run_gate
from ..paths import parse_virtual_path, request_path_from
from ..responder import apply_cache_policy, release_session, resolve_file, send_resolved_file

bp = Blueprint('files', __name__)

def _forcedownload_requested() -> bool:
    return request.args.get('forcedownload', '0').strip().lower() in {'1', 'true', 'yes', 'on'}

@bp.get('/', defaults={'relpath': None})
@bp.get('/<path:relpath>')
def serve(relpath: str | None):
    path = parse_virtual_path(request_path_from(relpath, request.args.get('file')))

    decision = AccessDecision(
        cache_lifetime=max(0, current_app.config['FILE_LIFETIME']),
        force_download=_forcedownload_requested(),
    )
    env = GateEnv.from_app(current_app, current_user._get_current_object())
    state = run_gate(path, env, decision)
    resolved = resolve_file(state)

    release_session()
    return send_resolved_file(resolved, state.decision)

@bp.errorhandler(FileAccessError)
def file_access_error(err: FileAccessError):
    current_app.logger.info("%s for %s (user %s): %s", type(err).__name__, request.path, current_user.get_id(), err.description)
    response = current_app.make_response((err.description, err.code, {'Content-Type': 'text/plain; charset=utf-8'}))
    if err.decision is not None and err.decision.cache_lifetime == 0:
        apply_cache_policy(response, err.decision)
    return response

@bp.errorhandler(LoginRequired)
def login_required_error(err: LoginRequired):
    # No "next" parameter: bouncing back to a file URL after login loops on some clients
    return redirect(url_for('auth.login'))
