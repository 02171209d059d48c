"""Error kinds raised while resolving and authorizing a file request.

Every failure is terminal. ``NotFound`` also covers "exists but you may not
know it exists", and ``MalformedPath`` answers with 404 for the same reason.
"""
from __future__ import annotations


class FileAccessError(Exception):
    code = 404
    description = "File not found"

    def __init__(self, description: str | None = None, decision=None):
        super().__init__(description or self.description)
        if description:
            self.description = description
        # AccessDecision reached before the failure, used for response headers
        self.decision = decision


class MalformedPath(FileAccessError):
    code = 404
    description = "No valid arguments supplied"


class Forbidden(FileAccessError):
    code = 403
    description = "Access not allowed"


class NotFound(FileAccessError):
    code = 404
    description = "File not found"


class LoginRequired(Exception):
    """Requester must sign in first; answered with a redirect to the login page."""
