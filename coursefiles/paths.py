"""Virtual path parsing.

Syntax: ``/<courseid|blog>[/<namespace>[/<module>/<instance>[/<userid>]]]/<filename>``
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import MalformedPath
from .utils import to_int

BLOG = "blog"


@dataclass(frozen=True)
class VirtualPath:
    segments: Tuple[str, ...]

    def _segment(self, index: int) -> Optional[str]:
        return self.segments[index] if len(self.segments) > index else None

    @property
    def owner_segment(self) -> str:
        return self.segments[0]

    @property
    def is_blog(self) -> bool:
        return self.owner_segment == BLOG

    @property
    def owner_id(self) -> Optional[int]:
        if self.is_blog:
            return None
        return to_int(self.owner_segment)

    @property
    def namespace(self) -> Optional[str]:
        seg = self._segment(1)
        return seg.lower() if seg is not None else None

    @property
    def module_type(self) -> Optional[str]:
        seg = self._segment(2)
        return seg.lower() if seg is not None else None

    @property
    def instance_segment(self) -> Optional[str]:
        return self._segment(3)

    @property
    def owner_uid(self) -> Optional[str]:
        return self._segment(4)

    @property
    def filename(self) -> str:
        return self.segments[-1]

    @property
    def relative(self) -> str:
        return "/".join(self.segments)

    @property
    def reference(self) -> str:
        return "/".join(self.segments[1:])

    def appended(self, name: str) -> "VirtualPath":
        return VirtualPath(self.segments + (name,))


def parse_virtual_path(raw: Optional[str]) -> VirtualPath:
    if not raw:
        raise MalformedPath("No valid arguments supplied or incorrect server configuration")
    # Relative paths are ambiguous; backup/restore links always start with a slash
    if not raw.startswith("/"):
        raise MalformedPath("No valid arguments supplied, path does not start with slash!")
    if "\x00" in raw:
        raise MalformedPath()

    segments = tuple(s for s in raw.strip("/").split("/") if s)
    if not segments:
        raise MalformedPath()
    if any(s in (".", "..") for s in segments):
        raise MalformedPath()

    first = segments[0]
    if first != BLOG and to_int(first) is None:
        raise MalformedPath("Invalid course ID")
    return VirtualPath(segments)


def request_path_from(path_info: Optional[str], file_arg: Optional[str]) -> Optional[str]:
    """Pick the relative path from path info, falling back to ``?file=``.

    The query form exists for servers that do not pass path info through.
    """
    if path_info:
        return "/" + path_info.lstrip("/")
    return file_arg
