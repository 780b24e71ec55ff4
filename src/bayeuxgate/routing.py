from __future__ import annotations

from enum import Enum

SCRIPT_SUFFIX = ".js"


class Endpoint(str, Enum):
    PROTOCOL = "protocol"
    SCRIPT = "script"
    UNMATCHED = "unmatched"


def route(path: str, mount: str) -> Endpoint:
    """Classify a request path against the mount point.

    Matching is exact string equality; there is no prefix or pattern matching.
    """
    if path == mount:
        return Endpoint.PROTOCOL
    if path == mount + SCRIPT_SUFFIX:
        return Endpoint.SCRIPT
    return Endpoint.UNMATCHED
