from __future__ import annotations

import json
from typing import Any, Optional

from bayeuxgate.errors import MessageAbsent, MessageMalformed


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def parse_message(payload: Optional[str]) -> Any:
    """Parse a message payload with strict JSON syntax.

    The result is returned as-is: a single envelope, a list of them, or any
    other JSON value. Only well-formedness is checked, never shape.
    """
    if payload is None:
        raise MessageAbsent()
    try:
        return json.loads(payload, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError is a ValueError subclass; deep nesting exhausts the decoder stack
        raise MessageMalformed(str(exc)) from exc
