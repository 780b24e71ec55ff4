from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Optional

BUNDLED_SCRIPT = "bayeux-client.js"


def load_client_script(path: Optional[str] = None) -> bytes:
    """Return the browser client served at ``<mount>.js``.

    A configured ``path`` replaces the bundled asset entirely.
    """
    if path:
        return Path(path).read_bytes()
    return resources.files("bayeuxgate").joinpath("static").joinpath(BUNDLED_SCRIPT).read_bytes()
