"""Per-request data carried through the adapter.

Nothing here outlives the request it was built for.
"""

from .context import RequestContext

__all__ = ["RequestContext"]
