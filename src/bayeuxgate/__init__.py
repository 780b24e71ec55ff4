"""HTTP long-polling transport for a Bayeux publish/subscribe engine."""

from .adapter import BayeuxAdapter, LocalClient
from .config import AdapterConfig, load_config

__all__ = ["BayeuxAdapter", "LocalClient", "AdapterConfig", "load_config"]
