from __future__ import annotations

import os
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bayeuxgate.routing import SCRIPT_SUFFIX

DEFAULT_MOUNT = "/bayeux"
DEFAULT_JSONP_CALLBACK = "jsonpcallback"

JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")

# environment variable -> AdapterConfig field
ENV_FIELDS = {
    "BAYEUX_MOUNT": "mount",
    "BAYEUX_JSONP_CALLBACK": "jsonp_callback",
    "BAYEUX_TIMEOUT": "timeout",
    "BAYEUX_ENGINE": "engine",
    "BAYEUX_SCRIPT_PATH": "script_path",
}


class AdapterConfig(BaseModel):
    """Immutable settings for one adapter instance.

    Fixed at startup and passed to the adapter's constructor; two adapters in
    the same process may be configured differently.
    """

    model_config = ConfigDict(frozen=True)

    mount: str = Field(DEFAULT_MOUNT, description="Path the protocol endpoint is served at")
    jsonp_callback: str = Field(DEFAULT_JSONP_CALLBACK, description="Callback used when a GET names none")
    timeout: float = Field(30, gt=0, description="Long-poll timeout in seconds, passed to the engine")
    engine: str = Field("loopback", description="Engine name understood by create_engine")
    script_path: Optional[str] = Field(None, description="Client script replacing the bundled one")

    @field_validator("mount")
    def _mount_is_absolute(cls, v: str):
        if not v.startswith("/"):
            raise ValueError("mount must start with '/'")
        return v

    @field_validator("jsonp_callback")
    def _callback_is_identifier(cls, v: str):
        if not JS_IDENTIFIER.match(v):
            raise ValueError("jsonp_callback must be a JavaScript identifier")
        return v

    @property
    def script_mount(self) -> str:
        return self.mount + SCRIPT_SUFFIX


def load_config(**overrides) -> AdapterConfig:
    """Build an AdapterConfig from BAYEUX_* environment variables.

    Keyword overrides take precedence over the environment.
    """
    values = {}
    for env_name, field_name in ENV_FIELDS.items():
        raw = os.environ.get(env_name)
        if raw not in (None, ""):
            values[field_name] = raw
    values.update({k: v for k, v in overrides.items() if v is not None})
    return AdapterConfig(**values)
