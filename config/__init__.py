import os
from typing import Mapping, Optional

_ENVIRONMENTS = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module(environ: Optional[Mapping[str, str]] = None) -> str:
    """Settings module for APP_ENV (development when unset or unknown).

    SETTINGS_MODULE names a module directly, e.g. for a per-site settings file.
    """
    environ = os.environ if environ is None else environ
    explicit = (environ.get("SETTINGS_MODULE") or "").strip()
    if explicit:
        return explicit
    return _ENVIRONMENTS.get(environ.get("APP_ENV", "development").lower(), "config.development")
