"""Configuration resolution for gooseboy.

The only ambient value gooseboy depends on is the user's home directory,
which decides where the mod directory (``~/.gooseboy``) lives. It is
looked up once in :func:`default_config` and then passed explicitly: the
root CLI callback stores the resulting :class:`~gooseboy.models.GooseboyConfig`
in ``ctx.obj["config"]`` unless the caller already put one there, which is
how tests substitute a temporary home.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from gooseboy.models import GooseboyConfig


def default_config() -> GooseboyConfig:
    """Build the configuration for a normal interactive run.

    Returns:
        A :class:`~gooseboy.models.GooseboyConfig` rooted at ``Path.home()``.
    """
    return GooseboyConfig(home_dir=Path.home())


def config_from_context(obj: Optional[dict[str, Any]]) -> GooseboyConfig:
    """Return the config stored on a Typer context object, or the default."""
    if obj and isinstance(obj.get("config"), GooseboyConfig):
        return obj["config"]
    return default_config()


def resolve_destination(config: GooseboyConfig, override: Optional[str]) -> Path:
    """Pick the install directory: an explicit override, else the mod directory."""
    if override:
        return Path(override).expanduser()
    return config.mod_dir
