"""Runtime configuration for discovery requests.

Configuration is an immutable value passed down to the fetcher rather than
module-level state, so concurrent resolutions with different settings never
interfere. Defaults come from :class:`constants.Constants`; a YAML or JSON
file and CLI flags can override them.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

import yaml

from constants import Constants, ModuleMode

logger = logging.getLogger(__name__)

_KNOWN_KEYS = ("timeout", "user_agent", "insecure", "module_mode", "schemes")


@dataclass(frozen=True)
class DiscoveryConfig:
    """Settings applied to every discovery request of a resolution."""
    timeout: float = Constants.REQUEST_TIMEOUT
    user_agent: str = Constants.USER_AGENT
    schemes: Tuple[str, ...] = field(default=Constants.DEFAULT_SCHEMES)
    module_mode: ModuleMode = ModuleMode.PREFER

    def __post_init__(self):
        if not isinstance(self.timeout, (int, float)) or isinstance(self.timeout, bool) or self.timeout <= 0:
            raise ValueError(f"timeout must be a positive number, got {self.timeout!r}")
        if not isinstance(self.user_agent, str) or not self.user_agent.strip():
            raise ValueError("user_agent must be a non-empty string")
        if not self.schemes:
            raise ValueError("at least one scheme is required")
        for scheme in self.schemes:
            if scheme not in Constants.INSECURE_SCHEMES:
                raise ValueError(f"unsupported discovery scheme {scheme!r}")
        if not isinstance(self.module_mode, ModuleMode):
            object.__setattr__(self, "module_mode", ModuleMode(self.module_mode))

    @property
    def insecure(self) -> bool:
        """True when plain http discovery is permitted."""
        return "http" in self.schemes

    def with_overrides(
        self,
        *,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        insecure: Optional[bool] = None,
        module_mode: Optional[str] = None,
    ) -> "DiscoveryConfig":
        """Return a copy with the given non-None values applied."""
        changes: Dict[str, Any] = {}
        if timeout is not None:
            changes["timeout"] = timeout
        if user_agent is not None:
            changes["user_agent"] = user_agent
        if insecure is not None:
            changes["schemes"] = Constants.INSECURE_SCHEMES if insecure else Constants.DEFAULT_SCHEMES
        if module_mode is not None:
            changes["module_mode"] = ModuleMode(module_mode)
        return replace(self, **changes) if changes else self


def _read_config_file(path: str) -> Dict[str, Any]:
    """Load a YAML or JSON mapping from ``path``."""
    with open(path, "r", encoding="utf-8") as fh:
        if path.lower().endswith(".json"):
            data = json.load(fh)
        else:
            data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: configuration must be a mapping")
    section = data.get(Constants.CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ValueError(f"{path}: '{Constants.CONFIG_SECTION}' section must be a mapping")
    return section


def config_from_mapping(values: Dict[str, Any]) -> DiscoveryConfig:
    """Build a DiscoveryConfig from a plain mapping (e.g. a parsed file)."""
    for key in values:
        if key not in _KNOWN_KEYS:
            logger.warning("Ignoring unknown configuration key: %s", key)

    kwargs: Dict[str, Any] = {}
    if "timeout" in values:
        kwargs["timeout"] = values["timeout"]
    if "user_agent" in values:
        kwargs["user_agent"] = values["user_agent"]
    if "schemes" in values:
        schemes = values["schemes"]
        if isinstance(schemes, str):
            schemes = [schemes]
        kwargs["schemes"] = tuple(schemes)
    elif values.get("insecure"):
        kwargs["schemes"] = Constants.INSECURE_SCHEMES
    if "module_mode" in values:
        try:
            kwargs["module_mode"] = ModuleMode(str(values["module_mode"]).lower())
        except ValueError as exc:
            raise ValueError(f"invalid module_mode {values['module_mode']!r}") from exc
    return DiscoveryConfig(**kwargs)


def load_config(path: Optional[str]) -> DiscoveryConfig:
    """Load configuration from ``path``; defaults when ``path`` is empty.

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: the file content is not a valid configuration.
    """
    if not path:
        return DiscoveryConfig()
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    try:
        values = _read_config_file(path)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ValueError(f"{path}: unable to parse configuration: {exc}") from exc
    config = config_from_mapping(values)
    logger.debug("Loaded configuration from %s", path)
    return config
