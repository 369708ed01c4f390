"""
Run configuration.

All environment lookups happen here, once, so a deployment run only depends
on the DeployConfig it is handed.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError

DEFAULT_VERCEL_BIN = "vercel"
DEFAULT_DOMAIN = "vercel.app"
DEFAULT_HOME = ".vdeploy"
DEFAULT_CLEANUP_DELAY = 1.0


@dataclass(frozen=True)
class DeployConfig:
    """Explicit inputs of a deployment run besides the source tree."""
    token: Optional[str] = None
    project_id: Optional[str] = None
    org_id: Optional[str] = None
    vercel_bin: str = DEFAULT_VERCEL_BIN
    timeout_s: Optional[float] = None
    cleanup_delay_s: float = DEFAULT_CLEANUP_DELAY
    temp_root: Optional[Path] = None
    home: Optional[Path] = None          # event log root; None disables events
    domain: str = DEFAULT_DOMAIN

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DeployConfig":
        """
        Build a config from environment variables.
        
        Args:
            environ: Mapping to read from (defaults to os.environ)
            
        Returns:
            DeployConfig
            
        Raises:
            ConfigError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ

        temp_root = env.get("VDEPLOY_TMPDIR")
        return cls(
            token=env.get("VERCEL_TOKEN") or None,
            project_id=env.get("VERCEL_PROJECT_ID") or None,
            org_id=env.get("VERCEL_ORG_ID") or None,
            vercel_bin=env.get("VDEPLOY_VERCEL_BIN") or DEFAULT_VERCEL_BIN,
            timeout_s=_parse_seconds(env, "VDEPLOY_TIMEOUT", None),
            cleanup_delay_s=_parse_seconds(env, "VDEPLOY_CLEANUP_DELAY", DEFAULT_CLEANUP_DELAY),
            temp_root=Path(temp_root) if temp_root else None,
            home=Path(env.get("VDEPLOY_HOME", DEFAULT_HOME)).resolve(),
            domain=env.get("VDEPLOY_DOMAIN") or DEFAULT_DOMAIN,
        )

    def with_overrides(self, **overrides) -> "DeployConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def require_token(self) -> str:
        if not self.token:
            raise ConfigError("VERCEL_TOKEN is not set; pass --token or export VERCEL_TOKEN")
        return self.token


def _parse_seconds(env: Mapping[str, str], key: str, default: Optional[float]) -> Optional[float]:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number of seconds, got {raw!r}")
    if value < 0:
        raise ConfigError(f"{key} must not be negative, got {raw!r}")
    return value
