"""
Exception types raised by the deployment pipeline.
"""

from typing import Optional


class VdeployError(Exception):
    """Base class for every error raised by vdeploy."""


class ConfigError(VdeployError):
    """Configuration is missing or malformed."""


class WorkspaceError(VdeployError):
    """A filesystem operation on the workspace failed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class InvalidProjectError(VdeployError):
    """The source tree has nothing deployable at its top level."""


class ManifestError(VdeployError, ValueError):
    """package.json exists but cannot be parsed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class DeploymentError(VdeployError):
    """The Vercel CLI did not report a deployment URL."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output
