"""
Vercel CLI wrapper.
"""

import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Union

from .config import DeployConfig
from .errors import DeploymentError

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"https://[^\s\"'<>`]+")
TRAILING_PUNCTUATION = ".,;:)]}'\""


def extract_url(text: Optional[str]) -> Optional[str]:
    """
    Return the first HTTPS URL in text.

    Args:
        text: CLI output (may be None)

    Returns:
        URL string or None
    """
    if not text:
        return None
    match = URL_PATTERN.search(text)
    if not match:
        return None
    return match.group(0).rstrip(TRAILING_PUNCTUATION)


def build_command(config: DeployConfig) -> List[str]:
    """
    Build the non-interactive production deploy command.

    Args:
        config: Run configuration (must carry a token)

    Returns:
        argv list
    """
    command = [config.vercel_bin, "--prod", "--yes", "--token", config.require_token()]
    if config.org_id:
        command.extend(["--scope", config.org_id])
    return command


def _child_env(config: DeployConfig) -> Dict[str, str]:
    env = dict(os.environ)
    if config.project_id:
        env["VERCEL_PROJECT_ID"] = config.project_id
    if config.org_id:
        env["VERCEL_ORG_ID"] = config.org_id
    return env


def _as_text(value: Union[str, bytes, None]) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _redact(text: str, token: Optional[str]) -> str:
    if token and text:
        return text.replace(token, "[REDACTED]")
    return text


def run_vercel(workspace: Path, config: DeployConfig) -> str:
    """
    Deploy the prepared workspace and return the deployment URL.

    A non-zero exit still counts as success when the CLI printed a URL;
    the CLI is known to do that.

    Args:
        workspace: Directory holding vercel.json and the project
        config: Run configuration

    Returns:
        Deployment URL

    Raises:
        ConfigError: If no token is configured
        DeploymentError: If no URL could be extracted
    """
    command = build_command(config)
    token = config.token
    logger.info(f"Running {config.vercel_bin} --prod in {workspace}")

    try:
        result = subprocess.run(
            command,
            cwd=workspace,
            capture_output=True,
            text=True,
            check=True,
            timeout=config.timeout_s,
            env=_child_env(config),
        )
    except subprocess.CalledProcessError as e:
        return _recover_url(
            _as_text(e.stdout), _as_text(e.stderr), _redact(str(e), token), token
        )
    except subprocess.TimeoutExpired as e:
        return _recover_url(
            _as_text(e.stdout), _as_text(e.stderr), _redact(str(e), token), token
        )
    except OSError as e:
        return _recover_url("", "", f"Failed to run {config.vercel_bin}: {e}", token)

    stdout = result.stdout or ""
    url = extract_url(stdout)
    if not url:
        output = _redact(stdout, token)
        raise DeploymentError(f"Vercel CLI finished but printed no deployment URL:\n{output}", output=output)

    logger.info(f"Deployed to {url}")
    return url


def _recover_url(stdout: str, stderr: str, message: str, token: Optional[str]) -> str:
    for source, text in (("stdout", stdout), ("stderr", stderr), ("error", message)):
        url = extract_url(text)
        if url:
            logger.warning(f"Vercel CLI reported failure but printed a URL on {source}; treating as deployed")
            return url

    output = _redact("\n".join(part for part in (stdout, stderr) if part), token)
    logger.error(f"Vercel deployment failed: {message}")
    detail = f"\n{output}" if output else ""
    raise DeploymentError(f"Vercel deployment failed: {message}{detail}", output=output or message)
