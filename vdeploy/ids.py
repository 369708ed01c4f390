"""
Identifier generation utilities.
"""

import random
import re
import secrets
import time

RUN_ID_PATTERN = re.compile(r"^r-\d{10,}-[0-9a-f]{8}$")


def new_run_id() -> str:
    """
    Generate a run ID of the form r-<unix seconds>-<8 hex digits>.

    Sorting ids as strings orders runs by start time.
    """
    return f"r-{int(time.time())}-{secrets.token_hex(4)}"


def is_valid_run_id(run_id: str) -> bool:
    """True if run_id could have come from new_run_id."""
    return bool(RUN_ID_PATTERN.match(run_id))


def new_workspace_id() -> str:
    """Random hex identifier for a temporary workspace directory."""
    return secrets.token_hex(8)


def new_subdomain_token() -> str:
    """
    Generate the subdomain used for the deployment alias.
    
    Uniqueness is not checked locally; a collision is left to the platform.
    
    Returns:
        str: e.g. "9f3a61c0417"
    """
    return f"{secrets.token_hex(4)}{random.randint(100, 999)}"
