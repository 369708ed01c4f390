"""
Event logging utilities for NDJSON format.
"""

import json
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .ids import is_valid_run_id

TOKENISH = re.compile(r"(?i)(secret|token|password|apikey|api_key)")


def get_run_dir(home: Path, run_id: str) -> Path:
    """
    Get the event directory for a specific run.
    
    Args:
        home: Events home directory
        run_id: Run ID
        
    Returns:
        Path: Run directory
        
    Raises:
        ValueError: If run ID is invalid
    """
    if not is_valid_run_id(run_id):
        raise ValueError(f"Invalid run ID: {run_id}")
    
    return Path(home) / run_id


def redact_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Replace values whose key looks like a credential."""
    return {k: ("[REDACTED]" if TOKENISH.search(k) else v) for k, v in data.items()}


def emit_event(home: Optional[Path], run_id: str, event_type: str, data: Dict[str, Any]) -> None:
    """
    Emit an event to the run's logs.ndjson file.
    
    Does nothing when home is None.
    
    Args:
        home: Events home directory, or None to disable events
        run_id: Run ID
        event_type: Event type (e.g., "INIT", "CLASSIFIED", "ERROR")
        data: Event data
    """
    if home is None:
        return

    run_dir = get_run_dir(home, run_id)
    run_dir.mkdir(parents=True, exist_ok=True)
    logs_file = run_dir / "logs.ndjson"
    
    event = {
        "ts": datetime.now().isoformat(),
        "type": event_type,
        "data": redact_data(data)
    }
    
    with open(logs_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")
        f.flush()


def read_events(home: Path, run_id: str) -> List[Dict[str, Any]]:
    """
    Read all events from a run's logs.ndjson file.
    
    Args:
        home: Events home directory
        run_id: Run ID
        
    Returns:
        List of events
    """
    logs_file = get_run_dir(home, run_id) / "logs.ndjson"
    
    if not logs_file.exists():
        return []
    
    events = []
    with open(logs_file, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                try:
                    events.append(json.loads(line))
                except json.JSONDecodeError:
                    continue  # Skip malformed lines
    
    return events


def run_exists(home: Path, run_id: str) -> bool:
    try:
        return get_run_dir(home, run_id).exists()
    except ValueError:
        return False


# Predefined event types for consistency
class EventTypes:
    INIT = "INIT"
    COPIED = "COPIED"
    CLASSIFIED = "CLASSIFIED"
    RESTRUCTURED = "RESTRUCTURED"
    DESCRIPTOR = "DESCRIPTOR"
    VERCEL_START = "VERCEL_START"
    DONE = "DONE"
    ERROR = "ERROR"
    CLEANUP = "CLEANUP"
