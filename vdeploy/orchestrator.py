"""
Main orchestrator for a deployment run.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .analyzer import ProjectReport, ProjectType, analyze_project, has_deployable_entry
from .analyzer.spec import ENTRY_HTML, MANIFEST_NAME
from .config import DeployConfig
from .errors import InvalidProjectError, WorkspaceError
from .events import EventTypes, emit_event
from .ids import new_run_id
from .patcher import restructure_vite
from .recipes import build_descriptor, write_descriptor
from .vercel import run_vercel
from .workspace import copy_tree, workspace

logger = logging.getLogger(__name__)


def _record(home: Optional[Path], run_id: Optional[str], event_type: str, data: Dict[str, Any]) -> None:
    """Append a run event; a failing event log never changes the run's outcome."""
    try:
        emit_event(home, run_id, event_type, data)
    except OSError as e:
        logger.warning(f"Could not record {event_type} event for run {run_id}: {e}")


@dataclass
class DeployResult:
    run_id: str
    url: str
    project_type: ProjectType
    descriptor: Dict[str, Any]
    duration_s: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "url": self.url,
            "project_type": self.project_type.value,
            "duration_s": round(self.duration_s, 2),
        }


def deploy(source: str, config: DeployConfig, run_id: Optional[str] = None) -> DeployResult:
    """
    Deploy a source tree to Vercel.

    The source is copied into a temporary workspace, which is removed on
    every exit path. The first fatal error propagates unchanged.

    Args:
        source: Directory to deploy
        config: Run configuration
        run_id: Optional run ID (generated if not provided)

    Returns:
        DeployResult with the deployment URL
    """
    run_id = run_id or new_run_id()
    config.require_token()
    home = config.home
    start_time = time.time()

    _record(home, run_id, EventTypes.INIT, {"run_id": run_id, "source": str(source)})
    logger.info(f"Starting run {run_id} for {source}")

    try:
        with workspace(Path(source), config.temp_root, config.cleanup_delay_s) as ws:
            _record(home, run_id, EventTypes.COPIED, {"workspace": str(ws)})

            report, descriptor = _prepare_tree(ws, config, run_id)

            _record(home, run_id, EventTypes.VERCEL_START, {"bin": config.vercel_bin})
            url = run_vercel(ws, config)
    except Exception as e:
        _record(home, run_id, EventTypes.ERROR, {
            "reason": str(e),
            "kind": e.__class__.__name__,
        })
        logger.error(f"Run {run_id} failed: {e}")
        raise
    finally:
        _record(home, run_id, EventTypes.CLEANUP, {})

    result = DeployResult(
        run_id=run_id,
        url=url,
        project_type=report.project_type,
        descriptor=descriptor,
        duration_s=time.time() - start_time,
    )
    _record(home, run_id, EventTypes.DONE, result.to_dict())
    logger.info(f"Run {run_id} deployed {report.project_type.value} project to {url}")
    return result


def prepare(source: str, dest: str, config: DeployConfig) -> Tuple[ProjectReport, Dict[str, Any]]:
    """
    Dry run: build the deployable tree in dest without calling Vercel.

    dest is created if needed, must be empty, and is left in place.

    Args:
        source: Directory to deploy
        dest: Output directory
        config: Run configuration (token not required)

    Returns:
        Tuple of (ProjectReport, descriptor)
    """
    out = Path(dest)
    if out.exists() and any(out.iterdir()):
        raise WorkspaceError(f"Output directory is not empty: {out}", path=str(out))
    out.mkdir(parents=True, exist_ok=True)

    count = copy_tree(Path(source), out)
    logger.info(f"Copied {count} files from {source} into {out}")
    return _prepare_tree(out, config, None)


def _prepare_tree(ws: Path, config: DeployConfig, run_id: Optional[str]) -> Tuple[ProjectReport, Dict[str, Any]]:
    home = config.home if run_id else None

    if not has_deployable_entry(ws):
        raise InvalidProjectError(
            f"Nothing to deploy: expected {ENTRY_HTML} or {MANIFEST_NAME} at the top level"
        )

    report = analyze_project(ws)
    _record(home, run_id, EventTypes.CLASSIFIED, {
        "project_type": report.project_type.value,
        "rationale": report.rationale,
    })

    if report.project_type == ProjectType.VITE:
        patch = restructure_vite(ws)
        _record(home, run_id, EventTypes.RESTRUCTURED, {
            "layout_skipped": patch.layout_skipped,
            "moved": patch.moved,
            "changes": patch.changes,
        })

    descriptor = build_descriptor(report.project_type, ws, domain=config.domain)
    write_descriptor(ws, descriptor)
    _record(home, run_id, EventTypes.DESCRIPTOR, {
        "alias": descriptor["alias"],
        "builds": descriptor["builds"],
    })
    return report, descriptor
