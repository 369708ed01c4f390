from __future__ import annotations

import logging
from pathlib import Path

from .spec import ENTRY_HTML, MANIFEST_NAME, ProjectReport, ProjectType
from .detect_node import classify_manifest, read_manifest
from .detect_static import detect_static

logger = logging.getLogger(__name__)


def analyze_project(app_root: str | Path) -> ProjectReport:
    """
    Inspect the top level of app_root and return a ProjectReport.
    Never executes project code. Raises ManifestError for malformed package.json.
    """
    root = Path(app_root)
    pkg = read_manifest(root)
    if pkg is not None:
        project_type, rationale = classify_manifest(root, pkg)
        report = ProjectReport(app_path=str(root), project_type=project_type, manifest=pkg, rationale=rationale)
    else:
        project_type, markers, rationale = detect_static(root)
        report = ProjectReport(app_path=str(root), project_type=project_type, markers=markers, rationale=rationale)

    logger.info(f"Classified {root} as {report.project_type.value}")
    return report


def classify_project(app_root: str | Path) -> ProjectType:
    return analyze_project(app_root).project_type


def has_deployable_entry(app_root: str | Path) -> bool:
    root = Path(app_root)
    return (root / ENTRY_HTML).is_file() or (root / MANIFEST_NAME).is_file()


__all__ = [
    "ProjectReport",
    "ProjectType",
    "analyze_project",
    "classify_project",
    "has_deployable_entry",
]
