"""
Node.js server entry points run as serverless functions.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

from vdeploy.analyzer.detect_node import read_manifest
from vdeploy.analyzer.spec import ProjectType
from .base import Recipe

logger = logging.getLogger(__name__)

ENTRY_CANDIDATES = ["server.js", "index.js", "app.js"]
DEFAULT_ENTRY = "index.js"


def find_entry(app_root: Path) -> str:
    """package.json "main" when it exists on disk, else the first conventional entry file."""
    root = Path(app_root)
    pkg = read_manifest(root) or {}
    main = pkg.get("main")
    if isinstance(main, str) and main and (root / main).is_file():
        return main[2:] if main.startswith("./") else main
    for name in ENTRY_CANDIDATES:
        if (root / name).is_file():
            return name
    logger.debug(f"No Node entry file found in {root}; assuming {DEFAULT_ENTRY}")
    return DEFAULT_ENTRY


class NodeServerRecipe(Recipe):
    project_type = ProjectType.NODE

    def builds(self, app_root: Path) -> List[Dict[str, Any]]:
        return [{"src": find_entry(app_root), "use": "@vercel/node"}]
