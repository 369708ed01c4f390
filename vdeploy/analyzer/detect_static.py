from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

from .spec import ENTRY_HTML, ProjectType
from .walk import exists_any

logger = logging.getLogger(__name__)

FRAMEWORK_MARKERS = {
    "angular.json": "Angular",
    "vue.config.js": "Vue",
    "svelte.config.js": "Svelte",
    "gatsby-config.js": "Gatsby",
    "nuxt.config.js": "Nuxt",
}


def detect_static(root: Path) -> Tuple[ProjectType, List[str], List[str]]:
    """
    Classify a tree without package.json.

    Marker files next to index.html only change what gets logged; the result
    is always STATIC.
    """
    markers = [name for name, present in exists_any(root, list(FRAMEWORK_MARKERS)).items() if present]

    if (root / ENTRY_HTML).exists():
        if markers:
            names = ", ".join(FRAMEWORK_MARKERS[m] for m in markers)
            logger.info(f"Found {names} marker(s) next to {ENTRY_HTML}; deploying as a static site")
            return ProjectType.STATIC, markers, [f"Found {ENTRY_HTML} alongside {', '.join(markers)}"]
        logger.info(f"Found {ENTRY_HTML}; deploying as a static site")
        return ProjectType.STATIC, markers, [f"Found {ENTRY_HTML} at top level"]

    return ProjectType.STATIC, markers, ["No manifest or entry HTML; falling back to static"]
