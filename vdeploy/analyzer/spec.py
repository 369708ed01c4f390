from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ProjectType(str, Enum):
    STATIC = "static"
    NODE = "node"
    REACT = "react"
    VITE = "vite"
    NEXT = "next"


MANIFEST_NAME = "package.json"
ENTRY_HTML = "index.html"
VITE_CONFIG_NAMES = ["vite.config.js", "vite.config.ts", "vite.config.mjs", "vite.config.cjs"]


@dataclass
class ProjectReport:
    app_path: str
    project_type: ProjectType

    # Parsed package.json, when present
    manifest: Optional[Dict[str, Any]] = None

    # Framework marker files seen next to index.html (informational only)
    markers: List[str] = field(default_factory=list)
    rationale: List[str] = field(default_factory=list)
