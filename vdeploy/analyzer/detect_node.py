from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from vdeploy.errors import ManifestError
from .spec import MANIFEST_NAME, VITE_CONFIG_NAMES, ProjectType
from .walk import exists_any, read_text

BUNDLER_DEP = "vite"
META_FRAMEWORK_DEP = "next"
UI_LIBRARY_DEP = "react"
SERVER_FRAMEWORK_DEPS = ["express", "koa", "fastify", "hapi", "@hapi/hapi", "@nestjs/core", "restify"]
MAPPING_KEYS = ["dependencies", "devDependencies", "scripts"]


def read_manifest(root: Path) -> Optional[dict]:
    pj = root / MANIFEST_NAME
    if not pj.exists():
        return None
    try:
        data = json.loads(read_text(pj) or "{}")
    except json.JSONDecodeError as e:
        raise ManifestError(f"Failed to parse {pj}: {e}", path=str(pj)) from e
    if not isinstance(data, dict):
        raise ManifestError(f"Failed to parse {pj}: top-level value must be an object", path=str(pj))
    for key in MAPPING_KEYS:
        if key in data and data[key] is not None and not isinstance(data[key], dict):
            raise ManifestError(f"Invalid {pj}: \"{key}\" must be an object", path=str(pj))
    return data


def merged_dependencies(pkg: dict) -> Dict[str, str]:
    return {**(pkg.get("dependencies") or {}), **(pkg.get("devDependencies") or {})}


def classify_manifest(root: Path, pkg: dict) -> Tuple[ProjectType, List[str]]:
    """Ordered checks over package.json; the first match wins."""
    deps = merged_dependencies(pkg)
    configs = [name for name, present in exists_any(root, VITE_CONFIG_NAMES).items() if present]

    if BUNDLER_DEP in deps or configs:
        hint = f"dependency '{BUNDLER_DEP}'" if BUNDLER_DEP in deps else configs[0]
        return ProjectType.VITE, [f"Detected Vite via {hint}"]
    if META_FRAMEWORK_DEP in deps:
        return ProjectType.NEXT, [f"Detected Next.js via dependency '{META_FRAMEWORK_DEP}'"]
    servers = [name for name in SERVER_FRAMEWORK_DEPS if name in deps]
    if servers:
        return ProjectType.NODE, [f"Detected Node server via dependency '{servers[0]}'"]
    if UI_LIBRARY_DEP in deps:
        return ProjectType.REACT, [f"Detected React via dependency '{UI_LIBRARY_DEP}'"]
    return ProjectType.NODE, ["package.json present without a known framework; treating as Node"]
