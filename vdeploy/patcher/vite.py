from __future__ import annotations

import json
import logging
import re
import shutil
from pathlib import Path
from typing import List, Set

from vdeploy.analyzer.detect_node import read_manifest
from vdeploy.analyzer.spec import ENTRY_HTML, MANIFEST_NAME, VITE_CONFIG_NAMES
from vdeploy.analyzer.walk import first_existing, read_text
from vdeploy.errors import WorkspaceError
from .report import PatchResult
from .rewrites import is_script, repair_imports

logger = logging.getLogger(__name__)

ENTRY_FILES = [
    "App.jsx", "App.js", "App.tsx", "App.ts", "App.css",
    "main.jsx", "main.js", "main.tsx", "main.ts",
    "index.css",
]
APP_ROOT_FILES = ["App.jsx", "App.js", "App.tsx", "App.ts"]
ENTRY_SCRIPT_EXTS = ["jsx", "js"]

DEV_DEPENDENCIES = {
    "vite": "^5.0.0",
    "@vitejs/plugin-react": "^4.2.0",
}
RUNTIME_DEPENDENCIES = {
    "react": "^18.2.0",
    "react-dom": "^18.2.0",
}
BUILD_SCRIPTS = {
    "build": "vite build",
    "preview": "vite preview",
}

VITE_CONFIG_TEMPLATE = """import { defineConfig } from 'vite'
import react from '@vitejs/plugin-react'

export default defineConfig({
  plugins: [react()],
  build: {
    outDir: 'dist',
    assetsDir: 'assets',
  },
})
"""

PARENT_ASSET_IMPORT = re.compile(r"""(from[ \t]+['"])\.\./assets/""")
RELATIVE_SVG_IMPORT = re.compile(r"""(from[ \t]+['"])\./([\w.-]+\.svg)(['"])""")


def restructure_vite(app_root: str | Path) -> PatchResult:
    """
    Reshape a flat Vite project into the src/ layout and make sure the
    config and package.json carry what `vite build` needs.

    The file moves are skipped entirely when src/ already exists, so a
    second call is a no-op.
    """
    root = Path(app_root)
    result = PatchResult(patched_app_path=str(root), layout_skipped=(root / "src").exists())

    if result.layout_skipped:
        logger.info("src/ already present; leaving layout untouched")
    else:
        try:
            _move_into_src(root, result)
        except OSError as e:
            path = getattr(e, "filename", None)
            raise WorkspaceError(f"Failed to restructure {root}: {e}", path=path) from e

    result.config_created = ensure_vite_config(root)
    if result.config_created:
        result.changes.append("created vite.config.js")

    manifest_changes = patch_manifest(root)
    result.manifest_updated = bool(manifest_changes)
    result.changes.extend(manifest_changes)
    return result


def _move_into_src(root: Path, result: PatchResult) -> None:
    src = root / "src"
    src.mkdir()

    for name in ENTRY_FILES:
        p = root / name
        if not p.is_file():
            continue
        content = read_text(p)
        if is_script(name):
            content = repair_imports(content)
        (src / name).write_text(content, encoding="utf-8")
        p.unlink()
        result.moved.append(f"{name} -> src/{name}")
        logger.debug(f"Moved {name} into src/")

    assets = root / "assets"
    if assets.is_dir():
        dest = src / "assets"
        dest.mkdir(parents=True, exist_ok=True)
        for child in sorted(assets.iterdir()):
            if child.is_dir():
                shutil.copytree(child, dest / child.name, dirs_exist_ok=True)
            else:
                shutil.copy2(child, dest / child.name)
        shutil.rmtree(assets)
        result.moved.append("assets/ -> src/assets/")

    moved_svgs: Set[str] = set()
    svgs = sorted(p for p in root.glob("*.svg") if p.is_file())
    if svgs:
        public = root / "public"
        public.mkdir(exist_ok=True)
        for svg in svgs:
            shutil.copy2(svg, public / svg.name)
            svg.unlink()
            moved_svgs.add(svg.name)
            result.moved.append(f"{svg.name} -> public/{svg.name}")

    index = root / ENTRY_HTML
    if index.is_file():
        html = read_text(index)
        updated = rewrite_entry_script(html)
        if updated != html:
            index.write_text(updated, encoding="utf-8")
            result.changes.append(f"{ENTRY_HTML}: entry script -> /src/")

    app = first_existing(src, APP_ROOT_FILES)
    if app is not None:
        text = read_text(app)
        updated = rewrite_app_imports(text, moved_svgs)
        if updated != text:
            app.write_text(updated, encoding="utf-8")
            result.changes.append(f"src/{app.name}: import paths")


def rewrite_entry_script(html: str) -> str:
    for ext in ENTRY_SCRIPT_EXTS:
        pattern = re.compile(r"""src=(["'])(?:\./|/)?main\.""" + ext + r"\1")
        html = pattern.sub(f'src="/src/main.{ext}"', html)
    return html


def rewrite_app_imports(text: str, public_svgs: Set[str]) -> str:
    text = PARENT_ASSET_IMPORT.sub(r"\1./assets/", text)

    def _to_public(m: re.Match) -> str:
        if m.group(2) not in public_svgs:
            return m.group(0)
        return f"{m.group(1)}/{m.group(2)}{m.group(3)}"

    text = RELATIVE_SVG_IMPORT.sub(_to_public, text)
    return repair_imports(text)


def ensure_vite_config(app_root: str | Path) -> bool:
    root = Path(app_root)
    if any((root / name).exists() for name in VITE_CONFIG_NAMES):
        return False
    (root / "vite.config.js").write_text(VITE_CONFIG_TEMPLATE, encoding="utf-8")
    logger.info("Created default vite.config.js")
    return True


def patch_manifest(app_root: str | Path) -> List[str]:
    """Add the scripts and dependencies a Vite build needs; only missing entries are added."""
    root = Path(app_root)
    pkg = read_manifest(root)
    if pkg is None:
        return []

    changes: List[str] = []

    scripts = pkg.get("scripts")
    if not isinstance(scripts, dict):
        pkg["scripts"] = dict(BUILD_SCRIPTS)
        changes.append("package.json: added scripts.build, scripts.preview")
    elif "build" not in scripts:
        scripts.update(BUILD_SCRIPTS)
        changes.append("package.json: added scripts.build, scripts.preview")

    deps = pkg.get("dependencies") or {}
    dev_deps = pkg.get("devDependencies") or {}
    for name, version in DEV_DEPENDENCIES.items():
        if name not in deps and name not in dev_deps:
            dev_deps[name] = version
            changes.append(f"package.json: added devDependencies.{name}")
    if dev_deps:
        pkg["devDependencies"] = dev_deps

    primary = next(iter(RUNTIME_DEPENDENCIES))
    if primary not in deps:
        for name, version in RUNTIME_DEPENDENCIES.items():
            deps.setdefault(name, version)
        pkg["dependencies"] = deps
        changes.append(f"package.json: added dependencies {', '.join(RUNTIME_DEPENDENCIES)}")

    if changes:
        (root / MANIFEST_NAME).write_text(json.dumps(pkg, indent=2) + "\n", encoding="utf-8")
        logger.info(f"Updated {MANIFEST_NAME}: {len(changes)} change(s)")
    return changes
