"""
Front-end projects compiled to static files by an npm build script.
"""

from pathlib import Path
from typing import Any, Dict, List

from vdeploy.analyzer.spec import ProjectType
from .base import Recipe, package_build

STATIC_BUILD = "@vercel/static-build"


class ViteRecipe(Recipe):
    project_type = ProjectType.VITE

    def builds(self, app_root: Path) -> List[Dict[str, Any]]:
        return [package_build(STATIC_BUILD, "dist")]


class ReactRecipe(Recipe):
    """Create React App style projects; react-scripts emits build/."""
    project_type = ProjectType.REACT

    def builds(self, app_root: Path) -> List[Dict[str, Any]]:
        return [package_build(STATIC_BUILD, "build")]
