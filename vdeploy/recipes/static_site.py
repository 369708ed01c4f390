"""
Plain HTML/CSS/JS served as-is.
"""

from pathlib import Path
from typing import Any, Dict, List

from vdeploy.analyzer.spec import ProjectType
from .base import Recipe


class StaticSiteRecipe(Recipe):
    project_type = ProjectType.STATIC

    def builds(self, app_root: Path) -> List[Dict[str, Any]]:
        return [{"src": "**/*", "use": "@vercel/static"}]
