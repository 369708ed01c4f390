"""
Next.js applications, built by Vercel's own Next builder.
"""

from pathlib import Path
from typing import Any, Dict, List

from vdeploy.analyzer.spec import ProjectType
from .base import Recipe, package_build


class NextAppRecipe(Recipe):
    project_type = ProjectType.NEXT

    def builds(self, app_root: Path) -> List[Dict[str, Any]]:
        # the Next builder picks its own output directory
        return [package_build("@vercel/next")]
