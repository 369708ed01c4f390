"""
Recipe registry and vercel.json synthesis.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from vdeploy.analyzer.spec import ProjectType
from vdeploy.ids import new_subdomain_token
from .base import CATCH_ALL_ROUTE, Recipe
from .next_app import NextAppRecipe
from .node_server import NodeServerRecipe
from .static_build import ReactRecipe, ViteRecipe
from .static_site import StaticSiteRecipe

logger = logging.getLogger(__name__)

DESCRIPTOR_NAME = "vercel.json"
DESCRIPTOR_VERSION = 2


AVAILABLE_RECIPES: Dict[ProjectType, Recipe] = {
    recipe.project_type: recipe
    for recipe in [
        StaticSiteRecipe(),
        NodeServerRecipe(),
        ReactRecipe(),
        ViteRecipe(),
        NextAppRecipe(),
    ]
}


def get_recipe(project_type: ProjectType) -> Recipe:
    """Recipe for a project type; unknown types deploy as static files."""
    return AVAILABLE_RECIPES.get(project_type, AVAILABLE_RECIPES[ProjectType.STATIC])


def build_descriptor(
    project_type: ProjectType,
    app_root: Path,
    domain: str = "vercel.app",
    subdomain: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the vercel.json document for a prepared workspace.
    
    Args:
        project_type: Classified project type
        app_root: Prepared workspace
        domain: Platform domain for the alias
        subdomain: Alias label (random when omitted)
        
    Returns:
        Descriptor dictionary
    """
    recipe = get_recipe(project_type)
    builds: List[Dict[str, Any]] = recipe.builds(Path(app_root))
    alias = f"{subdomain or new_subdomain_token()}.{domain}"
    logger.info(f"Using {recipe.__class__.__name__} for {project_type.value}; alias {alias}")

    return {
        "version": DESCRIPTOR_VERSION,
        "public": True,
        "alias": [alias],
        "builds": builds,
        "routes": [dict(CATCH_ALL_ROUTE)],
    }


def write_descriptor(app_root: Path, descriptor: Dict[str, Any]) -> Path:
    path = Path(app_root) / DESCRIPTOR_NAME
    path.write_text(json.dumps(descriptor, indent=2) + "\n", encoding="utf-8")
    logger.debug(f"Wrote {path}")
    return path
