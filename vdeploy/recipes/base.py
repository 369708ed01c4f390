"""
Base recipe interface and common helpers.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from vdeploy.analyzer.spec import ProjectType

CATCH_ALL_ROUTE = {"src": "/(.*)", "dest": "/$1"}


class Recipe(ABC):
    """Abstract base class for vercel.json build recipes."""

    project_type: ProjectType

    @abstractmethod
    def builds(self, app_root: Path) -> List[Dict[str, Any]]:
        """
        Return the "builds" entries for this project type.
        
        Args:
            app_root: Prepared workspace
            
        Returns:
            List of build rules (never empty)
        """
        pass


def package_build(use: str, output_directory: Optional[str] = None) -> Dict[str, Any]:
    """A build rule rooted at package.json, optionally with an output directory."""
    rule: Dict[str, Any] = {"src": "package.json", "use": use}
    if output_directory:
        rule["config"] = {"outputDirectory": output_directory}
    return rule
