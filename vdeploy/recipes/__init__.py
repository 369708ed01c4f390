"""
Descriptor recipes, one per project type.
"""

from .base import Recipe
from .registry import (
    AVAILABLE_RECIPES,
    DESCRIPTOR_NAME,
    build_descriptor,
    get_recipe,
    write_descriptor,
)

__all__ = [
    "AVAILABLE_RECIPES",
    "DESCRIPTOR_NAME",
    "Recipe",
    "build_descriptor",
    "get_recipe",
    "write_descriptor",
]
