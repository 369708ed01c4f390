from .report import PatchResult
from .rewrites import repair_imports
from .vite import ensure_vite_config, patch_manifest, restructure_vite

__all__ = [
    "PatchResult",
    "ensure_vite_config",
    "patch_manifest",
    "repair_imports",
    "restructure_vite",
]
