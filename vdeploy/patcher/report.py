from dataclasses import dataclass, field
from typing import List


@dataclass
class PatchResult:
    patched_app_path: str
    layout_skipped: bool                  # src/ already existed
    config_created: bool = False
    manifest_updated: bool = False
    moved: List[str] = field(default_factory=list)
    changes: List[str] = field(default_factory=list)
