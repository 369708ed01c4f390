from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional


def list_files(root: str | Path) -> List[Path]:
    """Every regular file below root, recursively. Creates root when absent."""
    root_path = Path(root)
    root_path.mkdir(parents=True, exist_ok=True)
    found: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames.sort()
        for filename in sorted(filenames):
            p = Path(dirpath) / filename
            if p.is_file():
                found.append(p)
    return found


def read_text(path: str | Path) -> str:
    p = Path(path)
    for enc in ("utf-8", "utf-8-sig"):
        try:
            return p.read_text(encoding=enc)
        except UnicodeDecodeError:
            continue
    return p.read_text(encoding="latin-1")


def exists_any(root: str | Path, names: List[str]) -> Dict[str, bool]:
    root_path = Path(root)
    return {name: (root_path / name).exists() for name in names}


def first_existing(root: str | Path, names: List[str]) -> Optional[Path]:
    root_path = Path(root)
    for name in names:
        p = root_path / name
        if p.is_file():
            return p
    return None
