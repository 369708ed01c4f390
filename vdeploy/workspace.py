"""
Temporary workspace lifecycle: create, populate, tear down.
"""

import logging
import os
import shutil
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from .analyzer.walk import list_files
from .errors import WorkspaceError
from .ids import new_workspace_id

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "vdeploy-"


def create_workspace(temp_root: Optional[Path] = None) -> Path:
    """
    Create a uniquely named empty directory.
    
    Args:
        temp_root: Parent directory (defaults to the system temp dir)
        
    Returns:
        Path: The new workspace
    """
    parent = Path(temp_root) if temp_root else Path(tempfile.gettempdir())
    parent.mkdir(parents=True, exist_ok=True)
    ws = parent / f"{WORKSPACE_PREFIX}{new_workspace_id()}"
    try:
        ws.mkdir()
    except OSError as e:
        raise WorkspaceError(f"Failed to create workspace {ws}: {e}", path=str(ws)) from e
    logger.debug(f"Created workspace {ws}")
    return ws


def copy_tree(src: Path, dst: Path) -> int:
    """
    Copy every regular file under src into dst, keeping relative paths.
    
    Args:
        src: Source directory
        dst: Destination directory
        
    Returns:
        int: Number of files copied
    """
    src = Path(src)
    if not src.is_dir():
        raise WorkspaceError(f"Source directory does not exist: {src}", path=str(src))

    copied = 0
    for sp in list_files(src):
        dp = Path(dst) / sp.relative_to(src)
        try:
            dp.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(sp, dp)
        except OSError as e:
            raise WorkspaceError(f"Failed to copy {sp}: {e}", path=str(sp)) from e
        copied += 1
    return copied


def remove_workspace(path: Path, delay_s: float = 1.0) -> List[str]:
    """
    Delete a workspace, continuing past individual failures.
    
    Waits delay_s first so handles left open by the Vercel CLI can close.
    
    Args:
        path: Workspace directory
        delay_s: Grace period in seconds
        
    Returns:
        List of failure messages (empty when everything was removed)
    """
    path = Path(path)
    if not path.exists():
        return []

    if delay_s > 0:
        time.sleep(delay_s)

    failures: List[str] = []
    for dirpath, dirnames, filenames in os.walk(path, topdown=False):
        for filename in filenames:
            fp = Path(dirpath) / filename
            try:
                fp.unlink()
            except OSError as e:
                failures.append(f"{fp}: {e}")
                logger.warning(f"Failed to delete {fp}: {e}")
        for dirname in dirnames:
            dp = Path(dirpath) / dirname
            try:
                if dp.is_symlink():
                    dp.unlink()
                else:
                    dp.rmdir()
            except OSError as e:
                failures.append(f"{dp}: {e}")
                logger.warning(f"Failed to remove directory {dp}: {e}")

    try:
        path.rmdir()
    except OSError as e:
        failures.append(f"{path}: {e}")
        logger.warning(f"Failed to remove workspace {path}: {e}")
    else:
        logger.debug(f"Removed workspace {path}")

    return failures


@contextmanager
def workspace(source: Path, temp_root: Optional[Path] = None, cleanup_delay_s: float = 1.0) -> Iterator[Path]:
    """
    Yield a fresh copy of source; the copy is removed on every exit path.
    
    Cleanup failures are logged and never replace the body's outcome.
    """
    ws = create_workspace(temp_root)
    try:
        count = copy_tree(source, ws)
        logger.info(f"Copied {count} files from {source} into {ws}")
        yield ws
    finally:
        try:
            remove_workspace(ws, cleanup_delay_s)
        except Exception as e:
            logger.warning(f"Workspace cleanup failed for {ws}: {e}")
