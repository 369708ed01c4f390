import json
from pathlib import Path

import pytest

from vdeploy.config import DeployConfig


@pytest.fixture
def make_tree(tmp_path):
    """Write a {relative_path: content} mapping under a fresh directory."""
    def _make(files, name="repo"):
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            p = root / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, dict):
                content = json.dumps(content)
            p.write_text(content)
        return root
    return _make


@pytest.fixture
def config(tmp_path):
    return DeployConfig(
        token="test-token",
        cleanup_delay_s=0,
        temp_root=tmp_path / "tmp",
        home=tmp_path / "home",
    )
