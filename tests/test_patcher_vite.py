import json
from pathlib import Path

import pytest

from vdeploy.errors import ManifestError
from vdeploy.patcher import ensure_vite_config, patch_manifest, restructure_vite
from vdeploy.patcher.vite import rewrite_app_imports, rewrite_entry_script


def _snapshot(root: Path):
    return {
        str(p.relative_to(root)): p.read_text()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def flat_vite_project(make_tree):
    return make_tree({
        "package.json": {"name": "demo", "devDependencies": {"vite": "^5.0.0"}},
        "index.html": '<html><body><div id="root"></div><script type="module" src="./main.jsx"></script></body></html>',
        "main.jsx": "import React from 'react'\nimport App from './App\nimport './index.css'\n",
        "App.jsx": "import logo from ./assets/logo.png\nimport viteLogo from './vite.svg'\nexport default function App() { return null }\n",
        "index.css": "body { margin: 0 }\n",
        "vite.svg": "<svg></svg>",
        "assets/logo.png": "png",
        "assets/icons/star.png": "star",
    })


class TestRestructure:
    """Flat Vite projects are moved into the src/ layout."""

    def test_entry_files_move_into_src(self, make_tree):
        root = flat_vite_project(make_tree)
        result = restructure_vite(root)

        assert not result.layout_skipped
        for name in ("App.jsx", "main.jsx", "index.css"):
            assert (root / "src" / name).exists()
            assert not (root / name).exists()

    def test_index_html_points_at_src(self, make_tree):
        root = flat_vite_project(make_tree)
        restructure_vite(root)
        html = (root / "index.html").read_text()
        assert 'src="/src/main.jsx"' in html
        assert './main.jsx' not in html

    def test_scripts_added(self, make_tree):
        root = flat_vite_project(make_tree)
        restructure_vite(root)
        pkg = json.loads((root / "package.json").read_text())
        assert pkg["scripts"]["build"] == "vite build"
        assert pkg["scripts"]["preview"] == "vite preview"
        assert pkg["devDependencies"]["vite"] == "^5.0.0"
        assert pkg["devDependencies"]["@vitejs/plugin-react"] == "^4.2.0"
        assert pkg["dependencies"]["react"] == "^18.2.0"
        assert pkg["dependencies"]["react-dom"] == "^18.2.0"

    def test_assets_and_svgs_relocated(self, make_tree):
        root = flat_vite_project(make_tree)
        restructure_vite(root)
        assert not (root / "assets").exists()
        assert (root / "src" / "assets" / "logo.png").read_text() == "png"
        assert (root / "src" / "assets" / "icons" / "star.png").read_text() == "star"
        assert (root / "public" / "vite.svg").exists()
        assert not (root / "vite.svg").exists()

    def test_imports_repaired(self, make_tree):
        root = flat_vite_project(make_tree)
        restructure_vite(root)
        app = (root / "src" / "App.jsx").read_text()
        main = (root / "src" / "main.jsx").read_text()
        assert "import logo from './assets/logo.png'" in app
        assert "import viteLogo from '/vite.svg'" in app
        assert "import App from './App'" in main

    def test_vite_config_created(self, make_tree):
        root = flat_vite_project(make_tree)
        result = restructure_vite(root)
        config = (root / "vite.config.js").read_text()
        assert result.config_created
        assert "plugins: [react()]" in config
        assert "outDir: 'dist'" in config
        assert "assetsDir: 'assets'" in config

    def test_second_run_changes_nothing(self, make_tree):
        root = flat_vite_project(make_tree)
        restructure_vite(root)
        before = _snapshot(root)

        result = restructure_vite(root)

        assert result.layout_skipped
        assert result.changes == []
        assert _snapshot(root) == before

    def test_existing_src_skips_layout_but_patches_manifest(self, make_tree):
        root = make_tree({
            "package.json": {"dependencies": {"vite": "5.0.0"}},
            "src/main.jsx": "",
            "App.jsx": "top level",
        })
        result = restructure_vite(root)
        assert result.layout_skipped
        assert (root / "App.jsx").exists()
        assert not (root / "src" / "App.jsx").exists()
        assert result.manifest_updated


class TestManifestPatch:
    """package.json only gains what is missing."""

    def test_existing_build_script_untouched(self, make_tree):
        root = make_tree({"package.json": {
            "scripts": {"build": "tsc && vite build"},
            "dependencies": {"react": "^17.0.0"},
            "devDependencies": {"vite": "^4.0.0", "@vitejs/plugin-react": "^3.0.0"},
        }})
        assert patch_manifest(root) == []
        pkg = json.loads((root / "package.json").read_text())
        assert pkg["scripts"] == {"build": "tsc && vite build"}
        assert "preview" not in pkg["scripts"]

    def test_scripts_without_build_get_both(self, make_tree):
        root = make_tree({"package.json": {"scripts": {"dev": "vite", "preview": "custom"}}})
        patch_manifest(root)
        scripts = json.loads((root / "package.json").read_text())["scripts"]
        assert scripts == {"dev": "vite", "build": "vite build", "preview": "vite preview"}

    def test_vite_in_runtime_dependencies_not_duplicated(self, make_tree):
        root = make_tree({"package.json": {"dependencies": {"vite": "^5.1.0", "react": "^18.0.0"}}})
        patch_manifest(root)
        pkg = json.loads((root / "package.json").read_text())
        assert "vite" not in pkg["devDependencies"]
        assert pkg["devDependencies"]["@vitejs/plugin-react"] == "^4.2.0"
        assert pkg["dependencies"] == {"vite": "^5.1.0", "react": "^18.0.0"}

    def test_manifest_is_pretty_printed(self, make_tree):
        root = make_tree({"package.json": {"name": "x"}})
        patch_manifest(root)
        text = (root / "package.json").read_text()
        assert text.startswith('{\n  "name": "x"')

    def test_no_manifest(self, make_tree):
        assert patch_manifest(make_tree({})) == []

    def test_dev_dependencies_list_rejected(self, make_tree):
        root = make_tree({"package.json": {"devDependencies": ["vite"]}})
        with pytest.raises(ManifestError, match="devDependencies"):
            patch_manifest(root)


def test_existing_vite_config_kept(make_tree):
    root = make_tree({"vite.config.mjs": "custom"})
    assert ensure_vite_config(root) is False
    assert not (root / "vite.config.js").exists()


def test_rewrite_entry_script_variants():
    assert rewrite_entry_script('<script src="/main.jsx">') == '<script src="/src/main.jsx">'
    assert rewrite_entry_script("<script src='main.js'>") == '<script src="/src/main.js">'
    assert rewrite_entry_script('<script src="./main.js"></script><script src="./main.jsx">') == (
        '<script src="/src/main.js"></script><script src="/src/main.jsx">'
    )
    assert rewrite_entry_script('<script src="/src/main.jsx">') == '<script src="/src/main.jsx">'


def test_rewrite_app_imports_only_touches_moved_svgs():
    text = "import a from './a.svg'\nimport b from './b.svg'\nimport c from '../assets/c.png'\n"
    assert rewrite_app_imports(text, {"a.svg"}) == (
        "import a from '/a.svg'\nimport b from './b.svg'\nimport c from './assets/c.png'\n"
    )
