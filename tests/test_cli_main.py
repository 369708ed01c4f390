"""
CLI tests using click's runner.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from vdeploy.analyzer.spec import ProjectType
from vdeploy.cli.main import main
from vdeploy.errors import DeploymentError
from vdeploy.orchestrator import DeployResult


@pytest.fixture
def runner(monkeypatch, tmp_path):
    for key in ("VERCEL_TOKEN", "VERCEL_PROJECT_ID", "VERCEL_ORG_ID", "VDEPLOY_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("VDEPLOY_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("VDEPLOY_CLEANUP_DELAY", "0")
    return CliRunner()


def _result(url="https://demo.vercel.app"):
    return DeployResult(run_id="r-1704110400-0a1b2c3d", url=url, project_type=ProjectType.STATIC,
                        descriptor={}, duration_s=1.234)


class TestDeployCommand:
    """vdeploy deploy."""

    def test_prints_url(self, runner, make_tree):
        src = make_tree({"index.html": ""})
        with patch("vdeploy.cli.main.deploy", return_value=_result()) as mock_deploy:
            res = runner.invoke(main, ["deploy", str(src), "--token", "abc"])
        assert res.exit_code == 0
        assert "https://demo.vercel.app" in res.output
        config = mock_deploy.call_args.args[1]
        assert config.token == "abc"

    def test_json_output(self, runner, make_tree):
        src = make_tree({"index.html": ""})
        with patch("vdeploy.cli.main.deploy", return_value=_result()):
            res = runner.invoke(main, ["--json", "deploy", str(src)])
        assert res.exit_code == 0
        data = json.loads(res.output.strip().splitlines()[-1])
        assert data == {"run_id": "r-1704110400-0a1b2c3d", "url": "https://demo.vercel.app",
                        "project_type": "static", "duration_s": 1.23}

    def test_failure_exit_code(self, runner, make_tree):
        src = make_tree({"index.html": ""})
        with patch("vdeploy.cli.main.deploy", side_effect=DeploymentError("no url")):
            res = runner.invoke(main, ["--json", "deploy", str(src)])
        assert res.exit_code == 1
        assert json.loads(res.output.strip().splitlines()[-1]) == {"error": "Deployment failed: no url"}

    def test_os_error_is_reported_not_raised(self, runner, make_tree):
        src = make_tree({"index.html": ""})
        with patch("vdeploy.cli.main.deploy", side_effect=PermissionError(13, "Permission denied", "/tmp/x")):
            res = runner.invoke(main, ["--json", "deploy", str(src), "--token", "abc"])
        assert res.exit_code == 1
        assert "Permission denied" in json.loads(res.output.strip().splitlines()[-1])["error"]

    def test_missing_token(self, runner, make_tree):
        src = make_tree({"index.html": ""})
        res = runner.invoke(main, ["--json", "deploy", str(src)])
        assert res.exit_code == 1
        assert "VERCEL_TOKEN" in res.output

    def test_bad_timeout_env(self, runner, make_tree, monkeypatch):
        monkeypatch.setenv("VDEPLOY_TIMEOUT", "soon")
        src = make_tree({"index.html": ""})
        res = runner.invoke(main, ["--json", "deploy", str(src), "--token", "abc"])
        assert res.exit_code == 1
        assert "Invalid configuration" in res.output


class TestOtherCommands:
    """detect, prepare, logs."""

    def test_detect(self, runner, make_tree):
        src = make_tree({"package.json": {"dependencies": {"next": "14.0.0"}}})
        res = runner.invoke(main, ["--json", "detect", str(src)])
        assert res.exit_code == 0
        assert json.loads(res.output.strip().splitlines()[-1])["project_type"] == "next"

    def test_detect_human(self, runner, make_tree):
        src = make_tree({"index.html": "", "angular.json": "{}"})
        res = runner.invoke(main, ["detect", str(src)])
        assert res.exit_code == 0
        assert "Project type: static" in res.output

    def test_prepare(self, runner, make_tree, tmp_path):
        src = make_tree({"index.html": ""})
        out = tmp_path / "out"
        res = runner.invoke(main, ["--json", "prepare", str(src), "--out", str(out)])
        assert res.exit_code == 0
        assert (out / "vercel.json").exists()
        assert json.loads(res.output.strip().splitlines()[-1])["project_type"] == "static"

    def test_logs_unknown_run(self, runner):
        res = runner.invoke(main, ["logs", "r-1704110400-ffffffff"])
        assert res.exit_code == 2

    def test_logs_after_run(self, runner, make_tree):
        src = make_tree({"index.html": ""})
        with patch("vdeploy.orchestrator.run_vercel", return_value="https://demo.vercel.app"):
            res = runner.invoke(main, ["--json", "deploy", str(src), "--token", "abc"])
        run_id = json.loads(res.output.strip().splitlines()[-1])["run_id"]

        res = runner.invoke(main, ["--json", "logs", run_id])
        assert res.exit_code == 0
        events = json.loads(res.output.strip().splitlines()[-1])["events"]
        assert events[0]["type"] == "INIT"
        assert events[-1]["type"] == "DONE"
