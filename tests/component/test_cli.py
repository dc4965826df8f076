"""CLI commands run end to end against a temporary data directory."""

import json
import logging

import pytest
import structlog
from typer.testing import CliRunner

from motia_studio.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI points logging at the runner's stderr; undo that after each test."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
    structlog.reset_defaults()


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    monkeypatch.setenv("MOTIA_STUDIO_STORAGE_BACKEND", "file")
    monkeypatch.setenv("MOTIA_STUDIO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("MOTIA_STUDIO_DEPLOY_DELAY_SECONDS", "0")
    monkeypatch.setenv("MOTIA_STUDIO_GENERATION_BACKEND", "template")
    return tmp_path


def invoke_json(*args):
    result = runner.invoke(app, [*args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestGenerate:
    def test_generate_json(self, cli_env):
        data = invoke_json("generate", "Receive webhook events from GitHub", "--user", "alice")

        assert data["id"].startswith("proj_")
        assert data["status"] == "ready"
        assert data["userId"] == "alice"
        assert data["files"][0]["path"] == "src/workflows/webhook.ts"

    def test_generate_table(self, cli_env):
        result = runner.invoke(app, ["generate", "Receive webhook events from GitHub"])

        assert result.exit_code == 0
        assert "Project generated" in result.output
        assert "src/workflows/webhook.ts" in result.output

    def test_short_description_fails(self, cli_env):
        result = runner.invoke(app, ["generate", "api"])

        assert result.exit_code == 1
        assert "at least 10 characters" in result.output


class TestDeploy:
    def test_deploy_waits_until_live(self, cli_env):
        project = invoke_json("generate", "Receive webhook events from GitHub")

        deployment = invoke_json("deploy", project["id"])

        assert deployment["status"] == "live"
        assert deployment["projectId"] == project["id"]
        assert deployment["metrics"]["uptime"] == "100%"

        status = invoke_json("status", deployment["id"])
        assert status["status"] == "live"

    def test_deploy_no_wait_returns_initial_record(self, cli_env):
        project = invoke_json("generate", "Receive webhook events from GitHub")

        deployment = invoke_json("deploy", project["id"], "--no-wait")

        assert deployment["status"] == "deploying"
        assert "metrics" not in deployment

    def test_deploy_unknown_project(self, cli_env):
        result = runner.invoke(app, ["deploy", "proj_missing"])

        assert result.exit_code == 1
        assert "Project not found" in result.output

    def test_status_unknown_deployment(self, cli_env):
        result = runner.invoke(app, ["status", "dep_missing"])

        assert result.exit_code == 1
        assert "Deployment not found" in result.output


class TestProjects:
    def test_list_show_delete(self, cli_env):
        project = invoke_json("generate", "Receive webhook events from GitHub", "--user", "bob")

        listed = invoke_json("projects", "list", "--user", "bob")
        assert [p["id"] for p in listed] == [project["id"]]

        shown = invoke_json("projects", "show", project["id"])
        assert shown["name"] == "Webhook Handler"
        assert shown["deployments"] == []

        result = runner.invoke(app, ["projects", "delete", project["id"], "--yes"])
        assert result.exit_code == 0
        assert invoke_json("projects", "list", "--user", "bob") == []

    def test_list_table(self, cli_env):
        invoke_json("generate", "Receive webhook events from GitHub")

        result = runner.invoke(app, ["projects", "list"])

        assert result.exit_code == 0
        assert "Webhook Handler" in result.output

    def test_show_unknown(self, cli_env):
        result = runner.invoke(app, ["projects", "show", "proj_missing"])

        assert result.exit_code == 1

    def test_delete_unknown(self, cli_env):
        result = runner.invoke(app, ["projects", "delete", "proj_missing", "--yes"])

        assert result.exit_code == 1


class TestTemplates:
    def test_list_templates(self, cli_env):
        templates = invoke_json("templates", "list")

        assert [t["id"] for t in templates] == [
            "rest-api-crud",
            "ai-agent-workflow",
            "job-queue",
            "ecommerce",
            "webhook-handler",
        ]

    def test_use_template(self, cli_env):
        project = invoke_json("templates", "use", "ecommerce")

        assert project["templateId"] == "ecommerce"
        assert project["status"] == "ready"

    def test_use_unknown_template(self, cli_env):
        result = runner.invoke(app, ["templates", "use", "nope"])

        assert result.exit_code == 1
        assert "Template not found" in result.output
