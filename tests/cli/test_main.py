"""Tests for the creator-studio CLI."""

from __future__ import annotations

import importlib
import json

import pytest
from click.testing import CliRunner
from conftest import FakeBackend, FakeVideoBackend, done_operation

from creator_studio.backend.protocols import GenerationKind
from creator_studio.core.errors import BackendCallError, CredentialError
from creator_studio.frontends.cli.main import automate, cli, generate, trending, video

cli_main = importlib.import_module("creator_studio.frontends.cli.main")


class FakeClient(FakeBackend):
    """FakeBackend usable as ``async with make_client(config) as client``."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None


class FakeVideoClient(FakeVideoBackend):
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch):
    """Provide an API key and keep the CLI from reconfiguring test logging."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-api-key")
    monkeypatch.delenv("API_KEY", raising=False)
    levels = []
    monkeypatch.setattr(
        cli_main, "configure_logging", lambda level=None, **kw: levels.append(level)
    )
    return levels


def use_client(monkeypatch, client):
    configs = []

    def make_client(config):
        configs.append(config)
        return client

    monkeypatch.setattr(cli_main, "make_client", make_client)
    return configs


class TestCommands:
    """Command registration and parameters."""

    def test_commands_registered(self):
        assert set(cli.commands) == {"automate", "video", "generate", "trending"}

    def test_automate_params(self):
        names = [p.name for p in automate.params]
        assert names == ["topic", "platform", "json_output"]

    def test_video_params(self):
        names = [p.name for p in video.params]
        assert names == ["prompt", "output", "interval"]

    def test_generate_kinds(self):
        kind = next(p for p in generate.params if p.name == "kind")
        assert set(kind.type.choices) == {k.value for k in GenerationKind}

    def test_trending_has_json_flag(self):
        assert [p.name for p in trending.params] == ["json_output"]

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "automate" in result.output

    def test_log_level_passed(self, runner, monkeypatch, cli_env):
        use_client(monkeypatch, FakeClient({GenerationKind.TRENDING_TOPICS: ["AI"]}))

        result = runner.invoke(cli, ["--log-level", "debug", "trending"])

        assert result.exit_code == 0
        assert cli_env == ["DEBUG"]


class TestAutomate:
    def test_youtube_run(self, runner, monkeypatch):
        client = FakeClient(choice="Laptop B")
        configs = use_client(monkeypatch, client)

        result = runner.invoke(cli, ["automate", "review of a new laptop"])

        assert result.exit_code == 0, result.output
        assert "Generating Viral Titles" in result.output
        assert "Laptop B" in result.output
        assert configs[0].api_key == "test-api-key"
        assert client.kinds == [
            GenerationKind.TITLES,
            GenerationKind.HOOKS,
            GenerationKind.SCRIPT,
            GenerationKind.DESCRIPTION,
            GenerationKind.TAGS,
        ]

    def test_json_output(self, runner, monkeypatch):
        use_client(monkeypatch, FakeClient())

        result = runner.invoke(cli, ["automate", "laptop", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "completed"
        assert data["topic"] == "laptop"
        assert data["steps"][0]["content"]["chosen"] == "Laptop A"

    def test_x_platform(self, runner, monkeypatch):
        client = FakeClient()
        use_client(monkeypatch, client)

        result = runner.invoke(cli, ["automate", "remote work", "--platform", "x", "--json"])

        assert result.exit_code == 0
        assert [s["id"] for s in json.loads(result.stdout)["steps"]] == [
            "viral_post",
            "thread",
            "hashtags",
        ]

    def test_failed_step_exit_code(self, runner, monkeypatch):
        client = FakeClient({GenerationKind.HOOKS: BackendCallError("quota exceeded")})
        use_client(monkeypatch, client)

        result = runner.invoke(cli, ["automate", "laptop"])

        assert result.exit_code == 1
        assert "quota exceeded" in result.output

    def test_empty_topic(self, runner, monkeypatch):
        client = FakeClient()
        use_client(monkeypatch, client)

        result = runner.invoke(cli, ["automate", "   "])

        assert result.exit_code == 1
        assert "Error: Topic is required" in result.output
        assert client.calls == []

    def test_missing_api_key(self, runner, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY")

        result = runner.invoke(cli, ["automate", "laptop"])

        assert result.exit_code == 1
        assert "Error: API key is required" in result.output


class TestVideo:
    def test_saves_artifact(self, runner, monkeypatch, tmp_path):
        use_client(monkeypatch, FakeVideoClient(polls=[done_operation()], artifact=b"mp4"))
        output = tmp_path / "city.mp4"

        result = runner.invoke(
            cli, ["video", "city at night", "--output", str(output), "--interval", "0.01"]
        )

        assert result.exit_code == 0, result.output
        assert output.read_bytes() == b"mp4"
        assert "Video ready." in result.output

    def test_reauth_exit_code(self, runner, monkeypatch, tmp_path):
        client = FakeVideoClient(polls=[CredentialError("API key not valid", status_code=403)])
        use_client(monkeypatch, client)
        output = tmp_path / "city.mp4"

        result = runner.invoke(
            cli, ["video", "city at night", "-o", str(output), "--interval", "0.01"]
        )

        assert result.exit_code == 2
        assert "Error: API key not valid" in result.output
        assert not output.exists()

    def test_start_failure(self, runner, monkeypatch, tmp_path):
        use_client(monkeypatch, FakeVideoClient(start_error=BackendCallError("quota exceeded")))

        result = runner.invoke(
            cli, ["video", "city at night", "-o", str(tmp_path / "v.mp4"), "-i", "0.01"]
        )

        assert result.exit_code == 1
        assert "Error: quota exceeded" in result.output

    def test_output_required(self, runner):
        result = runner.invoke(cli, ["video", "city at night"])
        assert result.exit_code == 2


class TestGenerate:
    def test_list_output(self, runner, monkeypatch):
        use_client(monkeypatch, FakeClient())

        result = runner.invoke(cli, ["generate", "hooks", "laptop"])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["- Hook 1", "- Hook 2"]

    def test_model_json_output(self, runner, monkeypatch):
        use_client(monkeypatch, FakeClient())

        result = runner.invoke(cli, ["generate", "description", "Laptop A", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["description"] == "A full laptop review."

    def test_text_output(self, runner, monkeypatch):
        use_client(monkeypatch, FakeClient())

        result = runner.invoke(cli, ["generate", "viral_post", "remote work"])

        assert result.stdout.strip() == "Remote work is here to stay."

    def test_unknown_kind(self, runner):
        result = runner.invoke(cli, ["generate", "poems", "laptop"])
        assert result.exit_code == 2

    def test_backend_error(self, runner, monkeypatch):
        use_client(monkeypatch, FakeClient({GenerationKind.HOOKS: BackendCallError("offline")}))

        result = runner.invoke(cli, ["generate", "hooks", "laptop"])

        assert result.exit_code == 1
        assert "Error: offline" in result.output


class TestTrending:
    def test_numbered_list(self, runner, monkeypatch):
        client = FakeClient({GenerationKind.TRENDING_TOPICS: ["AI agents", "Mars mission"]})
        use_client(monkeypatch, client)

        result = runner.invoke(cli, ["trending"])

        assert result.exit_code == 0
        assert "1. AI agents" in result.output
        assert "2. Mars mission" in result.output
        assert client.kinds == [GenerationKind.TRENDING_TOPICS]

    def test_json(self, runner, monkeypatch):
        use_client(monkeypatch, FakeClient({GenerationKind.TRENDING_TOPICS: ["AI agents"]}))

        result = runner.invoke(cli, ["trending", "--json"])

        assert json.loads(result.stdout) == ["AI agents"]
