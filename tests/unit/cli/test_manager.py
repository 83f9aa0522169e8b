"""Unit tests for the manager.py entry point."""

import pytest
from typer.testing import CliRunner

import manager
from filestore.api.client import FileStoreClient
from tests.conftest import API_KEY, BASE_URL, UPLOAD_BASE_URL

runner = CliRunner()


@pytest.fixture
def fake_client_factory(monkeypatch, fake_service):
    """Point manager.create_client at the fake service."""
    created = []

    def fake_create_client(api_key, source="cli", transport=None):
        created.append((api_key, source))
        return FileStoreClient(
            api_key, BASE_URL, UPLOAD_BASE_URL, transport=fake_service.transport, source=source,
        )

    monkeypatch.setattr(manager, "create_client", fake_create_client)
    return created


class TestManager:
    """Tests for key resolution and shell start-up."""

    def test_runs_shell_with_key(self, fake_client_factory, fake_service):
        fake_service.add_store("Docs")

        result = runner.invoke(manager.app, ["--key", API_KEY], input="1\n\nq\n")

        assert result.exit_code == 0
        assert "Docs" in result.output
        assert "Goodbye!" in result.output
        assert fake_client_factory == [(API_KEY, "shell")]

    def test_key_from_environment(self, fake_client_factory, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", API_KEY)
        monkeypatch.setattr(manager, "prompt_for_api_key", lambda: pytest.fail("prompted"))

        result = runner.invoke(manager.app, [], input="q\n")

        assert result.exit_code == 0
        assert fake_client_factory == [(API_KEY, "shell")]

    def test_empty_key_exits(self, fake_client_factory, monkeypatch):
        monkeypatch.setattr(manager, "prompt_for_api_key", lambda: "")

        result = runner.invoke(manager.app, [])

        assert result.exit_code == 1
        assert "API Key not provided. Exiting." in result.output
        assert fake_client_factory == []

    def test_prompted_key_is_used(self, fake_client_factory, monkeypatch):
        monkeypatch.setattr(manager, "prompt_for_api_key", lambda: API_KEY)

        result = runner.invoke(manager.app, [], input="q\n")

        assert result.exit_code == 0
        assert fake_client_factory == [(API_KEY, "shell")]

    def test_outside_project_root_exits(self, fake_client_factory, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(manager.app, ["--key", API_KEY])

        assert result.exit_code == 1
        assert "Project root not found" in result.output
        assert fake_client_factory == []
