"""Tests for the flask CLI commands and startup configuration."""

import logging

from logofive import create_app
from logofive.config import TestConfig, config_by_name


class NoOpenAIConfig(TestConfig):
    """Testing config with the image API key unset."""

    OPENAI_API_KEY = None


class TestGrantToken:

    def test_grants_given_token(self, app, token_store):
        runner = app.test_cli_runner()
        result = runner.invoke(args=["grant-token", "ManualToken"])

        assert result.exit_code == 0
        assert token_store.contains("ManualToken")
        assert "http://localhost:3000/criar?token=ManualToken" in result.output

    def test_mints_token_when_omitted(self, app, token_store):
        runner = app.test_cli_runner()
        result = runner.invoke(args=["grant-token"])

        assert result.exit_code == 0
        assert len(token_store) == 1


class TestRevokeToken:

    def test_revokes(self, app, token_store, paid_token):
        result = app.test_cli_runner().invoke(args=["revoke-token", paid_token])
        assert "Token revoked" in result.output
        assert not token_store.contains(paid_token)

    def test_unknown_token(self, app):
        result = app.test_cli_runner().invoke(args=["revoke-token", "nope"])
        assert "Token not found" in result.output


class TestCheckConfig:

    def test_all_present_in_testing(self, app):
        result = app.test_cli_runner().invoke(args=["check-config"])
        assert result.exit_code == 0
        assert "All required settings present." in result.output
        assert "MemoryTokenStore" in result.output

    def test_reports_missing_secret(self, monkeypatch):
        monkeypatch.setitem(config_by_name, "no-openai", NoOpenAIConfig)
        app = create_app("no-openai")

        result = app.test_cli_runner().invoke(args=["check-config"])
        assert result.exit_code == 0
        assert "MISSING: OPENAI_API_KEY" in result.output


class TestStartupWithMissingSecrets:
    """Missing secrets are logged; the app still boots."""

    def test_missing_key_logged_not_fatal(self, monkeypatch, caplog):
        monkeypatch.setitem(config_by_name, "no-openai", NoOpenAIConfig)

        with caplog.at_level(logging.ERROR):
            app = create_app("no-openai")

        assert app is not None
        assert "Missing OPENAI_API_KEY" in caplog.text
        assert "Missing STRIPE_SECRET_KEY" not in caplog.text

    def test_app_still_serves_requests(self, monkeypatch):
        monkeypatch.setitem(config_by_name, "no-openai", NoOpenAIConfig)
        app = create_app("no-openai")

        resp = app.test_client().get("/health")
        assert resp.get_json() == {"status": "ok"}
