import logging

import pytest

from katha import env_loader
from katha.env_loader import (
    apply_api_key,
    configure_logging,
    credential_status,
    forget_api_key,
    init_client,
    key_fingerprint,
    load_env,
)
from katha.errors import KathaError, MissingCredentialError


@pytest.fixture
def no_key(monkeypatch, tmp_path):
    """No key in the environment and no .env anywhere above cwd."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(env_loader, "load_dotenv", lambda override=False: False)
    monkeypatch.setattr(env_loader, "find_dotenv", lambda usecwd=True: "")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    return tmp_path


def test_fingerprint_never_shows_key():
    info = key_fingerprint("AIzaSecret123")
    assert "AIzaSecret123" not in info
    assert info.startswith("13 chars")
    assert key_fingerprint("AIzaSecret123") == info


def test_status_without_key_uses_missing_credential_message(no_key):
    has_key, status = credential_status()
    assert not has_key
    assert status == MissingCredentialError().message
    assert "GEMINI_API_KEY" in status and "GOOGLE_API_KEY" in status


def test_apply_and_forget(no_key):
    fingerprint = apply_api_key("  runtime-key ")
    assert load_env() == "runtime-key"
    has_key, status = credential_status()
    assert has_key and fingerprint in status
    assert not (no_key / ".env").exists()

    forget_api_key()
    assert load_env() == ""


@pytest.mark.parametrize("bad", ["", "   ", "two words"])
def test_apply_rejects_malformed_key(no_key, bad):
    with pytest.raises(KathaError):
        apply_api_key(bad)
    assert load_env() == ""


def test_apply_with_persist_writes_dotenv(no_key):
    apply_api_key("file-key", persist=True)

    content = (no_key / ".env").read_text(encoding="utf-8")
    assert "GEMINI_API_KEY" in content and "file-key" in content
    assert load_env() == "file-key"
    forget_api_key()


def test_persist_failure_leaves_key_unchanged(no_key, monkeypatch):
    def denied(*args, **kwargs):
        raise PermissionError("read-only")

    monkeypatch.setattr(env_loader, "set_key", denied)
    with pytest.raises(KathaError) as exc:
        apply_api_key("file-key", persist=True)
    assert ".env" in exc.value.message
    assert load_env() == ""


def test_google_api_key_fallback(no_key, monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    assert load_env() == "google-key"


def test_init_client_without_key():
    with pytest.raises(MissingCredentialError):
        init_client("")


def test_configure_logging_quiets_http(monkeypatch):
    monkeypatch.setenv("KATHA_LOG_LEVEL", "DEBUG")
    configure_logging()
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger().level == logging.DEBUG
