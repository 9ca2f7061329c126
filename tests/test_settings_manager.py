import json

import pytest

from vocabhub.config import Config, SettingsManager
from vocabhub.context import create_app_context
from vocabhub.errors import ConfigurationError
from vocabhub.services.supabase_backend import SupabaseBackend


@pytest.fixture
def settings(tmp_path, monkeypatch):
    for key in SettingsManager.DEFAULTS:
        monkeypatch.delenv(key, raising=False)
    SettingsManager.reset_instance()
    manager = SettingsManager(str(tmp_path / "settings.json"))
    yield manager
    SettingsManager.reset_instance()


@pytest.fixture
def restore_config(monkeypatch):
    for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "AUDIO_BUCKET", "MAX_AUDIO_SIZE_MB",
                 "USERS_LIMIT", "DELETE_VERIFY_DELAY", "LOG_LEVEL"):
        monkeypatch.setattr(Config, name, getattr(Config, name))


def test_singleton(settings):
    assert SettingsManager() is settings


def test_set_persists_to_json(settings):
    settings.set("AUDIO_BUCKET", "custom-audio")
    settings.set("MAX_AUDIO_SIZE_MB", 20)

    stored = json.loads(settings.settings_file.read_text(encoding="utf-8"))
    assert stored["AUDIO_BUCKET"] == "custom-audio"
    assert stored["MAX_AUDIO_SIZE_MB"] == 20


def test_reload_reads_file_and_env_overrides(settings, monkeypatch):
    settings.set("USERS_LIMIT", 25)
    monkeypatch.setenv("MAX_AUDIO_SIZE_MB", "15")
    monkeypatch.setenv("DELETE_VERIFY_DELAY", "not-a-number")

    settings.reload()

    assert settings.get("USERS_LIMIT") == 25
    assert settings.get("MAX_AUDIO_SIZE_MB") == 15
    assert settings.get("DELETE_VERIFY_DELAY") == SettingsManager.DEFAULTS["DELETE_VERIFY_DELAY"]


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    SettingsManager.reset_instance()
    try:
        manager = SettingsManager(str(path))
        assert manager.get("AUDIO_BUCKET") == "vocab-audio"
    finally:
        SettingsManager.reset_instance()


def test_reset_restores_defaults(settings):
    settings.set("AUDIO_BUCKET", "other")
    settings.reset("AUDIO_BUCKET")
    assert settings.get("AUDIO_BUCKET") == "vocab-audio"

    settings.set("USERS_LIMIT", 5)
    settings.reset()
    assert settings.get_all() == SettingsManager.DEFAULTS


def test_apply_copies_values_onto_config(settings, restore_config):
    settings.set("SUPABASE_URL", "https://project.supabase.co")
    settings.set("AUDIO_BUCKET", "")
    settings.set("MAX_AUDIO_SIZE_MB", "12")
    settings.set("LOG_LEVEL", "DEBUG")

    Config.apply(settings)

    assert Config.SUPABASE_URL == "https://project.supabase.co"
    assert Config.AUDIO_BUCKET == "vocab-audio"
    assert Config.max_audio_bytes() == 12 * 1024 * 1024
    assert Config.LOG_LEVEL == "DEBUG"


def test_app_context_requires_credentials(settings, restore_config):
    settings.set("SUPABASE_URL", "")
    settings.set("SUPABASE_ANON_KEY", "")

    with pytest.raises(ConfigurationError):
        create_app_context(settings)


def test_app_context_wires_services(settings, restore_config, monkeypatch, backend):
    monkeypatch.setattr(SupabaseBackend, "from_config", classmethod(lambda cls: backend))

    context = create_app_context(settings)

    assert context.backend is backend
    assert context.vocabulary.backend is backend
    assert context.media.bucket == Config.AUDIO_BUCKET
    assert context.session.identity is None
    assert backend.auth_listeners
