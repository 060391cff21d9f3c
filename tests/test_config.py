"""Settings loader tests."""

from pathlib import Path

import pytest
import yaml

from fyipost.bot import PostBot
from fyipost.config import AppSettings, ConfigError, FyiPost, PostDraft, SettingsLoader, StorageBackend
from fyipost.storage import FileStorage, MemoryStorage


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in SettingsLoader.ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)


class TestSettingsLoader:

    def test_defaults(self):
        settings = SettingsLoader().load()
        assert settings.storage == StorageBackend.FILE
        assert settings.state_dir == Path.home() / ".fyipost"
        assert settings.state_file == Path.home() / ".fyipost" / "state.json"
        assert settings.default_user == "local"

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "fyipost.yaml"
        path.write_text(yaml.dump({
            "storage": "memory",
            "state_dir": str(tmp_path / "st"),
            "default_user": "team",
        }))
        loader = SettingsLoader(path)
        settings = loader.load()
        assert settings.storage == StorageBackend.MEMORY
        assert settings.state_dir == tmp_path / "st"
        assert settings.default_user == "team"
        assert loader.settings is settings

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "fyipost.yaml"
        path.write_text("default_user: team\n")
        monkeypatch.setenv("FYIPOST_USER", "alice")
        monkeypatch.setenv("FYIPOST_STATE_DIR", str(tmp_path))
        settings = SettingsLoader(path).load()
        assert settings.default_user == "alice"
        assert settings.state_dir == tmp_path

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="does not exist"):
            SettingsLoader(tmp_path / "nope.yaml").load()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("storage: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            SettingsLoader(path).load()

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a mapping"):
            SettingsLoader(path).load()

    @pytest.mark.parametrize("data", [
        {"storage": "redis"},
        {"state_filename": "a/b.json"},
        {"default_user": "   "},
    ])
    def test_invalid_settings(self, tmp_path, data):
        path = tmp_path / "s.yaml"
        path.write_text(yaml.dump(data))
        with pytest.raises(ConfigError, match="Invalid settings"):
            SettingsLoader(path).load()

    def test_save_roundtrip(self, tmp_path):
        settings = AppSettings(storage="memory", state_dir=tmp_path, default_user="bob")
        out = tmp_path / "out" / "fyipost.yaml"
        SettingsLoader().save(out, settings=settings)
        assert SettingsLoader(out).load() == settings

    def test_save_without_settings(self, tmp_path):
        with pytest.raises(ConfigError):
            SettingsLoader().save(tmp_path / "x.yaml")


class TestModels:

    def test_missing_fields(self):
        draft = PostDraft(source_type="Website", url="http://x.com")
        assert draft.missing_fields() == ["description", "priority"]

    def test_overwrite_from(self):
        post = FyiPost(source_type="Website", url="a", description="b", priority="Wichtig")
        post.overwrite_from(PostDraft(source_type="Konferenz", url="c", description="d", priority="Dringend"))
        assert post == FyiPost(source_type="Konferenz", url="c", description="d", priority="Dringend")


class TestBotFromSettings:

    def test_memory(self, tmp_path):
        bot = PostBot.from_settings(AppSettings(storage="memory", state_dir=tmp_path))
        assert isinstance(bot.storage, MemoryStorage)

    def test_file(self, tmp_path):
        bot = PostBot.from_settings(AppSettings(storage="file", state_dir=tmp_path / "st"))
        assert isinstance(bot.storage, FileStorage)
        assert bot.storage.path == tmp_path / "st" / "state.json"
