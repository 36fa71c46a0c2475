from pathlib import Path

from osgijar.config import Settings, get_settings, set_settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("OSGIJAR_PROJECT_DIR", "OSGIJAR_LOG_LEVEL", "OSGIJAR_COMPRESS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.project_dir is None
    assert settings.log_level == "WARNING"
    assert settings.compress is True
    assert settings.get_project_dir() == tmp_path.resolve()


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("OSGIJAR_PROJECT_DIR", str(tmp_path / "widget"))
    monkeypatch.setenv("OSGIJAR_COMPRESS", "false")
    monkeypatch.setenv("OSGIJAR_LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.compress is False
    assert settings.log_level == "DEBUG"
    assert settings.get_project_dir() == (tmp_path / "widget").resolve()


def test_explicit_values_win_over_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("OSGIJAR_COMPRESS", "false")

    settings = Settings(compress=True, project_dir=Path("relative"))

    assert settings.compress is True
    monkeypatch.chdir(tmp_path)
    assert settings.get_project_dir() == (tmp_path / "relative").resolve()


def test_set_settings_replaces_global(override_settings):
    replacement = Settings(compress=False)

    set_settings(replacement)

    assert get_settings() is replacement
