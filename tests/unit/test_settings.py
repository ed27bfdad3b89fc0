import pytest

from pmf.config.settings import Settings
from pmf.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in (
        "PMF_LOG_LEVEL",
        "LOG_LEVEL",
        "PMF_JSON_LOGS",
        "PMF_CATALOG_PATH",
        "PMF_CONTAINER_WIDTH",
        "PMF_CONTAINER_HEIGHT",
        "PMF_EXPAND_ENTITIES",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings()
    assert settings.log_level == "INFO"
    assert settings.json_logs is False
    assert settings.catalog_path is None
    assert settings.expand_entities is True
    assert settings.layout_config().container_width == 800


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PMF_CONTAINER_WIDTH", "1200")
    monkeypatch.setenv("PMF_JSON_LOGS", "true")
    monkeypatch.setenv("PMF_EXPAND_ENTITIES", "false")

    settings = Settings()
    assert settings.json_logs is True
    assert settings.expand_entities is False
    assert settings.layout_config().container_width == 1200


def test_explicit_overrides_win(monkeypatch):
    monkeypatch.setenv("PMF_CONTAINER_WIDTH", "1200")
    config = Settings().layout_config(container_width=900, container_height=400)
    assert (config.container_width, config.container_height) == (900, 400)


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("PMF_CONTAINER_HEIGHT=450\n", encoding="utf-8")
    assert Settings().layout_config().container_height == 450


def test_invalid_layout_raises_configuration_error(monkeypatch):
    monkeypatch.setenv("PMF_CONTAINER_WIDTH", "-5")
    with pytest.raises(ConfigurationError):
        Settings().layout_config()
