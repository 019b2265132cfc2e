from pathlib import Path

from pydantic import ValidationError
import pytest

from app.config import LogLevel, get_config, reset_config

INI = """
[app]
loglevel = debug

[stats]
enabled = true
host =
module_name = simtax

[gateway]
backend = http
base_url = https://objects.example.com/api
authentication = api_key
api_key = Token abc
timeout =
retries = 5

[sim_tax]
fail_on_sync_error = yes
"""


@pytest.fixture(autouse=True)
def clean_config():
    reset_config()
    yield
    reset_config()


def test_get_config_should_read_ini_file(tmp_path: Path) -> None:
    path = tmp_path / "app.conf"
    path.write_text(INI)

    config = get_config(str(path))

    assert config.app.loglevel is LogLevel.debug
    assert config.stats.enabled is True
    assert config.stats.host is None
    assert config.gateway.backend == "http"
    assert config.gateway.timeout == 10
    assert config.gateway.retries == 5
    assert config.sim_tax.fail_on_sync_error is True
    assert config.sim_tax.sync_before_search is True
    assert config.uvicorn.port == 8000


def test_get_config_should_cache_config(tmp_path: Path) -> None:
    path = tmp_path / "app.conf"
    path.write_text(INI)

    assert get_config(str(path)) is get_config()


def test_get_config_should_use_app_env_suffix(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "app.test.conf").write_text("[app]\nloglevel = warning\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APP_ENV", "test")

    assert get_config().app.loglevel is LogLevel.warning


def test_get_config_should_fail_without_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        get_config(str(tmp_path / "missing.conf"))


def test_get_config_should_reject_unknown_backend(tmp_path: Path) -> None:
    path = tmp_path / "app.conf"
    path.write_text("[gateway]\nbackend = sqlite\n")

    with pytest.raises(ValidationError):
        get_config(str(path))
