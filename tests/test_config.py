import pytest
from hal_toolkit import config
from hal_toolkit.config import ClientSettings, create_client_from_env, load_env_config


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("HAL_BASE_URL", "HAL_TIMEOUT_SECONDS", "HAL_AUTH_TOKEN", "HAL_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda *a, **k: None)
    monkeypatch.setattr(config, "setup_logging", lambda level: None)
    return monkeypatch


@pytest.fixture
def logging_levels(clean_env):
    levels = []
    clean_env.setattr(config, "setup_logging", levels.append)
    return levels


def test_defaults_when_env_is_empty(clean_env):
    assert load_env_config() == ClientSettings(base_url="")


def test_reads_all_settings(clean_env):
    clean_env.setenv("HAL_BASE_URL", " https://api.example.com ")
    clean_env.setenv("HAL_TIMEOUT_SECONDS", "2.5")
    clean_env.setenv("HAL_AUTH_TOKEN", "secret")
    clean_env.setenv("HAL_LOG_LEVEL", "DEBUG")

    settings = load_env_config(use_dotenv=False)
    assert settings.base_url == "https://api.example.com"
    assert settings.timeout_seconds == 2.5
    assert settings.auth_token == "secret"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["soon", "0", "-1"])
def test_invalid_timeout_raises(clean_env, raw):
    clean_env.setenv("HAL_TIMEOUT_SECONDS", raw)
    with pytest.raises(ValueError):
        load_env_config(use_dotenv=False)


@pytest.mark.asyncio
async def test_create_client_from_env(clean_env):
    clean_env.setenv("HAL_BASE_URL", "https://api.example.com/")
    clean_env.setenv("HAL_TIMEOUT_SECONDS", "3")
    clean_env.setenv("HAL_AUTH_TOKEN", "secret")

    client = create_client_from_env()
    try:
        assert client.base_url == "https://api.example.com"
        assert client.timeout_seconds == 3.0
        assert client.http.headers["Authorization"] == "Bearer secret"
        assert client.http.headers["Accept"] == "application/hal+json"
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_create_client_from_env_applies_log_level(clean_env, logging_levels):
    clean_env.setenv("HAL_LOG_LEVEL", "DEBUG")

    client = create_client_from_env()
    await client.aclose()

    assert logging_levels == ["DEBUG"]


@pytest.mark.asyncio
async def test_create_client_from_env_can_leave_logging_alone(logging_levels):
    client = create_client_from_env(configure_logging=False)
    await client.aclose()

    assert logging_levels == []
