import pytest
from zenhub_client.client import DEFAULT_API_URL, ZenHubClient
from zenhub_client.config import create_client_from_env, load_env_config


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    # Prevent load_dotenv from repopulating values from .env
    monkeypatch.setattr("zenhub_client.config.load_dotenv", lambda *a, **k: None)
    for var in (
        "ZENHUB_API_TOKEN",
        "ZENHUB_BASE_URL",
        "ZENHUB_CHECK_STATUS_ON_WRITES",
    ):
        monkeypatch.delenv(var, raising=False)


def test_create_client_from_env_missing_token():
    with pytest.raises(ValueError) as exc:
        create_client_from_env()

    assert "Missing ZENHUB_API_TOKEN" in str(exc.value)


def test_load_env_config_defaults(monkeypatch):
    monkeypatch.setenv("ZENHUB_API_TOKEN", " tok ")

    cfg = load_env_config()

    assert cfg.token == "tok"
    assert cfg.base_url == DEFAULT_API_URL
    assert cfg.check_status_on_writes is False


@pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
def test_check_status_flag_truthy(monkeypatch, raw):
    monkeypatch.setenv("ZENHUB_CHECK_STATUS_ON_WRITES", raw)

    assert load_env_config().check_status_on_writes is True


@pytest.mark.asyncio
async def test_create_client_from_env(monkeypatch):
    monkeypatch.setenv("ZENHUB_API_TOKEN", "tok")
    monkeypatch.setenv("ZENHUB_BASE_URL", "https://zh.example.com/p1")
    monkeypatch.setenv("ZENHUB_CHECK_STATUS_ON_WRITES", "1")

    client = ZenHubClient.from_env()
    async with client:
        assert client.token == "tok"
        assert client.base_url == "https://zh.example.com/p1"
        assert client.check_status_on_writes is True


@pytest.mark.asyncio
async def test_kwargs_override_env(monkeypatch):
    monkeypatch.setenv("ZENHUB_API_TOKEN", "tok")
    monkeypatch.setenv("ZENHUB_CHECK_STATUS_ON_WRITES", "1")

    async with create_client_from_env(check_status_on_writes=False) as client:
        assert client.check_status_on_writes is False
