import logging

import pytest

from ytthumbs.config import Settings, load_settings, DEFAULT_SEARCH_URL
from ytthumbs.errors import ConfigurationError
from ytthumbs.main import create_app


def test_defaults():
    settings = load_settings({"YT_API_KEY": "abc"})
    assert settings == Settings(api_key="abc")
    assert settings.search_url == DEFAULT_SEARCH_URL
    assert settings.port == 8000
    assert settings.upstream_timeout == 10.0
    assert settings.log_level == logging.INFO


def test_overrides():
    settings = load_settings({
        "YT_API_KEY": "abc",
        "PORT": "9001",
        "HOST": "127.0.0.1",
        "UPSTREAM_TIMEOUT": "2.5",
        "YOUTUBE_SEARCH_URL": "http://localhost/search",
        "DEBUG_LOGGING": "yes",
    })
    assert settings.port == 9001
    assert settings.host == "127.0.0.1"
    assert settings.upstream_timeout == 2.5
    assert settings.search_url == "http://localhost/search"
    assert settings.log_level == logging.DEBUG


@pytest.mark.parametrize("env", [{}, {"YT_API_KEY": ""}, {"YT_API_KEY": "   "}])
def test_missing_api_key(env):
    with pytest.raises(ConfigurationError, match="YT_API_KEY"):
        load_settings(env)


@pytest.mark.parametrize("env", [
    {"YT_API_KEY": "abc", "PORT": "eighty"},
    {"YT_API_KEY": "abc", "UPSTREAM_TIMEOUT": "soon"},
    {"YT_API_KEY": "abc", "UPSTREAM_TIMEOUT": "0"},
])
def test_invalid_numbers(env):
    with pytest.raises(ConfigurationError):
        load_settings(env)


def test_create_app_without_key_fails(monkeypatch):
    monkeypatch.delenv("YT_API_KEY", raising=False)
    monkeypatch.setattr("ytthumbs.config.load_dotenv", lambda: False)
    with pytest.raises(ConfigurationError):
        create_app()


def test_create_app_keeps_settings():
    settings = Settings(api_key="abc")
    app = create_app(settings)
    assert app.state.settings is settings


def test_run_exits_without_api_key(monkeypatch):
    from ytthumbs import main

    def fail_run(*args, **kwargs):
        raise AssertionError("uvicorn must not start")

    monkeypatch.delenv("YT_API_KEY", raising=False)
    monkeypatch.setattr("ytthumbs.config.load_dotenv", lambda: False)
    monkeypatch.setattr(main.uvicorn, "run", fail_run)

    with pytest.raises(SystemExit) as exc:
        main.run()
    assert exc.value.code == 1


@pytest.mark.parametrize("port", ["0", "-1", "65536", "70000"])
def test_port_out_of_range(port):
    with pytest.raises(ConfigurationError, match="PORT"):
        load_settings({"YT_API_KEY": "abc", "PORT": port})


def test_port_bounds_accepted():
    assert load_settings({"YT_API_KEY": "abc", "PORT": "1"}).port == 1
    assert load_settings({"YT_API_KEY": "abc", "PORT": "65535"}).port == 65535
