import pan.xapi
import pytest
import typer

from panorama_cli.config import Settings
from panorama_cli.connection import connection_params
from panorama_cli.sdk import create_client


def test_api_key_takes_precedence_over_credentials() -> None:
    settings = Settings(host="pano.example.com", username="admin", password="secret")

    params = connection_params(settings, None, "key-123", None, None, None, False)

    assert params.host == "pano.example.com"
    assert params.api_key == "key-123"
    assert params.username is None
    assert params.password is None


def test_credentials_are_required_without_api_key() -> None:
    settings = Settings(host="pano.example.com", username="admin")

    with pytest.raises(typer.BadParameter, match="PANORAMA_CLI_PASSWORD"):
        connection_params(settings, None, None, None, None, None, False)


def test_options_override_settings() -> None:
    settings = Settings(host="pano.example.com", api_key="from-env", port=8443)

    params = connection_params(settings, "other.example.com", None, None, None, 443, True)

    assert params.host == "other.example.com"
    assert params.api_key == "from-env"
    assert params.port == 443
    assert params.verify_ssl is False


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PANORAMA_CLI_HOST", "env.example.com")
    monkeypatch.setenv("PANORAMA_CLI_DEVICE_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("PANORAMA_CLI_JOB_TIMEOUT", "120")

    settings = Settings()

    assert settings.host == "env.example.com"
    assert settings.device_timezone == "Europe/Berlin"
    assert settings.job_timeout == 120.0


def test_create_client_builds_xapi_client() -> None:
    settings = Settings(host="pano.example.com", api_key="key-123")
    params = connection_params(settings, None, None, None, None, None, True)

    client = create_client(params)

    assert isinstance(client, pan.xapi.PanXapi)
