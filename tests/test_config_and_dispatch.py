"""Settings from the environment, env-file loading and request classification."""

import os
from pathlib import Path

import pytest

from landing_server.config import Settings, load_env_file, load_settings
from landing_server.dispatch import RouteKind, classify_request
from landing_server.models import PaymentsConfig


def test_defaults_when_env_is_empty(tmp_path: Path):
    settings = Settings.from_env({}, cwd=tmp_path)

    assert settings.port == 3000
    assert settings.static_root == tmp_path.resolve()
    assert settings.payments == PaymentsConfig(
        provider="mock",
        public_key="pk_test_mocked",
        return_url="http://localhost:3000/thanks",
        currency="RUB",
        locale="ru-RU",
    )


def test_values_from_env(tmp_path: Path):
    env = {
        "PORT": "8081",
        "STATIC_ROOT": "public",
        "LOG_LEVEL": "debug",
        "PAYMENTS_PROVIDER": "yookassa",
        "PAYMENTS_PUBLIC_KEY": "pk_live_x",
        "PAYMENTS_RETURN_URL": "https://example.test/ok",
        "PAYMENTS_DEFAULT_CURRENCY": "USD",
        "PAYMENTS_LOCALE": "en-US",
    }

    settings = Settings.from_env(env, cwd=tmp_path)

    assert settings.port == 8081
    assert settings.static_root == (tmp_path / "public").resolve()
    assert settings.log_level == "DEBUG"
    assert settings.payments.as_dict() == {
        "provider": "yookassa",
        "publicKey": "pk_live_x",
        "returnUrl": "https://example.test/ok",
        "currency": "USD",
        "locale": "en-US",
    }


def test_empty_values_fall_back_to_defaults(tmp_path: Path):
    settings = Settings.from_env({"PAYMENTS_PROVIDER": "", "PORT": " "}, cwd=tmp_path)

    assert settings.payments.provider == "mock"
    assert settings.port == 3000


@pytest.mark.parametrize("port", ["abc", "0", "70000"])
def test_bad_port_is_rejected(tmp_path: Path, port: str):
    with pytest.raises(ValueError):
        Settings.from_env({"PORT": port}, cwd=tmp_path)


def test_settings_are_frozen(tmp_path: Path):
    settings = Settings.from_env({}, cwd=tmp_path)

    with pytest.raises(AttributeError):
        settings.port = 1  # type: ignore[misc]


def test_env_file_does_not_override_existing(tmp_path: Path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "PAYMENTS_PROVIDER=stripe\n"
        'PAYMENTS_LOCALE="en-GB"\n'
        "PAYMENTS_DEFAULT_CURRENCY='EUR'\n",
        encoding="utf-8",
    )
    # load_dotenv writes into os.environ; give it a private copy.
    environ = {k: v for k, v in os.environ.items() if not k.startswith(("PAYMENTS_", "PORT", "STATIC_ROOT"))}
    environ["PAYMENTS_PROVIDER"] = "mock"
    monkeypatch.setattr(os, "environ", environ)

    settings = load_settings(env_file)

    assert settings.payments.provider == "mock"
    assert settings.payments.locale == "en-GB"
    assert settings.payments.currency == "EUR"
    assert environ["PAYMENTS_LOCALE"] == "en-GB"


def test_missing_env_file_is_not_an_error(tmp_path: Path):
    assert load_env_file(tmp_path / "nope.env") is False


@pytest.mark.parametrize(
    "method, path, expected",
    [
        ("OPTIONS", "/api/payments/session", RouteKind.PREFLIGHT),
        ("options", "/api/payments", RouteKind.PREFLIGHT),
        ("GET", "/api/payments/config", RouteKind.PAYMENTS),
        ("POST", "/api/payments/session", RouteKind.PAYMENTS),
        ("GET", "/api/paymentsx", RouteKind.PAYMENTS),
        ("OPTIONS", "/index.html", RouteKind.STATIC),
        ("GET", "/", RouteKind.STATIC),
        ("GET", "/api/other", RouteKind.STATIC),
    ],
)
def test_classify_request(method, path, expected):
    assert classify_request(method, path) is expected


def test_handlers_do_not_read_environment(client, monkeypatch):
    """Config is captured at app creation; later env changes are invisible."""

    monkeypatch.setenv("PAYMENTS_PROVIDER", "changed")

    assert client.get("/api/payments/config").json()["config"]["provider"] == "mock"
    assert os.environ["PAYMENTS_PROVIDER"] == "changed"
