import pytest
from pydantic import ValidationError

from route_optimizer.config import GOOGLE_GEOCODING_URL, Settings

KEY_VARIABLES = ("ROUTEOPT_GOOGLE_MAPS_API_KEY", "GOOGLE_MAPS_API_KEY", "NEXT_PUBLIC_GOOGLE_MAPS_API_KEY")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in KEY_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("ROUTEOPT_MAX_ROUTE_ADDRESSES", raising=False)


def test_defaults():
    config = Settings(_env_file=None)

    assert config.google_maps_api_key is None
    assert config.geocoding_base_url == GOOGLE_GEOCODING_URL
    assert config.max_route_addresses == 20
    assert config.geocoding_max_parallel_requests == 21


@pytest.mark.parametrize("variable", KEY_VARIABLES)
def test_api_key_from_environment(monkeypatch: pytest.MonkeyPatch, variable: str):
    monkeypatch.setenv(variable, "abc123")

    assert Settings(_env_file=None).google_maps_api_key == "abc123"


def test_blank_api_key_is_missing(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ROUTEOPT_GOOGLE_MAPS_API_KEY", "   ")

    assert Settings(_env_file=None).google_maps_api_key is None


def test_prefixed_numeric_setting(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ROUTEOPT_MAX_ROUTE_ADDRESSES", "5")

    assert Settings(_env_file=None).max_route_addresses == 5


def test_allowed_origins_accepts_comma_separated_string():
    config = Settings(_env_file=None, frontend_allowed_origins="https://a.example, https://b.example")

    assert config.frontend_allowed_origins == ("https://a.example", "https://b.example")


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"geocoding_timeout_seconds": 0}, "geocoding_timeout_seconds"),
        ({"max_route_addresses": 21}, "max_route_addresses"),
        ({"max_route_addresses": 0}, "max_route_addresses"),
    ],
)
def test_out_of_range_settings_rejected(overrides, field):
    with pytest.raises(ValidationError, match=field):
        Settings(_env_file=None, **overrides)
