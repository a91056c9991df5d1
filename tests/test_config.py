import base64

import pytest

from app.core.config import Settings
from app.exceptions.errors import ConfigurationError

from .conftest import SERVICE_ACCOUNT_INFO


def test_defaults():
    s = Settings()
    assert s.API_V1_STR == "/api/v1"
    assert s.S2_COLLECTION == "COPERNICUS/S2_SR_HARMONIZED"
    assert s.has_gee_credentials is False


def test_private_key_json(monkeypatch, service_account_json):
    monkeypatch.setenv("GEE_PRIVATE_KEY", service_account_json)
    s = Settings()
    assert s.has_gee_credentials is True
    assert s.get_gee_credentials_info() == SERVICE_ACCOUNT_INFO


def test_private_key_b64_fallback(monkeypatch, service_account_json):
    monkeypatch.setenv("GEE_KEY_B64", base64.b64encode(service_account_json.encode()).decode())
    assert Settings().get_gee_credentials_info() == SERVICE_ACCOUNT_INFO


def test_missing_key():
    with pytest.raises(ConfigurationError, match="Server config error: GEE_PRIVATE_KEY not set."):
        Settings().get_gee_credentials_info()


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", "\"just a string\""])
def test_malformed_key(monkeypatch, raw):
    monkeypatch.setenv("GEE_PRIVATE_KEY", raw)
    with pytest.raises(ConfigurationError, match="Server config error"):
        Settings().get_gee_credentials_info()


def test_project_prefers_env(monkeypatch):
    monkeypatch.setenv("EARTHENGINE_PROJECT", "billing-project")
    assert Settings().get_gee_project(SERVICE_ACCOUNT_INFO) == "billing-project"


def test_project_falls_back_to_key():
    assert Settings().get_gee_project(SERVICE_ACCOUNT_INFO) == "ndvi-test-project"
