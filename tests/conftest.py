import pytest

from common.settings import MonitoredResource, get_log_settings, get_settings

ENV_VARS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_DEFAULT_REGION",
    "DXVIF_METRIC_KEY_PREFIX",
    "DXVIF_ROLE_ARN",
    "DXVIF_TIMEOUT_SECONDS",
    "MACKEREL_AGENT_PLUGIN_META",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_log_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_log_settings.cache_clear()


@pytest.fixture
def resource():
    return MonitoredResource(
        connection_id="dxcon-abc123", virtual_interface_id="dxvif-xyz789"
    )
