import pytest

from agent_orchestrator.config import OrchestratorConfig
from worker_agents.config import WorkerConfig

_ENV_VARS = (
    "HOST",
    "PORT",
    "CALENDAR_URL",
    "TODO_URL",
    "NLU_PROVIDER",
    "AGENT_TIMEOUT_SECONDS",
    "REQUEST_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "ENABLE_MONITORING",
    "OTEL_ENDPOINT",
    "OTEL_SERVICE_NAME",
    "CALENDAR_PORT",
    "TODO_PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = OrchestratorConfig.from_env()

    assert config.port == 8080
    assert config.calendar_url == "http://localhost:8081"
    assert config.todo_url == "http://localhost:8082"
    assert config.nlu_provider == "keyword"
    assert config.agent_timeout_seconds == 10.0
    assert config.request_timeout_seconds == 15.0
    assert config.enable_monitoring is False
    assert config.otel_endpoint is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("CALENDAR_URL", "http://calendar:8081/")
    monkeypatch.setenv("TODO_URL", "http://todo:8082")
    monkeypatch.setenv("AGENT_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("ENABLE_MONITORING", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = OrchestratorConfig.from_env()

    assert config.port == 9000
    assert config.calendar_url == "http://calendar:8081/"
    assert config.enable_monitoring is True
    assert config.log_level == "DEBUG"

    transport_configs = {c.name: c for c in config.agent_configs()}
    assert set(transport_configs) == {"calendar", "todo"}
    assert transport_configs["calendar"].url == "http://calendar:8081"
    assert transport_configs["todo"].timeout_seconds == 2.5


def test_empty_urls_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("CALENDAR_URL", "")

    assert OrchestratorConfig.from_env().calendar_url == "http://localhost:8081"


@pytest.mark.parametrize("value", ["0", "-1"])
def test_non_positive_request_timeout_disables_deadline(monkeypatch, value):
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", value)

    assert OrchestratorConfig.from_env().request_timeout_seconds is None


def test_worker_config(monkeypatch):
    assert WorkerConfig.from_env().calendar_port == 8081
    monkeypatch.setenv("TODO_PORT", "9082")

    assert WorkerConfig.from_env().todo_port == 9082


@pytest.mark.parametrize("value", ["0", "-5"])
def test_non_positive_agent_timeout_rejected(monkeypatch, value):
    monkeypatch.setenv("AGENT_TIMEOUT_SECONDS", value)

    with pytest.raises(ValueError, match="AGENT_TIMEOUT_SECONDS must be positive"):
        OrchestratorConfig.from_env()
