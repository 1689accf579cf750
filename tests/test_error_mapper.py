import pytest

from agent_orchestrator.error_mapper import CLIENT_CLOSED_REQUEST, ErrorMapper
from agent_orchestrator.exceptions import (
    AgentNotRegistered,
    InvalidQuery,
    NoIntentMatched,
    RequestCancelled,
    TransportError,
    TransportTimeout,
    TransportUnavailable,
)


@pytest.mark.parametrize(
    "exc, error_type, status_code",
    [
        (InvalidQuery("invalid JSON"), "INVALID_QUERY", 400),
        (NoIntentMatched("could not parse intent"), "NO_INTENT_MATCHED", 400),
        (AgentNotRegistered("weather"), "AGENT_NOT_REGISTERED", 500),
        (TransportUnavailable("agent todo unreachable"), "TRANSPORT_UNAVAILABLE", 500),
        (TransportTimeout("agent todo timed out"), "TRANSPORT_TIMEOUT", 500),
        (TransportError("agent todo returned HTTP 502", status_code=502), "TRANSPORT_ERROR", 500),
        (RequestCancelled("client disconnected"), "REQUEST_CANCELLED", CLIENT_CLOSED_REQUEST),
    ],
)
def test_orchestrator_errors_mapped(exc, error_type, status_code):
    info = ErrorMapper.map_exception(exc)

    assert info.error_type == error_type
    assert info.status_code == status_code
    assert info.message == exc.message


def test_unknown_error_becomes_internal():
    info = ErrorMapper.map_exception(KeyError("secret detail"))

    assert info.error_type == "INTERNAL_ERROR"
    assert info.status_code == 500
    assert info.message == "internal error: KeyError"
    assert "secret" not in info.message


def test_is_client_error():
    assert ErrorMapper.map_exception(NoIntentMatched("x")).is_client_error
    assert not ErrorMapper.map_exception(TransportError("x")).is_client_error
