import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode
from prometheus_client import CollectorRegistry

from agent_orchestrator.exceptions import TransportError, TransportTimeout
from agent_orchestrator.models import StructuredRequest
from agent_orchestrator.nlu import KeywordIntentParser
from agent_orchestrator.orchestrator import Orchestrator
from agent_orchestrator.telemetry import NullMetrics, NullTracing, OrchestratorMetrics, OrchestratorTracing
from agent_orchestrator.telemetry.tracing import ATTR_ACTION, ATTR_AGENT, ATTR_ERROR_TYPE, ATTR_REQUEST_ID

def test_orchestrator_metrics_counters_and_render():
    metrics = OrchestratorMetrics(registry=CollectorRegistry())
    metrics.inc_agent_call("calendar")
    metrics.inc_agent_error("calendar", "TRANSPORT_TIMEOUT")
    metrics.observe_latency("calendar", 0.123)
    metrics.inc_query("transport_timeout")

    body, content_type = metrics.render()

    assert content_type.startswith("text/plain")
    assert 'agent_calls_total{agent="calendar"} 1.0' in body
    assert 'agent_errors_total{agent="calendar",error_type="TRANSPORT_TIMEOUT"} 1.0' in body
    assert 'agent_call_latency_seconds_count{agent="calendar"} 1.0' in body
    assert 'queries_total{outcome="transport_timeout"} 1.0' in body
    assert "agent_orchestrator_up" in body

def test_separate_registries_do_not_collide():
    OrchestratorMetrics()
    OrchestratorMetrics()

def test_null_metrics_is_noop():
    metrics = NullMetrics()
    metrics.inc_agent_call("x")
    metrics.inc_agent_error("x", "err")
    metrics.observe_latency("x", 0.1)
    metrics.inc_query("completed")
    body, content_type = metrics.render()
    assert "# monitoring disabled" in body
    assert content_type == "text/plain"


@pytest.fixture
def span_exporter():
    return InMemorySpanExporter()

@pytest.fixture
def tracing(span_exporter):
    return OrchestratorTracing(service_name="orchestrator-test", otel_endpoint=None, exporter=span_exporter)

def test_tracing_noop_without_config():
    request = StructuredRequest(agent="todo", action="add_task")
    with NullTracing().agent_span(request) as span:
        assert span is None

    tracing = OrchestratorTracing(service_name=None, otel_endpoint=None)
    assert not tracing.enabled
    with tracing.agent_span(request) as span:
        assert span is None
    tracing.shutdown()

    partial = OrchestratorTracing(service_name="orchestrator", otel_endpoint=None)
    assert not partial.enabled

def test_agent_span_attributes(tracing, span_exporter):
    request = StructuredRequest(agent="calendar", action="create_event")

    with tracing.agent_span(request):
        pass

    (span,) = span_exporter.get_finished_spans()
    assert span.name == "agent.calendar.handle"
    assert span.attributes[ATTR_AGENT] == "calendar"
    assert span.attributes[ATTR_ACTION] == "create_event"
    assert span.attributes[ATTR_REQUEST_ID] == request.id
    assert span.status.status_code == StatusCode.OK

def test_agent_span_records_error(tracing, span_exporter):
    request = StructuredRequest(agent="todo", action="add_task")

    with pytest.raises(TransportError):
        with tracing.agent_span(request):
            raise TransportError("agent todo returned HTTP 502")

    (span,) = span_exporter.get_finished_spans()
    assert span.status.status_code == StatusCode.ERROR
    assert span.attributes[ATTR_ERROR_TYPE] == "TRANSPORT_ERROR"
    assert [event.name for event in span.events] == ["exception"]

class TestOrchestratorSpans:
    """Span на каждый маршрутизированный вызов."""

    @pytest.mark.anyio
    async def test_one_span_per_routed_call(self, tracing, span_exporter, make_transport):
        orchestrator = Orchestrator(parser=KeywordIntentParser(), tracing=tracing)
        transport = make_transport("todo")
        orchestrator.register_agent("todo", transport)

        await orchestrator.handle_query("add a task")

        (span,) = span_exporter.get_finished_spans()
        assert span.name == "agent.todo.handle"
        assert span.attributes[ATTR_AGENT] == "todo"
        assert span.attributes[ATTR_ACTION] == "add_task"
        assert span.attributes[ATTR_REQUEST_ID] == transport.messages[0].id

    @pytest.mark.anyio
    async def test_no_span_without_routing(self, tracing, span_exporter, make_transport):
        orchestrator = Orchestrator(parser=KeywordIntentParser(), tracing=tracing)
        orchestrator.register_agent("todo", make_transport("todo"))

        with pytest.raises(Exception):
            await orchestrator.handle_query("hello there")

        assert span_exporter.get_finished_spans() == ()

    @pytest.mark.anyio
    async def test_timeout_recorded_on_span(self, tracing, span_exporter, make_transport):
        orchestrator = Orchestrator(
            parser=KeywordIntentParser(),
            tracing=tracing,
            request_timeout_seconds=0.05,
        )
        orchestrator.register_agent("calendar", make_transport("calendar", delay=1.0))

        with pytest.raises(TransportTimeout):
            await orchestrator.handle_query("schedule a meeting")

        (span,) = span_exporter.get_finished_spans()
        assert span.status.status_code == StatusCode.ERROR
        assert span.attributes[ATTR_ERROR_TYPE] == "TRANSPORT_TIMEOUT"

    @pytest.mark.anyio
    async def test_aclose_shuts_down_tracing(self, tracing, make_transport):
        orchestrator = Orchestrator(parser=KeywordIntentParser(), tracing=tracing)
        orchestrator.register_agent("todo", make_transport("todo"))

        await orchestrator.aclose()

        assert not tracing.enabled
