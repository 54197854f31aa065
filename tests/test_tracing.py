"""Tests for tracing setup and the local trace processors."""

import json
import logging
from types import SimpleNamespace

from promptform import tracing
from promptform.config import PromptFormConfig
from promptform.orchestrator import FormGenerationOrchestrator
from promptform.tracing import FileTracingProcessor, LoggingTracingProcessor, setup_tracing


def _trace(trace_id="trace_0123456789abcdef", name="form_generation"):
    return SimpleNamespace(trace_id=trace_id, name=name)


def _span(trace_id="trace_0123456789abcdef", span_id="span_1", data="AgentSpanData(name='Form Generator')"):
    return SimpleNamespace(trace_id=trace_id, span_id=span_id, span_data=data)


class TestFileTracingProcessor:
    """Tests for the JSON Lines processor."""

    def test_writes_one_line_per_trace(self, tmp_path):
        path = tmp_path / "traces.jsonl"
        processor = FileTracingProcessor(file_path=str(path))

        processor.on_trace_start(_trace())
        processor.on_span_start(_span())
        processor.on_span_end(_span())
        processor.on_trace_end(_trace())

        records = [json.loads(line) for line in path.read_text().splitlines()]
        assert records == [{
            "trace_id": "trace_0123456789abcdef",
            "name": "form_generation",
            "spans": [{"span_id": "span_1", "data": "AgentSpanData(name='Form Generator')"}],
        }]

    def test_appends_across_traces(self, tmp_path):
        path = tmp_path / "traces.jsonl"
        processor = FileTracingProcessor(file_path=str(path))
        for trace_id in ("trace_a", "trace_b"):
            processor.on_trace_start(_trace(trace_id))
            processor.on_trace_end(_trace(trace_id))

        assert [json.loads(line)["trace_id"] for line in path.read_text().splitlines()] == ["trace_a", "trace_b"]

    def test_spans_of_unknown_traces_ignored(self, tmp_path):
        """Test a span without a started trace writes nothing."""
        path = tmp_path / "traces.jsonl"
        processor = FileTracingProcessor(file_path=str(path))
        processor.on_span_end(_span(trace_id="trace_unknown"))
        processor.on_trace_end(_trace("trace_unknown"))
        assert not path.exists()


class TestLoggingTracingProcessor:
    def test_logs_trace_boundaries(self, caplog):
        processor = LoggingTracingProcessor()
        with caplog.at_level(logging.INFO, logger="promptform.tracing"):
            processor.on_trace_start(_trace())
            processor.on_trace_end(_trace())

        assert "[TRACE START] form_generation (ID: trace_01...)" in caplog.messages
        assert "[TRACE END] form_generation" in caplog.messages

    def test_spans_logged_only_when_verbose(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="promptform.tracing"):
            LoggingTracingProcessor(verbose=False).on_span_end(_span())
            assert caplog.messages == []
            LoggingTracingProcessor(verbose=True).on_span_end(_span())

        assert caplog.messages == ["[SPAN END] AgentSpanData(name='Form Generator')"]


class TestSetupTracing:
    """Tests for setup_tracing."""

    def _capture(self, monkeypatch):
        calls = {"disabled": [], "processors": []}
        monkeypatch.setattr(tracing, "set_tracing_disabled", calls["disabled"].append)
        monkeypatch.setattr(tracing, "set_trace_processors", calls["processors"].append)
        return calls

    def test_disabled(self, monkeypatch):
        calls = self._capture(monkeypatch)
        setup_tracing(enabled=False, console=True, file_path="traces.jsonl")
        assert calls["disabled"] == [True]
        assert calls["processors"] == []

    def test_console_and_file(self, monkeypatch, tmp_path):
        calls = self._capture(monkeypatch)
        setup_tracing(console=True, verbose=True, file_path=str(tmp_path / "t.jsonl"))

        assert calls["disabled"] == [False]
        [processors] = calls["processors"]
        assert isinstance(processors[0], LoggingTracingProcessor)
        assert processors[0].verbose is True
        assert isinstance(processors[1], FileTracingProcessor)
        assert processors[1].file_path == str(tmp_path / "t.jsonl")

    def test_default_processors_kept(self, monkeypatch):
        """Test nothing is replaced when no local processor is requested."""
        calls = self._capture(monkeypatch)
        setup_tracing()
        assert calls["processors"] == []


class TestTracingConfig:
    """Trace settings flow from the environment to setup_tracing."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PROMPTFORM_TRACE_CONSOLE", "true")
        monkeypatch.setenv("PROMPTFORM_TRACE_VERBOSE", "true")
        monkeypatch.setenv("PROMPTFORM_TRACE_FILE", "/var/log/promptform/traces.jsonl")

        config = PromptFormConfig.from_env()
        assert config.trace_console is True
        assert config.trace_verbose is True
        assert config.trace_file == "/var/log/promptform/traces.jsonl"

    def test_defaults(self, monkeypatch):
        for name in ("PROMPTFORM_TRACE_CONSOLE", "PROMPTFORM_TRACE_VERBOSE", "PROMPTFORM_TRACE_FILE"):
            monkeypatch.delenv(name, raising=False)

        config = PromptFormConfig.from_env()
        assert config.trace_console is False
        assert config.trace_file is None

    def test_orchestrator_passes_settings(self, monkeypatch, store, provider, tmp_path):
        seen = []
        monkeypatch.setattr("promptform.orchestrator.setup_tracing", lambda **kwargs: seen.append(kwargs))
        config = PromptFormConfig(trace_console=True, trace_file=str(tmp_path / "t.jsonl"))

        FormGenerationOrchestrator(store, provider=provider, config=config)

        assert seen == [{
            "enabled": True,
            "console": True,
            "verbose": False,
            "file_path": str(tmp_path / "t.jsonl"),
        }]
