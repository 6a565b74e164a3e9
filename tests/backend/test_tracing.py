"""Tests for RequestTracer."""

import json

from creator_studio.backend.tracing import RequestTracer


class TestRequestTracer:
    def test_disabled_without_debug_dir(self, tmp_path):
        tracer = RequestTracer()

        tracer.save_debug("trace", "request.json", {"a": 1})

        assert tracer.debug_dir is None
        assert list(tmp_path.iterdir()) == []

    def test_trace_ids_are_sequential(self):
        tracer = RequestTracer()

        first = tracer.generate_trace_id("generateContent", "review of a new laptop")
        second = tracer.generate_trace_id("getOperation")

        assert first.startswith("00001_")
        assert first.endswith("_generateContent_review_of_a")
        assert second.startswith("00002_")
        assert second.endswith("_getOperation_request")

    def test_trace_id_strips_punctuation(self):
        trace_id = RequestTracer().generate_trace_id("op", "what's/new?")
        assert trace_id.endswith("_op_whatsn")

    def test_save_debug(self, tmp_path):
        tracer = RequestTracer(debug_dir=tmp_path)

        tracer.save_debug("00001_trace", "request.json", {"prompt": "hi"})

        path = tracer.debug_dir / "00001_trace" / "request.json"
        assert json.loads(path.read_text()) == {"prompt": "hi"}
        assert path.is_relative_to(tmp_path / "logs")

    def test_save_debug_oserror_logged(self, tmp_path, caplog):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        tracer = RequestTracer(debug_dir=blocker)

        tracer.save_debug("trace", "request.json", {})

        assert "Failed to save debug file" in caplog.text
