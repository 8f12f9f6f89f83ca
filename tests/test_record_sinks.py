"""Tests for committed-line delivery adapters."""

import json

import httpx
import pytest

from takeoff_dictation.adapters.http_sink import HttpRecordSink
from takeoff_dictation.adapters.memory_sink import InMemoryRecordSink
from takeoff_dictation.domain.entities.committed_line import CommittedLine
from takeoff_dictation.infrastructure.retry import RetryPolicy
from takeoff_dictation.ports.record_sink import RecordSink, RecordSinkError

NO_WAIT = RetryPolicy(max_attempts=3, initial_wait=0, max_wait=0, jitter=0)


@pytest.fixture
def line():
    return CommittedLine(record_id="L3", fields={"qty": 5, "shapeType": "W"})


def make_sink(responses, calls):
    """HttpRecordSink whose transport replays status codes (or exceptions) in order."""

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        outcome = responses[min(len(calls), len(responses)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome, json={})

    return HttpRecordSink(
        url="http://records.test/api/lines",
        retry_policy=NO_WAIT,
        transport=httpx.MockTransport(handler),
    )


class TestInMemorySink:
    @pytest.mark.asyncio
    async def test_keeps_lines_in_order(self, line):
        sink = InMemoryRecordSink()
        await sink.emit(line)
        await sink.emit(CommittedLine(record_id=None, fields={"qty": 1}))
        assert [saved.record_id for saved in sink.lines] == ["L3", None]

    def test_implements_port(self):
        assert isinstance(InMemoryRecordSink(), RecordSink)
        assert isinstance(HttpRecordSink(url="http://records.test"), RecordSink)


class TestHttpSink:
    @pytest.mark.asyncio
    async def test_posts_line_as_json(self, line):
        calls = []
        sink = make_sink([201], calls)
        await sink.emit(line)
        await sink.close()

        assert len(calls) == 1
        body = json.loads(calls[0].content)
        assert body["record_id"] == "L3"
        assert body["fields"] == {"qty": 5, "shapeType": "W"}
        assert "committed_at" in body

    @pytest.mark.asyncio
    async def test_retries_server_errors(self, line):
        calls = []
        sink = make_sink([503, 201], calls)
        await sink.emit(line)
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_retries_timeouts(self, line):
        calls = []
        sink = make_sink([httpx.ReadTimeout("slow store"), 200], calls)
        await sink.emit(line)
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, line):
        calls = []
        sink = make_sink([500], calls)
        with pytest.raises(RecordSinkError) as exc_info:
            await sink.emit(line)
        assert len(calls) == 3
        assert exc_info.value.record_id == "L3"

    @pytest.mark.asyncio
    async def test_client_errors_not_retried(self, line):
        calls = []
        sink = make_sink([422], calls)
        with pytest.raises(RecordSinkError):
            await sink.emit(line)
        assert len(calls) == 1
