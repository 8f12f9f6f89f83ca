"""Tests for the capture session that owns the accumulator."""

import logging

import pytest

from takeoff_dictation.adapters.scripted_source import ScriptedTranscriptSource
from takeoff_dictation.domain.entities.partial_record import PartialRecord
from takeoff_dictation.domain.services.capture_session import (
    CaptureSession,
    CaptureSessionClosedError,
)
from takeoff_dictation.domain.services.line_id_allocator import (
    LineIdAllocator,
    extract_line_number,
)
from takeoff_dictation.domain.value_objects.lifecycle_signal import SignalType
from takeoff_dictation.domain.value_objects.transcript import Transcript


class TestInterimFragments:
    def test_interim_only_updates_preview(self, session):
        outcome = session.handle(Transcript(text="quantity 5", is_final=False))
        assert outcome is None
        assert session.preview_text == "quantity 5"
        assert session.record == PartialRecord.empty()

    def test_interim_commit_word_never_commits(self, session, speak):
        speak("quantity 5")
        session.handle(Transcript(text="enter", is_final=False))
        assert session.committed_lines == []
        assert session.record.fields == {"qty": 5}

    def test_final_clears_preview(self, session, speak):
        session.handle(Transcript(text="quant", is_final=False))
        speak("quantity 5")
        assert session.preview_text == ""


class TestCommit:
    def test_commit_hands_off_and_resets(self, session, speak):
        outcomes = speak("quantity 5", "length 20 feet", "enter")
        committed = outcomes[-1].committed
        assert committed.fields == {"qty": 5, "lengthFt": 20}
        assert committed.record_id is None
        assert session.committed_lines == [committed]
        assert session.record == PartialRecord.empty()
        assert outcomes[-1].record == PartialRecord.empty()

    def test_enter_after_reset_is_noop(self, session, speak):
        outcomes = speak("quantity 5", "enter", "enter")
        assert outcomes[-1].signal.signal_type is SignalType.COMMIT
        assert outcomes[-1].should_process is False
        assert outcomes[-1].committed is None
        assert len(session.committed_lines) == 1

    def test_commit_targets_addressed_record(self, session, speak):
        outcomes = speak("line id 7, quantity 2", "enter")
        assert outcomes[-1].committed.record_id == "L7"
        assert outcomes[-1].committed.fields == {"qty": 2}


class TestNewRecord:
    def test_allocates_next_line_id(self, interpreter):
        session = CaptureSession(
            interpreter=interpreter,
            allocator=LineIdAllocator(known_ids=["L1", "L4"]),
        )
        session.handle(Transcript(text="new line", is_final=True))
        assert session.record.record_id == "L5"
        session.handle(Transcript(text="new line", is_final=True))
        assert session.record.record_id == "L6"

    def test_allocation_skips_addressed_ids(self, session, speak):
        speak("line id 7, quantity 2", "enter", "new line")
        assert session.record.record_id == "L8"

    def test_discarded_fields_logged(self, session, speak, caplog):
        with caplog.at_level(logging.WARNING):
            speak("quantity 5", "new line")
        assert "Discarding 1 uncommitted fields" in caplog.text
        assert session.record.fields == {}


class TestStop:
    def test_voice_stop_closes_session(self, session, speak):
        outcomes = speak("quantity 5", "stop recording")
        assert outcomes[-1].signal.signal_type is SignalType.STOP_CAPTURE
        assert session.closed is True
        assert session.record.fields == {"qty": 5}

    def test_fragments_after_stop_rejected(self, session, speak):
        speak("stop recording")
        with pytest.raises(CaptureSessionClosedError):
            speak("quantity 5")

    def test_stop_parses_pending_preview(self, session):
        session.handle(Transcript(text="quantity 5", is_final=False))
        outcome = session.stop()
        assert outcome.signal.signal_type is SignalType.STOP_CAPTURE
        assert outcome.record.fields == {"qty": 5}
        assert session.closed is True
        assert session.preview_text == ""

    def test_stop_ignores_commands_in_preview(self, session, speak):
        speak("quantity 5")
        session.handle(Transcript(text="enter", is_final=False))
        outcome = session.stop()
        assert session.committed_lines == []
        assert outcome.notice is not None
        assert outcome.record.fields == {"qty": 5}

    def test_stop_twice_rejected(self, session):
        session.stop()
        with pytest.raises(CaptureSessionClosedError):
            session.stop()


class TestDrain:
    @pytest.mark.asyncio
    async def test_drains_in_order_until_stop(self, session):
        source = ScriptedTranscriptSource(
            [
                "material",
                Transcript(text="quan", is_final=False),
                "quantity 5",
                "enter",
                "stop recording",
                "quantity 9",
            ]
        )
        outcomes = [outcome async for outcome in session.drain(source.fragments())]

        signals = [o.signal.signal_type for o in outcomes]
        assert signals == [
            SignalType.NONE,
            SignalType.NONE,
            SignalType.COMMIT,
            SignalType.STOP_CAPTURE,
        ]
        assert session.committed_lines[0].fields == {"qty": 5}
        assert session.closed is True


class TestLineIdAllocator:
    @pytest.mark.parametrize("line_id,number", [("L1", 1), ("L10", 10), ("L1-L10", 10), ("X", 0)])
    def test_extract_line_number(self, line_id, number):
        assert extract_line_number(line_id) == number

    def test_starts_at_one(self):
        assert LineIdAllocator().next_id() == "L1"

    def test_copy_ids_rank_by_trailing_number(self):
        allocator = LineIdAllocator(known_ids=["L1-L10", "L3"])
        assert allocator.next_id() == "L11"

    def test_custom_prefix(self):
        allocator = LineIdAllocator(prefix="R", known_ids=["R2"])
        assert allocator.next_id() == "R3"
        assert allocator.is_known("R3")
