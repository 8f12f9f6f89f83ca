"""Tests for lifecycle command recognition."""

import pytest

from takeoff_dictation.domain.entities.partial_record import PartialRecord
from takeoff_dictation.domain.services.command_recognizer import CommandRecognizer
from takeoff_dictation.domain.value_objects.lifecycle_signal import SignalType


@pytest.fixture
def recognizer():
    return CommandRecognizer()


@pytest.fixture
def filled_record():
    record = PartialRecord.empty()
    record.set_field("qty", 5)
    return record


class TestStopCapture:
    def test_stop_recording(self, recognizer):
        command = recognizer.recognize("stop recording", PartialRecord.empty())
        assert command.signal.signal_type is SignalType.STOP_CAPTURE
        assert command.unconsumed_text is None

    def test_words_anywhere(self, recognizer):
        command = recognizer.recognize("ok recording can stop now", PartialRecord.empty())
        assert command.signal.signal_type is SignalType.STOP_CAPTURE

    def test_reports_unconsumed_text(self, recognizer):
        command = recognizer.recognize("quantity 5 stop recording", PartialRecord.empty())
        assert command.signal.signal_type is SignalType.STOP_CAPTURE
        assert command.unconsumed_text == "quantity 5"

    def test_stop_wins_over_commit(self, recognizer, filled_record):
        command = recognizer.recognize("stop recording enter", filled_record)
        assert command.signal.signal_type is SignalType.STOP_CAPTURE


class TestCommit:
    @pytest.mark.parametrize("word", ["enter", "Done", "complete.", "finish!"])
    def test_commit_words(self, recognizer, filled_record, word):
        command = recognizer.recognize(word, filled_record)
        assert command.signal.signal_type is SignalType.COMMIT
        assert command.should_process is True

    def test_empty_record_not_actionable(self, recognizer):
        command = recognizer.recognize("enter", PartialRecord.empty())
        assert command.signal.signal_type is SignalType.COMMIT
        assert command.should_process is False

    def test_record_id_alone_is_actionable(self, recognizer):
        command = recognizer.recognize("enter", PartialRecord.empty(record_id="L3"))
        assert command.should_process is True

    def test_commit_word_inside_sentence_is_not_commit(self, recognizer, filled_record):
        command = recognizer.recognize("notes done by crew", filled_record)
        assert command.signal.signal_type is SignalType.NONE
        assert command.remainder == "notes done by crew"


class TestNewRecord:
    @pytest.mark.parametrize("text", ["new line", "Newline", "new line please"])
    def test_new_line(self, recognizer, text):
        command = recognizer.recognize(text, PartialRecord.empty())
        assert command.signal.signal_type is SignalType.NEW_RECORD


class TestAddressRecord:
    @pytest.mark.parametrize(
        "text,record_id",
        [
            ("line id 3", "L3"),
            ("line id three", "L3"),
            ("lineid twenty five", "L25"),
            ("line id one two", "L12"),
            ("line id L 4", "L4"),
            ("line id L4", "L4"),
            ("lineid3", "L3"),
            ("line id3", "L3"),
        ],
    )
    def test_record_ids(self, recognizer, text, record_id):
        command = recognizer.recognize(text, PartialRecord.empty())
        assert command.signal.signal_type is SignalType.ADDRESS_RECORD
        assert command.signal.record_id == record_id

    def test_prefix_needs_word_end(self, recognizer):
        command = recognizer.recognize("line identity 3", PartialRecord.empty())
        assert command.signal.signal_type is SignalType.NONE

    def test_remainder_after_id(self, recognizer):
        command = recognizer.recognize("line id three, quantity 5", PartialRecord.empty())
        assert command.signal.record_id == "L3"
        assert command.remainder == "quantity 5"

    def test_configured_prefix(self):
        recognizer = CommandRecognizer(line_id_prefix="R")
        command = recognizer.recognize("line id 7", PartialRecord.empty())
        assert command.signal.record_id == "R7"

    def test_line_id_without_number_is_not_a_command(self, recognizer):
        command = recognizer.recognize("line id please", PartialRecord.empty())
        assert command.signal.signal_type is SignalType.NONE
