"""
Pytest fixtures shared by the dictation tests.
"""

import pytest

from takeoff_dictation.domain.entities.partial_record import PartialRecord
from takeoff_dictation.domain.services.capture_session import CaptureSession
from takeoff_dictation.domain.services.field_registry import FieldRegistry
from takeoff_dictation.domain.services.interpreter import DictationInterpreter
from takeoff_dictation.domain.services.line_id_allocator import LineIdAllocator
from takeoff_dictation.domain.services.value_normalizer import ValueNormalizer
from takeoff_dictation.domain.value_objects.transcript import Transcript


@pytest.fixture
def registry():
    """Registry built from the default field table."""
    return FieldRegistry()


@pytest.fixture
def normalizer():
    return ValueNormalizer()


@pytest.fixture
def interpreter(registry, normalizer):
    return DictationInterpreter(registry=registry, normalizer=normalizer)


@pytest.fixture
def dictate(interpreter):
    """Feed utterances one by one; returns (final record, last result)."""

    def _dictate(*utterances, record=None):
        record = record or PartialRecord.empty()
        result = None
        for utterance in utterances:
            result = interpreter.interpret(utterance, record)
            record = result.record
        return record, result

    return _dictate


@pytest.fixture
def session(interpreter):
    """Capture session with an empty accumulator and no known lines."""
    return CaptureSession(interpreter=interpreter, allocator=LineIdAllocator())


@pytest.fixture
def speak(session):
    """Feed final fragments to the session fixture; returns every outcome."""

    def _speak(*texts):
        return [session.handle(Transcript(text=t, is_final=True)) for t in texts]

    return _speak
