"""Shared fixtures for whisper-bench tests.

No test loads a real speech model: FakeBackend stands in for a backend, and
the fake_faster_whisper fixture installs a stand-in faster_whisper module so
the real FasterWhisperBackend code path can run.
"""

import sys
import types
from types import SimpleNamespace

import pytest

from whisper_bench.backends import ModelHandle, RawTranscription, TranscriptionBackend
from whisper_bench.data_models import TranscriptionSegment
from whisper_bench.errors import ModelInitializationError, TranscriptionFailedError


class FakeBackend(TranscriptionBackend):
    """Backend returning canned transcriptions and recording its calls."""

    def __init__(
        self,
        duration=30.0,
        texts=("Hello there.", "General Kenobi."),
        fail_load_for=(),
        fail_transcribe_for=(),
    ):
        self.duration = duration
        self.texts = texts
        self.fail_load_for = set(fail_load_for)
        self.fail_transcribe_for = set(fail_transcribe_for)
        self.loaded = []
        self.transcribed = []
        self.handles = []

    def load_model(self, config):
        if config.model_size in self.fail_load_for:
            raise ModelInitializationError(f"cannot load {config.model_size}")
        self.loaded.append(config)
        handle = ModelHandle(object(), config)
        self.handles.append(handle)
        return handle

    def transcribe(self, handle, audio_path, options):
        if handle.config.model_size in self.fail_transcribe_for:
            raise TranscriptionFailedError(f"decode error on {audio_path}")
        self.transcribed.append((handle.config, audio_path, options))
        step = self.duration / max(len(self.texts), 1)
        segments = [
            TranscriptionSegment(
                start=i * step,
                end=(i + 1) * step,
                text=text,
                no_speech_prob=0.01,
            )
            for i, text in enumerate(self.texts)
        ]
        return RawTranscription(
            language="en",
            language_probability=0.98,
            duration=self.duration,
            segments=segments,
        )


@pytest.fixture
def fake_backend_cls():
    return FakeBackend


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "sample.wav"
    path.write_bytes(b"RIFF fake audio data")
    return path


class _FakeWhisperModel:
    instances = []

    def __init__(self, model_size, device="auto", compute_type="default", download_root=None):
        if model_size == "broken-load":
            raise RuntimeError("model files are corrupt")
        self.model_size = model_size
        self.device = device
        self.compute_type = compute_type
        self.transcribe_kwargs = None
        _FakeWhisperModel.instances.append(self)

    def transcribe(self, audio, **kwargs):
        self.transcribe_kwargs = kwargs
        if "broken" in str(audio):
            raise RuntimeError("Invalid data found when processing input")

        def segments():
            yield SimpleNamespace(start=0.0, end=2.5, text="  Hello world. ", no_speech_prob=0.02)
            yield SimpleNamespace(start=2.5, end=4.0, text=" Second line.", no_speech_prob=0.1)

        info = SimpleNamespace(language="en", language_probability=0.95, duration=4.0)
        return segments(), info


@pytest.fixture
def fake_faster_whisper(monkeypatch):
    """Install a stand-in faster_whisper module for the duration of a test."""
    module = types.ModuleType("faster_whisper")
    _FakeWhisperModel.instances = []
    module.WhisperModel = _FakeWhisperModel
    monkeypatch.setitem(sys.modules, "faster_whisper", module)
    return module
