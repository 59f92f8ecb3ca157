"""Main transcription interface for whisper-bench.

This module provides the WhisperTranscriber class, which validates input
before anything reaches the model, times the call into the backend and
assembles the TranscriptionResult.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .backends import FasterWhisperBackend, TranscribeOptions, TranscriptionBackend
from .data_models import ModelConfig, TranscriptionResult
from .errors import InvalidPathError, UnsupportedFormatError
from .profiler import measure_time

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("wav", "mp3", "flac", "m4a", "ogg", "mp4", "webm")

PathLike = Union[str, os.PathLike]


def is_supported_audio(path: PathLike) -> bool:
    """Return True if path carries a recognized audio extension."""
    suffix = Path(path).suffix
    return suffix[1:].lower() in SUPPORTED_EXTENSIONS if suffix else False


class WhisperTranscriber:
    """Transcribes audio files with a validated model configuration.

    Each call loads a fresh model through the backend and releases it when
    the call returns.

    Example:
        >>> transcriber = WhisperTranscriber(ModelConfig("base", "cpu", "int8"))
        >>> result = transcriber.transcribe("audio.wav")
        >>> print(f"{result.real_time_factor:.1f}x real-time")

    Attributes:
        backend: Backend that loads and runs the model
        transcribe_options: Decoding options passed to the backend
    """

    def __init__(
        self,
        config: ModelConfig,
        backend: Optional[TranscriptionBackend] = None,
        transcribe_options: Optional[TranscribeOptions] = None,
    ):
        """Initialize the transcriber.

        Args:
            config: Model configuration
            backend: Model backend (default: FasterWhisperBackend)
            transcribe_options: Decoding options (default: TranscribeOptions())

        Raises:
            InvalidConfigurationError: If config is invalid
        """
        config.validate()

        self._config = config
        self.backend = backend if backend is not None else FasterWhisperBackend()
        self.transcribe_options = transcribe_options or TranscribeOptions()

    @classmethod
    def from_params(
        cls,
        model_size: str,
        device: str,
        compute_type: str,
        backend: Optional[TranscriptionBackend] = None,
    ) -> "WhisperTranscriber":
        return cls(ModelConfig(model_size, device, compute_type), backend=backend)

    @property
    def config(self) -> ModelConfig:
        return self._config

    def transcribe(self, audio_path: PathLike) -> TranscriptionResult:
        """Transcribe a single audio file.

        Args:
            audio_path: Path to an audio file with a supported extension

        Returns:
            TranscriptionResult with segments, full text and timing

        Raises:
            InvalidPathError: If the file does not exist
            UnsupportedFormatError: If the extension is missing or unsupported
            ModelInitializationError: If the model cannot be loaded
            TranscriptionFailedError: If the model fails on the audio
        """
        audio_path = self._check_audio_path(audio_path)

        logger.info(f"Starting transcription for: {audio_path}")

        with self.backend.load_model(self._config) as handle:
            # Only decoding is timed, not the model load
            with measure_time() as timing:
                raw = self.backend.transcribe(handle, audio_path, self.transcribe_options)

        result = TranscriptionResult(
            language=raw.language,
            language_probability=raw.language_probability,
            duration=raw.duration,
            segments=raw.segments,
            full_text=" ".join(s.text for s in raw.segments if s.text),
        )
        result.calculate_real_time_factor(timing.elapsed)

        logger.info(f"Transcription completed in {result.transcription_time:.2f}s")
        logger.info(
            f"Audio duration: {result.duration:.2f}s, "
            f"Real-time factor: {result.real_time_factor:.2f}x"
        )
        return result

    def test_initialization(self) -> None:
        """Load and release the model without processing any audio.

        Raises:
            ModelInitializationError: If the model cannot be loaded
        """
        logger.info("Testing model initialization...")
        with self.backend.load_model(self._config):
            pass
        logger.info("Model initialization successful")

    @staticmethod
    def _check_audio_path(audio_path: PathLike) -> str:
        path = Path(audio_path)

        if not path.exists():
            raise InvalidPathError(f"File does not exist: {path}")

        if not path.suffix:
            raise UnsupportedFormatError("no extension")
        extension = path.suffix[1:].lower()
        if extension not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFormatError(extension)

        return str(path)
