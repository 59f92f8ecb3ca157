"""Transcription backends.

A backend is the bridge between whisper-bench and the runtime hosting the
actual speech model. The rest of the package only talks to the abstract
TranscriptionBackend interface, so a backend that shells out or calls into
another runtime can be dropped in without touching the benchmark logic.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .data_models import ModelConfig, TranscriptionSegment
from .errors import ModelInitializationError, TranscriptionFailedError

logger = logging.getLogger(__name__)

# faster-whisper selects CUDA or Metal itself when given "auto"
_FASTER_WHISPER_DEVICES = {
    "auto": "auto",
    "cpu": "cpu",
    "cuda": "auto",
    "mps": "auto",
}


@dataclass
class TranscribeOptions:
    """Decoding options passed to the model.

    Attributes:
        beam_size: Beam width for beam search
        word_timestamps: Whether to compute word-level timestamps
        vad_filter: Whether to skip non-speech with voice activity detection
        vad_parameters: Extra options for the VAD filter
    """
    beam_size: int = 5
    word_timestamps: bool = True
    vad_filter: bool = True
    vad_parameters: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RawTranscription:
    """What a backend returns for one audio file, before timing is applied."""
    language: str
    language_probability: float
    duration: float
    segments: List[TranscriptionSegment]


class ModelHandle:
    """A loaded model with an explicit lifetime.

    Use as a context manager; the model reference is dropped on exit so the
    runtime can free it. Handles are never shared between configurations.
    """

    def __init__(self, model: Any, config: ModelConfig):
        self.model = model
        self.config = config

    @property
    def released(self) -> bool:
        return self.model is None

    def release(self):
        if self.model is not None:
            logger.debug(f"Releasing model {self.config.label}")
        self.model = None

    def __enter__(self) -> "ModelHandle":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False


class TranscriptionBackend(ABC):
    """Interface every speech model backend implements."""

    @abstractmethod
    def load_model(self, config: ModelConfig) -> ModelHandle:
        """Load the model described by config.

        Raises:
            ModelInitializationError: If the runtime is missing or the
                model cannot be loaded
        """

    @abstractmethod
    def transcribe(
        self,
        handle: ModelHandle,
        audio_path: str,
        options: TranscribeOptions,
    ) -> RawTranscription:
        """Transcribe audio_path with an already loaded model.

        Raises:
            TranscriptionFailedError: If the model fails on this audio
        """


class FasterWhisperBackend(TranscriptionBackend):
    """Backend running models through faster-whisper (CTranslate2).

    Example:
        >>> backend = FasterWhisperBackend()
        >>> with backend.load_model(ModelConfig("base", "cpu", "int8")) as handle:
        ...     raw = backend.transcribe(handle, "audio.wav", TranscribeOptions())
    """

    def __init__(self, download_root: Optional[str] = None):
        self.download_root = download_root

    def load_model(self, config: ModelConfig) -> ModelHandle:
        try:
            import faster_whisper
        except ImportError as e:
            raise ModelInitializationError(
                "Failed to import faster_whisper. "
                f"Install with: pip install faster-whisper. Error: {e}"
            ) from e

        device = _FASTER_WHISPER_DEVICES.get(config.device, "auto")
        logger.info(
            f"Initializing faster-whisper model: {config.model_size} on "
            f"{config.device} with compute_type: {config.compute_type}"
        )

        try:
            model = faster_whisper.WhisperModel(
                config.model_size,
                device=device,
                compute_type=config.compute_type,
                download_root=self.download_root,
            )
        except Exception as e:
            raise ModelInitializationError(f"Failed to initialize model: {e}") from e

        return ModelHandle(model, config)

    def transcribe(
        self,
        handle: ModelHandle,
        audio_path: str,
        options: TranscribeOptions,
    ) -> RawTranscription:
        if handle.released:
            raise TranscriptionFailedError("Model handle has already been released")

        try:
            # Segments are produced lazily; decoding happens while iterating
            segments_iter, info = handle.model.transcribe(
                audio_path,
                beam_size=options.beam_size,
                word_timestamps=options.word_timestamps,
                vad_filter=options.vad_filter,
                vad_parameters=options.vad_parameters,
            )
            segments = [
                TranscriptionSegment(
                    start=segment.start,
                    end=segment.end,
                    text=segment.text.strip(),
                    no_speech_prob=segment.no_speech_prob,
                )
                for segment in segments_iter
            ]
        except Exception as e:
            raise TranscriptionFailedError(str(e)) from e

        return RawTranscription(
            language=info.language,
            language_probability=info.language_probability,
            duration=info.duration,
            segments=segments,
        )
