"""Core data models for whisper-bench.

This module defines the model configuration value, the transcription
output produced by a backend, and the flattened benchmark record used
for comparison and persistence.
"""

from dataclasses import asdict, dataclass, field
from typing import List, Optional

from .errors import InvalidConfigurationError
from .profiler import calculate_real_time_factor

MODEL_SIZES = ("tiny", "base", "small", "medium", "large-v2", "large-v3")
DEVICES = ("auto", "cpu", "cuda", "mps")
COMPUTE_TYPES = ("float16", "float32", "int8")


@dataclass(frozen=True)
class ModelConfig:
    """Model size, device and precision for a single transcription run.

    Construction does not validate; call validate() before use. This allows
    a sweep to be assembled first and checked configuration by configuration.

    Attributes:
        model_size: Whisper model size (see MODEL_SIZES)
        device: Device to run on (see DEVICES)
        compute_type: Numeric precision (see COMPUTE_TYPES)
    """
    model_size: str = "medium"
    device: str = "auto"
    compute_type: str = "float16"

    @property
    def label(self) -> str:
        """Short "size/device/compute" name used in logs and failure lines."""
        return f"{self.model_size}/{self.device}/{self.compute_type}"

    def is_valid_model_size(self) -> bool:
        """Check if model_size is one of MODEL_SIZES."""
        return self.model_size in MODEL_SIZES

    def is_valid_device(self) -> bool:
        """Check if device is one of DEVICES."""
        return self.device in DEVICES

    def is_valid_compute_type(self) -> bool:
        """Check if compute_type is one of COMPUTE_TYPES."""
        return self.compute_type in COMPUTE_TYPES

    def validate(self) -> None:
        """Check every field against its enumeration.

        Fields are checked in order (model size, device, compute type) and
        the first invalid one is reported.

        Raises:
            InvalidConfigurationError: If any field is not recognized
        """
        if not self.is_valid_model_size():
            raise InvalidConfigurationError(f"Invalid model size: {self.model_size}")
        if not self.is_valid_device():
            raise InvalidConfigurationError(f"Invalid device: {self.device}")
        if not self.is_valid_compute_type():
            raise InvalidConfigurationError(f"Invalid compute type: {self.compute_type}")


@dataclass
class TranscriptionSegment:
    """A transcribed segment with timing information.

    Attributes:
        start: Start time in seconds
        end: End time in seconds
        text: Transcribed text, stripped of surrounding whitespace
        no_speech_prob: Model's probability that the segment holds no speech
    """
    start: float
    end: float
    text: str
    no_speech_prob: float


@dataclass
class TranscriptionResult:
    """Output of one transcription call.

    transcription_time is the wall-clock time measured around the backend
    call, not a figure reported by the model.

    Attributes:
        language: Detected language code
        language_probability: Confidence of the language detection (0.0-1.0)
        duration: Audio duration in seconds
        segments: Transcribed segments in the order the model produced them
        full_text: Segment texts joined with single spaces
        transcription_time: Wall-clock transcription time in seconds
        real_time_factor: duration / transcription_time, 0.0 if time <= 0
    """
    language: str
    language_probability: float
    duration: float
    segments: List[TranscriptionSegment] = field(default_factory=list)
    full_text: str = ""
    transcription_time: float = 0.0
    real_time_factor: float = 0.0

    def calculate_real_time_factor(self, transcription_time: float) -> None:
        """Record the measured time and derive the real-time factor from it."""
        self.transcription_time = transcription_time
        self.real_time_factor = calculate_real_time_factor(
            self.duration, transcription_time
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary, segments included."""
        return asdict(self)


@dataclass(frozen=True)
class BenchmarkResult:
    """Flattened snapshot of one successful benchmark run.

    memory_usage_mb and accuracy_score are reserved for future
    instrumentation and are always None for now.
    """
    model_size: str
    device: str
    compute_type: str
    audio_duration: float
    transcription_time: float
    real_time_factor: float
    memory_usage_mb: Optional[float] = None
    accuracy_score: Optional[float] = None
    segments_count: int = 0

    @classmethod
    def from_transcription(
        cls,
        config: ModelConfig,
        result: TranscriptionResult,
    ) -> "BenchmarkResult":
        """Build a record from the configuration and its transcription."""
        return cls(
            model_size=config.model_size,
            device=config.device,
            compute_type=config.compute_type,
            audio_duration=result.duration,
            transcription_time=result.transcription_time,
            real_time_factor=result.real_time_factor,
            memory_usage_mb=None,
            accuracy_score=None,
            segments_count=len(result.segments),
        )

    def to_dict(self) -> dict:
        """Convert to the JSON record layout, with unset metrics as None."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "BenchmarkResult":
        """Build a record from a dictionary written by to_dict.

        Args:
            data: Parsed JSON object. memory_usage_mb and accuracy_score may
                be null or missing.

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            model_size=data["model_size"],
            device=data["device"],
            compute_type=data["compute_type"],
            audio_duration=float(data["audio_duration"]),
            transcription_time=float(data["transcription_time"]),
            real_time_factor=float(data["real_time_factor"]),
            memory_usage_mb=_optional_float(data.get("memory_usage_mb")),
            accuracy_score=_optional_float(data.get("accuracy_score")),
            segments_count=int(data["segments_count"]),
        )


def _optional_float(value) -> Optional[float]:
    return None if value is None else float(value)
