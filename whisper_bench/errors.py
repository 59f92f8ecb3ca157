"""Error types raised by whisper-bench.

Every failure raised by the transcription layer is a subclass of
TranscriptionError.
"""


class TranscriptionError(Exception):
    """Base class for all whisper-bench errors."""

    prefix = "Transcription error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class InvalidConfigurationError(TranscriptionError, ValueError):
    """A model size, device or compute type outside its enumeration."""

    prefix = "Invalid configuration"


class InvalidPathError(TranscriptionError):
    """Audio file is missing or its path cannot be used."""

    prefix = "Invalid file path"


class UnsupportedFormatError(TranscriptionError):
    """Audio file extension is absent or not recognized."""

    prefix = "Unsupported audio format"


class ModelInitializationError(TranscriptionError):
    """The speech model could not be imported or loaded."""

    prefix = "Model initialization failed"


class TranscriptionFailedError(TranscriptionError):
    """The model loaded but transcribing the audio failed."""

    prefix = "Transcription failed"
