"""whisper-bench: faster-whisper transcription and throughput benchmarking.

This module provides a validated transcription interface on top of
faster-whisper and a benchmark harness comparing model sizes, devices and
compute types.

Example:
    >>> from whisper_bench import Benchmark, print_comparison
    >>> benchmark = Benchmark()
    >>> benchmark.add_device_comparison("base", "float16", accelerator="cuda")
    >>> results = benchmark.run("audio.wav")
    >>> print_comparison(results, accelerator="cuda")
"""

from .backends import (
    FasterWhisperBackend,
    ModelHandle,
    RawTranscription,
    TranscribeOptions,
    TranscriptionBackend,
)
from .batch_processor import BatchProcessor, FileOutcome, find_audio_files
from .benchmark import Benchmark
from .data_models import (
    BenchmarkResult,
    ModelConfig,
    TranscriptionResult,
    TranscriptionSegment,
)
from .errors import (
    InvalidConfigurationError,
    InvalidPathError,
    ModelInitializationError,
    TranscriptionError,
    TranscriptionFailedError,
    UnsupportedFormatError,
)
from .profiler import calculate_real_time_factor, detect_accelerator, measure_time
from .report import (
    SpeedupComparison,
    compute_speedups,
    find_fastest,
    load_results_json,
    print_comparison,
    save_results_json,
)
from .transcriber import SUPPORTED_EXTENSIONS, WhisperTranscriber

__version__ = "0.1.0"

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "BatchProcessor",
    "Benchmark",
    "BenchmarkResult",
    "FasterWhisperBackend",
    "FileOutcome",
    "InvalidConfigurationError",
    "InvalidPathError",
    "ModelConfig",
    "ModelHandle",
    "ModelInitializationError",
    "RawTranscription",
    "SpeedupComparison",
    "TranscribeOptions",
    "TranscriptionBackend",
    "TranscriptionError",
    "TranscriptionFailedError",
    "TranscriptionResult",
    "TranscriptionSegment",
    "UnsupportedFormatError",
    "WhisperTranscriber",
    "calculate_real_time_factor",
    "compute_speedups",
    "detect_accelerator",
    "find_audio_files",
    "find_fastest",
    "load_results_json",
    "measure_time",
    "print_comparison",
    "save_results_json",
]
