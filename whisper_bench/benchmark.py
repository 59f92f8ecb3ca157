"""Benchmark sweeps across model configurations.

This module provides the Benchmark class, which assembles an ordered sweep
of model configurations and runs the same transcription workload for each
of them, one at a time, to compare throughput.
"""

import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from .backends import FasterWhisperBackend, TranscribeOptions, TranscriptionBackend
from .data_models import BenchmarkResult, ModelConfig
from .transcriber import WhisperTranscriber

logger = logging.getLogger(__name__)

MODEL_SIZE_PROGRESSION = ("tiny", "base", "small", "medium")
COMPUTE_TYPE_PROGRESSION = ("float16", "float32")


class Benchmark:
    """Builds and runs a benchmark sweep.

    Sweep generators append to the existing sweep, so several calls compose
    into one run. Configurations are never removed or deduplicated and run
    in the order they were added.

    Example:
        >>> benchmark = Benchmark()
        >>> benchmark.add_device_comparison("base", "float16", accelerator="cuda")
        >>> benchmark.add_model_size_comparison("cuda", "float16")
        >>> results = benchmark.run("audio.wav")

    Attributes:
        backend_factory: Called once per configuration to build a fresh backend
        transcribe_options: Decoding options used for every run
    """

    def __init__(
        self,
        backend_factory: Optional[Callable[[], TranscriptionBackend]] = None,
        transcribe_options: Optional[TranscribeOptions] = None,
    ):
        self._configs: List[ModelConfig] = []
        self.backend_factory = backend_factory or FasterWhisperBackend
        self.transcribe_options = transcribe_options

    @property
    def configs(self) -> Tuple[ModelConfig, ...]:
        return tuple(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def add_config(self, config: ModelConfig):
        self._configs.append(config)

    def add_device_comparison(
        self,
        model_size: str,
        compute_type: str,
        accelerator: str = "mps",
    ):
        """Append a CPU run followed by an accelerator run.

        CPU always comes first so each pair can be matched up in the report.
        """
        self._configs.append(ModelConfig(model_size, "cpu", compute_type))
        self._configs.append(ModelConfig(model_size, accelerator, compute_type))

    def add_model_size_comparison(self, device: str, compute_type: str):
        """Append one run per model size from tiny up to medium."""
        for model_size in MODEL_SIZE_PROGRESSION:
            self._configs.append(ModelConfig(model_size, device, compute_type))

    def add_compute_type_comparison(self, model_size: str, device: str):
        """Append a float16 run and a float32 run."""
        for compute_type in COMPUTE_TYPE_PROGRESSION:
            self._configs.append(ModelConfig(model_size, device, compute_type))

    def run(self, audio_path: Union[str, Path]) -> List[BenchmarkResult]:
        """Run every configuration in the sweep against one audio file.

        Configurations run sequentially in sweep order. A configuration that
        fails (invalid, model load, warm-up or transcription) is reported to
        stderr and skipped; the sweep always continues.

        Args:
            audio_path: Audio file to transcribe for every configuration

        Returns:
            Records of the successful runs in sweep order, possibly empty
        """
        results = []
        total = len(self._configs)

        logger.info(f"Starting benchmark with {total} configurations")
        logger.info(f"Audio file: {audio_path}")

        for i, config in enumerate(self._configs):
            logger.info(
                f"Running benchmark {i + 1}/{total}: {config.model_size} on "
                f"{config.device} with {config.compute_type}"
            )

            try:
                result = self._run_single_benchmark(config, audio_path)
            except Exception as e:
                logger.error(f"Benchmark {i + 1}/{total} failed for {config.label}: {e}")
                print(f"Failed {config.label}: {e}", file=sys.stderr)
                continue

            logger.info(
                f"Completed: {result.transcription_time:.2f}s "
                f"({result.real_time_factor:.1f}x real-time)"
            )
            results.append(result)

        logger.info(f"Benchmark finished: {len(results)}/{total} configurations succeeded")
        return results

    def _run_single_benchmark(
        self,
        config: ModelConfig,
        audio_path: Union[str, Path],
    ) -> BenchmarkResult:
        transcriber = WhisperTranscriber(
            config,
            backend=self.backend_factory(),
            transcribe_options=self.transcribe_options,
        )

        # Warm-up, not counted in the benchmark
        transcriber.test_initialization()

        result = transcriber.transcribe(audio_path)
        return BenchmarkResult.from_transcription(config, result)
