"""Timing and device utilities.

This module provides the real-time factor calculation, a wall-clock
timer used around transcription calls, and detection of the accelerator
available on the current machine.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass

import torch

logger = logging.getLogger(__name__)


def calculate_real_time_factor(audio_duration: float, processing_time: float) -> float:
    """Calculate the real-time factor of a transcription.

    Args:
        audio_duration: Audio duration in seconds
        processing_time: Wall-clock processing time in seconds

    Returns:
        audio_duration / processing_time, or 0.0 when processing_time is
        not positive
    """
    if processing_time > 0:
        return audio_duration / processing_time
    return 0.0


@dataclass
class Timing:
    """Wall-clock timing captured by measure_time().

    Attributes:
        elapsed: Elapsed time in seconds, set when the context exits
    """
    elapsed: float = 0.0

    def __str__(self) -> str:
        return f"{self.elapsed:.2f}s"


@contextmanager
def measure_time():
    """Context manager measuring wall-clock time of its body.

    The elapsed time is recorded even if the body raises.

    Example:
        >>> with measure_time() as timing:
        ...     result = backend.transcribe(handle, "audio.wav", options)
        >>> print(timing.elapsed)
    """
    timing = Timing()
    start_time = time.perf_counter()
    try:
        yield timing
    finally:
        timing.elapsed = time.perf_counter() - start_time


def detect_accelerator() -> str:
    """Return the accelerator device identifier for this machine.

    Prefers CUDA, then Apple Metal (MPS). Returns "mps" when neither is
    present.
    """
    if torch.cuda.is_available():
        logger.debug("CUDA is available")
        return "cuda"
    mps_backend = getattr(torch.backends, "mps", None)
    if mps_backend is not None and mps_backend.is_available():
        logger.debug("MPS is available")
        return "mps"
    logger.debug("No accelerator detected")
    return "mps"
