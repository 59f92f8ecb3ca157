"""Benchmark comparison report and result persistence.

Produces:
- Console table of every successful run
- Fastest configuration (highest real-time factor)
- Accelerator vs CPU speedup for configurations differing only by device
- JSON array of records for comparison across runs
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np

from .data_models import BenchmarkResult


@dataclass(frozen=True)
class SpeedupComparison:
    """Accelerator vs CPU result for one model size and compute type."""
    model_size: str
    compute_type: str
    accelerator: str
    cpu_real_time_factor: float
    accelerator_real_time_factor: float
    speedup: float


def find_fastest(results: Sequence[BenchmarkResult]) -> Optional[BenchmarkResult]:
    """Return the record with the highest real-time factor.

    Ties go to the earliest record. Returns None for an empty sequence.
    """
    if not results:
        return None
    # np.argmax returns the first index on ties
    rtfs = np.array([r.real_time_factor for r in results], dtype=float)
    return results[int(np.argmax(rtfs))]


def compute_speedups(
    results: Sequence[BenchmarkResult],
    accelerator: str = "mps",
) -> List[SpeedupComparison]:
    """Pair accelerator records with CPU records of the same model and precision.

    For each accelerator record the first CPU record with the same model size
    and compute type is used. Records without a partner produce no row, and
    neither does a partner whose CPU real-time factor is zero.
    """
    cpu_results = [r for r in results if r.device == "cpu"]
    accel_results = [r for r in results if r.device == accelerator]

    comparisons = []
    for accel in accel_results:
        cpu = next(
            (
                c for c in cpu_results
                if c.model_size == accel.model_size
                and c.compute_type == accel.compute_type
            ),
            None,
        )
        if cpu is None or cpu.real_time_factor <= 0:
            continue
        comparisons.append(
            SpeedupComparison(
                model_size=accel.model_size,
                compute_type=accel.compute_type,
                accelerator=accelerator,
                cpu_real_time_factor=cpu.real_time_factor,
                accelerator_real_time_factor=accel.real_time_factor,
                speedup=accel.real_time_factor / cpu.real_time_factor,
            )
        )
    return comparisons


def format_comparison(
    results: Sequence[BenchmarkResult],
    accelerator: str = "mps",
) -> str:
    """Render the comparison table and derived insights as text."""
    lines = [
        "",
        "Benchmark Results Comparison",
        f"{'Model':<10} {'Device':<8} {'Compute':<10} {'Audio':<9} "
        f"{'Transcr.':<12} {'RT Factor':<10} {'Segments':<8}",
        "-" * 80,
    ]

    for result in results:
        lines.append(
            f"{result.model_size:<10} "
            f"{result.device:<8} "
            f"{result.compute_type:<10} "
            f"{result.audio_duration:<8.1f}s "
            f"{result.transcription_time:<11.2f}s "
            f"{result.real_time_factor:<9.1f}x "
            f"{result.segments_count:<8}"
        )

    fastest = find_fastest(results)
    if fastest is not None:
        lines.append("")
        lines.append("Fastest Configuration:")
        lines.append(
            f"   {fastest.model_size} on {fastest.device} with "
            f"{fastest.compute_type} - {fastest.real_time_factor:.1f}x real-time"
        )

    speedups = compute_speedups(results, accelerator)
    if speedups:
        lines.append("")
        lines.append(f"{accelerator.upper()} vs CPU Performance:")
        for row in speedups:
            lines.append(
                f"   {row.model_size}/{row.compute_type}: {accelerator.upper()} is "
                f"{row.speedup:.1f}x faster than CPU "
                f"({row.accelerator_real_time_factor:.1f}x vs {row.cpu_real_time_factor:.1f}x)"
            )

    return "\n".join(lines)


def print_comparison(results: Sequence[BenchmarkResult], accelerator: str = "mps"):
    """Print the comparison table built by format_comparison to stdout."""
    print(format_comparison(results, accelerator))


def save_results_json(
    results: Sequence[BenchmarkResult],
    path: Union[str, Path],
):
    """Write records as a JSON array of flat objects.

    Unset placeholder fields are written as null.
    """
    path = Path(path)
    payload = [r.to_dict() for r in results]
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def load_results_json(path: Union[str, Path]) -> List[BenchmarkResult]:
    """Read records written by save_results_json()."""
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, list):
        raise ValueError(
            f"Benchmark results in '{path}' must be a JSON array, "
            f"got {type(payload).__name__}"
        )
    return [BenchmarkResult.from_dict(item) for item in payload]
