"""Basic usage example for whisper-bench.

This example demonstrates:
1. Transcribing a single audio file
2. Building a benchmark sweep and running it
3. Reading the comparison and saving results to JSON

Usage:
    python examples/basic_usage.py path/to/audio.wav
"""

import sys

from whisper_bench import (
    Benchmark,
    ModelConfig,
    TranscriptionError,
    WhisperTranscriber,
    compute_speedups,
    detect_accelerator,
    find_fastest,
    print_comparison,
    save_results_json,
)

audio_path = sys.argv[1] if len(sys.argv) > 1 else "audio.wav"

# =============================================================================
# Example 1: Basic Transcription
# =============================================================================
print("=" * 70)
print("Example 1: Basic Transcription")
print("=" * 70)

# - model_size: tiny, base, small, medium, large-v2, large-v3
# - device: auto, cpu, cuda, mps
# - compute_type: float16, float32, int8
transcriber = WhisperTranscriber(ModelConfig("base", "cpu", "int8"))

try:
    result = transcriber.transcribe(audio_path)

    print(f"\nLanguage: {result.language} ({result.language_probability:.0%})")
    print(f"Audio duration: {result.duration:.2f}s")
    print(f"Transcription time: {result.transcription_time:.2f}s")
    print(f"Real-time factor: {result.real_time_factor:.1f}x")
    print()

    print("Transcription:")
    print("-" * 70)
    for segment in result.segments:
        print(f"[{segment.start:6.2f}s - {segment.end:6.2f}s] {segment.text}")

except TranscriptionError as e:
    # Bad input and model failures are separate error types
    print(f"Transcription failed ({type(e).__name__}): {e}")
    sys.exit(1)

# =============================================================================
# Example 2: Benchmark Sweep
# =============================================================================
print("\n" + "=" * 70)
print("Example 2: Benchmark Sweep")
print("=" * 70)

accelerator = detect_accelerator()
print(f"\nComparing CPU against: {accelerator}")

# Generators append, so calls compose into a single sweep
benchmark = Benchmark()
benchmark.add_device_comparison("tiny", "float32", accelerator=accelerator)
benchmark.add_compute_type_comparison("tiny", accelerator)

for config in benchmark.configs:
    print(f"  {config.label}")

# Failed configurations are reported on stderr and skipped
results = benchmark.run(audio_path)

# =============================================================================
# Example 3: Comparing Results
# =============================================================================
print("\n" + "=" * 70)
print("Example 3: Comparing Results")
print("=" * 70)

print_comparison(results, accelerator=accelerator)

fastest = find_fastest(results)
if fastest is not None:
    print(f"\nFastest: {fastest.model_size}/{fastest.device}/{fastest.compute_type}")

for row in compute_speedups(results, accelerator=accelerator):
    print(f"{row.model_size}/{row.compute_type}: {row.speedup:.2f}x speedup")

save_results_json(results, "benchmark_results.json")
print("\nResults saved to benchmark_results.json")
