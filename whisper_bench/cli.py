"""
Command-line entry point for whisper-bench.

Usage:
    whisper-bench -i audio.wav                     # transcribe one file
    whisper-bench -i ./recordings -o ./out         # transcribe a directory
    whisper-bench -i audio.wav -b -o bench.json    # benchmark sweep
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .batch_processor import BatchProcessor, find_audio_files, write_transcription_json
from .benchmark import Benchmark
from .data_models import COMPUTE_TYPES, DEVICES, MODEL_SIZES, ModelConfig, TranscriptionResult
from .errors import TranscriptionError
from .profiler import detect_accelerator
from .report import print_comparison, save_results_json
from .transcriber import WhisperTranscriber

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "WHISPER_BENCH_LOG_LEVEL"


def positive_int(value: str) -> int:
    """Argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the whisper-bench command."""
    parser = argparse.ArgumentParser(
        prog="whisper-bench",
        description=(
            "Transcribe audio with faster-whisper and benchmark model sizes, "
            "devices and compute types."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  whisper-bench -i meeting.wav -m small -d cpu -c int8
  whisper-bench -i ./recordings -o ./transcripts -j 2
  whisper-bench -i meeting.wav --benchmark -o benchmark.json
        """,
    )
    parser.add_argument(
        "--input", "-i",
        required=True,
        type=Path,
        metavar="FILE/DIR",
        help="Input audio file or directory.",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        metavar="FILE/DIR",
        help="Output file or directory for JSON results.",
    )
    parser.add_argument(
        "--model", "-m",
        default="base",
        help=f"Model size: {', '.join(MODEL_SIZES)} (default: base)",
    )
    parser.add_argument(
        "--device", "-d",
        default="auto",
        help=f"Device: {', '.join(DEVICES)} (default: auto)",
    )
    parser.add_argument(
        "--compute-type", "-c",
        default="float16",
        help=f"Compute type: {', '.join(COMPUTE_TYPES)} (default: float16)",
    )
    parser.add_argument(
        "--benchmark", "-b",
        action="store_true",
        help="Run a benchmark sweep comparing devices, model sizes and compute types.",
    )
    parser.add_argument(
        "--accelerator",
        choices=["cuda", "mps"],
        help="Accelerator compared against CPU in benchmark mode (default: detected).",
    )
    parser.add_argument(
        "--workers", "-j",
        type=positive_int,
        default=4,
        help="Files transcribed concurrently in directory mode (default: 4).",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def setup_logging(verbose: bool = False):
    """Configure root logging.

    Args:
        verbose: Log at DEBUG. Otherwise the level comes from
            WHISPER_BENCH_LOG_LEVEL and defaults to INFO.
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.environ.get(LOG_LEVEL_ENV, "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_transcription(result: TranscriptionResult):
    print("\n=== Transcription Results ===")
    print(
        f"Language: {result.language} "
        f"(confidence: {result.language_probability * 100.0:.2f}%)"
    )
    print(f"Duration: {result.duration:.2f}s")
    print(f"Transcription Time: {result.transcription_time:.2f}s")
    print(f"Real-time Factor: {result.real_time_factor:.2f}x")
    print(f"\nFull Text:\n{result.full_text}")

    if result.segments:
        print("\n=== Segments ===")
        for i, segment in enumerate(result.segments, start=1):
            print(f"[{i:03}] [{segment.start:.2f}s -> {segment.end:.2f}s] {segment.text}")


def build_default_sweep(accelerator: str) -> Benchmark:
    benchmark = Benchmark()

    logger.info(f"Adding CPU vs {accelerator} comparison tests...")
    benchmark.add_device_comparison("base", "float16", accelerator=accelerator)

    logger.info("Adding model size comparison tests...")
    benchmark.add_model_size_comparison(accelerator, "float16")

    logger.info("Adding compute type comparison tests...")
    benchmark.add_compute_type_comparison("base", accelerator)

    return benchmark


def run_benchmark(
    input_path: Path,
    output_path: Optional[Path],
    accelerator: Optional[str] = None,
) -> int:
    if not input_path.is_file():
        logger.error("Benchmark mode requires a single audio file as input")
        return 1

    if output_path is not None and not output_path.parent.is_dir():
        logger.error(f"Output directory does not exist: {output_path.parent}")
        return 1

    accelerator = accelerator or detect_accelerator()
    logger.info(f"Starting comprehensive benchmark (accelerator: {accelerator})...")

    benchmark = build_default_sweep(accelerator)
    results = benchmark.run(input_path)

    print_comparison(results, accelerator)

    if output_path is not None:
        try:
            save_results_json(results, output_path)
        except OSError as e:
            logger.error(f"Failed to save benchmark results: {e}")
            return 1
        logger.info(f"Benchmark results saved to: {output_path}")

    return 0


def run_transcription(args: argparse.Namespace) -> int:
    config = ModelConfig(args.model, args.device, args.compute_type)
    transcriber = WhisperTranscriber(config)

    logger.info(
        f"Model: {config.model_size}, Device: {config.device}, "
        f"Compute Type: {config.compute_type}"
    )

    input_path = args.input
    if input_path.is_file():
        result = transcriber.transcribe(input_path)
        if args.output is not None:
            write_transcription_json(result, args.output)
            logger.info(f"Results saved to: {args.output}")
        else:
            print_transcription(result)
        return 0

    if input_path.is_dir():
        audio_files = find_audio_files(input_path)
        if not audio_files:
            logger.warning(f"No audio files found in directory: {input_path}")
            return 0

        logger.info(f"Found {len(audio_files)} audio files")
        processor = BatchProcessor(transcriber, max_workers=args.workers)
        outcomes = processor.process_files(audio_files, output_dir=args.output)

        if args.output is None:
            for outcome in outcomes:
                if outcome.succeeded:
                    print(f"\n##### {outcome.path}")
                    print_transcription(outcome.result)

        failed = [o for o in outcomes if not o.succeeded]
        if failed:
            logger.error(f"{len(failed)} of {len(outcomes)} files failed")
            return 1
        logger.info("All transcriptions completed successfully")
        return 0

    logger.error(f"Input path does not exist: {input_path}")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.benchmark:
        return run_benchmark(args.input, args.output, args.accelerator)

    try:
        return run_transcription(args)
    except TranscriptionError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
