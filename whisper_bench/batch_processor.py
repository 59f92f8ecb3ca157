"""Concurrent transcription of independent audio files.

Files in a batch share no state: each one is transcribed with its own
model handle, its outcome is reported on its own, and a failure never
cancels the other files. This is unrelated to benchmark sweeps, which are
always sequential.
"""

import json
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .data_models import TranscriptionResult
from .transcriber import WhisperTranscriber, is_supported_audio

logger = logging.getLogger(__name__)


@dataclass
class FileOutcome:
    """Outcome of transcribing one file in a batch.

    Attributes:
        path: Input audio file
        result: Transcription result, None if the file failed
        error: Exception raised for this file, None on success
        output_path: JSON file the result was written to, if any
    """
    path: Path
    result: Optional[TranscriptionResult] = None
    error: Optional[Exception] = None
    output_path: Optional[Path] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def find_audio_files(directory: Union[str, Path]) -> List[Path]:
    """List supported audio files directly inside directory, sorted by name."""
    directory = Path(directory)
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and is_supported_audio(p)
    )


def output_path_for(audio_path: Path, output_dir: Path) -> Path:
    return output_dir / f"{audio_path.stem}_transcription.json"


def write_transcription_json(result: TranscriptionResult, path: Union[str, Path]):
    path = Path(path)
    path.write_text(
        json.dumps(result.to_dict(), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


class BatchProcessor:
    """Transcribes many files concurrently with one transcriber.

    Attributes:
        transcriber: Transcriber used for every file
        max_workers: Maximum number of files processed at once
    """

    def __init__(self, transcriber: WhisperTranscriber, max_workers: int = 4):
        """Initialize batch processor.

        Args:
            transcriber: Transcriber used for every file
            max_workers: Maximum number of concurrent files (default: 4)

        Raises:
            TypeError: If max_workers is not an integer
            ValueError: If max_workers is not positive
        """
        if not isinstance(max_workers, int):
            raise TypeError(
                f"max_workers must be int, got {type(max_workers).__name__}"
            )
        if max_workers < 1:
            raise ValueError(
                f"max_workers must be positive integer, got {max_workers}"
            )

        self.transcriber = transcriber
        self.max_workers = max_workers

    def process_files(
        self,
        audio_paths: Sequence[Union[str, Path]],
        output_dir: Optional[Union[str, Path]] = None,
    ) -> List[FileOutcome]:
        """Transcribe every file, writing JSON into output_dir if given.

        Returns:
            One FileOutcome per input, in input order. Completion order
            across files is not defined.
        """
        paths = [Path(p) for p in audio_paths]
        if output_dir is not None:
            output_dir = Path(output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"Processing {len(paths)} files concurrently")

        outcomes: List[Optional[FileOutcome]] = [None] * len(paths)
        with ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="whisper-bench",
        ) as executor:
            futures = {
                executor.submit(self._process_file, path, output_dir): i
                for i, path in enumerate(paths)
            }
            for future in as_completed(futures):
                outcome = future.result()
                outcomes[futures[future]] = outcome
                if outcome.succeeded:
                    logger.info(f"Completed: {outcome.path}")
                else:
                    logger.error(f"Failed {outcome.path}: {outcome.error}")

        return outcomes

    def _process_file(self, path: Path, output_dir: Optional[Path]) -> FileOutcome:
        logger.info(f"Processing: {path}")
        outcome = FileOutcome(path=path)
        try:
            outcome.result = self.transcriber.transcribe(path)
            if output_dir is not None:
                outcome.output_path = output_path_for(path, output_dir)
                write_transcription_json(outcome.result, outcome.output_path)
                logger.info(f"Results saved to: {outcome.output_path}")
        except Exception as e:
            outcome.error = e
        return outcome
