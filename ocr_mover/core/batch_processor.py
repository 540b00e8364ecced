# ocr_mover/core/batch_processor.py

import logging
import os
from pathlib import Path
from typing import List

from .errors import OcrMoverError
from .file_operations import move_file
from .models import BatchCounters, FileOutcome, FileResult
from .ocr_engine import OcrEngine

logger = logging.getLogger(__name__)


class BatchListener:
    """
    Receives progress events from a BatchProcessor.

    Every hook is a no-op here; the console session overrides the ones it
    wants to show.
    """

    def batch_started(self, total_files: int):
        pass

    def file_started(self, source_path: Path):
        pass

    def file_failed(self, source_path: Path, error: Exception):
        pass

    def file_finished(self, result: FileResult):
        pass


class BatchProcessor:
    """
    Moves every image that contains text from a file list to a destination folder.

    A failing file is reported, counted and skipped. It never stops the
    rest of the batch.
    """

    def __init__(self, engine: OcrEngine, listener: BatchListener | None = None):
        self.engine = engine
        self.listener = listener or BatchListener()

    def process(self, files: List[Path], destination_folder: str | Path) -> BatchCounters:
        """
        Runs OCR on each file exactly once, in order, and moves the ones with text.

        Args:
            files: The snapshot of files to process.
            destination_folder: The folder text images are moved into.

        Returns:
            The final counters for the run.
        """
        counters = BatchCounters(total=len(files))
        logger.info(f"Batch started: {counters.total} files, destination '{destination_folder}'.")
        self.listener.batch_started(counters.total)

        for source_path in files:
            self.listener.file_started(source_path)
            destination_path = Path(os.path.join(destination_folder, source_path.name))
            result = self._process_file(source_path, destination_path)

            if result.outcome is FileOutcome.MOVED:
                counters.moved += 1
            elif result.outcome is FileOutcome.SKIPPED_BLANK:
                counters.blank += 1
            else:
                counters.errors += 1

            self.listener.file_finished(result)

        logger.info(
            f"Batch finished: {counters.moved} moved, {counters.blank} blank, "
            f"{counters.errors} errors out of {counters.total} files.")
        return counters

    def _process_file(self, source_path: Path, destination_path: Path) -> FileResult:
        try:
            if not self.engine.has_text(source_path):
                logger.info(f"No text found in '{source_path.name}'. Leaving it in place.")
                return FileResult(source_path, destination_path, FileOutcome.SKIPPED_BLANK)

            move_file(source_path, destination_path)
            return FileResult(source_path, destination_path, FileOutcome.MOVED)

        except (OcrMoverError, OSError) as e:
            kind = e.kind.name if isinstance(e, OcrMoverError) else "OS"
            logger.error(f"[{kind}] Failed to process '{source_path}': {e}")
            self.listener.file_failed(source_path, e)
            return FileResult(source_path, destination_path, FileOutcome.ERROR, error=e)
