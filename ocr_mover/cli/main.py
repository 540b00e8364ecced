# ocr_mover/cli/main.py

import logging
from pathlib import Path
from typing import Callable

import click
from rich.console import Console

from ocr_mover.core.batch_processor import BatchListener, BatchProcessor
from ocr_mover.core.config import load_ocr_config
from ocr_mover.core.file_operations import list_files
from ocr_mover.core.models import FileResult, RunSummary, Severity
from ocr_mover.core.ocr_engine import OcrEngine, TesseractEngine
from ocr_mover.gui.folder_picker import FolderPicker, QtFolderPicker
from ocr_mover.utils.logger import setup_logging

# A single Console object handles all colored output of the session.
console = Console()
logger = logging.getLogger(__name__)

__version__ = "1.0"

# The session log sits at the project root, next to config/.
SESSION_LOG_FILE = Path(__file__).resolve().parents[2] / "ocr_mover.log"

# --- Console Messages ---
WELCOME_MESSAGE = " ■ To detect text within an image and move it to a destination folder, press any key. ■"
SOURCE_TITLE = "Select Source Folder"
DESTINATION_TITLE = "Select Destination Folder"
NO_FOLDERS_MESSAGE = "None of the folders selected."
STARTED_MESSAGE = " ■ Processing of files has been started... ■"
PROCESSING_MESSAGE = "Processing..."
PROBLEM_MESSAGE = "Houston, we have a problem. Try re-launching!"
NONE_MOVED_MESSAGE = " ■ None of the files were moved to the destination folder. ■"
PARTIAL_MESSAGE = " ■ Few files({moved}/{total}) are moved to the destination folder successfully. ■"
ALL_MOVED_MESSAGE = " ■ Files are moved to the destination folder successfully. ■"


def write_colored_text(message: str, severity: Severity = Severity.INFO):
    """Prints one status line in the color of its severity."""
    # Paths may contain square brackets, so rich markup stays off.
    console.print(message, style=severity.value, markup=False, highlight=False)


def wait_for_key():
    click.pause(info="")


class ConsoleBatchListener(BatchListener):
    """Shows the progress of a batch run on the console."""

    def batch_started(self, total_files: int):
        console.clear()
        console.line(2)
        write_colored_text(STARTED_MESSAGE, Severity.SUCCESS)

    def file_started(self, source_path: Path):
        console.line(2)
        write_colored_text(str(source_path))
        write_colored_text(PROCESSING_MESSAGE, Severity.SUCCESS)

    def file_failed(self, source_path: Path, error: Exception):
        write_colored_text(str(error), Severity.ERROR)

    def file_finished(self, result: FileResult):
        console.clear()


def initial_message():
    console.line()
    write_colored_text(WELCOME_MESSAGE)
    wait_for_key()
    console.line(2)


def select_folder(picker: FolderPicker, title: str) -> str:
    write_colored_text(title)
    folder = picker.select_folder(title)
    write_colored_text(f" ■ {folder}")
    return folder


def report_summary(summary: RunSummary, moved: int, total: int):
    """Prints the one line that sums up the run."""
    console.line(2)
    if summary is RunSummary.NONE_MOVED:
        write_colored_text(NONE_MOVED_MESSAGE, Severity.WARNING)
    elif summary is RunSummary.PARTIAL:
        write_colored_text(PARTIAL_MESSAGE.format(moved=moved, total=total), Severity.WARNING)
    else:
        write_colored_text(ALL_MOVED_MESSAGE, Severity.SUCCESS)


def process_files(source_folder: str, destination_folder: str, engine: OcrEngine) -> RunSummary:
    """
    Runs one batch over the source folder and reports its outcome.

    Waits for a key press after the summary, before the session's final one.

    Args:
        source_folder: The folder whose files are scanned.
        destination_folder: Where files that contain text are moved.
        engine: The OCR engine used to classify each file.

    Returns:
        The summary outcome of the run.
    """
    files = list_files(source_folder)
    processor = BatchProcessor(engine, ConsoleBatchListener())
    counters = processor.process(files, destination_folder)
    report_summary(counters.summary, counters.moved, counters.total)
    wait_for_key()
    return counters.summary


def default_engine() -> OcrEngine:
    return TesseractEngine(load_ocr_config())


def select_folders_and_process(
        picker_factory: Callable[[], FolderPicker] | None = None,
        engine_factory: Callable[[], OcrEngine] | None = None,
) -> RunSummary | None:
    """
    The interactive session: pick both folders, then run the batch.

    Any failure outside the per-file loop (no display for the dialogs, a
    missing source folder, ...) ends the run with a generic message.
    Per-file failures are handled inside the batch and never reach here.

    Args:
        picker_factory: Builds the folder picker used for both dialogs.
        engine_factory: Builds the OCR engine, once per run.

    Returns:
        The run's summary, or None if no batch ran.
    """
    picker_factory = picker_factory or QtFolderPicker
    engine_factory = engine_factory or default_engine

    summary = None
    try:
        picker = picker_factory()
        source_folder = select_folder(picker, SOURCE_TITLE)
        console.line()
        destination_folder = select_folder(picker, DESTINATION_TITLE)

        # Only cancelling both dialogs stops the run; one empty folder still proceeds.
        if not source_folder and not destination_folder:
            logger.warning("Both folder dialogs were cancelled. Nothing to do.")
            write_colored_text(NO_FOLDERS_MESSAGE, Severity.WARNING)
            wait_for_key()
            return None

        summary = process_files(source_folder, destination_folder, engine_factory())

    except Exception as e:
        write_colored_text(PROBLEM_MESSAGE, Severity.ERROR)
        logger.error(f"Run aborted: {e}", exc_info=True)

    wait_for_key()
    return summary


@click.command(context_settings=dict(help_option_names=['-h', '--help']))
@click.version_option(version=__version__, prog_name="OCR Mover")
def run_mover():
    """
    Moves every image that contains text from a source folder to a destination folder.

    Both folders are chosen with folder dialogs. Images without any detectable
    text stay in the source folder.
    """
    setup_logging(SESSION_LOG_FILE, console_level=logging.CRITICAL)
    initial_message()
    select_folders_and_process()
