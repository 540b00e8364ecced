# ocr_mover/core/file_operations.py

import logging
import shutil
from pathlib import Path
from typing import List

from .errors import MoveError, SourceFolderError

# The main application configures the handlers for this logger.
logger = logging.getLogger(__name__)


def list_files(source_folder: str | Path) -> List[Path]:
    """
    Takes a snapshot of the files directly inside a folder.

    Subfolders are not descended into. The list is sorted by name and
    never refreshed, so files added while a batch runs are not picked up.

    Args:
        source_folder: The folder to list.

    Returns:
        The files in the folder, in name order.

    Raises:
        SourceFolderError: The path is empty, missing or not a directory.
    """
    # Path("") would silently mean the current working directory.
    if not str(source_folder):
        raise SourceFolderError("No source folder was selected.")

    source_dir = Path(source_folder)
    logger.info(f"Listing files in: {source_dir}")
    if not source_dir.is_dir():
        raise SourceFolderError(f"Source path is not a valid directory: {source_dir}", source_dir)

    try:
        files = sorted(entry for entry in source_dir.iterdir() if entry.is_file())
    except OSError as e:
        raise SourceFolderError(f"Could not list '{source_dir}': {e}", source_dir) from e

    logger.info(f"Found {len(files)} files in '{source_dir}'.")
    return files


def move_file(source_path: Path, destination_path: Path) -> Path:
    """
    Moves a file to an exact destination path, never overwriting.

    On the same drive shutil.move is a plain rename; across drives it
    copies and then deletes the source.

    Args:
        source_path: The file to move.
        destination_path: The full path the file should end up at.

    Returns:
        The destination path.

    Raises:
        MoveError: The destination already exists, or the OS refused the move.
    """
    if destination_path.exists():
        raise MoveError(f"Cannot move '{source_path.name}': '{destination_path}' already exists.", source_path)

    try:
        logger.info(f"Moving '{source_path}' to '{destination_path}'")
        shutil.move(str(source_path), str(destination_path))
    except PermissionError as e:
        raise MoveError(f"Permission denied moving '{source_path}'. Check file/folder permissions.",
                        source_path) from e
    except OSError as e:
        raise MoveError(f"Could not move '{source_path}' to '{destination_path}': {e}", source_path) from e

    return destination_path
