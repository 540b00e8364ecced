# ocr_mover/core/errors.py

from enum import Enum, auto
from pathlib import Path


class ErrorKind(Enum):
    """The kinds of failure a single run can run into."""
    IMAGE_LOAD = auto()
    OCR_ENGINE = auto()
    MOVE = auto()
    SOURCE_FOLDER = auto()


class OcrMoverError(Exception):
    """
    Base class for every failure raised by the core package.

    Each subclass pins down its ErrorKind, so callers can tell an unreadable
    image from a broken OCR engine without parsing messages.
    """
    kind: ErrorKind

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class ImageLoadError(OcrMoverError):
    """The image is missing, unreadable or not a format Pillow can decode."""
    kind = ErrorKind.IMAGE_LOAD


class OcrEngineError(OcrMoverError):
    """Tesseract is missing, crashed or timed out."""
    kind = ErrorKind.OCR_ENGINE


class MoveError(OcrMoverError):
    """The file could not be moved, including when the destination exists."""
    kind = ErrorKind.MOVE


class SourceFolderError(OcrMoverError):
    """The source folder is empty, missing or not a directory."""
    kind = ErrorKind.SOURCE_FOLDER
