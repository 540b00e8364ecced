# ocr_mover/core/ocr_engine.py

import logging
from pathlib import Path

import pytesseract
from PIL import Image

from .config import OcrConfig
from .errors import ImageLoadError, OcrEngineError

logger = logging.getLogger(__name__)

# Tesseract ends every page with a form feed.
PAGE_SEPARATOR = "\f"
BLANK_CHARACTERS = " \n"


def is_blank_text(text: str | None) -> bool:
    """
    Decides whether OCR output counts as "no text".

    The text is trimmed of leading and trailing spaces and newlines; it is
    blank if nothing but spaces and newlines remain. Tabs, carriage returns
    and punctuation-only OCR noise are deliberately not filtered, so a lone
    "\\t" counts as text.
    """
    if not text:
        return True

    trimmed = text.strip(BLANK_CHARACTERS)
    return all(char in BLANK_CHARACTERS for char in trimmed)


class OcrEngine:
    """
    The OCR capability the batch processor depends on.

    Implementations take an image path and return the plain text found in
    it, raising ImageLoadError or OcrEngineError on failure.
    """

    def extract_text(self, image_path: Path) -> str:
        raise NotImplementedError

    def has_text(self, image_path: Path) -> bool:
        """True when the image contains anything besides spaces and newlines."""
        return not is_blank_text(self.extract_text(image_path))


class TesseractEngine(OcrEngine):
    """
    Runs Tesseract through pytesseract with a fixed language configuration.

    One instance is built per run and reused for every file. Each image is
    opened, read and closed inside extract_text.
    """

    def __init__(self, config: OcrConfig):
        self.config = config
        self._tesseract_config = self._build_tesseract_config()

    def _build_tesseract_config(self) -> str:
        tessdata_dir = self.config.tessdata_dir
        if tessdata_dir.is_dir():
            return f'--tessdata-dir "{tessdata_dir}"'

        logger.warning(
            f"Tessdata folder '{tessdata_dir}' not found. Falling back to Tesseract's default language data.")
        return ""

    def extract_text(self, image_path: Path) -> str:
        """
        Loads the image and returns the text Tesseract finds in it.

        Args:
            image_path: The image file to read.

        Returns:
            The extracted text, without Tesseract's trailing page separator.

        Raises:
            ImageLoadError: The file is missing, unreadable or not an image.
            OcrEngineError: Tesseract is not installed, failed or timed out.
        """
        image = self._load_image(image_path)
        try:
            return self._run_tesseract(image, image_path)
        finally:
            image.close()

    def _load_image(self, image_path: Path) -> Image.Image:
        try:
            with Image.open(image_path) as image:
                # The RGB copy has no source format, so pytesseract hands it to
                # Tesseract as PNG whatever Pillow decoded (ICO, TGA, PCX, ...).
                return image.convert("RGB")
        except (OSError, Image.DecompressionBombError) as e:
            raise ImageLoadError(f"Could not load image '{image_path}': {e}", image_path) from e

    def _run_tesseract(self, image: Image.Image, image_path: Path) -> str:
        try:
            text = pytesseract.image_to_string(
                image,
                lang=self.config.lang,
                config=self._tesseract_config,
                timeout=self.config.timeout,
            )
        except pytesseract.TesseractNotFoundError as e:
            raise OcrEngineError(f"Tesseract is not installed or not on PATH: {e}", image_path) from e
        except (pytesseract.TesseractError, RuntimeError, OSError, TypeError, ValueError) as e:
            raise OcrEngineError(f"OCR failed for '{image_path}': {e}", image_path) from e

        logger.debug(f"OCR of '{image_path.name}' returned {len(text)} characters.")
        return text.replace(PAGE_SEPARATOR, "")
