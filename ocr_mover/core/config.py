# ocr_mover/core/config.py

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

logger = logging.getLogger(__name__)

# Tesseract language codes, see https://github.com/tesseract-ocr/tessdata
DEFAULT_LANGUAGES = ("hin", "eng")
# 0 means "wait for Tesseract as long as it takes".
DEFAULT_OCR_TIMEOUT = 0


def get_resource_path(relative_path: str) -> Path:
    """
    Gets the absolute path to a resource, working for both development (source)
    and production (PyInstaller bundled executable).
    """
    try:
        # PyInstaller unpacks bundled data into `sys._MEIPASS`.
        base_path = Path(sys._MEIPASS)
    except AttributeError:
        # Running from source: the project root is 3 levels up from this file.
        base_path = Path(__file__).resolve().parent.parent.parent

    return base_path / relative_path


CONFIG_PATH = get_resource_path('config')
SETTINGS_FILE_PATH = CONFIG_PATH / 'settings.json'
DEFAULT_TESSDATA_PATH = get_resource_path('tessdata')


@dataclass(frozen=True)
class OcrConfig:
    """
    Everything the OCR engine needs to know, fixed for the length of a run.

    Attributes:
        languages: Tesseract language codes, primary language first.
        tessdata_dir: The folder holding the `<lang>.traineddata` files.
        timeout: Seconds before a single OCR call is abandoned (0 = no limit).
    """
    languages: Tuple[str, ...] = DEFAULT_LANGUAGES
    tessdata_dir: Path = DEFAULT_TESSDATA_PATH
    timeout: int = DEFAULT_OCR_TIMEOUT

    @property
    def lang(self) -> str:
        """The language string in the `hin+eng` form Tesseract expects."""
        return "+".join(self.languages)


def load_ocr_config(settings_path: Path = SETTINGS_FILE_PATH) -> OcrConfig:
    """
    Builds the OcrConfig from settings.json, falling back to defaults.

    Recognised keys are `languages` (list of codes), `tessdata_dir` (path,
    relative paths resolve against the settings file's folder) and
    `ocr_timeout` (seconds). Unknown keys are ignored.

    Args:
        settings_path: The settings file to read.

    Returns:
        The resolved, immutable OCR configuration.
    """
    settings = {}
    try:
        if settings_path.exists():
            with open(settings_path, 'r', encoding='utf-8') as f:
                settings = json.load(f)
        else:
            logger.info(f"No settings file at '{settings_path}'. Using default OCR settings.")
    except (IOError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read settings file '{settings_path}', using defaults: {e}")
        settings = {}

    languages = settings.get("languages") or DEFAULT_LANGUAGES
    if isinstance(languages, str):
        languages = languages.split("+")

    tessdata_dir = settings.get("tessdata_dir")
    if tessdata_dir:
        tessdata_path = Path(tessdata_dir).expanduser()
        if not tessdata_path.is_absolute():
            tessdata_path = (settings_path.parent / tessdata_path).resolve()
    else:
        tessdata_path = DEFAULT_TESSDATA_PATH

    try:
        timeout = int(settings.get("ocr_timeout", DEFAULT_OCR_TIMEOUT) or 0)
    except (TypeError, ValueError):
        logger.warning("Invalid 'ocr_timeout' in settings, OCR calls will not time out.")
        timeout = DEFAULT_OCR_TIMEOUT

    config = OcrConfig(languages=tuple(languages), tessdata_dir=tessdata_path, timeout=timeout)
    logger.info(f"OCR configured with languages '{config.lang}' and tessdata at '{config.tessdata_dir}'.")
    return config
