# tests/test_batch.py

from pathlib import Path

import pytest
import pytesseract
from PIL import Image

from ocr_mover.core.batch_processor import BatchListener, BatchProcessor
from ocr_mover.core.config import OcrConfig
from ocr_mover.core.errors import ImageLoadError, OcrEngineError
from ocr_mover.core.models import FileOutcome, RunSummary
from ocr_mover.core.ocr_engine import OcrEngine, TesseractEngine


class FakeEngine(OcrEngine):
    """Returns canned text per file name, or raises the canned exception."""

    def __init__(self, texts):
        self.texts = texts
        self.calls = []

    def extract_text(self, image_path: Path) -> str:
        self.calls.append(image_path.name)
        outcome = self.texts[image_path.name]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingListener(BatchListener):
    def __init__(self):
        self.events = []

    def batch_started(self, total_files):
        self.events.append(("batch", total_files))

    def file_started(self, source_path):
        self.events.append(("start", source_path.name))

    def file_failed(self, source_path, error):
        self.events.append(("fail", source_path.name))

    def file_finished(self, result):
        self.events.append(("done", result.source.name, result.outcome))


@pytest.fixture
def folders(tmp_path):
    source_dir = tmp_path / "source"
    dest_dir = tmp_path / "destination"
    source_dir.mkdir()
    dest_dir.mkdir()
    return source_dir, dest_dir


def make_files(folder, *names):
    paths = []
    for name in names:
        path = folder / name
        path.write_bytes(name.encode())
        paths.append(path)
    return paths


# --- Tests for batch_processor.py ---

def test_text_images_are_moved_and_blank_ones_stay(folders):
    source_dir, dest_dir = folders
    files = make_files(source_dir, "invoice.png", "empty.png")
    engine = FakeEngine({"invoice.png": "Invoice #42\n", "empty.png": "   \n  \n"})

    counters = BatchProcessor(engine).process(files, dest_dir)

    assert (dest_dir / "invoice.png").exists()
    assert not (source_dir / "invoice.png").exists()
    assert (source_dir / "empty.png").exists()
    assert not (dest_dir / "empty.png").exists()
    assert (counters.total, counters.moved, counters.blank, counters.errors) == (2, 1, 1, 0)
    assert counters.summary is RunSummary.PARTIAL


def test_tab_only_text_is_moved(folders):
    source_dir, dest_dir = folders
    files = make_files(source_dir, "tab.png")

    counters = BatchProcessor(FakeEngine({"tab.png": "\t"})).process(files, dest_dir)

    assert counters.moved == 1
    assert (dest_dir / "tab.png").exists()


def test_all_files_with_text_is_all_moved(folders):
    source_dir, dest_dir = folders
    files = make_files(source_dir, "one.png", "two.png")

    counters = BatchProcessor(FakeEngine({"one.png": "1", "two.png": "2"})).process(files, dest_dir)

    assert counters.summary is RunSummary.ALL_MOVED


def test_ocr_failure_does_not_stop_the_batch(folders):
    source_dir, dest_dir = folders
    files = make_files(source_dir, "a.png", "broken.png", "c.png")
    engine = FakeEngine({
        "a.png": "text",
        "broken.png": OcrEngineError("tesseract crashed"),
        "c.png": "more text",
    })
    listener = RecordingListener()

    counters = BatchProcessor(engine, listener).process(files, dest_dir)

    assert engine.calls == ["a.png", "broken.png", "c.png"]
    assert counters.errors == 1
    assert counters.moved == 2
    assert (source_dir / "broken.png").exists()
    assert listener.events.count(("fail", "broken.png")) == 1
    assert ("done", "broken.png", FileOutcome.ERROR) in listener.events


def test_same_named_file_in_destination_fails_only_that_move(folders):
    source_dir, dest_dir = folders
    files = make_files(source_dir, "dup.png", "fresh.png")
    (dest_dir / "dup.png").write_bytes(b"older copy")

    counters = BatchProcessor(FakeEngine({"dup.png": "x", "fresh.png": "y"})).process(files, dest_dir)

    assert counters.errors == 1
    assert counters.moved == 1
    assert (source_dir / "dup.png").exists()
    assert (dest_dir / "dup.png").read_bytes() == b"older copy"
    assert (dest_dir / "fresh.png").exists()
    assert counters.summary is RunSummary.PARTIAL


def test_file_removed_after_snapshot_is_an_error(folders):
    source_dir, dest_dir = folders
    files = make_files(source_dir, "gone.png", "here.png")
    files[0].unlink()
    engine = FakeEngine({"gone.png": ImageLoadError("missing"), "here.png": "text"})

    counters = BatchProcessor(engine).process(files, dest_dir)

    assert counters.errors == 1
    assert counters.moved == 1


def test_raw_os_error_is_counted(folders):
    source_dir, dest_dir = folders
    files = make_files(source_dir, "locked.png")

    counters = BatchProcessor(FakeEngine({"locked.png": PermissionError("locked")})).process(files, dest_dir)

    assert counters.errors == 1
    assert counters.summary is RunSummary.NONE_MOVED


def test_listener_sees_events_in_order(folders):
    source_dir, dest_dir = folders
    files = make_files(source_dir, "a.png", "b.png")
    listener = RecordingListener()

    BatchProcessor(FakeEngine({"a.png": "", "b.png": "B"}), listener).process(files, dest_dir)

    assert listener.events == [
        ("batch", 2),
        ("start", "a.png"),
        ("done", "a.png", FileOutcome.SKIPPED_BLANK),
        ("start", "b.png"),
        ("done", "b.png", FileOutcome.MOVED),
    ]


# --- Tests for TesseractEngine ---

@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "page.png"
    Image.new("RGB", (40, 20), "white").save(path)
    return path


@pytest.fixture
def tessdata_config(tmp_path):
    tessdata = tmp_path / "tessdata"
    tessdata.mkdir()
    return OcrConfig(tessdata_dir=tessdata)


def test_tesseract_engine_passes_language_config(monkeypatch, image_file, tessdata_config):
    captured = {}

    def fake_image_to_string(image, lang=None, config="", timeout=0):
        captured.update(lang=lang, config=config, timeout=timeout, size=image.size)
        return "Hello\n\f"

    monkeypatch.setattr(pytesseract, "image_to_string", fake_image_to_string)

    text = TesseractEngine(tessdata_config).extract_text(image_file)

    assert text == "Hello\n"
    assert captured["lang"] == "hin+eng"
    assert captured["config"] == f'--tessdata-dir "{tessdata_config.tessdata_dir}"'
    assert captured["size"] == (40, 20)


def test_page_separator_alone_is_blank(monkeypatch, image_file, tessdata_config):
    monkeypatch.setattr(pytesseract, "image_to_string", lambda *args, **kwargs: " \n\f")

    assert TesseractEngine(tessdata_config).has_text(image_file) is False


def test_missing_tessdata_falls_back_to_default(monkeypatch, image_file, tmp_path):
    captured = {}

    def fake_image_to_string(image, lang=None, config="", timeout=0):
        captured["config"] = config
        return "x"

    monkeypatch.setattr(pytesseract, "image_to_string", fake_image_to_string)

    TesseractEngine(OcrConfig(tessdata_dir=tmp_path / "nowhere")).extract_text(image_file)

    assert captured["config"] == ""


def test_undecodable_image_is_an_image_load_error(tmp_path, tessdata_config):
    not_an_image = tmp_path / "notes.png"
    not_an_image.write_text("this is not a png")

    with pytest.raises(ImageLoadError):
        TesseractEngine(tessdata_config).extract_text(not_an_image)


def test_tesseract_failure_is_an_engine_error(monkeypatch, image_file, tessdata_config):
    def failing_image_to_string(*args, **kwargs):
        raise pytesseract.TesseractError(1, "Failed loading language 'hin'")

    monkeypatch.setattr(pytesseract, "image_to_string", failing_image_to_string)

    with pytest.raises(OcrEngineError):
        TesseractEngine(tessdata_config).extract_text(image_file)


def test_missing_tesseract_binary_is_an_engine_error(monkeypatch, image_file, tessdata_config):
    def not_installed(*args, **kwargs):
        raise pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(pytesseract, "image_to_string", not_installed)

    with pytest.raises(OcrEngineError):
        TesseractEngine(tessdata_config).extract_text(image_file)


def test_tesseract_receives_an_image_it_accepts(monkeypatch, tmp_path, tessdata_config):
    """Formats Pillow reads but Tesseract does not (TGA here) are handed over as plain RGB."""
    tga_file = tmp_path / "scan.tga"
    Image.new("RGB", (30, 10), "white").save(tga_file)
    captured = {}

    def fake_image_to_string(image, lang=None, config="", timeout=0):
        captured.update(format=image.format, mode=image.mode)
        return "text"

    monkeypatch.setattr(pytesseract, "image_to_string", fake_image_to_string)

    assert TesseractEngine(tessdata_config).has_text(tga_file) is True
    assert captured == {"format": None, "mode": "RGB"}


def test_uncommon_image_formats_do_not_stop_the_batch(monkeypatch, folders, tessdata_config):
    source_dir, dest_dir = folders
    files = []
    for name in ("a_logo.ico", "b_scan.tga", "c_page.png"):
        path = source_dir / name
        Image.new("RGB", (32, 32), "white").save(path)
        files.append(path)

    def format_checking_image_to_string(image, lang=None, config="", timeout=0):
        # pytesseract refuses any Pillow format outside its own list.
        if image.format and image.format not in pytesseract.pytesseract.SUPPORTED_FORMATS:
            raise TypeError("Unsupported image format/type")
        return "text"

    monkeypatch.setattr(pytesseract, "image_to_string", format_checking_image_to_string)

    counters = BatchProcessor(TesseractEngine(tessdata_config)).process(files, dest_dir)

    assert counters.errors == 0
    assert counters.moved == 3
    assert (dest_dir / "c_page.png").exists()


def test_rejected_image_type_is_one_failed_file(monkeypatch, folders, tessdata_config):
    source_dir, dest_dir = folders
    files = []
    for name in ("a_logo.ico", "b_page.png"):
        path = source_dir / name
        Image.new("RGB", (32, 32), "white").save(path)
        files.append(path)
    calls = []

    def picky_image_to_string(image, lang=None, config="", timeout=0):
        calls.append(image.size)
        if len(calls) == 1:
            raise TypeError("Unsupported image format/type")
        return "text"

    monkeypatch.setattr(pytesseract, "image_to_string", picky_image_to_string)

    counters = BatchProcessor(TesseractEngine(tessdata_config)).process(files, dest_dir)

    assert len(calls) == 2
    assert counters.errors == 1
    assert counters.moved == 1
    assert (source_dir / "a_logo.ico").exists()
    assert (dest_dir / "b_page.png").exists()


def test_os_error_while_running_tesseract_is_an_engine_error(monkeypatch, image_file, tessdata_config):
    def binary_not_executable(*args, **kwargs):
        raise PermissionError(13, "Permission denied", "tesseract")

    monkeypatch.setattr(pytesseract, "image_to_string", binary_not_executable)

    with pytest.raises(OcrEngineError):
        TesseractEngine(tessdata_config).extract_text(image_file)
