# ocr_mover/gui/folder_picker.py

import logging

from PySide6.QtWidgets import QApplication, QFileDialog

logger = logging.getLogger(__name__)


class FolderPicker:
    """
    The folder selection capability used by the console session.

    select_folder returns an absolute path, or "" when the user cancels.
    """

    def select_folder(self, title: str) -> str:
        raise NotImplementedError


class QtFolderPicker(FolderPicker):
    """Asks for a folder with the platform's native directory dialog."""

    def __init__(self):
        # A QApplication must exist before any dialog is created.
        self.app = QApplication.instance() or QApplication([])

    def select_folder(self, title: str) -> str:
        """
        Shows a blocking directory dialog.

        Args:
            title: Shown as the dialog's window title.

        Returns:
            The selected folder, or an empty string if the dialog was cancelled.
        """
        folder = QFileDialog.getExistingDirectory(None, title, "", QFileDialog.Option.ShowDirsOnly)
        if folder:
            logger.info(f"'{title}': selected '{folder}'")
        else:
            logger.info(f"'{title}': dialog cancelled.")
        return folder or ""
