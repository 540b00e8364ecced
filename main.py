# main.py

# Launcher script for running from a checkout or bundling with PyInstaller.
from ocr_mover.main import main

if __name__ == '__main__':
    main()
