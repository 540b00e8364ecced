# ocr_mover/main.py

# The entry point only directs traffic; the session lives in the CLI module.
from ocr_mover.cli.main import run_mover

main = run_mover

if __name__ == '__main__':
    # Executed by 'python -m ocr_mover.main'.
    main()
