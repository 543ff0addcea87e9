"""Entry point for ``python -m projectbrowser``."""

from projectbrowser.cli import main

if __name__ == "__main__":
    main()
