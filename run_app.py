"""Entry-Point für PyInstaller – startet das fswin-CLI."""

import sys

from fswin.scan import main

if __name__ == "__main__":
    sys.exit(main())
