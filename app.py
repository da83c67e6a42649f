"""
bashtutor - Interactive Bash scripting tutorial.

Terminal application that walks through shell lessons section by section,
running canned examples, with skip / jump / quit navigation at every pause.

Usage:
    python app.py [--start N] [--list] [script_args ...]
"""

import sys

from bashtutor.cli import main


if __name__ == "__main__":
    sys.exit(main())
