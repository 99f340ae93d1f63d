"""
Entry point for module execution (``python -m import_switcheroo``).

This module delegates execution to the CLI handler in ``import_switcheroo.cli.__main__``.
"""

import sys

from import_switcheroo.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
