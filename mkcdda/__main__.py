"""Package entry point for ``python -m mkcdda``.

WHY: Users run the converter as ``python -m mkcdda track1.wav track2.wav``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Delegates to the CLI's main() and hands its return value to
sys.exit() as the process exit status.
"""

import sys

if __name__ == "__main__":
    from mkcdda.cli import main
    sys.exit(main())
