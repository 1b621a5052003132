"""statewalk CLI entry point.

This module enables running statewalk as:
    python -m statewalk <command>
"""

from statewalk.cli import main

if __name__ == "__main__":
    main()
