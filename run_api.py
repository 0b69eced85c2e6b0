"""
Ops API entrypoint.

Operator notes:
- Serves the loaded command catalogue; it never connects to Discord.
- Host/port come from HOST and PORT.
"""

import logging
import sys

from crimecat.main import run


def main() -> None:
    try:
        run()
    except Exception:
        logging.basicConfig(level=logging.ERROR)
        logging.exception("API failed to start.")
        print("\n❌ API failed to start.")
        print("   See error above. Most common causes:")
        print("   - Port already in use (PORT)")
        print("   - A command/event module failing to import (ModuleLoadError)")
        print("   - Missing dependencies / broken venv\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
