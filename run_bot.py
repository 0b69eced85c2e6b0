"""
Starts the CrimeCat bot.

run_bot() checks the settings (BOT_PREFIX, BACKEND_API_BASE, LOG_LEVEL),
loads the command, event and response modules, and then logs in. A module
that fails to import stops startup here with a non-zero exit.
"""

import logging
import sys

from crimecat.discord.bot import run_bot


def main() -> None:
    try:
        run_bot()
    except Exception:
        # Fail loud and early with a clear signal for operators.
        logging.basicConfig(level=logging.ERROR)
        logging.exception("Discord bot failed to start.")
        print("\n❌ Discord bot failed to start.")
        print("   See error above. Most common causes:")
        print("   - DISCORD_BOT_TOKEN missing or not loaded into the environment")
        print("   - Invalid BACKEND_API_BASE or LOG_LEVEL")
        print("   - BOT_PREFIX empty, too long or containing whitespace")
        print("   - A command/event module failing to import (ModuleLoadError)\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
