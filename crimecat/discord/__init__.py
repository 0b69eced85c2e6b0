"""
Discord integration package.

- crimecat.discord.bot is the stable entrypoint (CrimeCatBot + run_bot)
- commands/ loads the modules listed in commands.MODULES (filtered by
  DISCORD_COMMANDS_ALLOW / DISCORD_COMMANDS_DENY)
- events/ and responses/ are scanned per subpackage at boot; dropping a
  module there is enough to register it
"""

from .bot import CrimeCatBot, build_context, run_bot  # re-export for convenience

__all__ = [
    "CrimeCatBot",
    "build_context",
    "run_bot",
]
