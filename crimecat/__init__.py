"""
CrimeCat community Discord bot.
"""

__version__ = "1.0.0"
