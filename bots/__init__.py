"""Computer opponents for Crazy Eights."""

from .base import BotMove, BotStrategy
from .baseline_eights_last import EightsLastBot
from .random_bot import RandomBot

__all__ = ["BotMove", "BotStrategy", "EightsLastBot", "RandomBot"]
