from .grammarbot import GrammarBotClient
from .pa11y import Pa11yRunner
from .readable import ReadableClient

__all__ = [
    "GrammarBotClient",
    "Pa11yRunner",
    "ReadableClient",
]
