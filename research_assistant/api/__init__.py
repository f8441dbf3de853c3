from research_assistant import __version__

__all__ = ["__version__"]
