from .entry_repository import ContentfulEntryRepository

__all__ = ["ContentfulEntryRepository"]
