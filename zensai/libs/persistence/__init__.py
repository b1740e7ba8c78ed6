"""Journal persistence clients."""

from .store import JournalStore, StoreError, SupabaseJournalStore, photo_object_path

__all__ = ["JournalStore", "StoreError", "SupabaseJournalStore", "photo_object_path"]
