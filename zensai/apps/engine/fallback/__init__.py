from .content import FallbackContentProvider

__all__ = ["FallbackContentProvider"]
