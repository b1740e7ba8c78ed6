"""Zensai journaling backend: entry enrichment and engagement orchestration."""

__version__ = "0.1.0"
