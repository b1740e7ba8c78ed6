"""Application entrypoints for Zensai."""
