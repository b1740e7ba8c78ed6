"""Shared libraries used across Zensai apps."""
