"""Orchestration engine: one sub-package per component."""
