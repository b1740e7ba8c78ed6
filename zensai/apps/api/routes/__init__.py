from . import entries, prompt, session, suggestion

__all__ = ["entries", "prompt", "session", "suggestion"]
