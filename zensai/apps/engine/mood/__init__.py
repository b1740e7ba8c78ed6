from .classifier import Classification, MoodClassifier, resolve_mood_label

__all__ = ["Classification", "MoodClassifier", "resolve_mood_label"]
