from .debouncer import (
    MoodState,
    MoodSuggestionDebouncer,
    SuggestionResponse,
    SuggestionView,
)

__all__ = ["MoodState", "MoodSuggestionDebouncer", "SuggestionResponse", "SuggestionView"]
