from .messages import compose_success_message
from .pipeline import EnrichmentPipeline, MoodPrecedence, PHOTO_FEATURE, PipelineState

__all__ = ["EnrichmentPipeline", "MoodPrecedence", "PHOTO_FEATURE", "PipelineState", "compose_success_message"]
