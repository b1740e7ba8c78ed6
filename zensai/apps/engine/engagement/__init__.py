from .reconciler import EngagementSnapshot, EngagementStateReconciler, badge_message

__all__ = ["EngagementSnapshot", "EngagementStateReconciler", "badge_message"]
