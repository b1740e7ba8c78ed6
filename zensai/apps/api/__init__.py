"""HTTP surface for the journaling orchestrator."""
