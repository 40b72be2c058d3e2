"""Agent Context Sync — keep agent context files in step with plan.md."""

__version__ = "0.1.0"
