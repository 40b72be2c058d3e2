"""
Domain models — Pydantic types for agent context sync.

All models are re-exported here for convenient access:

    from agent_context.core.models import PlanFields, AgentTarget
"""

from agent_context.core.models.plan import PlanFields
from agent_context.core.models.target import (
    DEFAULT_TARGET,
    TARGETS,
    AgentTarget,
    get_target,
    target_names,
)

__all__ = [
    # target.py
    "AgentTarget",
    "DEFAULT_TARGET",
    # plan.py
    "PlanFields",
    "TARGETS",
    "get_target",
    "target_names",
]
