"""
Plan model — metadata lifted out of a feature's plan.md.

Computed once per run and shared read-only by every target update,
so the model is frozen.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PlanFields(BaseModel):
    """Labeled fields extracted from a plan document.

    An empty string means the label was absent or marked as
    needing clarification.
    """

    model_config = ConfigDict(frozen=True)

    language: str = ""
    framework: str = ""
    testing: str = ""
    storage: str = ""
    project_type: str = ""

    @property
    def tech_entry(self) -> str:
        """``{language} + {framework}`` as used in bullets and change lines."""
        return f"{self.language} + {self.framework}"

    def is_empty(self) -> bool:
        """True when no field was found."""
        return not any(
            (self.language, self.framework, self.testing, self.storage, self.project_type)
        )
