"""DiagnosticProcedure class for step-by-step troubleshooting guides."""
import uuid
from typing import List, Optional


class DiagnosticProcedure:
    """A troubleshooting procedure for one vehicle system."""

    def __init__(
            self,
            title: str,
            system: str = "Engine",
            description: Optional[str] = None,
            steps: Optional[str] = None,
            warnings: Optional[str] = None,
            related_part_ids: Optional[List[str]] = None,
            id: Optional[str] = None,
    ):
        self.id = id or uuid.uuid4().hex
        self.title = title
        self.system = system
        self.description = description
        self.steps = steps
        self.warnings = warnings
        self.related_part_ids = list(related_part_ids or [])

    @property
    def step_list(self) -> List[str]:
        """Steps split one per line, blank lines dropped."""
        return [s.strip() for s in (self.steps or "").splitlines() if s.strip()]


def validate_diagnostic(procedure: DiagnosticProcedure) -> None:
    if not procedure.title or not procedure.title.strip():
        raise ValueError("Diagnostic title is required")
