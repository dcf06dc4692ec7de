"""InspectionItem class for inspection checklist templates."""
import uuid
from typing import Optional


class InspectionItem:
    """One entry of a vehicle's inspection checklist."""

    def __init__(
            self,
            title: str,
            category: str = "General",
            description: Optional[str] = None,
            specifications: Optional[str] = None,
            is_priority: bool = False,
            id: Optional[str] = None,
    ):
        self.id = id or uuid.uuid4().hex
        self.title = title
        self.category = category
        self.description = description
        self.specifications = specifications
        self.is_priority = bool(is_priority)


def validate_inspection(item: InspectionItem) -> None:
    if not item.title or not item.title.strip():
        raise ValueError("Inspection title is required")
