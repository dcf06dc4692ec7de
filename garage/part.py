"""Part class for the per-vehicle parts catalog."""
import uuid
from typing import Optional


class Part:
    """A replacement part known to fit the vehicle."""

    def __init__(
            self,
            name: str,
            category: str = "Engine",
            specifications: Optional[str] = None,
            supplier_name: Optional[str] = None,
            purchase_link: Optional[str] = None,
            price_eur: Optional[float] = None,
            compatibility_notes: Optional[str] = None,
            id: Optional[str] = None,
    ):
        self.id = id or uuid.uuid4().hex
        self.name = name
        self.category = category
        self.specifications = specifications
        self.supplier_name = supplier_name
        self.purchase_link = purchase_link
        self.price_eur = price_eur
        self.compatibility_notes = compatibility_notes

    def matches_search(self, term: str) -> bool:
        """Case-insensitive substring search over name and specifications."""
        term = term.lower()
        return term in self.name.lower() or term in (self.specifications or "").lower()


def validate_part(part: Part) -> None:
    if not part.name or not part.name.strip():
        raise ValueError("Part name is required")
    if part.price_eur is not None and part.price_eur < 0:
        raise ValueError(f"Price cannot be negative, got {part.price_eur}")
