"""Car class for vehicle identification."""

from typing import Optional


class Car:
    """Vehicle identification and purchase information."""

    def __init__(
        self,
        make: str,
        model: str,
        year: int,
        engine: Optional[str] = None,
        transmission: Optional[str] = None,
        purchase_date: Optional[str] = None,
        notes: Optional[str] = None,
    ):
        self.make = make
        self.model = model
        self.year = year
        self.engine = engine
        self.transmission = transmission
        self.purchase_date = purchase_date
        self.notes = notes

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.year} {self.make} {self.model}"
