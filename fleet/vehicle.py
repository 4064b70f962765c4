"""Vehicle class for fleet units."""

from typing import List, Optional

from .document import Document


class Vehicle:
    """A fleet vehicle with its latest odometer and engine hour readings."""

    def __init__(
        self,
        vehicle_id: str,
        make: Optional[str] = None,
        model: Optional[str] = None,
        year: Optional[int] = None,
        current_mileage: Optional[float] = None,
        current_engine_hours: Optional[float] = None,
        documents: Optional[List[Document]] = None,
        name: Optional[str] = None,
    ):
        self.id = vehicle_id
        self.make = make
        self.model = model
        self.year = year
        self.current_mileage = current_mileage
        self.current_engine_hours = current_engine_hours
        self.documents = documents or []
        self._name = name

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        if self._name:
            return self._name
        parts = [str(p) for p in (self.year, self.make, self.model) if p]
        return " ".join(parts) if parts else self.id
