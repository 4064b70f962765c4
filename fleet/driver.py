"""Driver, credential and training record classes."""
from typing import List, Optional

from .document import Document


class Credential:
    """License and medical card details for a driver."""

    def __init__(
            self,
            license_number: Optional[str] = None,
            license_class: Optional[str] = None,
            license_expiry_date: Optional[str] = None,
            medical_card_expiry_date: Optional[str] = None,
    ):
        self.license_number = license_number
        self.license_class = license_class
        self.license_expiry_date = license_expiry_date
        self.medical_card_expiry_date = medical_card_expiry_date


class TrainingRecord:
    """Completion record for one training type."""

    def __init__(
            self,
            training_type: str,
            last_completed: Optional[str] = None,
            next_due: Optional[str] = None,
    ):
        self.training_type = training_type
        self.last_completed = last_completed
        self.next_due = next_due


class Driver:
    """A driver with credentials, training and documents."""

    def __init__(
            self,
            driver_id: str,
            first_name: Optional[str] = None,
            last_name: Optional[str] = None,
            email: Optional[str] = None,
            credential: Optional[Credential] = None,
            training: Optional[List[TrainingRecord]] = None,
            documents: Optional[List[Document]] = None,
    ):
        self.id = driver_id
        self.first_name = first_name
        self.last_name = last_name
        self.email = email
        self.credential = credential or Credential()
        self.training = training or []
        self.documents = documents or []

    @property
    def name(self) -> str:
        """Human-readable driver name, falling back to the id."""
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) if parts else self.id

    @property
    def profile_complete(self) -> bool:
        return bool(self.first_name and self.last_name and self.email)

    def get_training(self, training_type: str) -> Optional[TrainingRecord]:
        """Find a training record by type (case-insensitive)."""
        wanted = training_type.lower()
        for record in self.training:
            if record.training_type.lower() == wanted:
                return record
        return None
