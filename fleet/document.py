"""Document class for uploaded driver and vehicle paperwork."""
from typing import Optional


class Document:
    """A stored document, optionally with an expiry date."""

    def __init__(
            self,
            document_type: str,
            expiry_date: Optional[str] = None,
            file_ref: Optional[str] = None,
            notes: Optional[str] = None,
    ):
        self.document_type = document_type
        self.expiry_date = expiry_date
        self.file_ref = file_ref
        self.notes = notes
