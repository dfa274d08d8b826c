from __future__ import annotations

from typing import Optional


class PayrollError(Exception):
    """Base error for the reconciliation engine."""


class ValidationError(PayrollError):
    def __init__(self, message: str, shift_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.shift_id = shift_id
