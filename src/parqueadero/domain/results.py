# File: src/parqueadero/domain/results.py
"""
Operation results for parking lot operations

Every mutating lot operation reports either a success carrying a value or a
failure tagged with the reason it was rejected.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from enum import Enum


class FailureReason(str, Enum):
    """Why a parking lot operation was rejected"""
    DUPLICATE_OWNER = "duplicate_owner"
    DUPLICATE_VEHICLE = "duplicate_vehicle"
    OWNER_NOT_FOUND = "owner_not_found"
    VEHICLE_NOT_FOUND = "vehicle_not_found"
    INVALID_CATEGORY = "invalid_category"
    ENTRY_HOUR_OUT_OF_RANGE = "entry_hour_out_of_range"
    EXIT_HOUR_OUT_OF_RANGE = "exit_hour_out_of_range"
    EXIT_NOT_AFTER_ENTRY = "exit_not_after_entry"

    @property
    def message(self) -> str:
        messages = {
            FailureReason.DUPLICATE_OWNER: "An owner with that id is already registered",
            FailureReason.DUPLICATE_VEHICLE: "A vehicle with that plate is already registered",
            FailureReason.OWNER_NOT_FOUND: "No owner registered with that id",
            FailureReason.VEHICLE_NOT_FOUND: "No vehicle registered with that plate",
            FailureReason.INVALID_CATEGORY: "Unknown vehicle category",
            FailureReason.ENTRY_HOUR_OUT_OF_RANGE: "Entry hour is outside the allowed range",
            FailureReason.EXIT_HOUR_OUT_OF_RANGE: "Exit hour is outside the allowed range",
            FailureReason.EXIT_NOT_AFTER_ENTRY: "Exit hour must be after entry hour",
        }
        return messages[self]


@dataclass(frozen=True)
class OperationResult:
    """Success with a value, or failure with a reason"""
    success: bool
    value: Any = None
    reason: Optional[FailureReason] = None

    @classmethod
    def ok(cls, value: Any = None) -> 'OperationResult':
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, reason: FailureReason) -> 'OperationResult':
        return cls(success=False, reason=reason)

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "value": self.value,
            "reason": self.reason.value if self.reason else None,
            "message": self.reason.message if self.reason else None
        }
