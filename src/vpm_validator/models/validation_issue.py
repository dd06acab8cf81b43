"""Validation issue model shared by manifest and catalog checks."""

from __future__ import annotations

from dataclasses import dataclass

INFO = "info"
WARNING = "warning"
ERROR = "error"

_VALID_SEVERITIES = {INFO, WARNING, ERROR}


@dataclass(frozen=True)
class ValidationIssue:
    """A single advisory or blocking message about a manifest."""

    severity: str
    message: str

    def __post_init__(self) -> None:
        if self.severity not in _VALID_SEVERITIES:
            raise ValueError(f"Invalid severity: {self.severity}")
        if not self.message:
            raise ValueError("Issue message must be non-empty")

    @property
    def is_error(self) -> bool:
        return self.severity == ERROR

    def to_dict(self) -> dict[str, str]:
        return {"severity": self.severity, "message": self.message}

    @classmethod
    def info(cls, message: str) -> ValidationIssue:
        return cls(severity=INFO, message=message)

    @classmethod
    def warning(cls, message: str) -> ValidationIssue:
        return cls(severity=WARNING, message=message)

    @classmethod
    def error(cls, message: str) -> ValidationIssue:
        return cls(severity=ERROR, message=message)
