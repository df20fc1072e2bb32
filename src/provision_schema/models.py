"""Data models for the provision_schema stage."""

from dataclasses import dataclass
from typing import Callable

STATUS_OK = "ok"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass
class ProvisionStep:
    """A named, idempotent provisioning action.

    run() returns (status, message); status is STATUS_OK or STATUS_SKIPPED.
    Raising marks the step as failed.
    """
    name: str
    description: str
    run: Callable[[], tuple[str, str]]


@dataclass
class StepResult:
    name: str
    status: str
    message: str

    @property
    def failed(self) -> bool:
        return self.status == STATUS_FAILED
