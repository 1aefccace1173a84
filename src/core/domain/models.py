"""Domain models (Pydantic v2).

Each operation gets its own explicit schema: registration works on
`UserAccount`, report generation on `ReportData`. Collaborators never receive
an open-ended bag of fields.

Note:
- These models describe *what* the data is, not *how* it is stored or sent.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from core.errors import MalformedReportData, StepWarning


class AccountStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    DISABLED = "disabled"


class UserAccount(BaseModel):
    """A user going through the registration flow.

    `email` is optional at the schema level: whether an account without a
    contact address is acceptable is the validator's decision, not the model's.
    """

    model_config = ConfigDict(extra="forbid")

    id: int = Field(
        ...,
        ge=0,
        description="Identity of the account.",
    )
    email: str | None = Field(
        default=None,
        max_length=320,
        description="Contact address used by the notifier.",
    )
    status: AccountStatus = Field(
        default=AccountStatus.PENDING,
        description="Lifecycle status of the account.",
    )
    display_name: str | None = Field(
        default=None,
        max_length=128,
        description="Optional human readable name.",
    )


class ReportData(BaseModel):
    """Input for every report handler."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="Report title.",
    )
    rows: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Tabular content; keys are column names.",
    )
    notes: list[str] = Field(
        default_factory=list,
        description="Free-form lines rendered after the table.",
    )
    generated_at: datetime | None = Field(
        default=None,
        description="Timestamp printed by document formats; set by the caller.",
    )

    @classmethod
    def coerce(cls, data: object) -> "ReportData":
        """Return `data` as a `ReportData`, raising `MalformedReportData` otherwise."""

        if isinstance(data, ReportData):
            return data
        if not isinstance(data, Mapping):
            raise MalformedReportData(
                f"Report data must be a mapping or ReportData, got {type(data).__name__}."
            )
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise MalformedReportData(str(exc)) from exc

    def columns(self) -> list[str]:
        """Column names in first-seen order across all rows."""

        seen: dict[str, None] = {}
        for row in self.rows:
            for key in row:
                seen.setdefault(str(key), None)
        return list(seen)


class ExecutionState(str, Enum):
    START = "start"
    VALIDATING = "validating"
    PERSISTING = "persisting"
    NOTIFYING = "notifying"
    LOGGING = "logging"
    DONE = "done"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (ExecutionState.DONE, ExecutionState.FAILED)


@dataclass
class RegistrationResult:
    """Output of a successful registration."""

    entity: UserAccount
    state: ExecutionState
    transitions: list[ExecutionState] = field(default_factory=list)
    warnings: list[StepWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state is ExecutionState.DONE
