"""Validator implementations for `UserAccount`."""

from __future__ import annotations

import re
from typing import Sequence

from core.domain.models import AccountStatus, UserAccount
from core.errors import ValidationFailed
from core.interfaces.capabilities import Validator

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class RequiredEmailValidator:
    """Rejects accounts without a well-formed email address."""

    def validate(self, entity: UserAccount) -> None:
        email = (entity.email or "").strip()
        if not email:
            raise ValidationFailed(f"User {entity.id} has no email address.")
        if not _EMAIL_RE.match(email):
            raise ValidationFailed(f"User {entity.id} has a malformed email address: {email!r}.")


class ActiveStatusValidator:
    def validate(self, entity: UserAccount) -> None:
        if entity.status is AccountStatus.DISABLED:
            raise ValidationFailed(f"User {entity.id} is disabled.")


class CompositeValidator:
    """Runs several validators in order; the first rejection wins."""

    def __init__(self, validators: Sequence[Validator]) -> None:
        self._validators = tuple(validators)

    def validate(self, entity: UserAccount) -> None:
        for validator in self._validators:
            validator.validate(entity)
