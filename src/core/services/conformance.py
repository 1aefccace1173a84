"""Substitutability checks for capability implementers.

A type-checker can confirm that a validator *has* a `validate` method; it
cannot confirm the method behaves like a validator. These helpers exercise an
implementer against known samples and reject it when it does not.
"""

from __future__ import annotations

from typing import Iterable

from core.domain.models import UserAccount
from core.errors import CapabilityMismatchError, ContractViolation
from core.interfaces.capabilities import Validator


def check_capability(obj: object, capability: type) -> None:
    """Raise `CapabilityMismatchError` unless `obj` structurally satisfies `capability`."""

    if not isinstance(obj, capability):
        raise CapabilityMismatchError(
            f"{type(obj).__name__} does not implement {capability.__name__}."
        )


def check_validator_conformance(
    validator: Validator,
    *,
    valid: Iterable[UserAccount],
    invalid: Iterable[UserAccount],
) -> None:
    """Verify that `validator` accepts every valid and rejects every invalid sample.

    Raises:
        ContractViolation: with one line per misbehaving sample.
    """

    check_capability(validator, Validator)
    problems: list[str] = []

    for entity in valid:
        try:
            result = validator.validate(entity)
        except Exception as exc:
            problems.append(f"rejected valid entity id={entity.id}: {exc}")
            continue
        if result is not None:
            problems.append(f"returned {result!r} instead of None for id={entity.id}")

    for entity in invalid:
        try:
            validator.validate(entity)
        except Exception:
            continue
        problems.append(f"accepted invalid entity id={entity.id} without raising")

    if problems:
        raise ContractViolation(
            f"{type(validator).__name__} violates the Validator contract:\n- "
            + "\n- ".join(problems)
        )
