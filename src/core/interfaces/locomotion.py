"""Movement capabilities.

One protocol per behaviour: a variant implements only what it can actually
do, so no implementer is forced to stub out `fly` or `swim`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Flyable(Protocol):
    def fly(self) -> str: ...


@runtime_checkable
class Swimmable(Protocol):
    def swim(self) -> str: ...
