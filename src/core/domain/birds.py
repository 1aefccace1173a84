"""Bird variants composed from movement capabilities.

There is no shared `Bird.fly` that some subclasses would have to break:
`Penguin` simply does not provide `fly`, and callers select participants by
capability instead of by class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from core.interfaces.locomotion import Flyable, Swimmable


@dataclass(frozen=True)
class Sparrow:
    name: str = "sparrow"

    def fly(self) -> str:
        return f"{self.name} flaps up into the air"


@dataclass(frozen=True)
class Penguin:
    name: str = "penguin"

    def swim(self) -> str:
        return f"{self.name} dives under the ice"


@dataclass(frozen=True)
class Duck:
    name: str = "duck"

    def fly(self) -> str:
        return f"{self.name} takes off from the pond"

    def swim(self) -> str:
        return f"{self.name} paddles across the pond"


def fly_all(birds: Iterable[object]) -> list[str]:
    """Make every bird that can fly do so; the rest are skipped."""

    return [bird.fly() for bird in birds if isinstance(bird, Flyable)]


def swim_all(birds: Iterable[object]) -> list[str]:
    return [bird.swim() for bird in birds if isinstance(bird, Swimmable)]
