"""Simulator-agnostic entity identity.

An actuator is addressed either by a numeric handle (Ignition-style entity
id, also used for GrADyS node ids) or by a name (Gazebo-classic style). The
two cases are separate frozen classes, so an identity always carries exactly
one payload and asking for the other one raises instead of returning a
default.

Author: Laércio Lucchesi
Date: October 18, 2026
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

_UINT64_LIMIT = 2 ** 64


class Simulator(Enum):
    IGNITION = auto()
    GAZEBO = auto()


class WrongEntityVariantError(TypeError):
    """Raised when reading the payload of the variant that was not constructed."""


@dataclass(frozen=True)
class EntityHandle:
    """Identity holding a numeric entity handle."""

    entity: int

    def __post_init__(self):
        if isinstance(self.entity, bool) or not isinstance(self.entity, int):
            raise ValueError(f"entity handle must be an int, got {self.entity!r}")
        if not 0 <= self.entity < _UINT64_LIMIT:
            raise ValueError(f"entity handle out of uint64 range: {self.entity}")

    @property
    def sim_type(self) -> Simulator:
        return Simulator.IGNITION

    def as_handle(self) -> int:
        return self.entity

    def as_name(self) -> str:
        raise WrongEntityVariantError(
            f"{self!r} holds a numeric handle, not a name"
        )


@dataclass(frozen=True)
class EntityName:
    """Identity holding an entity name."""

    name: str

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise ValueError(f"entity name must be a str, got {self.name!r}")

    @property
    def sim_type(self) -> Simulator:
        return Simulator.GAZEBO

    def as_handle(self) -> int:
        raise WrongEntityVariantError(
            f"{self!r} holds a name, not a numeric handle"
        )

    def as_name(self) -> str:
        return self.name


SimEntity = Union[EntityHandle, EntityName]
