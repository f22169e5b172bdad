"""Validation error kinds reported by the parameter validator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class UnknownFamily:
    """The topology tag does not name a supported family."""

    family: object

    @property
    def message(self) -> str:
        return f"Unknown topology family: {self.family!r}"


@dataclass(frozen=True)
class MissingField:
    """A required parameter is absent."""

    field: str

    @property
    def message(self) -> str:
        return f"Missing required parameter '{self.field}'"


@dataclass(frozen=True)
class NotAnInteger:
    """A parameter value cannot be read as an integer."""

    field: str
    value: object

    @property
    def message(self) -> str:
        return f"Parameter '{self.field}' must be an integer, got {self.value!r}"


@dataclass(frozen=True)
class OutOfRange:
    """A parameter lies outside its inclusive ``[min, max]`` bounds."""

    field: str
    value: int
    min: int
    max: int

    @property
    def message(self) -> str:
        return (
            f"Parameter '{self.field}' = {self.value} out of range "
            f"(allowed: {self.min} - {self.max})"
        )


@dataclass(frozen=True)
class TooLarge:
    """The derived node or host count exceeds the safety cap."""

    computed_count: int
    cap: int

    @property
    def message(self) -> str:
        return (
            f"Topology too large: {self.computed_count:,} generated "
            f"(limit: {self.cap:,})"
        )


Violation = Union[UnknownFamily, MissingField, NotAnInteger, OutOfRange, TooLarge]


class ValidationError(ValueError):
    """All constraints violated by one parameter record.

    The validator returns instances of this class; the engine facade raises
    them. ``violations`` is never empty.
    """

    def __init__(self, family: object, violations: list[Violation]) -> None:
        self.family = family
        self.violations: tuple[Violation, ...] = tuple(violations)
        detail = "; ".join(v.message for v in self.violations)
        label = getattr(family, "value", family)
        super().__init__(f"Invalid parameters for {label}: {detail}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.family == other.family and self.violations == other.violations

    def __hash__(self) -> int:
        return hash((repr(self.family), self.violations))
