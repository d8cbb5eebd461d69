"""Typed city and road records."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, Field


class City(BaseModel):
    """Single city record."""

    index: int = Field(ge=1)
    name: str


class Road(BaseModel):
    """Undirected road between two cities, reported with its lower index first."""

    a: int
    b: int
    a_name: str
    b_name: str
    budget: float = 0.0

    @property
    def label(self) -> str:
        return f"{self.a_name}-{self.b_name}"


@dataclass
class MatrixView:
    """Square matrix over existing city indices, ready for display."""

    labels: list[int] = field(default_factory=list)
    rows: list[list[float]] = field(default_factory=list)
