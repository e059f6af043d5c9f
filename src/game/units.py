"""Defines the types of units each side fields"""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from src.core.shared_types import Seat


class UnitType(Enum):
    PAWN = "P"
    HERO1 = "H1"  # moves exactly two cells in a straight line
    HERO2 = "H2"  # moves exactly one cell diagonally


# Labels as they appear in unit ids ("A-P1"), in the order they are placed on a side's home row (column 0 to 4)
STARTING_ORDER: list[str] = ["P1", "P2", "H1", "H2", "P3"]

LABEL_TO_UNIT: dict[str, tuple[UnitType, int]] = {
    "P1": (UnitType.PAWN, 1),
    "P2": (UnitType.PAWN, 2),
    "P3": (UnitType.PAWN, 3),
    "H1": (UnitType.HERO1, 1),
    "H2": (UnitType.HERO2, 1),
}

UNIT_TO_LABEL: dict[tuple[UnitType, int], str] = {
    value: key for key, value in LABEL_TO_UNIT.items()
}


@dataclass(frozen=True)
class Unit:
    seat: Seat
    type: UnitType
    index: int = 1

    @classmethod
    def from_id(cls, unit_id: str) -> Self:
        """
        Unit ids are "<seat>-<label>"
        ex. "A-P1" is side A's first pawn, "B-H2" is side B's diagonal hero.
        """
        seat, _, label = unit_id.partition("-")
        if seat not in Seat.__members__ or label not in LABEL_TO_UNIT:
            raise ValueError(f"Not a valid unit id: {unit_id!r}")
        unit_type, index = LABEL_TO_UNIT[label]
        return cls(Seat(seat), unit_type, index)

    @property
    def label(self) -> str:
        return UNIT_TO_LABEL[(self.type, self.index)]

    @property
    def id(self) -> str:
        return f"{self.seat}-{self.label}"


def starting_units(seat: Seat) -> list[Unit]:
    """The five units a side starts with, in home row order."""
    return [Unit.from_id(f"{seat}-{label}") for label in STARTING_ORDER]
