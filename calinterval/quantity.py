from dataclasses import dataclass
from fractions import Fraction
from typing import Literal, TypeAlias

from calinterval.units import UnitKind

Sign: TypeAlias = Literal[1, -1]


@dataclass(frozen=True, kw_only=True)
class Quantity:
    unit: UnitKind
    magnitude: Fraction

    def __post_init__(self) -> None:
        if self.magnitude < 0:
            raise ValueError(
                f"Quantity magnitude must be >= 0, got {self.magnitude}.\n"
                f"Negative amounts are written with a '-' marker: '-3 days'"
            )

    def __str__(self) -> str:
        return f"{self.magnitude} {self.unit.name.lower()}"


@dataclass(frozen=True, kw_only=True)
class SignedQuantity:
    """A quantity with the sign that was in effect where it was written.

    Attributes:
        quantity: Unit and unsigned magnitude
        sign: Running sign multiplier at that point (+1 or -1)
        position: Character offset of the quantity's number in the input
    """

    quantity: Quantity
    sign: Sign
    position: int = 0

    @property
    def unit(self) -> UnitKind:
        return self.quantity.unit

    @property
    def value(self) -> Fraction:
        """Signed magnitude in the quantity's own unit."""
        return self.sign * self.quantity.magnitude

    def __str__(self) -> str:
        prefix = "-" if self.sign < 0 else ""
        return f"{prefix}{self.quantity}"


ParsedExpression: TypeAlias = tuple[SignedQuantity, ...]
