"""
Coefficient relationships between plane-wave terms.

A relationship says "if the term with powers (n, m) is present, its partner
must be present too". The partner's powers are a permutation/negation of
(n, m) and its multiplier is either copied or negated depending on the parity
of the source powers. Negating on odd parity is what turns a mirror into a
glide reflection.

The same ``PowerTransform`` records are used to generate partners during setup
and to recognise partners during symmetry detection.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Tuple, TypeVar

import numpy as np

from .exceptions import ParseError

T = TypeVar("T")

MULTIPLIER_TOLERANCE = 1e-9


class Parity(Enum):
    """When a transform negates the partner's multiplier."""
    NONE = "none"
    SUM = "n+m"   # negate when n + m is odd
    N = "n"       # negate when n is odd


@dataclass(frozen=True)
class PowerTransform:
    """
    Maps (n, m) to a partner's powers and multiplier sign.

    The powers are optionally swapped first, then each slot is negated.
    """
    swap: bool
    negate_n: bool
    negate_m: bool
    parity: Parity = Parity.NONE

    def powers(self, power_n: int, power_m: int) -> Tuple[int, int]:
        n, m = (power_m, power_n) if self.swap else (power_n, power_m)
        return (-n if self.negate_n else n, -m if self.negate_m else m)

    def is_odd(self, power_n: int, power_m: int) -> bool:
        """True when the parity rule fires for these source powers."""
        if self.parity is Parity.SUM:
            return (power_n + power_m) % 2 != 0
        if self.parity is Parity.N:
            return power_n % 2 != 0
        return False

    def scale(self, power_n: int, power_m: int) -> int:
        return -1 if self.is_odd(power_n, power_m) else 1

    def apply(self, power_n: int, power_m: int, multiplier: complex) -> Tuple[int, int, complex]:
        n, m = self.powers(power_n, power_m)
        return n, m, multiplier * self.scale(power_n, power_m)

    def matches(self, source, target) -> bool:
        """
        Does ``target`` sit where this transform sends ``source``?

        Both arguments need ``power_n``, ``power_m`` and ``multiplier``.
        """
        if (target.power_n, target.power_m) != self.powers(source.power_n, source.power_m):
            return False
        expected = source.multiplier * self.scale(source.power_n, source.power_m)
        return bool(np.isclose(target.multiplier, expected, rtol=0.0, atol=MULTIPLIER_TOLERANCE))


class Relationship(Enum):
    """Declared partner relationships, valued by their descriptor code."""
    PLUS_M_PLUS_N = "+M+N"
    PLUS_M_PLUS_N_MAYBE_FLIP_SCALE = "+M+NF"
    MINUS_N_MINUS_M = "-N-M"
    MINUS_M_MINUS_N = "-M-N"
    MINUS_M_MINUS_N_MAYBE_FLIP_SCALE = "-M-NF"

    @property
    def code(self) -> str:
        return self.value

    @property
    def transform(self) -> PowerTransform:
        return RELATIONSHIP_TRANSFORMS[self]

    @classmethod
    def from_code(cls, code: Any) -> "Relationship":
        """Look a relationship up by its code. Unknown codes are rejected."""
        if isinstance(code, cls):
            return code
        if isinstance(code, str):
            try:
                return cls(code.strip().upper())
            except ValueError:
                pass
        valid = [member.value for member in cls]
        raise ParseError(f"Unknown coefficient relationship: {code!r}. Valid: {valid}")


RELATIONSHIP_TRANSFORMS: Dict[Relationship, PowerTransform] = {
    Relationship.PLUS_M_PLUS_N: PowerTransform(swap=True, negate_n=False, negate_m=False),
    Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE: PowerTransform(
        swap=True, negate_n=False, negate_m=False, parity=Parity.SUM),
    Relationship.MINUS_N_MINUS_M: PowerTransform(swap=False, negate_n=True, negate_m=True),
    Relationship.MINUS_M_MINUS_N: PowerTransform(swap=True, negate_n=True, negate_m=True),
    Relationship.MINUS_M_MINUS_N_MAYBE_FLIP_SCALE: PowerTransform(
        swap=True, negate_n=True, negate_m=True, parity=Parity.SUM),
}


def apply_relationship(relationship: Relationship, term: T) -> T:
    """
    Build the partner term that ``relationship`` requires for ``term``.

    The partner keeps every other field of the source (conjugate handling
    included) and declares no relationships of its own.
    """
    power_n, power_m, multiplier = relationship.transform.apply(
        term.power_n, term.power_m, term.multiplier)
    return replace(
        term,
        power_n=power_n,
        power_m=power_m,
        multiplier=multiplier,
        coefficient_relationships=[],
    )
