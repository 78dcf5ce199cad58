"""
Single plane-wave terms.

Three kinds of term share the same powers (n, m):

- ``EulerFormulaTerm``: frieze waves, ``a · e^{inz} · e^{-im z̄}``
- ``RosetteFormulaTerm``: rosette waves, ``a · z^n · z̄^m``
- ``EisensteinFormulaTerm``: lattice waves, ``e^{2πi(ns + mt)}`` where
  ``z = s·x_vector + t·y_vector``

Every ``calculate`` accepts a complex scalar or a numpy array of complex
sample points and evaluates exactly one term. Partner terms required by
coefficient relationships come from ``closure()``.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Tuple

import numpy as np

from .coefficient import Relationship, apply_relationship
from .exceptions import ParseError
from .parsing import parse_bool, parse_complex, parse_int


@dataclass
class EulerFormulaTerm:
    """One frieze wave with optional coefficient relationships."""
    multiplier: complex = 1 + 0j
    power_n: int = 0
    power_m: int = 0
    ignore_complex_conjugate: bool = False
    coefficient_relationships: List[Relationship] = field(default_factory=list)

    def __post_init__(self):
        self.multiplier = complex(self.multiplier)
        self.coefficient_relationships = [
            Relationship.from_code(relationship) for relationship in self.coefficient_relationships
        ]

    @property
    def powers(self) -> Tuple[int, int]:
        return self.power_n, self.power_m

    def calculate(self, z):
        """Evaluate this term alone at ``z``."""
        z = np.asarray(z, dtype=complex)
        result = self.multiplier * np.exp(1j * self.power_n * z)
        if not self.ignore_complex_conjugate:
            result = result * np.exp(-1j * self.power_m * np.conj(z))
        return result

    def closure(self) -> List["EulerFormulaTerm"]:
        """This term followed by one partner per declared relationship, in order."""
        return [self] + [apply_relationship(relationship, self)
                         for relationship in self.coefficient_relationships]

    def calculate_with_relationships(self, z):
        """Sum of this term and its partners at ``z``."""
        return sum(term.calculate(z) for term in self.closure())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EulerFormulaTerm":
        """
        Build a term from a descriptor mapping.

        Recognised fields: multiplier, power_n, power_m,
        ignore_complex_conjugate, coefficient_relationships.
        """
        return cls(**_term_fields(data, "term"))


@dataclass
class RosetteFormulaTerm(EulerFormulaTerm):
    """One rosette wave: ``a · z^n · z̄^m``."""

    def calculate(self, z):
        z = np.asarray(z, dtype=complex)
        result = self.multiplier * z ** self.power_n
        if not self.ignore_complex_conjugate:
            result = result * np.conj(z) ** self.power_m
        return result


@dataclass
class EisensteinFormulaTerm:
    """
    One lattice wave. Its multiplier is the owning wave packet's.

    ``calculate`` takes lattice coordinates, not points; the wallpaper formula
    converts points with ``Lattice.coordinates``.
    """
    power_n: int = 0
    power_m: int = 0

    def __post_init__(self):
        self.power_n = parse_int(self.power_n, "power_n")
        self.power_m = parse_int(self.power_m, "power_m")

    @property
    def powers(self) -> Tuple[int, int]:
        return self.power_n, self.power_m

    def calculate(self, s, t):
        return np.exp(2j * np.pi * (self.power_n * np.asarray(s) + self.power_m * np.asarray(t)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EisensteinFormulaTerm":
        if not isinstance(data, Mapping):
            raise ParseError(f"wave packet term must be a mapping, got {data!r}")
        unknown = set(data) - {"power_n", "power_m"}
        if unknown:
            raise ParseError(f"wave packet term has unsupported fields: {sorted(unknown)}")
        return cls(
            power_n=parse_int(data.get("power_n", 0), "power_n"),
            power_m=parse_int(data.get("power_m", 0), "power_m"),
        )


def _term_fields(data: Mapping[str, Any], label: str) -> dict:
    if not isinstance(data, Mapping):
        raise ParseError(f"{label} must be a mapping, got {data!r}")
    relationships = data.get("coefficient_relationships") or []
    if isinstance(relationships, str) or not isinstance(relationships, (list, tuple)):
        raise ParseError(f"coefficient_relationships must be a list, got {relationships!r}")
    return {
        "multiplier": parse_complex(data.get("multiplier"), "multiplier", default=1 + 0j),
        "power_n": parse_int(data.get("power_n", 0), "power_n"),
        "power_m": parse_int(data.get("power_m", 0), "power_m"),
        "ignore_complex_conjugate": parse_bool(
            data.get("ignore_complex_conjugate", False), "ignore_complex_conjugate"),
        "coefficient_relationships": [Relationship.from_code(code) for code in relationships],
    }
