"""
Rosette formulas: patterns with point symmetry about the origin.

A sum of ``a · z^n · z̄^m`` terms is invariant under rotation by 2π/p when
every term has n − m divisible by p, and under the mirror z → z̄ when every
term is matched by its (m, n) partner with the same multiplier. A term that
ignores the conjugate is ``a · z^n`` and counts as powers (n, 0).
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple

import numpy as np

from .base import Formula, FormulaResult
from .coefficient import MULTIPLIER_TOLERANCE, Relationship
from .exceptions import FormulaError
from .frieze import _parse_term_list
from .parsing import parse_complex
from .term import RosetteFormulaTerm

logger = logging.getLogger(__name__)


@dataclass
class RosetteSymmetry:
    """
    Point symmetry of a rosette.

    Attributes:
        multifold: Order of the rotation symmetry; 0 when every term is
            rotation invariant (all n == m)
        mirror: Whether the rosette is symmetric across the real axis
    """
    multifold: int = 1
    mirror: bool = False


def _field_powers(term: RosetteFormulaTerm) -> Tuple[int, int]:
    """Powers of z and z̄ the term actually carries; ``z̄`` drops out when ignored."""
    if term.ignore_complex_conjugate:
        return term.power_n, 0
    return term.power_n, term.power_m


class RosetteFormula(Formula):
    """Sum of rosette terms scaled by a common multiplier."""

    def __init__(self, terms: List[RosetteFormulaTerm], multiplier: complex = 1 + 0j):
        self.terms = list(terms)
        self.multiplier = complex(multiplier)

    def setup(self) -> None:
        if not self.terms:
            raise FormulaError("A rosette formula needs at least one term")
        logger.debug("Rosette formula with %d declared terms", len(self.terms))

    def closed_terms(self) -> List[RosetteFormulaTerm]:
        return [term for declared in self.terms for term in declared.closure()]

    def calculate(self, z) -> FormulaResult:
        contributions = [term.calculate_with_relationships(z) for term in self.terms]
        return FormulaResult(
            total=self.multiplier * sum(contributions),
            contribution_by_term=contributions,
        )

    def analyze_for_symmetry(self) -> RosetteSymmetry:
        terms = [_field_powers(term) + (term.multiplier,) for term in self.closed_terms()]
        differences = np.array([abs(n - m) for n, m, _ in terms], dtype=int)
        multifold = int(np.gcd.reduce(differences)) if len(differences) else 1

        swap = Relationship.PLUS_M_PLUS_N.transform
        mirror = bool(terms) and all(
            any((other_n, other_m) == swap.powers(n, m)
                and np.isclose(other_multiplier, multiplier, rtol=0.0, atol=MULTIPLIER_TOLERANCE)
                for other_n, other_m, other_multiplier in terms)
            for n, m, multiplier in terms
        )
        return RosetteSymmetry(multifold=multifold, mirror=mirror)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RosetteFormula":
        terms = _parse_term_list(data, "rosette formula")
        return cls(
            terms=[RosetteFormulaTerm.from_dict(term) for term in terms],
            multiplier=parse_complex(data.get("multiplier"), "multiplier", default=1 + 0j),
        )
