"""
Frieze formulas: patterns that repeat along one axis.

A frieze formula sums ``EulerFormulaTerm`` waves. Declared coefficient
relationships are resolved lazily each time the formula is evaluated or
analysed, so the formula itself is never modified after construction.

The 7 frieze groups (crystallographic names):
- p111: translations only
- p211: half-turns
- p1m1: vertical mirrors
- p11m: horizontal mirror
- p11g: glide reflection
- p2mm: both mirrors (half-turns follow)
- p2mg: half-turns with a glide
"""

import logging
from dataclasses import dataclass, fields
from enum import Enum
from itertools import combinations
from typing import Any, Iterable, List, Mapping, NamedTuple, Optional

from .base import Formula, FormulaResult
from .coefficient import Relationship
from .exceptions import FormulaError, ParseError
from .parsing import parse_complex
from .term import EulerFormulaTerm

logger = logging.getLogger(__name__)


class FriezeGroup(Enum):
    P111 = "p111"
    P211 = "p211"
    P1M1 = "p1m1"
    P11M = "p11m"
    P11G = "p11g"
    P2MM = "p2mm"
    P2MG = "p2mg"


@dataclass
class FriezeSymmetry:
    """Which frieze groups the coefficients satisfy."""
    p111: bool = False
    p211: bool = False
    p1m1: bool = False
    p11m: bool = False
    p11g: bool = False
    p2mm: bool = False
    p2mg: bool = False

    def has(self, group: FriezeGroup) -> bool:
        return getattr(self, group.value)

    def groups(self) -> List[FriezeGroup]:
        return [FriezeGroup(f.name) for f in fields(self) if getattr(self, f.name)]


# Relationships a term that ignores its complex conjugate may not use to
# pair with the partner generated from itself.
_CONJUGATE_SENSITIVE = {Relationship.MINUS_N_MINUS_M}


class ClosedTerm(NamedTuple):
    """A term of the closed set and where it came from."""
    origin: int  # index of the declared term
    relationship: Optional[Relationship]  # None for the declared term itself
    term: EulerFormulaTerm


def _is_own_partner(first: ClosedTerm, second: ClosedTerm, relationship: Relationship) -> bool:
    if relationship not in _CONJUGATE_SENSITIVE or first.origin != second.origin:
        return False
    if not first.term.ignore_complex_conjugate:
        return False
    return {first.relationship, second.relationship} == {None, relationship}


def _relationship_matches(relationship: Relationship,
                          closed: Iterable[ClosedTerm],
                          odd_only: bool = False) -> bool:
    """
    Is some unordered pair of ``closed`` terms related by ``relationship``?

    With ``odd_only`` the pair also needs the parity rule to fire, which is
    what separates a glide from the mirror it degrades to.
    """
    transform = relationship.transform
    for first, second in combinations(closed, 2):
        if _is_own_partner(first, second, relationship):
            continue
        for source, target in ((first.term, second.term), (second.term, first.term)):
            if not transform.matches(source, target):
                continue
            if odd_only and not transform.is_odd(source.power_n, source.power_m):
                continue
            return True
    return False


class FriezeFormula(Formula):
    """
    Sum of Euler terms scaled by a common multiplier.

    Args:
        terms: Declared terms; each may carry coefficient relationships
        multiplier: Factor applied to the total
    """

    def __init__(self, terms: List[EulerFormulaTerm], multiplier: complex = 1 + 0j):
        self.terms = list(terms)
        self.multiplier = complex(multiplier)

    def setup(self) -> None:
        if not self.terms:
            raise FormulaError("A frieze formula needs at least one term")
        logger.debug("Frieze formula with %d declared terms, %d after closure",
                     len(self.terms), len(self.closed_terms()))

    def closed_terms(self) -> List[EulerFormulaTerm]:
        """Every declared term followed by its partners, in declaration order."""
        return [closed.term for closed in self.closed_terms_with_origin()]

    def closed_terms_with_origin(self) -> List[ClosedTerm]:
        """``closed_terms`` tagged with the declared term and relationship each came from."""
        closed = []
        for origin, declared in enumerate(self.terms):
            relationships = [None] + list(declared.coefficient_relationships)
            for relationship, term in zip(relationships, declared.closure()):
                closed.append(ClosedTerm(origin, relationship, term))
        return closed

    def calculate(self, z) -> FormulaResult:
        contributions = [term.calculate_with_relationships(z) for term in self.terms]
        return FormulaResult(
            total=self.multiplier * sum(contributions),
            contribution_by_term=contributions,
        )

    def analyze_for_symmetry(self) -> FriezeSymmetry:
        terms = self.closed_terms_with_origin()
        symmetry = FriezeSymmetry(
            p211=_relationship_matches(Relationship.MINUS_N_MINUS_M, terms),
            p1m1=_relationship_matches(Relationship.PLUS_M_PLUS_N, terms),
            p11m=_relationship_matches(Relationship.MINUS_M_MINUS_N, terms),
            p11g=_relationship_matches(
                Relationship.MINUS_M_MINUS_N_MAYBE_FLIP_SCALE, terms, odd_only=True),
        )
        glide_partner = symmetry.p11g or _relationship_matches(
            Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE, terms, odd_only=True)

        symmetry.p2mm = symmetry.p211 and symmetry.p1m1 and symmetry.p11m
        symmetry.p2mg = symmetry.p211 and glide_partner
        symmetry.p111 = not any((symmetry.p211, symmetry.p1m1, symmetry.p11m,
                                 symmetry.p11g, symmetry.p2mm, symmetry.p2mg))
        return symmetry

    def has_symmetry(self, group: FriezeGroup) -> bool:
        return self.analyze_for_symmetry().has(group)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FriezeFormula":
        """Build from a descriptor mapping with ``terms`` and optional ``multiplier``."""
        terms = _parse_term_list(data, "frieze formula")
        return cls(
            terms=[EulerFormulaTerm.from_dict(term) for term in terms],
            multiplier=parse_complex(data.get("multiplier"), "multiplier", default=1 + 0j),
        )


def _parse_term_list(data: Mapping[str, Any], label: str) -> list:
    if not isinstance(data, Mapping):
        raise ParseError(f"{label} must be a mapping, got {data!r}")
    terms = data.get("terms")
    if not isinstance(terms, list) or not terms:
        raise ParseError(f"{label} needs a non-empty list of terms")
    return terms
