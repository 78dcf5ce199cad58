"""
Symmetry Verifier for wave formulas.

Checks numerically that a formula's field really has the symmetries its
coefficients claim. Instead of comparing pixels, the verifier evaluates the
field at random sample points z and at g(z) for every operation g of the
group, and compares the two directly.

Frieze operations act on the plane (the strip repeats every 2π along x).
Wallpaper operations act on lattice coordinates, so they hold for any basis
of the right lattice class, including precomputed ones.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from ..formula.base import Formula
from ..formula.exceptions import FormulaError
from ..formula.frieze import FriezeFormula, FriezeGroup
from ..formula.rosette import RosetteFormula
from ..wallpaper.formula import WallpaperFormula
from ..wallpaper.groups import LATTICE_FAMILIES, WALLPAPER_GROUPS, CoordinateMap, WallpaperGroup

logger = logging.getLogger(__name__)

PlaneOperation = Callable[[np.ndarray], np.ndarray]


@dataclass
class SymmetryResult:
    """Result of a single symmetry check."""
    name: str
    present: bool
    score: float  # max |f(g·z) - f(z)| over the samples, lower = more symmetric
    threshold: float
    details: str = ""


@dataclass
class GroupVerificationResult:
    """Complete verification result for a formula."""
    expected_group: str
    verified: bool
    symmetry_scores: Dict[str, SymmetryResult] = field(default_factory=dict)
    message: str = ""


def _half_turn(z):
    return -z


def _vertical_mirror(z):
    return -np.conj(z)


def _horizontal_mirror(z):
    return np.conj(z)


def _glide(z):
    return np.conj(z) + np.pi


HALF_TURN = ("half_turn", _half_turn)
VERTICAL_MIRROR = ("vertical_mirror", _vertical_mirror)
HORIZONTAL_MIRROR = ("horizontal_mirror", _horizontal_mirror)
GLIDE = ("glide", _glide)

# Plane operations required by each frieze group
FRIEZE_OPERATIONS: Dict[FriezeGroup, List[Tuple[str, PlaneOperation]]] = {
    FriezeGroup.P111: [],
    FriezeGroup.P211: [HALF_TURN],
    FriezeGroup.P1M1: [VERTICAL_MIRROR],
    FriezeGroup.P11M: [HORIZONTAL_MIRROR],
    FriezeGroup.P11G: [GLIDE],
    FriezeGroup.P2MM: [HALF_TURN, VERTICAL_MIRROR, HORIZONTAL_MIRROR],
    FriezeGroup.P2MG: [HALF_TURN, GLIDE],
}


class SymmetryVerifier:
    """
    Verifies formula symmetries by direct evaluation.

    This verifier works by:
    1. Drawing sample points inside one period of the pattern
    2. Mapping them through every operation of the group
    3. Comparing the field before and after each operation
    """

    def __init__(self,
                 tolerance: float = 1e-6,
                 samples: int = 64,
                 seed: Optional[int] = None):
        """
        Initialize verifier.

        Args:
            tolerance: Largest allowed difference, relative to the field's magnitude
            samples: Number of sample points per check
            seed: Random seed for reproducibility
        """
        self.tolerance = tolerance
        self.samples = samples
        self.rng = np.random.default_rng(seed)

    def verify(self,
               formula: Formula,
               expected_group: Union[FriezeGroup, WallpaperGroup, None] = None) -> GroupVerificationResult:
        """
        Verify that a set-up formula has the expected symmetry.

        Args:
            formula: Frieze, rosette or wallpaper formula (after ``setup()``)
            expected_group: Group to check; rosettes check their own analysis

        Returns:
            GroupVerificationResult
        """
        if isinstance(formula, FriezeFormula):
            if not isinstance(expected_group, FriezeGroup):
                raise ValueError(f"Unknown frieze group: {expected_group}")
            return self.verify_frieze(formula, expected_group)
        if isinstance(formula, WallpaperFormula):
            if not isinstance(expected_group, WallpaperGroup):
                raise ValueError(f"Unknown wallpaper group: {expected_group}")
            return self.verify_wallpaper(formula, expected_group)
        if isinstance(formula, RosetteFormula):
            return self.verify_rosette(formula)
        raise ValueError(f"Unsupported formula: {type(formula).__name__}")

    def verify_frieze(self, formula: FriezeFormula, group: FriezeGroup) -> GroupVerificationResult:
        x = self.rng.uniform(0.0, 2.0 * np.pi, self.samples)
        y = self.rng.uniform(-1.0, 1.0, self.samples)
        z = x + 1j * y

        results = {
            name: self._check(formula, z, operation(z), name)
            for name, operation in FRIEZE_OPERATIONS[group]
        }
        return self._summarize(group.value, results)

    def verify_rosette(self, formula: RosetteFormula) -> GroupVerificationResult:
        symmetry = formula.analyze_for_symmetry()
        radius = self.rng.uniform(0.5, 1.5, self.samples)
        angle = self.rng.uniform(0.0, 2.0 * np.pi, self.samples)
        z = radius * np.exp(1j * angle)

        results = {}
        if symmetry.multifold > 1:
            turn = np.exp(2j * np.pi / symmetry.multifold)
            results[f"rotation_{symmetry.multifold}"] = self._check(
                formula, z, turn * z, f"rotation_{symmetry.multifold}")
        if symmetry.mirror:
            results["mirror"] = self._check(formula, z, np.conj(z), "mirror")

        name = f"{'d' if symmetry.mirror else 'c'}{symmetry.multifold}"
        return self._summarize(name, results)

    def verify_wallpaper(self, formula: WallpaperFormula,
                         group: WallpaperGroup) -> GroupVerificationResult:
        if formula.lattice is None:
            raise FormulaError("setup() must be called before verification")
        family = LATTICE_FAMILIES[formula.lattice_type]
        if group not in family.groups:
            raise ValueError(f"{group.value} is not a {formula.lattice_type.value} group")

        operations: List[Tuple[str, CoordinateMap]] = []
        if family.rotation_order > 1:
            operations.append((f"rotation_{family.rotation_order}", family.rotation_operation))
        for index, relation in enumerate(WALLPAPER_GROUPS[group].relations):
            kind = "glide" if relation.is_glide else "relation"
            operations.append((f"{kind}_{index}", relation.operation))

        s = self.rng.uniform(0.0, 1.0, self.samples)
        t = self.rng.uniform(0.0, 1.0, self.samples)
        z = formula.lattice.point(s, t)

        results = {
            name: self._check(formula, z, formula.lattice.point(*operation(s, t)), name)
            for name, operation in operations
        }
        return self._summarize(group.value, results)

    def _check(self, formula: Formula, z: np.ndarray, image: np.ndarray,
               name: str) -> SymmetryResult:
        before = np.asarray(formula.calculate(z).total)
        after = np.asarray(formula.calculate(image).total)
        score = float(np.max(np.abs(after - before)))
        threshold = self.tolerance * (1.0 + float(np.max(np.abs(before))))
        return SymmetryResult(
            name=name,
            present=score <= threshold,
            score=score,
            threshold=threshold,
            details=f"max |f(g·z) - f(z)| over {len(z)} samples",
        )

    def _summarize(self, group_name: str,
                   results: Dict[str, SymmetryResult]) -> GroupVerificationResult:
        # p1 and p111 have nothing to check and always pass
        verified = all(result.present for result in results.values())
        if verified:
            message = f"✓ Formula verified as {group_name}"
        else:
            missing = [name for name, result in results.items() if not result.present]
            message = f"✗ Missing symmetries: {missing}"
        logger.debug(message)
        return GroupVerificationResult(
            expected_group=group_name,
            verified=verified,
            symmetry_scores=results,
            message=message,
        )
