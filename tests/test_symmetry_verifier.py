"""
Tests that formulas whose coefficients claim a symmetry really have it.

The verifier evaluates each formula at random points and at their images
under the group's operations; these tests are the numerical counterpart of
the coefficient-based detection tests.
"""

import pytest

from wavepaper.analysis import SymmetryVerifier
from wavepaper.formula.frieze import FriezeFormula, FriezeGroup
from wavepaper.formula.rosette import RosetteFormula
from wavepaper.formula.term import EisensteinFormulaTerm, EulerFormulaTerm, RosetteFormulaTerm
from wavepaper.wallpaper.formula import WallpaperFormula, WavePacket
from wavepaper.wallpaper.groups import LATTICE_FAMILIES, WallpaperGroup
from wavepaper.wallpaper.lattice import Dimensions, Lattice, LatticeType

SIZES = {
    LatticeType.HEXAGONAL: None,
    LatticeType.SQUARE: None,
    LatticeType.RECTANGULAR: Dimensions(width=2, height=1),
    LatticeType.RHOMBIC: Dimensions(width=2, height=1.5),
    LatticeType.OBLIQUE: Dimensions(width=0.3, height=1.2),
}

# Base powers whose generated packets reach every group of the lattice
BASE_POWERS = {
    LatticeType.HEXAGONAL: (1, -2),
    LatticeType.SQUARE: (1, 2),
    LatticeType.RECTANGULAR: (1, 2),
    LatticeType.RHOMBIC: (2, 1),
    LatticeType.OBLIQUE: (1, 0),
}

ALL_GROUPS = [
    (lattice_type, group)
    for lattice_type, family in LATTICE_FAMILIES.items()
    for group in family.groups
]


@pytest.fixture
def verifier():
    return SymmetryVerifier(tolerance=1e-6, samples=32, seed=0)


def frieze(*terms):
    formula = FriezeFormula(terms=list(terms))
    formula.setup()
    return formula


def wallpaper(lattice_type, desired_symmetry=None, multiplier=0.7 - 0.2j):
    n, m = BASE_POWERS[lattice_type]
    formula = WallpaperFormula(
        lattice_type=lattice_type,
        wave_packets=[WavePacket(terms=[EisensteinFormulaTerm(n, m)], multiplier=multiplier)],
        lattice_size=SIZES[lattice_type],
        desired_symmetry=desired_symmetry,
    )
    formula.setup()
    return formula


# =============================================================================
# FRIEZE
# =============================================================================

class TestFriezeVerification:

    def test_p211(self, verifier):
        formula = frieze(EulerFormulaTerm(multiplier=1 + 1j, power_n=3, power_m=1,
                                          coefficient_relationships=["-N-M"]))
        result = verifier.verify(formula, FriezeGroup.P211)
        assert result.verified, result.message

    def test_p2mg(self, verifier):
        formula = frieze(EulerFormulaTerm(power_n=2, power_m=-1,
                                          coefficient_relationships=["-N-M", "+M+NF", "-M-NF"]))
        assert formula.has_symmetry(FriezeGroup.P2MG)
        result = verifier.verify(formula, FriezeGroup.P2MG)
        assert result.verified, result.message
        assert set(result.symmetry_scores) == {"half_turn", "glide"}

    def test_p2mm(self, verifier):
        formula = frieze(EulerFormulaTerm(power_n=2, power_m=1,
                                          coefficient_relationships=["-N-M", "+M+N", "-M-N"]))
        assert verifier.verify(formula, FriezeGroup.P2MM).verified

    def test_missing_half_turn(self, verifier):
        formula = frieze(EulerFormulaTerm(power_n=3, power_m=1))
        result = verifier.verify(formula, FriezeGroup.P211)
        assert not result.verified
        assert not result.symmetry_scores["half_turn"].present

    def test_p111_always_verifies(self, verifier):
        formula = frieze(EulerFormulaTerm(power_n=3, power_m=1))
        assert verifier.verify(formula, FriezeGroup.P111).verified

    def test_wrong_group_kind(self, verifier):
        formula = frieze(EulerFormulaTerm(power_n=3, power_m=1))
        with pytest.raises(ValueError):
            verifier.verify(formula, WallpaperGroup.P2)


# =============================================================================
# WALLPAPER
# =============================================================================

class TestWallpaperVerification:

    @pytest.mark.parametrize("lattice_type, group", ALL_GROUPS,
                             ids=[group.value for _, group in ALL_GROUPS])
    def test_desired_symmetry_is_real(self, verifier, lattice_type, group):
        formula = wallpaper(lattice_type, desired_symmetry=group)
        assert formula.has_symmetry(group)
        result = verifier.verify(formula, group)
        assert result.verified, result.message

    def test_rotation_only(self, verifier):
        formula = wallpaper(LatticeType.HEXAGONAL)
        assert verifier.verify(formula, WallpaperGroup.P3).verified
        result = verifier.verify(formula, WallpaperGroup.P6)
        assert not result.verified
        assert result.symmetry_scores["rotation_3"].present

    def test_square_p4m_is_not_p4g(self, verifier):
        formula = wallpaper(LatticeType.SQUARE, desired_symmetry=WallpaperGroup.P4M)
        assert not verifier.verify(formula, WallpaperGroup.P4G).verified

    def test_precomputed_lattice(self, verifier):
        formula = WallpaperFormula(
            lattice_type=LatticeType.RECTANGULAR,
            wave_packets=[WavePacket(terms=[EisensteinFormulaTerm(1, 2)])],
            lattice=Lattice(3 + 0j, 0.5j),
            desired_symmetry=WallpaperGroup.PGG,
        )
        formula.setup()
        assert verifier.verify(formula, WallpaperGroup.PGG).verified

    def test_group_outside_lattice(self, verifier):
        with pytest.raises(ValueError):
            verifier.verify(wallpaper(LatticeType.OBLIQUE), WallpaperGroup.P4)


# =============================================================================
# ROSETTE
# =============================================================================

class TestRosetteVerification:

    def test_dihedral(self, verifier):
        formula = RosetteFormula(terms=[RosetteFormulaTerm(multiplier=1 - 1j, power_n=4, power_m=1,
                                                           coefficient_relationships=["+M+N"])])
        formula.setup()
        result = verifier.verify(formula)
        assert result.expected_group == "d3"
        assert result.verified, result.message

    def test_cyclic(self, verifier):
        formula = RosetteFormula(terms=[RosetteFormulaTerm(power_n=5, power_m=0),
                                        RosetteFormulaTerm(multiplier=2j, power_n=0, power_m=-5)])
        formula.setup()
        result = verifier.verify(formula)
        assert result.expected_group == "c5"
        assert result.verified, result.message
