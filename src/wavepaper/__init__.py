"""
Symmetric pattern formulas: friezes, rosettes and wallpapers built from
complex plane waves whose coefficients are tied together by symmetry.
"""

from .formula import (
    FormulaError,
    ParseError,
    DegenerateLatticeError,
    InvalidLatticeSizeError,
    Relationship,
    EulerFormulaTerm,
    RosetteFormulaTerm,
    EisensteinFormulaTerm,
    FormulaResult,
    FriezeFormula,
    FriezeGroup,
    FriezeSymmetry,
    RosetteFormula,
    RosetteSymmetry,
)
from .wallpaper import (
    LatticeType,
    Dimensions,
    Lattice,
    WallpaperGroup,
    WavePacket,
    WallpaperFormula,
)
from .descriptor import build_formula

__version__ = "0.1.0"

__all__ = [
    # Errors
    'FormulaError',
    'ParseError',
    'DegenerateLatticeError',
    'InvalidLatticeSizeError',
    # Frieze and rosette formulas
    'Relationship',
    'EulerFormulaTerm',
    'RosetteFormulaTerm',
    'FormulaResult',
    'FriezeFormula',
    'FriezeGroup',
    'FriezeSymmetry',
    'RosetteFormula',
    'RosetteSymmetry',
    # Wallpaper formulas
    'EisensteinFormulaTerm',
    'LatticeType',
    'Dimensions',
    'Lattice',
    'WallpaperGroup',
    'WavePacket',
    'WallpaperFormula',
    # Job descriptors
    'build_formula',
]
