from .exceptions import FormulaError, ParseError, DegenerateLatticeError, InvalidLatticeSizeError
from .coefficient import Parity, PowerTransform, Relationship, apply_relationship
from .term import EulerFormulaTerm, RosetteFormulaTerm, EisensteinFormulaTerm
from .base import Formula, FormulaResult
from .frieze import FriezeFormula, FriezeGroup, FriezeSymmetry
from .rosette import RosetteFormula, RosetteSymmetry

__all__ = [
    # Errors
    'FormulaError',
    'ParseError',
    'DegenerateLatticeError',
    'InvalidLatticeSizeError',
    # Coefficient relationships
    'Parity',
    'PowerTransform',
    'Relationship',
    'apply_relationship',
    # Terms
    'EulerFormulaTerm',
    'RosetteFormulaTerm',
    'EisensteinFormulaTerm',
    # Formulas
    'Formula',
    'FormulaResult',
    'FriezeFormula',
    'FriezeGroup',
    'FriezeSymmetry',
    'RosetteFormula',
    'RosetteSymmetry',
]
