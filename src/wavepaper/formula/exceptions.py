"""Errors raised while building, setting up or evaluating formulas."""


class FormulaError(ValueError):
    """Base class for every formula error."""


class ParseError(FormulaError):
    """A descriptor field could not be turned into a formula parameter."""


class DegenerateLatticeError(FormulaError):
    """The two lattice vectors are linearly dependent (zero-area cell)."""


class InvalidLatticeSizeError(FormulaError):
    """The lattice class needs a size and none was given."""
