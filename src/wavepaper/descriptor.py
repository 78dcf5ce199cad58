"""
Turn a parsed job descriptor into a formula.

The descriptor is whatever the external YAML/JSON reader produced: a mapping
holding exactly one formula under one of the keys below. Sample space, output
size and file names belong to the renderer and are ignored here.
"""

from typing import Any, Callable, Dict, Mapping

from .formula.base import Formula
from .formula.exceptions import ParseError
from .formula.frieze import FriezeFormula
from .formula.rosette import RosetteFormula
from .wallpaper.formula import WallpaperFormula
from .wallpaper.lattice import LatticeType

FORMULA_BUILDERS: Dict[str, Callable[[Mapping[str, Any]], Formula]] = {
    "frieze_formula": FriezeFormula.from_dict,
    "rosette_formula": RosetteFormula.from_dict,
    "wallpaper_formula": WallpaperFormula.from_dict,
    "hexagonal_wallpaper_formula":
        lambda data: WallpaperFormula.from_dict(data, lattice_type=LatticeType.HEXAGONAL),
    "square_wallpaper_formula":
        lambda data: WallpaperFormula.from_dict(data, lattice_type=LatticeType.SQUARE),
}


def build_formula(descriptor: Mapping[str, Any], setup: bool = True) -> Formula:
    """
    Build the formula a job descriptor asks for.

    Args:
        descriptor: Parsed job descriptor
        setup: Run ``setup()`` on the new formula

    Returns:
        The frieze, rosette or wallpaper formula
    """
    if not isinstance(descriptor, Mapping):
        raise ParseError(f"job descriptor must be a mapping, got {type(descriptor).__name__}")

    present = [key for key in FORMULA_BUILDERS if descriptor.get(key) is not None]
    if len(present) != 1:
        raise ParseError(f"job descriptor needs exactly one of {list(FORMULA_BUILDERS)}, "
                         f"found {present}")

    key = present[0]
    formula = FORMULA_BUILDERS[key](descriptor[key])
    if setup:
        formula.setup()
    return formula
