"""
Lattice vectors for the five plane lattice classes.

Groups by lattice type:
- Oblique: p1, p2
- Rectangular: pm, pg, pmm, pmg, pgg
- Rhombic (centered): cm, cmm
- Square: p4, p4m, p4g
- Hexagonal: p3, p3m1, p31m, p6, p6m

The hexagonal and square cells are fixed up to scale, so their basis is
always the unit one. The other classes need a ``Dimensions`` whose meaning
depends on the class (see ``build_lattice``).
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import numpy as np

from ..formula.exceptions import DegenerateLatticeError, InvalidLatticeSizeError, ParseError
from ..formula.parsing import parse_float

DEGENERATE_TOLERANCE = 1e-12


class LatticeType(Enum):
    OBLIQUE = "oblique"
    RECTANGULAR = "rectangular"
    RHOMBIC = "rhombic"
    SQUARE = "square"
    HEXAGONAL = "hexagonal"


@dataclass
class Dimensions:
    """Width and height of a lattice cell."""
    width: float
    height: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Dimensions":
        if not isinstance(data, Mapping):
            raise ParseError(f"lattice_size must be a mapping with width/height, got {data!r}")
        if "width" not in data or "height" not in data:
            raise ParseError("lattice_size needs both width and height")
        return cls(
            width=parse_float(data["width"], "lattice_size.width"),
            height=parse_float(data["height"], "lattice_size.height"),
        )


@dataclass
class Lattice:
    """Two complex vectors generating the translation lattice."""
    x_lattice_vector: complex
    y_lattice_vector: complex

    def __post_init__(self):
        self.x_lattice_vector = complex(self.x_lattice_vector)
        self.y_lattice_vector = complex(self.y_lattice_vector)

    @property
    def determinant(self) -> float:
        x, y = self.x_lattice_vector, self.y_lattice_vector
        return x.real * y.imag - x.imag * y.real

    def validate(self) -> None:
        scale = max(abs(self.x_lattice_vector), abs(self.y_lattice_vector)) ** 2
        if scale == 0 or abs(self.determinant) <= DEGENERATE_TOLERANCE * scale:
            raise DegenerateLatticeError(
                f"Lattice vectors {self.x_lattice_vector} and {self.y_lattice_vector} "
                f"are linearly dependent")

    def coordinates(self, z) -> Tuple[np.ndarray, np.ndarray]:
        """
        Solve ``z = s·x_vector + t·y_vector`` for real ``s`` and ``t``.

        Args:
            z: Complex scalar or array of points

        Returns:
            (s, t) with the shape of ``z``
        """
        self.validate()
        z = np.asarray(z, dtype=complex)
        x, y = self.x_lattice_vector, self.y_lattice_vector
        det = self.determinant
        s = (z.real * y.imag - z.imag * y.real) / det
        t = (x.real * z.imag - x.imag * z.real) / det
        return s, t

    def point(self, s, t):
        """Inverse of ``coordinates``."""
        return np.asarray(s) * self.x_lattice_vector + np.asarray(t) * self.y_lattice_vector


def _hexagonal(size: Optional[Dimensions]) -> Lattice:
    return Lattice(1 + 0j, complex(-0.5, math.sqrt(3.0) / 2.0))


def _square(size: Optional[Dimensions]) -> Lattice:
    return Lattice(1 + 0j, 1j)


def _rectangular(size: Dimensions) -> Lattice:
    return Lattice(complex(size.width, 0), complex(0, size.height))


def _rhombic(size: Dimensions) -> Lattice:
    return Lattice(complex(size.width / 2.0, size.height / 2.0),
                   complex(size.width / 2.0, -size.height / 2.0))


def _oblique(size: Dimensions) -> Lattice:
    return Lattice(1 + 0j, complex(size.width, size.height))


# lattice type -> (builder, whether a size is required)
LATTICE_BUILDERS: Dict[LatticeType, Tuple[Callable[[Optional[Dimensions]], Lattice], bool]] = {
    LatticeType.HEXAGONAL: (_hexagonal, False),
    LatticeType.SQUARE: (_square, False),
    LatticeType.RECTANGULAR: (_rectangular, True),
    LatticeType.RHOMBIC: (_rhombic, True),
    LatticeType.OBLIQUE: (_oblique, True),
}


def build_lattice(lattice_type: LatticeType, size: Optional[Dimensions] = None) -> Lattice:
    """
    Derive the lattice basis for a lattice class.

    - hexagonal: 1 and -1/2 + i·√3/2 (size ignored)
    - square: 1 and i (size ignored)
    - rectangular: width and i·height
    - rhombic: (width ± i·height) / 2
    - oblique: 1 and width + i·height

    Raises:
        InvalidLatticeSizeError: The class needs a size and none was given
        DegenerateLatticeError: The resulting vectors span no area
    """
    builder, size_required = LATTICE_BUILDERS[lattice_type]
    if size_required and size is None:
        raise InvalidLatticeSizeError(f"{lattice_type.value} lattice needs a lattice_size")
    lattice = builder(size)
    lattice.validate()
    return lattice
