"""
Wallpaper group tables.

Each group is described by the coefficient relations its wave packets must
satisfy. A relation pairs a ``PowerTransform`` (how the partner packet's powers
and multiplier follow from a packet's) with the geometric operation, written
in lattice coordinates, that the relation makes the pattern invariant under.

Setup uses the transforms to generate partner packets, ``has_symmetry`` uses
them to detect partners, and the symmetry verifier samples the operations.

Lattice coordinates: a point is ``z = s·x_vector + t·y_vector`` and a lattice
wave is ``E(n, m) = exp(2πi(n·s + m·t))``. An operation ``(s, t) -> M·(s, t) + b``
sends ``E(n, m)`` to ``exp(2πi (n, m)·b) · E(Mᵀ(n, m))``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

import numpy as np

from ..formula.coefficient import Parity, PowerTransform, Relationship
from .lattice import LatticeType

Matrix = Tuple[Tuple[int, int], Tuple[int, int]]

IDENTITY: Matrix = ((1, 0), (0, 1))


class WallpaperGroup(Enum):
    P1 = "p1"
    P2 = "p2"
    PM = "pm"
    PG = "pg"
    CM = "cm"
    PMM = "pmm"
    PMG = "pmg"
    PGG = "pgg"
    CMM = "cmm"
    P4 = "p4"
    P4M = "p4m"
    P4G = "p4g"
    P3 = "p3"
    P3M1 = "p3m1"
    P31M = "p31m"
    P6 = "p6"
    P6M = "p6m"


@dataclass(frozen=True)
class CoordinateMap:
    """Affine map of lattice coordinates: (s, t) -> matrix·(s, t) + offset."""
    matrix: Matrix
    offset: Tuple[float, float] = (0.0, 0.0)

    def __call__(self, s, t):
        (a, b), (c, d) = self.matrix
        s, t = np.asarray(s), np.asarray(t)
        return a * s + b * t + self.offset[0], c * s + d * t + self.offset[1]


@dataclass(frozen=True)
class GroupRelation:
    """A coefficient relation and the operation it produces."""
    transform: PowerTransform
    operation: CoordinateMap

    @property
    def is_glide(self) -> bool:
        return self.transform.parity is not Parity.NONE


@dataclass(frozen=True)
class GroupDefinition:
    """Represents a wallpaper group with its generating relations."""
    name: str
    lattice_type: LatticeType
    rotation_order: int  # Maximum rotation symmetry (1, 2, 3, 4, or 6)
    relations: Tuple[GroupRelation, ...]
    description: str


@dataclass(frozen=True)
class LatticeFamily:
    """
    The groups a lattice class supports and its point-group rotation.

    ``power_rotation`` acts on (n, m); repeating it ``rotation_order`` times
    gives the orbit every wave packet is closed to.
    """
    lattice_type: LatticeType
    rotation_order: int
    power_rotation: Matrix
    rotation_operation: CoordinateMap
    inherent: Tuple[WallpaperGroup, ...]
    groups: Tuple[WallpaperGroup, ...]

    def rotate(self, power_n: int, power_m: int) -> Tuple[int, int]:
        (a, b), (c, d) = self.power_rotation
        return a * power_n + b * power_m, c * power_n + d * power_m

    def orbit(self, power_n: int, power_m: int) -> Tuple[Tuple[int, int], ...]:
        powers = [(power_n, power_m)]
        while len(powers) < self.rotation_order:
            powers.append(self.rotate(*powers[-1]))
        return tuple(powers)


# Coefficient relations
SWAP = Relationship.PLUS_M_PLUS_N.transform                          # (m, n)
SWAP_GLIDE = Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE.transform   # (m, n), odd n+m flips
NEGATE = Relationship.MINUS_N_MINUS_M.transform                      # (-n, -m)
NEGATE_SWAP = Relationship.MINUS_M_MINUS_N.transform                 # (-m, -n)
NEGATE_M = PowerTransform(swap=False, negate_n=False, negate_m=True)  # (n, -m)
NEGATE_M_GLIDE = PowerTransform(swap=False, negate_n=False, negate_m=True, parity=Parity.N)
NEGATE_M_DOUBLE_GLIDE = PowerTransform(swap=False, negate_n=False, negate_m=True,
                                       parity=Parity.SUM)

# Operations in lattice coordinates
HALF_TURN = CoordinateMap(((-1, 0), (0, -1)))
SWAP_AXES = CoordinateMap(((0, 1), (1, 0)))
SWAP_AXES_NEGATED = CoordinateMap(((0, -1), (-1, 0)))
FLIP_T = CoordinateMap(((1, 0), (0, -1)))

P2_RELATION = GroupRelation(NEGATE, HALF_TURN)
PM_RELATION = GroupRelation(NEGATE_M, FLIP_T)
PG_RELATION = GroupRelation(NEGATE_M_GLIDE, CoordinateMap(FLIP_T.matrix, (0.5, 0.0)))
PGG_RELATION = GroupRelation(NEGATE_M_DOUBLE_GLIDE, CoordinateMap(FLIP_T.matrix, (0.5, 0.5)))
CM_RELATION = GroupRelation(SWAP, SWAP_AXES)
P4M_RELATION = GroupRelation(SWAP, SWAP_AXES)
P4G_RELATION = GroupRelation(SWAP_GLIDE, CoordinateMap(SWAP_AXES.matrix, (0.5, 0.5)))
P31M_RELATION = GroupRelation(SWAP, SWAP_AXES)
P3M1_RELATION = GroupRelation(NEGATE_SWAP, SWAP_AXES_NEGATED)
P6_RELATION = GroupRelation(NEGATE, HALF_TURN)


# Definition of all 17 wallpaper groups
WALLPAPER_GROUPS: Dict[WallpaperGroup, GroupDefinition] = {
    # Oblique lattice
    WallpaperGroup.P1: GroupDefinition(
        "p1", LatticeType.OBLIQUE, 1, (),
        "Only translations, no point symmetry"),
    WallpaperGroup.P2: GroupDefinition(
        "p2", LatticeType.OBLIQUE, 2, (P2_RELATION,),
        "180° rotation centers"),

    # Rectangular lattice
    WallpaperGroup.PM: GroupDefinition(
        "pm", LatticeType.RECTANGULAR, 1, (PM_RELATION,),
        "Parallel reflection axes"),
    WallpaperGroup.PG: GroupDefinition(
        "pg", LatticeType.RECTANGULAR, 1, (PG_RELATION,),
        "Parallel glide reflections"),
    WallpaperGroup.PMM: GroupDefinition(
        "pmm", LatticeType.RECTANGULAR, 2, (P2_RELATION, PM_RELATION),
        "Perpendicular reflection axes"),
    WallpaperGroup.PMG: GroupDefinition(
        "pmg", LatticeType.RECTANGULAR, 2, (P2_RELATION, PG_RELATION),
        "Reflection + perpendicular glide"),
    WallpaperGroup.PGG: GroupDefinition(
        "pgg", LatticeType.RECTANGULAR, 2, (P2_RELATION, PGG_RELATION),
        "Perpendicular glide reflections"),

    # Rhombic (centered rectangular) lattice
    WallpaperGroup.CM: GroupDefinition(
        "cm", LatticeType.RHOMBIC, 1, (CM_RELATION,),
        "Reflection axes with glide between"),
    WallpaperGroup.CMM: GroupDefinition(
        "cmm", LatticeType.RHOMBIC, 2, (CM_RELATION, P2_RELATION),
        "Centered cell with reflections"),

    # Square lattice
    WallpaperGroup.P4: GroupDefinition(
        "p4", LatticeType.SQUARE, 4, (),
        "90° rotation centers"),
    WallpaperGroup.P4M: GroupDefinition(
        "p4m", LatticeType.SQUARE, 4, (P4M_RELATION,),
        "Square with reflections on all axes"),
    WallpaperGroup.P4G: GroupDefinition(
        "p4g", LatticeType.SQUARE, 4, (P4G_RELATION,),
        "Square with glides and rotations"),

    # Hexagonal lattice
    WallpaperGroup.P3: GroupDefinition(
        "p3", LatticeType.HEXAGONAL, 3, (),
        "120° rotation centers"),
    WallpaperGroup.P3M1: GroupDefinition(
        "p3m1", LatticeType.HEXAGONAL, 3, (P3M1_RELATION,),
        "120° rotation with reflection axes through centers"),
    WallpaperGroup.P31M: GroupDefinition(
        "p31m", LatticeType.HEXAGONAL, 3, (P31M_RELATION,),
        "120° rotation with reflection axes between centers"),
    WallpaperGroup.P6: GroupDefinition(
        "p6", LatticeType.HEXAGONAL, 6, (P6_RELATION,),
        "60° rotation centers"),
    WallpaperGroup.P6M: GroupDefinition(
        "p6m", LatticeType.HEXAGONAL, 6, (P6_RELATION, P31M_RELATION, P3M1_RELATION),
        "Hexagonal with all symmetries"),
}


LATTICE_FAMILIES: Dict[LatticeType, LatticeFamily] = {
    LatticeType.HEXAGONAL: LatticeFamily(
        lattice_type=LatticeType.HEXAGONAL,
        rotation_order=3,
        power_rotation=((0, 1), (-1, -1)),                 # (n, m) -> (m, -n-m)
        rotation_operation=CoordinateMap(((0, -1), (1, -1))),  # z -> ωz
        inherent=(WallpaperGroup.P1, WallpaperGroup.P3),
        groups=(WallpaperGroup.P1, WallpaperGroup.P3, WallpaperGroup.P31M,
                WallpaperGroup.P3M1, WallpaperGroup.P6, WallpaperGroup.P6M),
    ),
    LatticeType.SQUARE: LatticeFamily(
        lattice_type=LatticeType.SQUARE,
        rotation_order=4,
        power_rotation=((0, 1), (-1, 0)),                  # (n, m) -> (m, -n)
        rotation_operation=CoordinateMap(((0, -1), (1, 0))),   # z -> iz
        inherent=(WallpaperGroup.P1, WallpaperGroup.P2, WallpaperGroup.P4),
        groups=(WallpaperGroup.P1, WallpaperGroup.P2, WallpaperGroup.P4,
                WallpaperGroup.P4M, WallpaperGroup.P4G),
    ),
    LatticeType.RECTANGULAR: LatticeFamily(
        lattice_type=LatticeType.RECTANGULAR,
        rotation_order=1,
        power_rotation=IDENTITY,
        rotation_operation=CoordinateMap(IDENTITY),
        inherent=(WallpaperGroup.P1,),
        groups=(WallpaperGroup.P1, WallpaperGroup.P2, WallpaperGroup.PM, WallpaperGroup.PG,
                WallpaperGroup.PMM, WallpaperGroup.PMG, WallpaperGroup.PGG),
    ),
    LatticeType.RHOMBIC: LatticeFamily(
        lattice_type=LatticeType.RHOMBIC,
        rotation_order=1,
        power_rotation=IDENTITY,
        rotation_operation=CoordinateMap(IDENTITY),
        inherent=(WallpaperGroup.P1,),
        groups=(WallpaperGroup.P1, WallpaperGroup.P2, WallpaperGroup.CM, WallpaperGroup.CMM),
    ),
    LatticeType.OBLIQUE: LatticeFamily(
        lattice_type=LatticeType.OBLIQUE,
        rotation_order=1,
        power_rotation=IDENTITY,
        rotation_operation=CoordinateMap(IDENTITY),
        inherent=(WallpaperGroup.P1,),
        groups=(WallpaperGroup.P1, WallpaperGroup.P2),
    ),
}


def list_groups(lattice_type: LatticeType) -> Tuple[WallpaperGroup, ...]:
    """List the wallpaper groups a lattice class can express."""
    return LATTICE_FAMILIES[lattice_type].groups
