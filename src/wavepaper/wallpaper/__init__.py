from .lattice import LatticeType, Dimensions, Lattice, build_lattice
from .groups import WallpaperGroup, WALLPAPER_GROUPS, LATTICE_FAMILIES, list_groups
from .formula import WavePacket, WallpaperFormula

__all__ = [
    # Lattices
    'LatticeType',
    'Dimensions',
    'Lattice',
    'build_lattice',
    # Groups
    'WallpaperGroup',
    'WALLPAPER_GROUPS',
    'LATTICE_FAMILIES',
    'list_groups',
    # Formulas
    'WavePacket',
    'WallpaperFormula',
]
