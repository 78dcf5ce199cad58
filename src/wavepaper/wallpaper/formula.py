"""
Wallpaper formulas: sums of wave packets over a 2-D lattice.

A wave packet is a group of lattice waves sharing one multiplier. During
``setup`` every packet is closed to the rotation orbit of its first term, so
the pattern always has the lattice's rotation symmetry (3-fold for hexagonal,
4-fold for square). Extra symmetry comes from pairs of packets whose first
terms are related as listed in ``groups.WALLPAPER_GROUPS``; when a desired
symmetry is given, ``setup`` appends the missing partner packets.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from itertools import combinations_with_replacement
from typing import Any, Dict, List, Mapping, Optional

from ..formula.base import Formula, FormulaResult
from ..formula.exceptions import FormulaError, ParseError
from ..formula.parsing import parse_complex, parse_enum
from ..formula.term import EisensteinFormulaTerm
from .groups import LATTICE_FAMILIES, WALLPAPER_GROUPS, GroupRelation, LatticeFamily, WallpaperGroup
from .lattice import Dimensions, Lattice, LatticeType, build_lattice

logger = logging.getLogger(__name__)


@dataclass
class WavePacket:
    """Lattice waves sharing one multiplier."""
    terms: List[EisensteinFormulaTerm]
    multiplier: complex = 1 + 0j

    def __post_init__(self):
        self.multiplier = complex(self.multiplier)
        if not self.terms:
            raise FormulaError("A wave packet needs at least one term")

    @property
    def power_n(self) -> int:
        return self.terms[0].power_n

    @property
    def power_m(self) -> int:
        return self.terms[0].power_m

    def close(self, family: LatticeFamily) -> None:
        """
        Replace the terms with the rotation orbit of the first term.

        Declared terms that already belong to the orbit are absorbed; any
        other term would break the orbit and is rejected.
        """
        orbit = family.orbit(self.power_n, self.power_m)
        stray = [term.powers for term in self.terms if term.powers not in orbit]
        if stray:
            raise FormulaError(
                f"Wave packet terms {stray} are not in the {family.lattice_type.value} "
                f"orbit {list(orbit)} of its first term")
        self.terms = [EisensteinFormulaTerm(power_n=n, power_m=m) for n, m in orbit]

    def calculate(self, s, t):
        """Multiplier times the average of the packet's waves."""
        waves = [term.calculate(s, t) for term in self.terms]
        return self.multiplier * sum(waves) / len(waves)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WavePacket":
        if not isinstance(data, Mapping):
            raise ParseError(f"wave packet must be a mapping, got {data!r}")
        terms = data.get("terms")
        if not isinstance(terms, list) or not terms:
            raise ParseError("wave packet needs a non-empty list of terms")
        return cls(
            terms=[EisensteinFormulaTerm.from_dict(term) for term in terms],
            multiplier=parse_complex(data.get("multiplier"), "multiplier", default=1 + 0j),
        )


@dataclass
class WallpaperFormula(Formula):
    """
    Wave packets over a lattice, scaled by a common multiplier.

    Args:
        lattice_type: Lattice class (hexagonal, square, rectangular, rhombic, oblique)
        wave_packets: Declared packets; the first one is the base for desired symmetry
        multiplier: Factor applied to the total
        lattice_size: Cell size, required by rectangular, rhombic and oblique lattices
        lattice: Precomputed lattice; skips derivation from ``lattice_size``
        desired_symmetry: Group to reach by appending partner packets
    """
    lattice_type: LatticeType
    wave_packets: List[WavePacket] = field(default_factory=list)
    multiplier: complex = 1 + 0j
    lattice_size: Optional[Dimensions] = None
    lattice: Optional[Lattice] = None
    desired_symmetry: Optional[WallpaperGroup] = None

    def __post_init__(self):
        self.multiplier = complex(self.multiplier)
        if isinstance(self.lattice_type, str):
            self.lattice_type = parse_enum(LatticeType, self.lattice_type, "lattice_type")
        if isinstance(self.desired_symmetry, str):
            self.desired_symmetry = parse_enum(WallpaperGroup, self.desired_symmetry,
                                               "desired_symmetry")

    @property
    def family(self) -> LatticeFamily:
        if self.lattice_type not in LATTICE_FAMILIES:
            raise FormulaError(f"Unknown lattice type: {self.lattice_type!r}. "
                               f"Valid: {[t.value for t in LATTICE_FAMILIES]}")
        return LATTICE_FAMILIES[self.lattice_type]

    def setup(self) -> None:
        """
        Derive the lattice, close the packets and add desired-symmetry packets.

        Raises:
            FormulaError: Unknown lattice type, no packets, or a desired
                symmetry the lattice cannot express
            InvalidLatticeSizeError: The lattice needs a size and has none
            DegenerateLatticeError: The lattice vectors span no area
        """
        family = self.family
        if not self.wave_packets:
            raise FormulaError("A wallpaper formula needs at least one wave packet")
        if self.desired_symmetry is not None and self.desired_symmetry not in family.groups:
            raise FormulaError(
                f"{self.desired_symmetry.value} is not a {self.lattice_type.value} group. "
                f"Valid: {[group.value for group in family.groups]}")

        if self.lattice is None:
            self.lattice = build_lattice(self.lattice_type, self.lattice_size)
        else:
            self.lattice.validate()
        logger.debug("%s lattice: x=%s y=%s", self.lattice_type.value,
                     self.lattice.x_lattice_vector, self.lattice.y_lattice_vector)

        for packet in self.wave_packets:
            packet.close(family)

        if self.desired_symmetry is not None:
            self._add_symmetry_packets(self.desired_symmetry)

    def _add_symmetry_packets(self, group: WallpaperGroup) -> None:
        if self.has_symmetry(group):
            return

        base = self.wave_packets[0]
        relations = WALLPAPER_GROUPS[group].relations
        seen = {(packet.power_n, packet.power_m) for packet in self.wave_packets}

        # Breadth-first over the group's relations, always starting from the
        # base packet's own first term.
        queue = deque([(base.power_n, base.power_m, base.multiplier)])
        while queue:
            power_n, power_m, multiplier = queue.popleft()
            for relation in relations:
                n, m, new_multiplier = relation.transform.apply(power_n, power_m, multiplier)
                if (n, m) in seen:
                    continue
                seen.add((n, m))
                packet = WavePacket(terms=[EisensteinFormulaTerm(power_n=n, power_m=m)],
                                    multiplier=new_multiplier)
                packet.close(self.family)
                self.wave_packets.append(packet)
                queue.append((n, m, new_multiplier))
                logger.debug("Added %s packet (%d, %d) multiplier %s",
                             group.value, n, m, new_multiplier)

        if not self.has_symmetry(group):
            logger.warning("Could not reach %s from base powers (%d, %d)",
                           group.value, base.power_n, base.power_m)

    def calculate(self, z) -> FormulaResult:
        if self.lattice is None:
            raise FormulaError("setup() must be called before calculate()")
        s, t = self.lattice.coordinates(z)
        contributions = [packet.calculate(s, t) for packet in self.wave_packets]
        return FormulaResult(
            total=self.multiplier * sum(contributions),
            contribution_by_term=contributions,
        )

    def _relation_holds(self, relation: GroupRelation) -> bool:
        """Is some unordered pair of packets (a packet may pair with itself) related?"""
        transform = relation.transform
        for first, second in combinations_with_replacement(self.wave_packets, 2):
            for source, target in ((first, second), (second, first)):
                if not transform.matches(source, target):
                    continue
                if relation.is_glide and not transform.is_odd(source.power_n, source.power_m):
                    continue
                return True
        return False

    def has_symmetry(self, group: WallpaperGroup) -> bool:
        family = self.family
        if group not in family.groups:
            return False
        if group in family.inherent:
            return True
        return all(self._relation_holds(relation) for relation in WALLPAPER_GROUPS[group].relations)

    def analyze_for_symmetry(self) -> Dict[WallpaperGroup, bool]:
        return {group: self.has_symmetry(group) for group in self.family.groups}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any],
                  lattice_type: Optional[LatticeType] = None) -> "WallpaperFormula":
        """
        Build from a descriptor mapping.

        Args:
            data: Mapping with wave_packets, multiplier, lattice_type,
                lattice_size and desired_symmetry
            lattice_type: Forces the lattice class (used by the per-lattice
                descriptor keys); otherwise ``data["lattice_type"]`` is required
        """
        if not isinstance(data, Mapping):
            raise ParseError(f"wallpaper formula must be a mapping, got {data!r}")
        if lattice_type is None:
            if "lattice_type" not in data:
                raise ParseError("wallpaper formula needs a lattice_type")
            lattice_type = parse_enum(LatticeType, data["lattice_type"], "lattice_type")

        packets = data.get("wave_packets")
        if not isinstance(packets, list) or not packets:
            raise ParseError("wallpaper formula needs a non-empty list of wave_packets")

        lattice_size = data.get("lattice_size")
        desired_symmetry = data.get("desired_symmetry")
        return cls(
            lattice_type=lattice_type,
            wave_packets=[WavePacket.from_dict(packet) for packet in packets],
            multiplier=parse_complex(data.get("multiplier"), "multiplier", default=1 + 0j),
            lattice_size=Dimensions.from_dict(lattice_size) if lattice_size is not None else None,
            desired_symmetry=(parse_enum(WallpaperGroup, desired_symmetry, "desired_symmetry")
                              if desired_symmetry is not None else None),
        )
