"""Interface shared by frieze, rosette and wallpaper formulas."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class FormulaResult:
    """Value of a formula at a point, plus the share of each declared term/packet."""
    total: Any
    contribution_by_term: List[Any] = field(default_factory=list)


class Formula(ABC):
    """
    A sum of plane-wave terms with a symmetry structure.

    Lifecycle: construct, call ``setup()`` once, then ``calculate`` and
    ``analyze_for_symmetry`` may be called any number of times (and from
    several threads) without changing the formula.
    """

    @abstractmethod
    def setup(self) -> None:
        """Validate the formula and expand any closure it needs."""

    @abstractmethod
    def calculate(self, z) -> FormulaResult:
        """Evaluate the formula at ``z`` (complex scalar or numpy array)."""

    @abstractmethod
    def analyze_for_symmetry(self):
        """Report the symmetry groups the formula's coefficients satisfy."""
