"""enconv package.

Energy unit conversion (:mod:`enconv.units`) plus small VASP volumetric
data helpers (:mod:`enconv.chgcar`).
"""

from .version import __version__

__all__ = ["__version__"]
