"""
Abstract base class for magnetic structures.

A magnetic structure is what the magnetic-structure solver hands over to the
table: the moment of every magnetic atom in the magnetic supercell, and the
size of that supercell in crystallographic unit cells.

Column convention
-----------------
Moments are stored as a (3, N) array with N = nMagAtom * nx * ny * nz.
Columns run over the supercell with the unit cell atom index fastest and the
cell translation slowest (x translation fastest among the cells), the same
order used by `magframe.core.supercell`.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Dict


class AbstractMagneticStructure(ABC):
    """
    Abstract base class for magnetic moment configurations.

    This represents the MOMENTS only, independent of:
    - The atom positions (handled by UnitCell)
    - How moments were found (solver, optimizer or user input)

    Subclasses provide moments and extension factors; the local frames and
    the replicated positions are derived from them by `magframe.core.magtable`.
    """

    @abstractmethod
    def get_moments(self) -> np.ndarray:
        """
        Get all moments of the magnetic supercell.

        Returns
        -------
        moments : np.ndarray, shape (3, N)
            Moment vectors in the global Cartesian frame, one per column
        """
        pass

    @abstractmethod
    def get_extension_factors(self) -> np.ndarray:
        """
        Get the size of the magnetic supercell.

        Returns
        -------
        n_ext : np.ndarray, shape (3,), dtype int
            (nx, ny, nz) in units of the crystallographic lattice vectors
        """
        pass

    @abstractmethod
    def to_dict(self) -> Dict:
        """
        Serialize magnetic structure to dictionary.

        Returns
        -------
        data : Dict
            Dictionary representation, must include a 'type' field.
        """
        pass

    def get_num_magnetic_sites(self) -> int:
        """Number of moments in the magnetic supercell."""
        return self.get_moments().shape[1]

    def get_num_cells(self) -> int:
        """Number of crystallographic unit cells in the magnetic supercell."""
        return int(np.prod(self.get_extension_factors()))

    def is_empty(self) -> bool:
        """True if the structure holds no moments."""
        return self.get_num_magnetic_sites() == 0

    def is_symbolic(self) -> bool:
        """True if the moments are sympy expressions."""
        return self.get_moments().dtype == object

    def __repr__(self) -> str:
        """String representation."""
        name = self.__class__.__name__
        n_ext = tuple(int(n) for n in self.get_extension_factors())
        return f"{name}(n_ext={n_ext}, moments={self.get_num_magnetic_sites()})"
