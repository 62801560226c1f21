"""
Commensurate magnetic structures with finite supercells.

This module implements magnetic orderings that repeat with a finite period,
given explicitly as one moment per magnetic atom of the supercell.
"""

import numpy as np
from typing import Dict

from .base import AbstractMagneticStructure
from ..arithmetic import ExactArithmetic
from ..supercell import as_extension_factors


def _as_moment_array(moments) -> np.ndarray:
    """(3, N) moment array, float for numbers, sympy objects otherwise."""
    moments = np.array(moments)
    if moments.dtype.kind in 'OUS':
        moments = ExactArithmetic().asarray(moments.astype(object))
    else:
        moments = moments.astype(float)

    if moments.size == 0:
        moments = moments.reshape(3, 0)

    if moments.ndim != 2 or moments.shape[0] != 3:
        raise ValueError(f"moments must have shape (3, N), got {moments.shape}")

    return moments


class CommensurateStructure(AbstractMagneticStructure):
    """
    Commensurate magnetic structure with finite magnetic supercell.

    This represents orderings such as:
    - Ferromagnetic (all moments parallel, n_ext = (1, 1, 1))
    - Simple antiferromagnetic (2 sublattices, e.g. n_ext = (2, 1, 1))
    - 120° structure on a triangular lattice (n_ext = (3, 1, 1) for a chain of cells)
    - Any k-vector that is a rational fraction of the reciprocal lattice

    Parameters
    ----------
    moments : array_like, shape (3, N)
        Moment of each magnetic atom of the supercell. Entries may be sympy
        expressions (or strings parsed by sympy) for symbolic structures.
    n_ext : array_like, shape (3,)
        Magnetic supercell size (nx, ny, nz) in crystallographic unit cells

    Attributes
    ----------
    moments : np.ndarray, shape (3, N)
    n_ext : np.ndarray, shape (3,), dtype int

    Examples
    --------
    Two-sublattice antiferromagnet along a:
    >>> structure = CommensurateStructure(
    ...     moments=[[0, 0], [0, 0], [1, -1]],
    ...     n_ext=(2, 1, 1)
    ... )
    >>> structure.get_num_magnetic_sites()
    2
    """

    def __init__(self, moments, n_ext=(1, 1, 1)):
        self.moments = _as_moment_array(moments)
        self.n_ext = as_extension_factors(n_ext)

    @classmethod
    def from_angles(cls,
                    angles: np.ndarray,
                    n_ext=(1, 1, 1),
                    spin_magnitude: float = 0.5) -> 'CommensurateStructure':
        """
        Build moments from polar angles.

        Parameters
        ----------
        angles : np.ndarray, shape (N, 2)
            Angles (θ, φ) of each moment
            θ: polar angle (0 to π)
            φ: azimuthal angle (0 to 2π)
        n_ext : array_like, shape (3,)
            Magnetic supercell size
        spin_magnitude : float, optional
            Length of every moment (default: 0.5 for S=1/2)

        Returns
        -------
        structure : CommensurateStructure
        """
        if spin_magnitude <= 0:
            raise ValueError("Spin magnitude must be positive")

        angles = np.array(angles, dtype=float).reshape(-1, 2)
        theta, phi = angles[:, 0], angles[:, 1]

        moments = spin_magnitude * np.array([
            np.sin(theta) * np.cos(phi),
            np.sin(theta) * np.sin(phi),
            np.cos(theta)
        ])

        return cls(moments, n_ext)

    def get_moments(self) -> np.ndarray:
        return self.moments

    def get_extension_factors(self) -> np.ndarray:
        return self.n_ext

    def get_total_magnetization(self) -> np.ndarray:
        """
        Sum of all moments.

        Returns
        -------
        M : np.ndarray, shape (3,)

        Notes
        -----
        For antiferromagnetic structures, this should be close to zero.
        """
        return np.sum(self.moments, axis=1)

    def to_dict(self) -> Dict:
        """
        Serialize to dictionary.

        Returns
        -------
        data : Dict
            Dictionary with keys:
            - 'type': 'commensurate'
            - 'n_ext': [nx, ny, nz]
            - 'moments': 3 x N nested list (strings for symbolic entries)
        """
        if self.is_symbolic():
            moments = [[str(m) for m in row] for row in self.moments]
        else:
            moments = self.moments.tolist()

        return {
            'type': 'commensurate',
            'n_ext': self.n_ext.tolist(),
            'moments': moments
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'CommensurateStructure':
        """
        Reconstruct from dictionary.

        Accepts either explicit 'moments' or 'angles' (with optional
        'spin_magnitude'), as written in configuration files.
        """
        if data.get('type', 'commensurate') != 'commensurate':
            raise ValueError(f"Expected type 'commensurate', got '{data.get('type')}'")

        n_ext = data.get('n_ext', (1, 1, 1))

        if 'moments' in data:
            return cls(data['moments'], n_ext)
        if 'angles' in data:
            return cls.from_angles(data['angles'], n_ext, data.get('spin_magnitude', 0.5))

        raise ValueError("magnetic_structure needs either 'moments' or 'angles'")

    def __repr__(self) -> str:
        """String representation."""
        nx, ny, nz = self.n_ext.tolist()
        return (f"CommensurateStructure(n_ext=({nx}, {ny}, {nz}), "
                f"moments={self.get_num_magnetic_sites()}, "
                f"symbolic={self.is_symbolic()})")
