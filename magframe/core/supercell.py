"""
Replication of unit cell atoms over the magnetic supercell.

The magnetic supercell is the crystallographic unit cell repeated
(nx, ny, nz) times along the lattice vectors. Every atom is copied into every
cell of the supercell; each copy remembers which unit cell atom it came from.

Ordering
--------
Columns run over (cell, atom) pairs with the atom index fastest:

    column = atom + nAtom * (ia + nx * (ib + ny * ic))

for the cell translation (ia, ib, ic). The x translation is the fastest of
the three. Moments from the magnetic structure are expected in the same
order, so column i of the positions belongs to column i of the moments.
"""

import logging
from typing import Sequence, Tuple

import numpy as np

from .lattice import UnitCellAtom

logger = logging.getLogger(__name__)


def as_extension_factors(n_ext) -> np.ndarray:
    """
    Validate supercell extension factors.

    Parameters
    ----------
    n_ext : array_like, shape (3,)
        Number of unit cells along a, b and c

    Returns
    -------
    n_ext : np.ndarray, shape (3,), dtype int

    Raises
    ------
    ValueError
        If n_ext does not hold three positive integers
    """
    n_ext = np.asarray(n_ext)
    if n_ext.shape != (3,):
        raise ValueError(f"Extension factors must have shape (3,), got {n_ext.shape}")

    n_int = n_ext.astype(int)
    if np.any(n_int != n_ext) or np.any(n_int < 1):
        raise ValueError(f"Extension factors must be positive integers, got {n_ext.tolist()}")

    return n_int


def supercell_translations(n_ext) -> np.ndarray:
    """
    Integer translations of all cells in the supercell.

    Parameters
    ----------
    n_ext : array_like, shape (3,)
        Extension factors (nx, ny, nz)

    Returns
    -------
    translations : np.ndarray, shape (3, nx*ny*nz)
        Cell origins in lattice units, x translation fastest
    """
    nx, ny, nz = as_extension_factors(n_ext)
    ia, ib, ic = np.meshgrid(np.arange(nx), np.arange(ny), np.arange(nz), indexing='ij')
    return np.vstack([ia.ravel(order='F'), ib.ravel(order='F'), ic.ravel(order='F')])


def _replicate(atoms: Sequence[UnitCellAtom], n_ext) -> Tuple[np.ndarray, np.ndarray]:
    """Positions in lattice units and atom indices of every (cell, atom) pair."""
    positions = np.array([atom.position for atom in atoms], dtype=float).reshape(-1, 3).T
    indices = np.array([atom.index for atom in atoms], dtype=int)

    translations = supercell_translations(n_ext)
    num_cells = translations.shape[1]
    num_atoms = positions.shape[1]

    R = np.tile(positions, (1, num_cells)) + np.repeat(translations, num_atoms, axis=1)
    logger.debug("Replicated %d atoms over %d cells", num_atoms, num_cells)

    return R, np.tile(indices, num_cells)


def extend_lattice(atoms: Sequence[UnitCellAtom], n_ext) -> Tuple[np.ndarray, np.ndarray]:
    """
    Atomic positions of the supercell in supercell fractional coordinates.

    Parameters
    ----------
    atoms : Sequence[UnitCellAtom]
        Unit cell atoms to replicate (usually the magnetic atoms)
    n_ext : array_like, shape (3,)
        Extension factors (nx, ny, nz)

    Returns
    -------
    RRext : np.ndarray, shape (3, K)
        Positions in units of the supercell lattice vectors, (r + t) / n_ext,
        all within [0, 1) for atoms inside the unit cell
    idx : np.ndarray, shape (K,)
        Unit cell index of the atom in each column

    Notes
    -----
    K = len(atoms) * nx * ny * nz, zero atoms give K = 0.
    """
    n_ext = as_extension_factors(n_ext)
    R, idx = _replicate(atoms, n_ext)
    return R / n_ext[:, np.newaxis], idx


def expand_positions(atoms: Sequence[UnitCellAtom], n_ext) -> Tuple[np.ndarray, np.ndarray]:
    """
    Atomic positions of the supercell in lattice units.

    Parameters
    ----------
    atoms : Sequence[UnitCellAtom]
        Unit cell atoms to replicate
    n_ext : array_like, shape (3,)
        Extension factors (nx, ny, nz)

    Returns
    -------
    R : np.ndarray, shape (3, K)
        Positions in units of the crystallographic lattice vectors, i.e. the
        supercell fractional positions of `extend_lattice` scaled by n_ext
    atom_index : np.ndarray, shape (K,)
        Unit cell index of the atom in each column, atoms fastest

    Examples
    --------
    >>> atoms = [UnitCellAtom([0, 0, 0], 1), UnitCellAtom([0.5, 0.5, 0], 2)]
    >>> R, atom_index = expand_positions(atoms, (2, 1, 1))
    >>> R.T.tolist()
    [[0.0, 0.0, 0.0], [0.5, 0.5, 0.0], [1.0, 0.0, 0.0], [1.5, 0.5, 0.0]]
    >>> atom_index.tolist()
    [1, 2, 1, 2]
    """
    return _replicate(atoms, as_extension_factors(n_ext))
