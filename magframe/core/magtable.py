"""
Tabulated list of the magnetic moments of a magnetic supercell.

The table collects, column by column:
- M: the moment vectors
- e1, e2, e3: the local coordinate system of every moment (see `frames`)
- R: positions of the magnetic atoms in lattice units
- atom: pointer to the unit cell atom of every column

This is the hand-over format between the magnetic structure and anything
downstream (spin wave calculation, plotting, table export).
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Union

import numpy as np

from .arithmetic import FrameMode, get_arithmetic
from .frames import LocalFrame, build_frames
from .lattice import UnitCellAtom
from .supercell import as_extension_factors, expand_positions

logger = logging.getLogger(__name__)

# Atom pointer of a table without moments
EMPTY_ATOM_INDEX = np.zeros(1, dtype=int)


@dataclass(frozen=True, eq=False)
class MagTable:
    """
    Magnetic moments of the supercell with their local frames and positions.

    Attributes
    ----------
    M : np.ndarray, shape (3, N)
        Every column is a magnetic moment
    e1, e2, e3 : np.ndarray, shape (3, N)
        Unit vectors of the local coordinate system of each moment.
        e3 is parallel to the moment, (e1, e2, e3) is right-handed.
    R : np.ndarray, shape (3, K)
        Position of each magnetic atom in lattice units. K = N for a
        non-empty table, K = 0 otherwise.
    atom : np.ndarray, shape (K,)
        Index of the unit cell atom of each column of R. For a table
        without moments this is EMPTY_ATOM_INDEX, a single 0.
    mode : FrameMode
        Arithmetic mode of the frame calculation
    """
    M: np.ndarray
    e1: np.ndarray
    e2: np.ndarray
    e3: np.ndarray
    R: np.ndarray
    atom: np.ndarray
    mode: FrameMode = FrameMode.NUMERIC

    @property
    def frame(self) -> LocalFrame:
        """Local coordinate systems as a LocalFrame."""
        return LocalFrame(e1=self.e1, e2=self.e2, e3=self.e3, mode=self.mode)

    @property
    def num_moments(self) -> int:
        return self.M.shape[1]

    @property
    def is_empty(self) -> bool:
        """True if the table holds no moments."""
        return self.num_moments == 0

    def to_dict(self) -> Dict:
        """
        Serialize to a dictionary of nested lists.

        Sympy entries of an EXACT table are written as strings.
        """
        def serialize_array(array):
            if array.dtype == object:
                return np.vectorize(str, otypes=[object])(array).tolist()
            return array.tolist()

        return {
            'M': serialize_array(self.M),
            'e1': serialize_array(self.e1),
            'e2': serialize_array(self.e2),
            'e3': serialize_array(self.e3),
            'R': serialize_array(self.R),
            'atom': self.atom.tolist(),
            'mode': self.mode.value
        }

    def __repr__(self) -> str:
        return (f"MagTable(moments={self.num_moments}, "
                f"positions={self.R.shape[1]}, mode={self.mode.value})")


def assemble(moments,
             atoms: Sequence[UnitCellAtom],
             n_ext,
             mode: Union[FrameMode, str, bool] = FrameMode.NUMERIC,
             frame: Optional[LocalFrame] = None) -> MagTable:
    """
    Create the tabulated list of all magnetic moments of the supercell.

    Parameters
    ----------
    moments : array_like, shape (3, N)
        Moments of the magnetic supercell, ordered like the columns of
        `expand_positions(atoms, n_ext)`
    atoms : Sequence[UnitCellAtom]
        Magnetic atoms of the crystallographic unit cell
    n_ext : array_like, shape (3,)
        Magnetic supercell size (nx, ny, nz)
    mode : FrameMode, str or bool, optional
        Arithmetic mode of the frame calculation (default: NUMERIC)
    frame : LocalFrame, optional
        Precomputed local frames. Built from `moments` if not given.

    Returns
    -------
    table : MagTable

    Raises
    ------
    ValueError
        If N != len(atoms) * nx * ny * nz for a non-empty moment set, or
        if a precomputed frame has a different number of columns or was
        built in a different mode.
    ZeroDivisionError
        If a moment has zero length (from `build_frames`).

    Notes
    -----
    Without moments the positions are not expanded at all: R is a (3, 0)
    array and atom is EMPTY_ATOM_INDEX, whatever the unit cell contains.
    """
    arith = get_arithmetic(mode)
    M = arith.as_vectors(moments)
    n_ext = as_extension_factors(n_ext)
    num_moments = M.shape[1]

    if num_moments > 0:
        expected = len(atoms) * int(np.prod(n_ext))
        if num_moments != expected:
            raise ValueError(
                f"Number of moments ({num_moments}) does not match the number of "
                f"magnetic sites in the supercell: {len(atoms)} atoms x "
                f"{n_ext.tolist()} cells = {expected}"
            )

    if frame is None:
        frame = build_frames(M, arith.mode)
    elif frame.num_moments != num_moments:
        raise ValueError(
            f"Frame has {frame.num_moments} columns, expected {num_moments}"
        )
    elif frame.mode is not arith.mode:
        raise ValueError(
            f"Frame was built in {frame.mode.value} mode, "
            f"table is {arith.mode.value}"
        )

    if num_moments == 0:
        logger.debug("No magnetic moments, returning empty table")
        R = np.zeros((3, 0))
        atom = EMPTY_ATOM_INDEX.copy()
    else:
        # Positions in l.u.
        R, atom = expand_positions(atoms, n_ext)

    return MagTable(M=M, e1=frame.e1, e2=frame.e2, e3=frame.e3,
                    R=R, atom=atom, mode=arith.mode)
