"""
Local coordinate frames attached to magnetic moments.

Every moment m_i gets a right-handed orthonormal triad (e1, e2, e3) with e3
along the moment. This is the rotating frame used for the spin wave
linearization: the quantization axis of each spin is e3, the transverse
boson operators live in the (e1, e2) plane.

Construction
------------
    e3 = m / |m|
    e2 = e3 × x̂ = (0, e3_z, -e3_y),   replaced by ẑ if e3 ∥ x̂
    e2 = e2 / |e2|
    e1 = e2 × e3

The same algorithm runs in both arithmetic modes; only the backend from
`arithmetic.get_arithmetic` changes (float64 with a 1e-10 zero tolerance, or
sympy with exact simplification).
"""

import logging
from dataclasses import dataclass
from typing import Union

import numpy as np

from .arithmetic import FrameMode, get_arithmetic

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class LocalFrame:
    """
    Local coordinate systems for a set of moments.

    Attributes
    ----------
    e1, e2, e3 : np.ndarray, shape (3, N)
        Unit vectors, the i-th column belongs to the i-th moment.
        e3 is parallel to the moment, (e1, e2, e3) is right-handed.
        dtype is float for NUMERIC mode and object (sympy) for EXACT mode.
    mode : FrameMode
        Arithmetic mode the frame was computed in
    """
    e1: np.ndarray
    e2: np.ndarray
    e3: np.ndarray
    mode: FrameMode = FrameMode.NUMERIC

    @property
    def num_moments(self) -> int:
        """Number of moments (columns)."""
        return self.e3.shape[1]

    def rotation_matrices(self) -> np.ndarray:
        """
        Rotation matrices from the local to the global frame.

        Returns
        -------
        rotations : np.ndarray, shape (N, 3, 3)
            rotations[i] has columns (e1_i, e2_i, e3_i), so that
            rotations[i] @ [0, 0, 1] is the direction of moment i.
        """
        return np.stack([self.e1.T, self.e2.T, self.e3.T], axis=2)


def build_frames(moments,
                 mode: Union[FrameMode, str, bool] = FrameMode.NUMERIC) -> LocalFrame:
    """
    Build the local (e1, e2, e3) coordinate system of every moment.

    Parameters
    ----------
    moments : array_like, shape (3, N)
        Magnetic moments in the global Cartesian frame, one per column.
        N = 0 is allowed and gives three empty (3, 0) arrays.
    mode : FrameMode, str or bool, optional
        FrameMode.NUMERIC (default) or FrameMode.EXACT. A boolean is read
        as the `symbolic` flag of the unit cell.

    Returns
    -------
    frame : LocalFrame

    Raises
    ------
    ZeroDivisionError
        If any moment has exactly zero length (provably zero in EXACT mode).
        A zero moment has no direction, so no frame can be defined.
    ValueError
        If moments does not have shape (3, N).

    Notes
    -----
    If the moment is parallel to x̂ the candidate e2 = e3 × x̂ vanishes and
    e2 = ẑ is used instead. In NUMERIC mode a candidate counts as zero when
    all of its components are within 1e-10; in EXACT mode only when all of
    them simplify to zero. Components that merely might vanish (free
    symbols) do not trigger the replacement.

    Examples
    --------
    >>> frame = build_frames([[0], [0], [3]])
    >>> np.allclose(frame.e1[:, 0], [1, 0, 0])
    True
    >>> np.allclose(frame.e2[:, 0], [0, 1, 0])
    True
    """
    arith = get_arithmetic(mode)
    M = arith.as_vectors(moments)

    # e3 || Si
    S = arith.norms(M)
    null = arith.null_mask(S)
    if np.any(null):
        columns = np.flatnonzero(null).tolist()
        raise ZeroDivisionError(
            f"Zero magnetic moment in column(s) {columns}, "
            f"local coordinate system is undefined"
        )
    e3 = arith.simplify(M / S)

    # e2 = Si x [1,0,0]
    e2 = np.empty_like(e3)
    e2[0] = arith.zero
    e2[1] = e3[2]
    e2[2] = -e3[1]

    # Si || [1,0,0] --> e2 = [0,0,1]
    degenerate = arith.degenerate_columns(e2)
    e2[0, degenerate] = arith.zero
    e2[1, degenerate] = arith.zero
    e2[2, degenerate] = arith.one
    e2 = arith.simplify(e2 / arith.norms(e2))

    # e1 = e2 x e3
    e1 = arith.simplify(arith.cross(e2, e3))

    logger.debug("Built %d local frames (%s), %d parallel to x",
                 M.shape[1], arith.mode.value, int(np.sum(degenerate)))

    return LocalFrame(e1=e1, e2=e2, e3=e3, mode=arith.mode)
