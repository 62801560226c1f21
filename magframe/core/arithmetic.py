"""
Arithmetic backends for the local frame calculation.

The frame algorithm is written once and parameterized over an arithmetic
backend that decides:
- which array type holds the vectors (float64 or sympy expressions)
- how square roots and simplification are carried out
- when a value counts as zero (exact test vs absolute tolerance)

Available backends:
- NumericArithmetic: floating-point numpy arrays, tolerance-based zero test
- ExactArithmetic: numpy object arrays of sympy expressions, exact zero test
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Union

import numpy as np
import sympy as sp

logger = logging.getLogger(__name__)

# Absolute tolerance on every component of a NUMERIC vector
ZERO_TOLERANCE = 1e-10


class FrameMode(Enum):
    """Arithmetic kind used by the frame builder."""
    EXACT = 'exact'
    NUMERIC = 'numeric'


def resolve_mode(mode: Union[FrameMode, str, bool]) -> FrameMode:
    """
    Normalize a mode specification.

    Parameters
    ----------
    mode : FrameMode, str or bool
        Either a FrameMode, its string value ('exact' / 'numeric'), or the
        boolean `symbolic` flag of a unit cell (True -> EXACT).

    Returns
    -------
    mode : FrameMode
    """
    if isinstance(mode, FrameMode):
        return mode
    if isinstance(mode, (bool, np.bool_)):
        return FrameMode.EXACT if mode else FrameMode.NUMERIC
    if isinstance(mode, str):
        try:
            return FrameMode(mode.lower())
        except ValueError:
            pass
    valid = [m.value for m in FrameMode]
    raise ValueError(f"Unknown frame mode {mode!r}, choose from {valid}")


class Arithmetic(ABC):
    """
    Abstract arithmetic backend.

    All vector arguments are arrays of shape (3, N), one vector per column.
    Subclasses fix the element type and the zero test; the shared vector
    helpers (norms, cross products) only use operations that both numpy
    floats and sympy expressions support.
    """

    mode: FrameMode
    dtype: Any
    zero: Any
    one: Any

    @abstractmethod
    def asarray(self, values) -> np.ndarray:
        """Convert array-like input to the backend's element type."""
        pass

    @abstractmethod
    def sqrt(self, values: np.ndarray) -> np.ndarray:
        """Element-wise square root."""
        pass

    @abstractmethod
    def simplify(self, values: np.ndarray) -> np.ndarray:
        """Bring every element to canonical form."""
        pass

    @abstractmethod
    def is_zero(self, value) -> bool:
        """Decide whether a single element is zero."""
        pass

    def as_vectors(self, values) -> np.ndarray:
        """
        Convert input to a (3, N) array of column vectors.

        Raises
        ------
        ValueError
            If the input is not two-dimensional with three rows.
        """
        vectors = self.asarray(values)
        if vectors.ndim == 1 and vectors.size == 0:
            vectors = vectors.reshape(3, 0)
        if vectors.ndim != 2 or vectors.shape[0] != 3:
            raise ValueError(
                f"Moments must have shape (3, N), got {vectors.shape}"
            )
        return vectors

    def norms(self, vectors: np.ndarray) -> np.ndarray:
        """Euclidean length of every column."""
        return self.simplify(self.sqrt(np.sum(vectors * vectors, axis=0)))

    def cross(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Column-wise cross product a x b."""
        result = np.empty(a.shape, dtype=self.dtype)
        result[0] = a[1] * b[2] - a[2] * b[1]
        result[1] = a[2] * b[0] - a[0] * b[2]
        result[2] = a[0] * b[1] - a[1] * b[0]
        return result

    def zero_mask(self, values: np.ndarray) -> np.ndarray:
        """Boolean mask of the zero elements of a 1D array."""
        return np.array([self.is_zero(v) for v in values], dtype=bool)

    def null_mask(self, values: np.ndarray) -> np.ndarray:
        """Mask of the elements that are exactly zero, with no tolerance."""
        return self.zero_mask(values)

    def degenerate_columns(self, vectors: np.ndarray) -> np.ndarray:
        """Boolean mask of the columns whose every component is zero."""
        mask = np.ones(vectors.shape[1], dtype=bool)
        for row in vectors:
            mask &= self.zero_mask(row)
        return mask

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(mode={self.mode.value})"


class NumericArithmetic(Arithmetic):
    """
    Floating-point backend.

    Zero tests use an absolute tolerance, `ZERO_TOLERANCE` by default, so
    that rounding noise in e3 does not hide a moment parallel to x.

    Parameters
    ----------
    tolerance : float, optional
        Absolute tolerance on each component (default: 1e-10)
    """

    mode = FrameMode.NUMERIC
    dtype = float
    zero = 0.0
    one = 1.0

    def __init__(self, tolerance: float = ZERO_TOLERANCE):
        if tolerance < 0:
            raise ValueError("tolerance must be non-negative")
        self.tolerance = tolerance

    def asarray(self, values) -> np.ndarray:
        return np.array(values, dtype=float)

    def sqrt(self, values: np.ndarray) -> np.ndarray:
        return np.sqrt(values)

    def simplify(self, values: np.ndarray) -> np.ndarray:
        return values

    def norms(self, vectors: np.ndarray) -> np.ndarray:
        """
        Euclidean length of every column.

        Each column is divided by its largest absolute component before
        squaring, so lengths near the float limits neither overflow to inf
        nor underflow to 0. A column is 0 only if all its components are 0.
        """
        scale = np.max(np.abs(vectors), axis=0)
        safe = np.where(scale > 0, scale, 1.0)
        return scale * np.sqrt(np.sum((vectors / safe) ** 2, axis=0))

    def is_zero(self, value) -> bool:
        return bool(abs(value) <= self.tolerance)

    def zero_mask(self, values: np.ndarray) -> np.ndarray:
        return np.abs(values) <= self.tolerance

    def null_mask(self, values: np.ndarray) -> np.ndarray:
        return values == 0


class ExactArithmetic(Arithmetic):
    """
    Exact backend built on sympy.

    Elements are sympy expressions stored in numpy object arrays, so the
    same slicing and broadcasting code serves both backends. Floating-point
    input is first turned into the simplest exact number it represents
    (`sympy.nsimplify`), strings are parsed by sympy. An element is
    zero only if sympy can prove it after simplification; expressions whose
    value depends on free symbols never count as zero.
    """

    mode = FrameMode.EXACT
    dtype = object
    zero = sp.Integer(0)
    one = sp.Integer(1)

    def asarray(self, values) -> np.ndarray:
        if isinstance(values, sp.MatrixBase):
            values = values.tolist()
        return self._map(self._exact, np.array(values, dtype=object))

    @staticmethod
    def _exact(value):
        # 0.5 -> 1/2, 0.8660254037844386 -> sqrt(3)/2
        if isinstance(value, (float, np.floating)):
            return sp.nsimplify(float(value))
        return sp.sympify(value)

    def sqrt(self, values: np.ndarray) -> np.ndarray:
        return self._map(sp.sqrt, values)

    def simplify(self, values: np.ndarray) -> np.ndarray:
        return self._map(sp.simplify, values)

    def is_zero(self, value) -> bool:
        return sp.simplify(value).is_zero is True

    @staticmethod
    def _map(func, values: np.ndarray) -> np.ndarray:
        # Filled in place so numpy never tries to unpack sympy objects
        result = np.empty(values.shape, dtype=object)
        for i, value in enumerate(values.flat):
            result.flat[i] = func(value)
        return result


def get_arithmetic(mode: Union[FrameMode, str, bool] = FrameMode.NUMERIC) -> Arithmetic:
    """
    Return the arithmetic backend for a mode.

    Parameters
    ----------
    mode : FrameMode, str or bool
        See `resolve_mode`.

    Returns
    -------
    backend : Arithmetic
    """
    mode = resolve_mode(mode)
    backend = ExactArithmetic() if mode is FrameMode.EXACT else NumericArithmetic()
    logger.debug("Using %r", backend)
    return backend
