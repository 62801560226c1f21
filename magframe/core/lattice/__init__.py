"""
Unit cell module.

Minimal view of the crystallographic unit cell: atom positions, indices,
labels and the symbolic/numeric flag. Contains NO magnetic moments.
"""

from .base import UnitCellAtom, UnitCell

__all__ = [
    'UnitCellAtom',
    'UnitCell',
]
