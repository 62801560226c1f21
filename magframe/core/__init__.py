"""
Core domain models for the magframe package.

This module contains the fundamental pieces:
- Arithmetic: exact (sympy) and numeric (numpy) backends
- Frames: local (e1, e2, e3) coordinate systems of the moments
- Supercell: replication of unit cell atoms over the magnetic supercell
- MagTable: moments, frames and positions in one record
- UnitCell / MagneticStructure / SpinSystem: the inputs of the table
"""

from .arithmetic import (
    FrameMode,
    Arithmetic,
    NumericArithmetic,
    ExactArithmetic,
    ZERO_TOLERANCE,
    get_arithmetic,
    resolve_mode
)

from .frames import LocalFrame, build_frames

from .lattice import UnitCellAtom, UnitCell

from .supercell import (
    as_extension_factors,
    supercell_translations,
    extend_lattice,
    expand_positions
)

from .magtable import MagTable, EMPTY_ATOM_INDEX, assemble

from .magnetic_structure import (
    AbstractMagneticStructure,
    CommensurateStructure
)

from .spin_system import SpinSystem

__all__ = [
    # Arithmetic
    'FrameMode',
    'Arithmetic',
    'NumericArithmetic',
    'ExactArithmetic',
    'ZERO_TOLERANCE',
    'get_arithmetic',
    'resolve_mode',

    # Frames
    'LocalFrame',
    'build_frames',

    # Unit cell
    'UnitCellAtom',
    'UnitCell',

    # Supercell
    'as_extension_factors',
    'supercell_translations',
    'extend_lattice',
    'expand_positions',

    # Table
    'MagTable',
    'EMPTY_ATOM_INDEX',
    'assemble',

    # Magnetic Structure
    'AbstractMagneticStructure',
    'CommensurateStructure',

    # Spin System
    'SpinSystem',
]
