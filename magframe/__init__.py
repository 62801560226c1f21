"""
magframe: local moment frames and magnetic supercell tables

A Python package that turns the moments of a magnetic structure into the
tabulated form used by linear spin wave calculations: the local rotating
frame of every moment and the position of every magnetic atom in the
magnetic supercell.

Main Components
---------------
core : Frame builder, supercell expansion, magnetic table, input models
io : Configuration loading and optional table / JSON export

Quick Start
-----------
>>> from magframe import UnitCell, UnitCellAtom, CommensurateStructure, SpinSystem
>>>
>>> # One magnetic Cu per unit cell
>>> cell = UnitCell([UnitCellAtom([0, 0, 0], index=1, label='MCu1 Cu')])
>>>
>>> # Antiferromagnetic chain along a
>>> structure = CommensurateStructure(
...     moments=[[0, 0], [0, 0], [1, -1]],
...     n_ext=(2, 1, 1)
... )
>>>
>>> system = SpinSystem(cell, structure)
>>> table = system.magtable()
>>> table.e3
array([[ 0.,  0.],
       [ 0.,  0.],
       [ 1., -1.]])
"""

__version__ = "0.1.0"

# High-level API exports
from .core import (
    # Frames
    FrameMode,
    LocalFrame,
    build_frames,

    # Supercell
    UnitCellAtom,
    expand_positions,

    # Table
    MagTable,
    assemble,

    # Inputs
    UnitCell,
    AbstractMagneticStructure,
    CommensurateStructure,
    SpinSystem,
)

__all__ = [
    # Version info
    '__version__',

    # Core abstractions
    'FrameMode',
    'LocalFrame',
    'build_frames',
    'UnitCellAtom',
    'expand_positions',
    'MagTable',
    'assemble',
    'UnitCell',
    'AbstractMagneticStructure',
    'CommensurateStructure',
    'SpinSystem',
]
