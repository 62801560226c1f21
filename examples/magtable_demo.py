"""
Magnetic table demo.

This example walks through the magframe pieces:
- UnitCell (atom positions only)
- CommensurateStructure (moments of the magnetic supercell)
- SpinSystem.magtable() (local frames + supercell positions)
- Optional export to a pandas table
"""

import numpy as np
import sympy as sp

from magframe.core import (
    UnitCell,
    UnitCellAtom,
    CommensurateStructure,
    SpinSystem,
    FrameMode,
    build_frames
)
from magframe.io import magtable_to_dataframe, atom_tooltip


def example_afm_chain():
    """Example 1: Antiferromagnetic chain with two atoms per cell."""
    print("="*60)
    print("Example 1: AFM chain, (2, 1, 1) supercell")
    print("="*60)

    cell = UnitCell([
        UnitCellAtom([0.0, 0.0, 0.0], index=1, label='MCu1 Cu'),
        UnitCellAtom([0.5, 0.5, 0.0], index=2, label='MCu2 Cu'),
        UnitCellAtom([0.5, 0.0, 0.0], index=3, label='O1 O', magnetic=False)
    ])
    print(f"\nUnit cell: {cell}")

    # Atom index fastest, then the cell along a
    moments = np.array([
        [0.0, 1.0, 0.0, -1.0],
        [0.0, 0.0, 0.0, 0.0],
        [1.0, 0.0, -1.0, 0.0]
    ])
    structure = CommensurateStructure(moments, n_ext=(2, 1, 1))
    print(f"Magnetic structure: {structure}")

    system = SpinSystem(cell, structure, metadata={'name': 'Cu chain'})
    print(f"\n{system}")

    table = system.magtable()
    print("\nMagnetic table:")
    print(magtable_to_dataframe(table, labels=cell.get_labels()).to_string(index=False))

    print("\nTooltip of the last atom:")
    label = cell.get_atom(int(table.atom[-1])).label
    print(atom_tooltip(label, table.R[:, -1]))


def example_120_degree():
    """Example 2: 120° structure from polar angles."""
    print("\n" + "="*60)
    print("Example 2: 120° structure, three cells along a")
    print("="*60)

    angles_120 = np.array([
        [np.pi/2, 0.0],           # θ=π/2, φ=0
        [np.pi/2, 2*np.pi/3],     # θ=π/2, φ=2π/3
        [np.pi/2, 4*np.pi/3]      # θ=π/2, φ=4π/3
    ])
    structure = CommensurateStructure.from_angles(angles_120, n_ext=(3, 1, 1))
    cell = UnitCell([UnitCellAtom([0.0, 0.0, 0.0], index=1, label='MCo1 Co')])

    table = SpinSystem(cell, structure).magtable()

    for i in range(table.num_moments):
        e1, e2, e3 = table.e1[:, i], table.e2[:, i], table.e3[:, i]
        print(f"  Moment {i}: R = {table.R[:, i]}")
        print(f"    e1 = [{e1[0]:+.3f}, {e1[1]:+.3f}, {e1[2]:+.3f}]")
        print(f"    e2 = [{e2[0]:+.3f}, {e2[1]:+.3f}, {e2[2]:+.3f}]")
        print(f"    e3 = [{e3[0]:+.3f}, {e3[1]:+.3f}, {e3[2]:+.3f}]")

    M_total = structure.get_total_magnetization()
    print(f"\n|M| = {np.linalg.norm(M_total):.6f} (should be ~0 for AFM)")


def example_exact_frames():
    """Example 3: Exact frames with sympy."""
    print("\n" + "="*60)
    print("Example 3: EXACT mode")
    print("="*60)

    t = sp.Symbol('theta', real=True)
    moments = [[1, 5, sp.cos(t)], [1, 0, 0], [1, 0, sp.sin(t)]]
    frame = build_frames(moments, mode=FrameMode.EXACT)

    for i in range(frame.num_moments):
        print(f"\n  Moment {i}:")
        print(f"    e1 = {list(frame.e1[:, i])}")
        print(f"    e2 = {list(frame.e2[:, i])}")
        print(f"    e3 = {list(frame.e3[:, i])}")


if __name__ == '__main__':
    example_afm_chain()
    example_120_degree()
    example_exact_frames()
