"""
Crystallographic unit cell seen from the magnetic table.

The full crystal model (lattice parameters, space group, form factors) lives
outside this package. Here the unit cell is only what the table needs:
- atom positions in fractional coordinates
- a stable integer index per atom, used to look up labels and species
- whether the atom carries a magnetic moment
- the `symbolic` flag that selects exact arithmetic
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence


@dataclass
class UnitCellAtom:
    """
    Atom inside the crystallographic unit cell.

    Attributes
    ----------
    position : np.ndarray, shape (3,)
        Fractional coordinates in units of the lattice vectors
    index : int
        Index of the atom in the unit cell (stable, supplied by the crystal model)
    label : str
        Label, conventionally '<site label> <species>', e.g. 'MCu1 Cu'
    magnetic : bool
        True if the atom carries a magnetic moment
    """
    position: np.ndarray
    index: int
    label: str = ''
    magnetic: bool = True

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=float)
        if self.position.shape != (3,):
            raise ValueError(
                f"Atom position must have shape (3,), got {self.position.shape}"
            )
        self.index = int(self.index)

    @property
    def species(self) -> str:
        """Second word of the label, or the whole label if it has one word."""
        words = self.label.split()
        if len(words) > 1:
            return words[1]
        return words[0] if words else ''

    def to_dict(self) -> Dict:
        return {
            'position': self.position.tolist(),
            'index': self.index,
            'label': self.label,
            'magnetic': self.magnetic
        }


class UnitCell:
    """
    Ordered list of unit cell atoms.

    Parameters
    ----------
    atoms : Sequence[UnitCellAtom]
        Atoms of the crystallographic unit cell, in index order
    symbolic : bool, optional
        If True, the magnetic table is computed with exact (sympy)
        arithmetic. Default is False (floating point).

    Examples
    --------
    >>> cell = UnitCell([
    ...     UnitCellAtom([0, 0, 0], index=1, label='MCu1 Cu'),
    ...     UnitCellAtom([0.5, 0.5, 0], index=2, label='O1 O', magnetic=False)
    ... ])
    >>> [atom.index for atom in cell.magnetic_atoms()]
    [1]
    """

    def __init__(self, atoms: Sequence[UnitCellAtom], symbolic: bool = False):
        atoms = list(atoms)
        for atom in atoms:
            if not isinstance(atom, UnitCellAtom):
                raise TypeError("atoms must be UnitCellAtom instances")

        indices = [atom.index for atom in atoms]
        if len(set(indices)) != len(indices):
            raise ValueError(f"Atom indices must be unique, got {indices}")

        self.atoms = atoms
        self.symbolic = bool(symbolic)

    def magnetic_atoms(self) -> List[UnitCellAtom]:
        """Atoms that carry a magnetic moment, in unit cell order."""
        return [atom for atom in self.atoms if atom.magnetic]

    def get_atom(self, index: int) -> Optional[UnitCellAtom]:
        """Atom with the given index, None if there is none."""
        for atom in self.atoms:
            if atom.index == index:
                return atom
        return None

    def get_labels(self) -> Dict[int, str]:
        """Mapping atom index → label."""
        return {atom.index: atom.label for atom in self.atoms}

    def to_dict(self) -> Dict:
        return {
            'symbolic': self.symbolic,
            'atoms': [atom.to_dict() for atom in self.atoms]
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'UnitCell':
        """
        Reconstruct from dictionary.

        Atoms without an explicit 'index' are numbered from 1 in list order.
        """
        if 'atoms' not in data:
            raise ValueError("unit_cell needs an 'atoms' list")

        atoms = []
        for i, atom in enumerate(data['atoms']):
            atoms.append(UnitCellAtom(
                position=atom['position'],
                index=atom.get('index', i + 1),
                label=atom.get('label', ''),
                magnetic=atom.get('magnetic', True)
            ))

        return cls(atoms, symbolic=data.get('symbolic', False))

    def __len__(self) -> int:
        return len(self.atoms)

    def __repr__(self) -> str:
        num_mag = len(self.magnetic_atoms())
        return (f"UnitCell(atoms={len(self.atoms)}, magnetic={num_mag}, "
                f"symbolic={self.symbolic})")
