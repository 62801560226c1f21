"""
SpinSystem: unit cell and magnetic structure of a magnetic crystal.

This module defines the SpinSystem class which combines:
- Crystallographic unit cell (atom positions, labels, symbolic flag)
- Magnetic structure (moments of the magnetic supercell)

and produces the magnetic table handed to spin wave solvers and plotters.
"""

from typing import Dict, Optional

from .arithmetic import FrameMode, resolve_mode
from .frames import LocalFrame
from .lattice import UnitCell
from .magnetic_structure import AbstractMagneticStructure, CommensurateStructure
from .magtable import MagTable, assemble


class SpinSystem:
    """
    Magnetic crystal: unit cell + magnetic structure.

    Design Philosophy
    -----------------
    Separation of concerns:
    - UnitCell determines WHERE atoms are (and which are magnetic)
    - MagneticStructure determines the MOMENTS and the supercell size
    - SpinSystem COMBINES both into the magnetic table

    Parameters
    ----------
    unit_cell : UnitCell
        Crystallographic unit cell
    magnetic_structure : AbstractMagneticStructure
        Moments of the magnetic supercell, one per magnetic atom and cell
    metadata : Dict, optional
        Additional information (project name, description, etc.)

    Examples
    --------
    >>> cell = UnitCell([UnitCellAtom([0, 0, 0], index=1, label='MCu1 Cu')])
    >>> structure = CommensurateStructure([[0, 0], [0, 0], [1, -1]], n_ext=(2, 1, 1))
    >>> system = SpinSystem(cell, structure)
    >>> table = system.magtable()
    >>> table.R.T.tolist()
    [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]]
    """

    def __init__(self,
                 unit_cell: UnitCell,
                 magnetic_structure: AbstractMagneticStructure,
                 metadata: Optional[Dict] = None):
        if not isinstance(unit_cell, UnitCell):
            raise TypeError("unit_cell must be a UnitCell instance")

        if not isinstance(magnetic_structure, AbstractMagneticStructure):
            raise TypeError("magnetic_structure must be an AbstractMagneticStructure instance")

        self.unit_cell = unit_cell
        self.magnetic_structure = magnetic_structure
        self.metadata = metadata or {}

    @property
    def mode(self) -> FrameMode:
        """
        Arithmetic mode of the magnetic table.

        EXACT if the unit cell is flagged symbolic or the moments are sympy
        expressions, NUMERIC otherwise.
        """
        symbolic = self.unit_cell.symbolic or self.magnetic_structure.is_symbolic()
        return resolve_mode(bool(symbolic))

    @property
    def num_magnetic_atoms(self) -> int:
        """Number of magnetic atoms in the crystallographic unit cell."""
        return len(self.unit_cell.magnetic_atoms())

    def magtable(self, frame: Optional[LocalFrame] = None) -> MagTable:
        """
        Tabulated list of all magnetic moments of the supercell.

        Parameters
        ----------
        frame : LocalFrame, optional
            Precomputed local frames of the moments

        Returns
        -------
        table : MagTable
            Moments, local frames and positions (in lattice units) of the
            magnetic supercell, see `magframe.core.magtable.assemble`.
        """
        return assemble(
            self.magnetic_structure.get_moments(),
            self.unit_cell.magnetic_atoms(),
            self.magnetic_structure.get_extension_factors(),
            mode=self.mode,
            frame=frame
        )

    def to_dict(self) -> Dict:
        """
        Serialize to dictionary.

        Returns
        -------
        data : Dict
            Complete representation suitable for saving to YAML/JSON,
            readable by `from_dict`.
        """
        return {
            'unit_cell': self.unit_cell.to_dict(),
            'magnetic_structure': self.magnetic_structure.to_dict(),
            'metadata': self.metadata
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'SpinSystem':
        """
        Reconstruct from dictionary.

        Parameters
        ----------
        data : Dict
            Dictionary with 'unit_cell' and 'magnetic_structure' sections
            and an optional 'metadata' section

        Returns
        -------
        system : SpinSystem
        """
        for section in ('unit_cell', 'magnetic_structure'):
            if section not in data:
                raise ValueError(f"Missing '{section}' section")

        return cls(
            UnitCell.from_dict(data['unit_cell']),
            CommensurateStructure.from_dict(data['magnetic_structure']),
            metadata=data.get('metadata')
        )

    @classmethod
    def from_config(cls, config_path) -> 'SpinSystem':
        """
        Load system from YAML configuration file.

        Configuration file format:
            unit_cell:
              symbolic: false
              atoms:
                - {label: "MCu1 Cu", position: [0, 0, 0], index: 1}

            magnetic_structure:
              type: commensurate
              n_ext: [2, 1, 1]
              moments:
                - [0, 0]
                - [0, 0]
                - [1, -1]

            metadata:
              name: "Cu chain AFM"
        """
        from ..io.config import load_config

        return cls.from_dict(load_config(config_path))

    def __repr__(self) -> str:
        """String representation."""
        return (f"SpinSystem(unit_cell={self.unit_cell!r}, "
                f"structure={self.magnetic_structure!r})")

    def __str__(self) -> str:
        """Detailed string representation."""
        lines = [
            "="*50,
            "Spin System",
            "="*50,
            f"Unit cell: {self.unit_cell}",
            f"Magnetic Structure: {self.magnetic_structure}",
            f"Mode: {self.mode.value}",
            f"Number of Magnetic Atoms: {self.num_magnetic_atoms}",
        ]

        if self.metadata:
            lines.append("")
            lines.append("Metadata:")
            for key, value in self.metadata.items():
                lines.append(f"  {key}: {value}")

        lines.append("="*50)

        return "\n".join(lines)
