"""
Optional export of magnetic tables.

Nothing in `magframe.core` formats or writes anything; callers that want a
printable table, a JSON file, or tooltip text pick one of these explicitly.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np
import pandas as pd

from ..core.magtable import MagTable

logger = logging.getLogger(__name__)

VECTOR_COLUMNS = ('R', 'M', 'e1', 'e2', 'e3')


def magtable_to_dataframe(table: MagTable,
                          labels: Optional[Dict[int, str]] = None) -> pd.DataFrame:
    """
    One row per magnetic atom of the supercell.

    Parameters
    ----------
    table : MagTable
        Magnetic table to convert
    labels : Dict[int, str], optional
        Atom index → label (e.g. `UnitCell.get_labels()`). Adds a 'label'
        column if given.

    Returns
    -------
    df : pd.DataFrame
        Columns: atom, [label], Rx, Ry, Rz, Mx, My, Mz, e1x, ..., e3z.
        Empty (with the same columns) for a table without moments.
    """
    columns = ['atom']
    if labels is not None:
        columns.append('label')
    for name in VECTOR_COLUMNS:
        columns.extend(f'{name}{axis}' for axis in 'xyz')

    if table.is_empty:
        return pd.DataFrame(columns=columns)

    data = {'atom': table.atom}
    if labels is not None:
        data['label'] = [labels.get(int(idx), '') for idx in table.atom]
    for name in VECTOR_COLUMNS:
        vectors = getattr(table, name)
        for i, axis in enumerate('xyz'):
            data[f'{name}{axis}'] = vectors[i]

    return pd.DataFrame(data, columns=columns)


def save_magtable_json(table: MagTable, filename: Union[str, Path]) -> None:
    """
    Write a magnetic table to a JSON file.

    Arrays are stored as nested lists (3 x N); sympy expressions of an
    EXACT table are stored as strings.
    """
    filename = Path(filename)
    filename.parent.mkdir(parents=True, exist_ok=True)

    with open(filename, 'w') as f:
        json.dump(table.to_dict(), f, indent=4)

    logger.debug("Saved magnetic table with %d moments to %s", table.num_moments, filename)


def atom_tooltip(label: str, position) -> str:
    """
    Tooltip text for an atom drawn in a supercell plot.

    Parameters
    ----------
    label : str
        Atom label, '<site label> <species>' (e.g. 'MCu1 Cu'). Missing
        words are filled with the last word present, so a one-word label
        'Fe' is both site and species ('Fe atom (Fe)'), the same rule as
        `UnitCellAtom.species`.
    position : array_like, shape (3,)
        Position in lattice units

    Returns
    -------
    text : str
        Species, label, unit cell (integer part of the position) and the
        position inside that cell.

    Examples
    --------
    >>> print(atom_tooltip('MCu1 Cu', [1.5, 0.25, 0]))
    Cu atom (MCu1)
    Unit cell:
    [1, 0, 0]
    Atomic position
    [0.500, 0.250, 0.000]
    """
    words = label.split()
    site = words[0] if words else ''
    species = words[1] if len(words) > 1 else site

    position = np.asarray(position, dtype=float)
    cell = np.floor(position)
    fractional = position - cell

    return (f"{species} atom ({site})\n"
            f"Unit cell:\n"
            f"[{int(cell[0])}, {int(cell[1])}, {int(cell[2])}]\n"
            f"Atomic position\n"
            f"[{fractional[0]:5.3f}, {fractional[1]:5.3f}, {fractional[2]:5.3f}]")
