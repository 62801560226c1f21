"""
Unit tests for magnetic table export.
"""

import json

import numpy as np
import pandas as pd
import pytest
from magframe.core import UnitCellAtom, assemble
from magframe.io.export import atom_tooltip, magtable_to_dataframe, save_magtable_json


@pytest.fixture
def table():
    atoms = [
        UnitCellAtom([0.0, 0.0, 0.0], index=1),
        UnitCellAtom([0.5, 0.5, 0.0], index=2)
    ]
    moments = np.array([
        [0.0, 1.0, 0.0, -1.0],
        [0.0, 0.0, 0.0, 0.0],
        [1.0, 0.0, -1.0, 0.0]
    ])
    return assemble(moments, atoms, (2, 1, 1))


class TestDataFrame:
    """Test magtable_to_dataframe."""

    def test_columns_and_rows(self, table):
        df = magtable_to_dataframe(table)

        assert isinstance(df, pd.DataFrame)
        assert len(df) == 4
        assert list(df.columns[:4]) == ['atom', 'Rx', 'Ry', 'Rz']
        assert list(df.columns[-3:]) == ['e3x', 'e3y', 'e3z']
        assert df['atom'].tolist() == [1, 2, 1, 2]
        assert df['Rx'].tolist() == [0.0, 0.5, 1.0, 1.5]
        assert df['Mz'].tolist() == [1.0, 0.0, -1.0, 0.0]

    def test_labels(self, table):
        df = magtable_to_dataframe(table, labels={1: 'MCu1 Cu', 2: 'MCu2 Cu'})

        assert df.columns[1] == 'label'
        assert df['label'].tolist() == ['MCu1 Cu', 'MCu2 Cu', 'MCu1 Cu', 'MCu2 Cu']

    def test_empty_table(self):
        empty = assemble(np.zeros((3, 0)), [], (1, 1, 1))
        df = magtable_to_dataframe(empty)

        assert len(df) == 0
        assert 'e2z' in df.columns


class TestJson:
    """Test save_magtable_json."""

    def test_save(self, table, tmp_path):
        path = tmp_path / 'results' / 'magtable.json'
        save_magtable_json(table, path)

        with open(path) as f:
            data = json.load(f)

        assert data['atom'] == [1, 2, 1, 2]
        assert np.allclose(data['e3'], table.e3)

    def test_save_exact(self, tmp_path):
        atoms = [UnitCellAtom([0.0, 0.0, 0.0], index=1)]
        exact = assemble([[1], [1], [0]], atoms, (1, 1, 1), mode='exact')
        path = tmp_path / 'exact.json'
        save_magtable_json(exact, path)

        with open(path) as f:
            data = json.load(f)

        assert data['e3'][0] == ['sqrt(2)/2']
        assert data['mode'] == 'exact'


class TestTooltip:
    """Test atom_tooltip."""

    def test_two_word_label(self):
        text = atom_tooltip('MCu1 Cu', [1.5, 0.25, 0.0])

        assert text == (
            "Cu atom (MCu1)\n"
            "Unit cell:\n"
            "[1, 0, 0]\n"
            "Atomic position\n"
            "[0.500, 0.250, 0.000]"
        )

    def test_one_word_label(self):
        """Test a one-word label is used as site and species."""
        atom = UnitCellAtom([0.0, 0.0, 0.125], index=1, label='Fe')
        text = atom_tooltip(atom.label, [0.0, 2.0, 0.125])

        assert text.startswith(f"{atom.species} atom (Fe)\n")
        assert text.splitlines()[0] == "Fe atom (Fe)"
        assert "[0, 2, 0]" in text
        assert "[0.000, 0.000, 0.125]" in text


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
