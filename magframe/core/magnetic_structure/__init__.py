"""
Magnetic structure module.

This module provides the moments of the magnetic supercell, separate from
the crystallographic unit cell.

Available structures:
- CommensurateStructure: finite supercell with one explicit moment per site
"""

from .base import AbstractMagneticStructure
from .commensurate import CommensurateStructure

__all__ = [
    'AbstractMagneticStructure',
    'CommensurateStructure',
]
