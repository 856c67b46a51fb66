"""Graph transformations."""

from chirtree.transform.hydrogen import (
    add_explicit_hydrogens,
    implicit_hydrogens,
    total_hydrogens,
)

__all__ = [
    "add_explicit_hydrogens",
    "implicit_hydrogens",
    "total_hydrogens",
]
