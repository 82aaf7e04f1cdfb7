"""
The enums used in dotmath. The enums are all available from the root ``dotmath`` namespace.

.. currentmodule:: dotmath.utils.enums

.. autosummary::
    :toctree: utils/enums

    MatrixType

"""

from enum import Enum


__all__ = ["MatrixType"]


class MatrixType(str, Enum):
    """The structural class of a matrix.

    A specialized tag (anything but ``OTHER``) is a promise about the
    entries of the matrix that operations may use to take a shortcut.
    ``OTHER`` promises nothing and is valid for every matrix.
    """

    IDENTITY = "identity"  #: exactly the identity
    TRANSLATION = "translation"  #: identity apart from the translation column
    SCALING = "scaling"  #: diagonal
    AFFINE = "affine"  #: bottom row is exactly [0, ..., 0, 1]
    OTHER = "other"  #: no promise

    def __str__(self):
        return self.name

    @classmethod
    def from_name(cls, name):
        """Get the member for a name as produced by ``member.name``."""
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Invalid MatrixType name: {name!r}") from None
