from pytest import raises

import dotmath
from dotmath.utils.enums import MatrixType


def test_matrix_type():
    # All members, in order of specialization
    assert [m.name for m in MatrixType] == [
        "IDENTITY",
        "TRANSLATION",
        "SCALING",
        "AFFINE",
        "OTHER",
    ]

    # Members are strings
    assert MatrixType.AFFINE == "affine"
    assert str(MatrixType.AFFINE) == "AFFINE"
    assert MatrixType("scaling") is MatrixType.SCALING

    # Available from the root namespace
    assert dotmath.MatrixType is MatrixType


def test_from_name():
    assert MatrixType.from_name("OTHER") is MatrixType.OTHER
    with raises(ValueError):
        MatrixType.from_name("other")
    with raises(ValueError):
        MatrixType.from_name("PERSPECTIVE")


def test_enums_are_immutable():
    with raises(AttributeError):
        MatrixType.AFFINE = "foo"
