from dotmath.linalg import Matrix3, Matrix4, Quaternion


def matrix_equals(a, b, tolerance: float = 0.0001):
    if len(a.entries) != len(b.entries):
        return False
    return all(abs(x - y) < tolerance for x, y in zip(a.entries, b.entries))


def rows_equal(matrix, rows, tolerance: float = 0.0001):
    """Compare a matrix with a flat list of row-major values."""
    cls = Matrix3 if len(rows) == 9 else Matrix4
    return matrix_equals(matrix, cls(*rows), tolerance)


def quat_equals(a: Quaternion, b: Quaternion, tolerance: float = 0.0001):
    return (
        abs(a.x - b.x) + abs(a.y - b.y) + abs(a.z - b.z) + abs(a.w - b.w)
    ) < tolerance


def vector_equals(a, b, tolerance: float = 0.0001):
    return all(abs(x - y) < tolerance for x, y in zip(a.to_numpy(), b.to_numpy()))
