from .ray3 import Ray3
from .vector3 import Vector3


__all__ = ["Plane3"]


class Plane3:
    """A plane in 3D, the points p for which ``p . normal == distance``.

    Parameters
    ----------
    normal : Vector3
        The unit normal of the plane.
    distance : float
        The signed distance from the origin, such that ``normal * distance``
        lies on the plane.
    """

    __slots__ = ("normal", "distance")

    def __init__(self, normal: Vector3, distance: float) -> None:
        if abs(normal.magnitude - 1) >= 0.01:
            raise ValueError(
                f"The plane normal must be a unit vector, got magnitude {normal.magnitude}"
            )
        self.normal = normal
        self.distance = distance

    def __repr__(self) -> str:
        return f"Plane3({self.normal!r}, {self.distance})"

    def signed_distance_to_point(self, point: Vector3) -> float:
        return point.dot(self.normal) - self.distance

    def intersect_with_ray(self, ray: Ray3) -> Vector3:
        return ray.point_at_distance(ray.distance_to_plane(self))

    @classmethod
    def from_triangle(cls, a: Vector3, b: Vector3, c: Vector3):
        """Get the plane through three points, or None if they are collinear."""
        normal = c.minus(a).cross(b.minus(a))
        if normal.magnitude == 0:
            return None
        normal.normalize()
        return cls(normal, normal.dot(a))


Plane3.XY = Plane3(Vector3.Z_UNIT, 0)
Plane3.XZ = Plane3(Vector3.Y_UNIT, 0)
Plane3.YZ = Plane3(Vector3.X_UNIT, 0)
