from math import inf, isnan

import pytest

from dotmath.linalg import Plane3, Ray2, Ray3, Vector2, Vector3

from .utils import vector_equals


eps = 0.0001


# PLANE3
def test_plane_requires_unit_normal():
    Plane3(Vector3(0, 0, 1.005), 2)
    with pytest.raises(ValueError):
        Plane3(Vector3(0, 0, 2), 0)
    with pytest.raises(ValueError):
        Plane3(Vector3(), 0)


def test_plane_constants():
    assert Plane3.XY.normal == Vector3(0, 0, 1)
    assert Plane3.XZ.normal == Vector3(0, 1, 0)
    assert Plane3.YZ.normal == Vector3(1, 0, 0)
    assert Plane3.XY.distance == 0


def test_plane_signed_distance():
    plane = Plane3(Vector3(0, 0, 1), 2)
    assert plane.signed_distance_to_point(Vector3(5, 5, 5)) == 3
    assert plane.signed_distance_to_point(Vector3(5, 5, -1)) == -3
    assert plane.signed_distance_to_point(Vector3(1, 2, 2)) == 0


def test_plane_from_triangle():
    plane = Plane3.from_triangle(Vector3(0, 0, 3), Vector3(0, 1, 3), Vector3(1, 0, 3))
    assert vector_equals(plane.normal, Vector3(0, 0, 1))
    assert abs(plane.distance - 3) < eps

    # Collinear points
    assert Plane3.from_triangle(Vector3(0, 0, 0), Vector3(1, 1, 1), Vector3(2, 2, 2)) is None
    assert Plane3.from_triangle(Vector3(1, 2, 3), Vector3(1, 2, 3), Vector3(4, 5, 6)) is None


def test_plane_intersect_with_ray():
    plane = Plane3(Vector3(0, 0, 1), 2)
    ray = Ray3(Vector3(1, 1, 0), Vector3(0, 0, 1))
    assert plane.intersect_with_ray(ray) == Vector3(1, 1, 2)


# RAY3
def test_ray3_distance_to_plane():
    plane = Plane3(Vector3(0, 0, 1), 2)
    assert Ray3(Vector3(0, 0, 0), Vector3(0, 0, 1)).distance_to_plane(plane) == 2
    # The plane is behind the ray
    assert Ray3(Vector3(0, 0, 5), Vector3(0, 0, 1)).distance_to_plane(plane) == -3
    # Parallel, off the plane and in the plane
    assert Ray3(Vector3(0, 0, 0), Vector3(1, 0, 0)).distance_to_plane(plane) == inf
    assert isnan(Ray3(Vector3(0, 0, 2), Vector3(1, 0, 0)).distance_to_plane(plane))


def test_ray3_points():
    ray = Ray3(Vector3(1, 2, 3), Vector3(0, 1, 0))
    assert ray.point_at_distance(4) == Vector3(1, 6, 3)
    shifted = ray.shifted(2)
    assert shifted.position == Vector3(1, 4, 3)
    assert shifted.direction is ray.direction
    assert "=>" in str(ray)


# RAY2
def test_ray2_points():
    ray = Ray2(Vector2(1, 2), Vector2(1, 0))
    assert ray.point_at_distance(3) == Vector2(4, 2)
    assert ray.shifted(-1).position == Vector2(0, 2)
    assert repr(ray) == "Ray2(Vector2(1, 2), Vector2(1, 0))"
