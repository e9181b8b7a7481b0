import math
import random

import pytest
from hyperray.core.bivector import Bivector4, UNIT_PLANES
from hyperray.core.math4d import DegenerateGeometryError, Vec4
from hyperray.core.rotor import Rotor4
from hyperray.scene.camera import orientation

TOL = 1e-9


def close(a: Vec4, b: Vec4, tol=TOL):
    return all(abs(p - q) < tol for p, q in zip(a.to_tuple(), b.to_tuple()))


def random_vec(rng):
    return Vec4(rng.uniform(-2, 2), rng.uniform(-2, 2), rng.uniform(-2, 2), rng.uniform(-2, 2))


def random_rotor(rng):
    return orientation(*(rng.uniform(0, 2 * math.pi) for _ in range(4)))


def test_identity_leaves_vectors_alone():
    v = Vec4(1.0, -2.0, 3.0, 0.5)
    assert close(Rotor4.IDENTITY.rotate_vec(v), v)


def test_angle_plane_rotates_first_axis_toward_second():
    axes = {"x": Vec4.unit_x(), "y": Vec4.unit_y(), "z": Vec4.unit_z(), "w": Vec4.unit_w()}
    for name, plane in UNIT_PLANES.items():
        a, b = axes[name[0].lower()], axes[name[1].lower()]
        rotor = Rotor4.from_angle_plane(math.pi / 2, plane)
        assert close(rotor.rotate_vec(a), b)
        assert close(rotor.rotate_vec(b), -a)


def test_angle_plane_leaves_orthogonal_plane_fixed():
    rotor = Rotor4.from_angle_plane(1.1, Bivector4.XY)
    assert close(rotor.rotate_vec(Vec4.unit_z()), Vec4.unit_z())
    assert close(rotor.rotate_vec(Vec4.unit_w()), Vec4.unit_w())


def test_zero_plane_raises():
    with pytest.raises(DegenerateGeometryError):
        Rotor4.from_angle_plane(1.0, Bivector4())


def test_constructed_rotors_are_unit():
    rng = random.Random(7)
    for _ in range(50):
        assert abs(random_rotor(rng).length() - 1.0) < 1e-12
    plane = Bivector4(xy=2.0, zw=-3.0)
    assert abs(Rotor4.from_angle_plane(0.8, plane).length() - 1.0) < 1e-12


def test_rotation_preserves_length():
    rng = random.Random(11)
    for _ in range(50):
        rotor = random_rotor(rng)
        v = random_vec(rng)
        assert abs(rotor.rotate_vec(v).length() - v.length()) < TOL


def test_conjugate_undoes_rotation():
    rng = random.Random(3)
    for _ in range(20):
        rotor = random_rotor(rng)
        product = rotor * rotor.conjugate()
        assert abs(product.s - 1.0) < TOL
        assert product.bv.length() < TOL
        assert abs(product.xyzw) < TOL

        v = random_vec(rng)
        assert close(rotor.conjugate().rotate_vec(rotor.rotate_vec(v)), v)


def test_rotate_by_applies_argument_first():
    rng = random.Random(5)
    for _ in range(20):
        a, b = random_rotor(rng), random_rotor(rng)
        v = random_vec(rng)
        assert close(a.rotate_by(b).rotate_vec(v), a.rotate_vec(b.rotate_vec(v)))


def test_composition_is_not_commutative():
    a = Rotor4.from_angle_plane(math.pi / 2, Bivector4.XY)
    b = Rotor4.from_angle_plane(math.pi / 2, Bivector4.YZ)
    v = Vec4.unit_x()
    assert not close(a.rotate_by(b).rotate_vec(v), b.rotate_by(a).rotate_vec(v))


def test_disjoint_planes_produce_pseudoscalar():
    a = Rotor4.from_angle_plane(math.pi / 2, Bivector4.YZ)
    b = Rotor4.from_angle_plane(math.pi / 2, Bivector4.XW)
    assert a.xyzw == 0.0 and b.xyzw == 0.0

    both = a.rotate_by(b)
    assert abs(both.xyzw - 0.5) < TOL
    assert abs(both.length() - 1.0) < TOL

    # a double rotation moves every axis
    assert close(both.rotate_vec(Vec4.unit_y()), Vec4.unit_z())
    assert close(both.rotate_vec(Vec4.unit_x()), Vec4.unit_w())


def test_rotation_between_maps_from_onto_to():
    rng = random.Random(13)
    for _ in range(30):
        a = random_vec(rng).normalized()
        b = random_vec(rng).normalized()
        rotor = Rotor4.from_rotation_between(a, b)
        assert abs(rotor.length() - 1.0) < 1e-12
        assert close(rotor.rotate_vec(a), b, 1e-8)


def test_rotation_between_equal_vectors_is_identity():
    v = Vec4(0.0, 0.6, 0.0, 0.8)
    rotor = Rotor4.from_rotation_between(v, v)
    assert close(rotor.rotate_vec(Vec4.unit_x()), Vec4.unit_x())


def test_rotation_between_opposite_vectors():
    x = Vec4.unit_x()
    with pytest.raises(DegenerateGeometryError):
        Rotor4.from_rotation_between(x, -x)

    rotor = Rotor4.from_rotation_between(x, -x, fallback_plane=Bivector4.XY)
    assert close(rotor.rotate_vec(x), -x)
    assert close(rotor.rotate_vec(Vec4.unit_z()), Vec4.unit_z())


def test_normalize_zero_rotor_raises():
    with pytest.raises(DegenerateGeometryError):
        Rotor4(s=0.0).normalized()


def test_multiply_by_non_rotor():
    with pytest.raises(TypeError):
        Rotor4() * 2.0
