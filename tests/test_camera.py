import itertools
import math

from hyperray.core.math4d import Vec4
from hyperray.scene.camera import TAU, Camera4D, orientation, basis_from_rotor, wrap_angle

TOL = 1e-9
QUARTER = math.pi / 2


def close(a: Vec4, b: Vec4, tol=TOL):
    return all(abs(p - q) < tol for p, q in zip(a.to_tuple(), b.to_tuple()))


def basis(yaw=0.0, pitch=0.0, w_yaw=0.0, w_pitch=0.0):
    return basis_from_rotor(orientation(yaw, pitch, w_yaw, w_pitch))


def test_zero_angles_give_axis_basis():
    b = basis()
    assert close(b.forward, Vec4.unit_z())
    assert close(b.right, Vec4.unit_x())
    assert close(b.up, Vec4.unit_y())


def test_basis_is_orthonormal():
    angles = [0.0, 0.4, 1.3, 2.9, 4.4, 6.1]
    for yaw, pitch, w_yaw, w_pitch in itertools.product(angles, repeat=4):
        f, r, u = basis(yaw, pitch, w_yaw, w_pitch)
        for v in (f, r, u):
            assert abs(v.length() - 1.0) < TOL
        assert abs(f.dot(r)) < TOL
        assert abs(f.dot(u)) < TOL
        assert abs(r.dot(u)) < TOL


def test_yaw_turns_forward_toward_right():
    b = basis(yaw=QUARTER)
    assert close(b.forward, Vec4.unit_x())
    assert close(b.up, Vec4.unit_y())


def test_pitch_turns_forward_toward_up():
    b = basis(pitch=QUARTER)
    assert close(b.forward, Vec4.unit_y())
    assert close(b.right, Vec4.unit_x())


def test_w_yaw_turns_right_into_w():
    b = basis(w_yaw=QUARTER)
    assert close(b.right, Vec4.unit_w())
    assert close(b.forward, Vec4.unit_z())
    assert close(b.up, Vec4.unit_y())


def test_w_pitch_turns_forward_into_w():
    b = basis(w_pitch=QUARTER)
    assert close(b.forward, Vec4.unit_w())
    assert close(b.right, Vec4.unit_x())
    assert close(b.up, Vec4.unit_y())


def test_pitch_is_applied_in_yawed_frame():
    b = basis(yaw=QUARTER, pitch=QUARTER)
    assert close(b.forward, Vec4.unit_y())
    assert close(b.right, -Vec4.unit_z())
    assert close(b.up, -Vec4.unit_x())


def test_camera_basis_matches_orientation():
    camera = Camera4D(yaw=0.3, pitch=1.1, w_yaw=2.0, w_pitch=0.7)
    expected = basis(0.3, 1.1, 2.0, 0.7)
    for got, want in zip(camera.basis(), expected):
        assert close(got, want)


def test_wrap_angle():
    assert wrap_angle(0.0) == 0.0
    assert abs(wrap_angle(TAU + 1.0) - 1.0) < TOL
    assert abs(wrap_angle(-1.0) - (TAU - 1.0)) < TOL
    assert 0.0 <= wrap_angle(-1e-20) < TAU
    assert wrap_angle(TAU) == 0.0


def test_clamp():
    camera = Camera4D(
        yaw=-0.5, pitch=7.0, fov=-0.1,
        min_distance=-2.0, max_distance=-5.0,
        bounce_count=0, sample_count=-3,
    ).clamp()
    assert abs(camera.yaw - (TAU - 0.5)) < TOL
    assert abs(camera.pitch - (7.0 - TAU)) < TOL
    assert 0.0 <= camera.fov < TAU
    assert camera.min_distance == 0.0
    assert camera.max_distance == 0.0
    assert camera.bounce_count == 1
    assert camera.sample_count == 1


def test_clamp_keeps_valid_values():
    camera = Camera4D(min_distance=0.5, max_distance=20.0, bounce_count=3, sample_count=4)
    camera.clamp()
    assert (camera.min_distance, camera.max_distance) == (0.5, 20.0)
    assert (camera.bounce_count, camera.sample_count) == (3, 4)


def test_dict_round_trip():
    camera = Camera4D(position=Vec4(1.0, 2.0, 3.0, 4.0), yaw=1.0, w_pitch=2.0, sample_count=8)
    restored = Camera4D.from_dict(camera.to_dict())
    assert restored == camera


def test_from_dict_fills_defaults():
    camera = Camera4D.from_dict({'yaw': -1.0})
    assert camera.position == Vec4(0.0, 1.0, -3.0, 0.0)
    assert abs(camera.yaw - (TAU - 1.0)) < TOL
    assert camera.bounce_count == 5
