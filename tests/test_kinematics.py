import numpy as np
import pytest

from geometry import default_parameters
from kinematics import (solve, check_state, truss_members, center_joints,
                        chord_length, hoop_radius, hoop_nodes)

params = default_parameters()   # n=12, a=282.84, z in [0, 800]
a, n = params.a, params.n


def test_chord_follows_folding_angle():
    phis = np.linspace(0, np.pi/2, 200)
    chords = [solve(params, phi).chord for phi in phis]
    assert np.allclose(chords, 2*a*np.sin(phis), rtol=1e-12, atol=1e-12)
    assert np.all(np.diff(chords) >= 0)


def test_deployed_radius():
    state = solve(params, np.pi/2)
    assert state.chord == pytest.approx(565.68, rel=1e-12)
    assert state.radius == pytest.approx(565.68 / (2*np.sin(np.pi/12)), rel=1e-12)
    assert state.radius == pytest.approx(1092.8, abs=0.1)


def test_folded_nodes_on_circle():
    state = solve(params, np.pi/12)
    assert state.chord == pytest.approx(146.41, abs=0.01)
    assert state.radius == pytest.approx(hoop_radius(state.chord, n))

    for N, z in [(state.upper_nodes, params.z_upper), (state.lower_nodes, params.z_lower)]:
        assert N.shape == (n, 3)
        assert np.allclose(np.linalg.norm(N[:, :2], axis=1), state.radius)
        assert np.allclose(N[:, 2], z)
        theta = np.degrees(np.arctan2(N[:, 1], N[:, 0])) % 360
        assert np.allclose(np.diff(theta), 30.0)
    # same angular layout on both planes
    assert np.array_equal(state.upper_nodes[:, :2], state.lower_nodes[:, :2])


@pytest.mark.parametrize('phi', np.linspace(0.01, np.pi/2, 25))
def test_center_joints_keep_arm_length(phi):
    state = solve(params, phi)
    ok, msgs = check_state(state, a, tol=1e-9*a)
    assert ok, msgs


def test_center_joint_is_inward_of_midpoint():
    state = solve(params, np.pi/4)
    N, C = state.upper_nodes, state.upper_centers
    mid = (N + np.roll(N, -1, axis=0)) / 2
    assert np.all(np.linalg.norm(C[:, :2], axis=1) < np.linalg.norm(mid[:, :2], axis=1))
    assert np.allclose(C[:, 2], params.z_upper)


def test_solve_is_pure():
    s1 = solve(params, 0.7)
    s2 = solve(params, 0.7)
    assert s1.phi == s2.phi and s1.chord == s2.chord and s1.radius == s2.radius
    for A, B in zip(s1[3:], s2[3:]):
        assert A.tobytes() == B.tobytes()


def test_state_arrays_are_read_only():
    state = solve(params, 0.5)
    with pytest.raises(ValueError):
        state.upper_nodes[0, 0] = 1.0


def test_zero_angle_collapses_to_axis():
    with np.errstate(all='raise'):
        state = solve(params, 0.0)
    assert state.chord == 0.0 and state.radius == 0.0
    for P in state[3:]:
        assert np.all(np.isfinite(P))
        assert np.allclose(P[:, :2], 0.0)
    assert np.allclose(state.lower_nodes, 0.0)
    assert np.allclose(state.lower_centers, 0.0)


def test_overlong_chord_clamps_to_midpoint():
    L = 2*a*(1 + 1e-12)
    N = hoop_nodes(hoop_radius(L, n), n, 0.0)
    C = center_joints(N, a, L)
    mid = (N + np.roll(N, -1, axis=0)) / 2
    assert np.all(np.isfinite(C))
    assert np.allclose(C, mid)


def test_check_state_reports_wrong_arm():
    state = solve(params, np.pi/3)
    ok, msgs = check_state(state, a + 1.0)
    assert not ok
    assert len(msgs) == 4*n
    assert 'arm' in msgs[0]


def test_truss_members():
    state = solve(params, np.pi/3)
    members = truss_members(state)
    assert members['arms'].shape == (4*n, 2, 3)
    assert members['verticals'].shape == (n, 2, 3)
    assert members['braces'].shape == (2*n, 2, 3)
    assert members['hoops'].shape == (2*n, 2, 3)

    arms = members['arms']
    assert np.allclose(np.linalg.norm(arms[:, 1] - arms[:, 0], axis=1), a)

    hoops = members['hoops']
    assert np.allclose(np.linalg.norm(hoops[:, 1] - hoops[:, 0], axis=1), state.chord)

    verticals = members['verticals']
    assert np.allclose(verticals[:, 0, 2] - verticals[:, 1, 2], params.z_upper - params.z_lower)

    # brace from upper node 0 ends on the lower center between nodes n-1 and 0
    braces = members['braces']
    assert np.array_equal(braces[0, 0], state.upper_nodes[0])
    assert np.array_equal(braces[0, 1], state.lower_centers[-1])
    assert np.array_equal(braces[n, 1], state.upper_centers[-1])


def test_helpers_match_formulas():
    assert chord_length(1.0, np.pi/6) == pytest.approx(1.0)
    assert hoop_radius(1.0, 6) == pytest.approx(1.0)
