# kinematics.py
"""
Folding-angle -> node layout of the scissor (7R) hoop truss.

One scalar phi drives the whole mechanism. Each scissor arm of length a spans
half a chord, so the chord between neighbouring hoop nodes is 2*a*sin(phi) and
the hoop radius follows from the regular n-gon. Center joints sit inward of
each chord midpoint at the distance that keeps both arms at length a.
"""
from typing import NamedTuple

import numpy as np

from geometry import ARM_TOL
from utils import ring_points, cyclic_midpoints, unit_rows


class FoldingState(NamedTuple):
    phi: float
    chord: float
    radius: float
    upper_nodes: np.ndarray     # (n,3)
    lower_nodes: np.ndarray     # (n,3)
    upper_centers: np.ndarray   # (n,3), center i between nodes i and i+1
    lower_centers: np.ndarray   # (n,3)

    @property
    def n(self):
        return len(self.upper_nodes)

    @property
    def degrees(self):
        return float(np.degrees(self.phi))


def chord_length(a, phi):
    return 2*a*np.sin(phi)

def hoop_radius(chord, n):
    return chord / (2*np.sin(np.pi/n))

def hoop_nodes(radius, n, z):
    return ring_points(radius, n, z)

def center_joints(nodes, a, chord):
    """
    Scissor center joints for one hoop plane.

    mid_i = (N_i + N_{i+1})/2, C_i = mid_i - h*mid_i/|mid_i| with
    h = sqrt(max(a^2 - (chord/2)^2, 0)). Clamping keeps C_i on the midpoint
    when chord/2 exceeds a by rounding; at zero radius everything stays at
    the plane origin.
    """
    mid = cyclic_midpoints(nodes)
    dir_unit = unit_rows(mid[:, :2])
    h = np.sqrt(max(a**2 - (chord/2)**2, 0.0))
    C = mid.copy()
    C[:, :2] -= h * dir_unit
    return C

def _frozen(A):
    A.setflags(write=False)
    return A

def solve(params, phi):
    L_cur = chord_length(params.a, phi)
    R_cur = hoop_radius(L_cur, params.n)

    upper = hoop_nodes(R_cur, params.n, params.z_upper)
    lower = hoop_nodes(R_cur, params.n, params.z_lower)

    return FoldingState(
        phi=float(phi),
        chord=float(L_cur),
        radius=float(R_cur),
        upper_nodes=_frozen(upper),
        lower_nodes=_frozen(lower),
        upper_centers=_frozen(center_joints(upper, params.a, L_cur)),
        lower_centers=_frozen(center_joints(lower, params.a, L_cur)),
    )


def check_state(state, a, tol=ARM_TOL):
    """
    Verify arm rigidity, hoop planarity and node radius.
    Returns (ok, msgs) with one message per violation.
    """
    msgs = []
    planes = [('upper', state.upper_nodes, state.upper_centers),
              ('lower', state.lower_nodes, state.lower_centers)]
    for name, N, C in planes:
        arm_prev = np.linalg.norm(N - C, axis=1)
        arm_next = np.linalg.norm(np.roll(N, -1, axis=0) - C, axis=1)
        for i in range(len(N)):
            for arm_len in (arm_prev[i], arm_next[i]):
                if abs(arm_len - a) > tol:
                    msgs.append(f'{name} unit {i}: arm {arm_len:.6f} (a={a})')

        heights = np.concatenate([N[:, 2], C[:, 2]])
        if np.ptp(heights) > tol:
            msgs.append(f'{name} hoop not planar (dz={np.ptp(heights):.3g})')

        r = np.linalg.norm(N[:, :2], axis=1)
        if np.any(np.abs(r - state.radius) > tol):
            msgs.append(f'{name} nodes off radius {state.radius:.3f}')
    return len(msgs) == 0, msgs


def _segments(A, B):
    return np.stack([A, B], axis=1)

def truss_members(state):
    """
    Line segments of every member group, each (m,2,3):
    arms, verticals, braces (node i to the neighbouring center i-1 on the
    opposite plane) and hoops.
    """
    Nu, Nl = state.upper_nodes, state.lower_nodes
    Cu, Cl = state.upper_centers, state.lower_centers
    next_u, next_l = np.roll(Nu, -1, axis=0), np.roll(Nl, -1, axis=0)
    prev_cu, prev_cl = np.roll(Cu, 1, axis=0), np.roll(Cl, 1, axis=0)

    return {
        'arms': np.concatenate([
            _segments(Nu, Cu), _segments(next_u, Cu),
            _segments(Nl, Cl), _segments(next_l, Cl),
        ]),
        'verticals': _segments(Nu, Nl),
        'braces': np.concatenate([
            _segments(Nu, prev_cl), _segments(Nl, prev_cu),
        ]),
        'hoops': np.concatenate([
            _segments(Nu, next_u), _segments(Nl, next_l),
        ]),
    }
