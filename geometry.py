# geometry.py
from typing import NamedTuple

import numpy as np

# --- Core dimensions (mm) ---
n = 12            # number of scissor units
a = 282.84        # scissor arm length (fixed)
H_hoop = 800.0    # hoop height

z_upper = H_hoop
z_lower = 0.0

# --- Folding angle range (radians) ---
phi_start = np.pi/12   # folded (~15 deg)
phi_end = np.pi/2      # fully deployed (90 deg)

# --- Sampling ---
NUM_STATES = 3    # static: folded, partial, open
NUM_FRAMES = 50   # animation frames

# --- Output ---
GIF_PATH = "AnimatedTruss.gif"
FPS = 10
DPI = 100

# --- Tolerances ---
EPS = np.finfo(float).eps
ARM_TOL = 1e-6    # mm tolerance on |node - center| == a


class MechanismParameters(NamedTuple):
    n: int
    a: float
    z_upper: float
    z_lower: float
    phi_start: float
    phi_end: float


def default_parameters(**overrides):
    params = MechanismParameters(n, a, z_upper, z_lower, phi_start, phi_end)
    return params._replace(**overrides)
