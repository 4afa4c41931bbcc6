# sequencer.py
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

import numpy as np

from geometry import NUM_STATES, NUM_FRAMES
from kinematics import solve


class ConfigurationError(Exception):
    pass


class Mode(Enum):
    STATIC = 'static'
    ANIMATION = 'animation'


def parse_mode(value):
    if isinstance(value, Mode):
        return value
    try:
        return Mode(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f'Invalid mode {value!r}. Use "animation" or "static".') from None


def folding_angles(phi_start, phi_end, count):
    """
    count evenly spaced angles, both ends included. A single sample is phi_start.
    """
    count = int(count)
    if count < 1:
        raise ConfigurationError(f'need at least one folding state, got {count}')
    if count == 1:
        return np.array([float(phi_start)])
    return np.linspace(phi_start, phi_end, count)


def generate_sequence(params, phi_start, phi_end, count, workers=None):
    """
    FoldingState for each sampled angle, ascending from folded to deployed.
    With workers > 1 the states are solved on a thread pool; order is kept.
    """
    phis = folding_angles(phi_start, phi_end, count)
    if workers and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda phi: solve(params, phi), phis))
    return [solve(params, phi) for phi in phis]


def sequence_for_mode(params, mode, num_states=NUM_STATES, num_frames=NUM_FRAMES, workers=None):
    mode = parse_mode(mode)
    count = num_states if mode is Mode.STATIC else num_frames
    return mode, generate_sequence(params, params.phi_start, params.phi_end, count, workers)
