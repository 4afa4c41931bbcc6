# utils.py
import numpy as np

from geometry import EPS


def ring_points(radius, n, z=0.0):
    # n points, no repeated closing point
    t = 2*np.pi*np.arange(n)/n
    return np.column_stack([radius*np.cos(t), radius*np.sin(t), np.full(n, float(z))])

def cyclic_midpoints(Pts):
    # midpoint of rows i and (i+1) mod n
    return (Pts + np.roll(Pts, -1, axis=0)) / 2

def unit_rows(V, eps=EPS):
    """
    Row-wise V / max(|V|, eps). Zero rows stay zero instead of producing NaN.
    """
    norms = np.linalg.norm(V, axis=1)
    return V / np.maximum(norms, eps)[:, None]

def angle_label(phi, decimals=1):
    return f'φ = {np.degrees(phi):.{decimals}f}°'
