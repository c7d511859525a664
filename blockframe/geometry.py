# geometry.py
import math
from numpy import float64 as np_float64
from numpy import ndarray
import numpy as np
from numba import njit

from numba.core.errors import NumbaPerformanceWarning
import warnings
warnings.filterwarnings("ignore", category=NumbaPerformanceWarning)

# values this close to 0, 1 or -1 are snapped when building rotations
SNAP_TOLERANCE = 1e-12


@njit(cache=True)
def normalize(vector: ndarray) -> ndarray:
    """
    Scale a 3D vector to unit length.

    A zero-length vector is returned as zeros rather than NaNs; callers treat
    the zero vector as "no direction".

    Parameters:
        vector (ndarray): length-3 array.

    Returns:
        ndarray: a new length-3 float64 array.
    """
    out = np.zeros(3, dtype=np_float64)
    norm = math.sqrt(vector[0]*vector[0] + vector[1]*vector[1] + vector[2]*vector[2])
    if norm == 0.0:
        return out
    out[0] = vector[0] / norm
    out[1] = vector[1] / norm
    out[2] = vector[2] / norm
    return out


@njit(cache=True)
def closest_direction(candidates: ndarray, target: ndarray, last_wins: bool = True) -> int:
    """
    Find the candidate direction that best matches a target direction.

    Every candidate is normalized and compared to the (already normalized)
    target by dot product; the largest dot product wins. When two candidates
    score the same, `last_wins` decides whether the later or the earlier one
    in row order is kept.

    Parameters:
        candidates (ndarray): (N, 3) array of candidate directions.
        target (ndarray): length-3 unit vector.
        last_wins (bool, optional): tie-break toward the last candidate. Defaults to True.

    Returns:
        int: row index of the best candidate, or -1 if there are no candidates
        or the target is the zero vector.
    """
    best = -1
    if target[0] == 0.0 and target[1] == 0.0 and target[2] == 0.0:
        return best
    closest = -2.0
    for i in range(candidates.shape[0]):
        c = normalize(candidates[i])
        dot = c[0]*target[0] + c[1]*target[1] + c[2]*target[2]
        if dot > closest or (last_wins and dot == closest):
            closest = dot
            best = i
    return best


@njit(cache=True)
def snap(matrix: ndarray, tol: float = SNAP_TOLERANCE) -> ndarray:
    """Round entries within `tol` of 0, 1 or -1 to those exact values."""
    out = matrix.copy()
    rows, cols = out.shape
    for i in range(rows):
        for j in range(cols):
            v = out[i, j]
            if abs(v) < tol:
                out[i, j] = 0.0
            elif abs(v - 1.0) < tol:
                out[i, j] = 1.0
            elif abs(v + 1.0) < tol:
                out[i, j] = -1.0
    return out


def axis_rotation(axis: int, theta: float, degrees: bool = True) -> ndarray:
    """
    Build a 3x3 rotation about one world axis.

    Rotations about x and z are right-handed. Rotation about y follows the
    block-world yaw convention instead: a positive angle turns north (0, 0, -1)
    toward east (1, 0, 0), clockwise when viewed from above.

    Parameters:
        axis (int): 0 for x, 1 for y, 2 for z.
        theta (float): rotation angle.
        degrees (bool, optional): if True, `theta` is in degrees. Defaults to True.

    Returns:
        ndarray: 3x3 float64 rotation matrix.
    """
    if degrees:
        theta = math.radians(theta)
    c = math.cos(theta)
    s = math.sin(theta)
    if axis == 0:
        R = np.array([[1.0, 0.0, 0.0],
                      [0.0, c, -s],
                      [0.0, s, c]], dtype=np_float64)
    elif axis == 1:
        R = np.array([[c, 0.0, -s],
                      [0.0, 1.0, 0.0],
                      [s, 0.0, c]], dtype=np_float64)
    elif axis == 2:
        R = np.array([[c, -s, 0.0],
                      [s, c, 0.0],
                      [0.0, 0.0, 1.0]], dtype=np_float64)
    else:
        raise ValueError(f"Invalid axis: {axis}")
    return snap(R)
