"""Backend-agnostic conversions between simulator math types and numpy.

Generic representation:
- vectors: ``np.ndarray`` of shape (3,), order x, y, z
- quaternions: ``np.ndarray`` of shape (4,), order w, x, y, z
- rigid transforms: homogeneous ``np.ndarray`` of shape (4, 4)

Each simulator math library is described once by a `MathBackend`, which
knows how to read components out of its vector/quaternion/pose types and
how to build them. The conversion functions only talk to that interface.
Quaternions are assumed to be normalized by the caller.

Author: Laércio Lucchesi
Date: October 18, 2026
"""

from abc import ABC, abstractmethod
from typing import Any, Tuple

import numpy as np
from scipy.spatial.transform import Rotation


class MathBackend(ABC):
    """Capability interface of a simulator's vector/quaternion/pose types."""

    @abstractmethod
    def vector_components(self, vec: Any) -> Tuple[float, float, float]:
        """Return (x, y, z)."""

    @abstractmethod
    def quaternion_components(self, quat: Any) -> Tuple[float, float, float, float]:
        """Return (w, x, y, z)."""

    @abstractmethod
    def pose_components(self, pose: Any) -> Tuple[Any, Any]:
        """Return the backend (position, rotation) pair of a pose."""

    @abstractmethod
    def make_vector(self, x: float, y: float, z: float) -> Any:
        ...

    @abstractmethod
    def make_quaternion(self, w: float, x: float, y: float, z: float) -> Any:
        ...

    @abstractmethod
    def make_pose(self, position: Any, rotation: Any) -> Any:
        ...


class AccessorMathBackend(MathBackend):
    """Backend for gz-math style types.

    Vectors expose ``X()/Y()/Z()``, quaternions ``W()/X()/Y()/Z()`` and
    poses ``Pos()/Rot()``. Constructors are called as ``vector_type(x, y, z)``,
    ``quaternion_type(w, x, y, z)`` and ``pose_type(position, rotation)``.
    """

    def __init__(self, vector_type, quaternion_type, pose_type):
        self._vector_type = vector_type
        self._quaternion_type = quaternion_type
        self._pose_type = pose_type

    def vector_components(self, vec):
        return (float(vec.X()), float(vec.Y()), float(vec.Z()))

    def quaternion_components(self, quat):
        return (float(quat.W()), float(quat.X()), float(quat.Y()), float(quat.Z()))

    def pose_components(self, pose):
        return (pose.Pos(), pose.Rot())

    def make_vector(self, x, y, z):
        return self._vector_type(x, y, z)

    def make_quaternion(self, w, x, y, z):
        return self._quaternion_type(w, x, y, z)

    def make_pose(self, position, rotation):
        return self._pose_type(position, rotation)


class TupleMathBackend(MathBackend):
    """Backend for plain tuples, as used by GrADyS-SIM node positions.

    Positions are ``(x, y, z)``, rotations ``(w, x, y, z)`` and poses
    ``(position, rotation)``.
    """

    def vector_components(self, vec):
        x, y, z = vec
        return (float(x), float(y), float(z))

    def quaternion_components(self, quat):
        w, x, y, z = quat
        return (float(w), float(x), float(y), float(z))

    def pose_components(self, pose):
        position, rotation = pose
        return (position, rotation)

    def make_vector(self, x, y, z):
        return (x, y, z)

    def make_quaternion(self, w, x, y, z):
        return (w, x, y, z)

    def make_pose(self, position, rotation):
        return (position, rotation)


IDENTITY_QUATERNION = (1.0, 0.0, 0.0, 0.0)


def _as_array(value, shape: Tuple[int, ...], what: str) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != shape:
        raise ValueError(f"{what} must have shape {shape}, got {arr.shape}")
    return arr


def quaternion_to_matrix(quat) -> np.ndarray:
    """Rotation matrix of a (w, x, y, z) quaternion."""
    w, x, y, z = _as_array(quat, (4,), "quaternion")
    return Rotation.from_quat([x, y, z, w]).as_matrix()


def matrix_to_quaternion(matrix) -> np.ndarray:
    """(w, x, y, z) quaternion of a rotation matrix."""
    x, y, z, w = Rotation.from_matrix(_as_array(matrix, (3, 3), "rotation matrix")).as_quat()
    return np.array([w, x, y, z])


def convert_vec(vec, backend: MathBackend) -> np.ndarray:
    return np.array(backend.vector_components(vec), dtype=float)


def convert_quat(quat, backend: MathBackend) -> np.ndarray:
    return np.array(backend.quaternion_components(quat), dtype=float)


def convert_to_vec(vec, backend: MathBackend):
    x, y, z = _as_array(vec, (3,), "vector")
    return backend.make_vector(float(x), float(y), float(z))


def convert_to_quat(quat, backend: MathBackend):
    w, x, y, z = _as_array(quat, (4,), "quaternion")
    return backend.make_quaternion(float(w), float(x), float(y), float(z))


def convert_pose(pose, backend: MathBackend) -> np.ndarray:
    """Backend pose -> homogeneous (4, 4) rigid transform."""
    position, rotation = backend.pose_components(pose)
    tf = np.eye(4)
    tf[:3, 3] = convert_vec(position, backend)
    tf[:3, :3] = quaternion_to_matrix(convert_quat(rotation, backend))
    return tf


def convert_to_pose(tf, backend: MathBackend):
    """Homogeneous (4, 4) rigid transform -> backend pose."""
    tf = _as_array(tf, (4, 4), "transform")
    position = convert_to_vec(tf[:3, 3], backend)
    rotation = convert_to_quat(matrix_to_quaternion(tf[:3, :3]), backend)
    return backend.make_pose(position, rotation)
