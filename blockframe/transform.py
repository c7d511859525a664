# transform.py

from abc import ABC, abstractmethod
from typing import Union, Optional, List, Tuple, Iterable
from numpy.linalg import det as np_det
from numpy.linalg import inv as np_inv
from numpy.linalg import LinAlgError
from numpy import allclose as np_allclose
from numpy import append as np_append
from numpy import array2string as np_array2string
from numpy import asarray as np_asarray
from numpy import diag as np_diag
from numpy import eye as np_eye
from numpy import float64 as np_float64
from numpy import ndarray
import numpy as np

from blockframe.geometry import normalize, axis_rotation

# preallocate the identity matrix and origin for performance
_EYE4 = np_eye(4, dtype=np_float64)
_ZERO = np.zeros(3, dtype=np_float64)

_AXES = {"x": 0, "y": 1, "z": 2}

VectorLike = Union[ndarray, List, Tuple]


class Transform(ABC):
    """
    A spatial mapping of 3D points with a defined inverse.

    Subclasses only need `apply` and `inverse`; directions are derived by
    applying the transform to a vector and to the origin and subtracting, so
    any translation component drops out.
    """
    __slots__ = ()

    @abstractmethod
    def apply(self, point: VectorLike) -> ndarray:
        """Map a point through this transform."""

    @abstractmethod
    def inverse(self) -> "Transform":
        """Return the transform that undoes this one."""

    def is_identity(self) -> bool:
        return False

    def combine(self, other: "Transform") -> "Transform":
        """
        Chain another transform after this one.

        Args:
            other: transform applied to the output of this one.

        Returns:
            A transform equivalent to `other.apply(self.apply(p))`.
        """
        if other.is_identity():
            return self
        if self.is_identity():
            return other
        return CombinedTransform((self, other))

    def transform_direction(self, direction: VectorLike) -> ndarray:
        """
        Apply this transform to a direction rather than a point.

        Args:
            direction: length-3 vector.

        Returns:
            Unit length-3 vector, or zeros if the direction collapses.
        """
        v = np_asarray(direction, dtype=np_float64)
        return normalize(self.apply(v) - self.apply(_ZERO))

    def __matmul__(self, other: "Transform") -> "Transform":
        # a @ b applies b first, like the matrix product
        if not isinstance(other, Transform):
            return NotImplemented
        return other.combine(self)


class Identity(Transform):
    """The transform that leaves every point where it is."""
    __slots__ = ()

    def apply(self, point: VectorLike) -> ndarray:
        return np_asarray(point, dtype=np_float64).copy()

    def inverse(self) -> "Identity":
        return self

    def is_identity(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Identity)

    def __hash__(self) -> int:
        return hash(Identity)

    def __repr__(self) -> str:
        return "Identity()"


class AffineTransform(Transform):
    """
    A 4x4 homogeneous affine transformation in 3D space.

    Attributes:
        matrix (ndarray): 4x4 transformation matrix. The bottom row is expected
            to be [0, 0, 0, 1].
    """
    __slots__ = ("matrix",)

    def __init__(self, matrix: Optional[ndarray] = None):
        if matrix is None:
            self.matrix = _EYE4.copy()
        else:
            matrix = np_asarray(matrix, dtype=np_float64)
            if matrix.shape != (4, 4):
                raise ValueError(f"Invalid matrix shape: {matrix.shape}")
            self.matrix = matrix.copy()

    @classmethod
    def identity(cls) -> "AffineTransform":
        """
        Create an identity AffineTransform.

        Returns:
            A new AffineTransform whose `matrix` is the identity matrix.
        """
        return cls(_EYE4)

    @classmethod
    def from_values(
        cls,
        translation: Optional[VectorLike] = None,
        rotation: Optional[VectorLike] = None,
        scale: Optional[VectorLike] = None,
    ) -> "AffineTransform":
        """
        Create an AffineTransform by assembling translation, rotation, and scale into a 4x4 matrix.
        Order of application is: scale → rotate → translate.

        Args:
            translation: length-3 array to place in last column.
            rotation: 3x3 rotation matrix.
            scale: scalar or length-3 scale factors.

        Returns:
            A new AffineTransform whose `matrix` encodes T·R·S.
        """
        mat = _EYE4.copy()
        R = np_eye(3, dtype=np_float64)
        S = np_eye(3, dtype=np_float64)
        if rotation is not None:
            R = np_asarray(rotation, dtype=np_float64)
            if R.shape != (3, 3):
                raise ValueError(f"Rotation must be a 3x3 matrix, got {R.shape}")
        if scale is not None:
            s = np_asarray(scale, dtype=np_float64)
            if s.shape in ((), (1,)):
                S = np_diag([float(s.reshape(-1)[0])] * 3)
            elif s.shape == (3,):
                S = np_diag(s)
            else:
                raise ValueError(f"Invalid scale shape: {s.shape}")
        mat[:3, :3] = R @ S
        if translation is not None:
            t = np_asarray(translation, dtype=np_float64)
            if t.shape != (3,):
                raise ValueError(f"Translation must be a 3D vector, got {t.shape}")
            mat[:3, 3] = t
        return cls(mat)

    @classmethod
    def from_translation(cls, translation: VectorLike) -> "AffineTransform":
        return cls.from_values(translation=translation)

    @classmethod
    def from_scale(cls, scale: VectorLike) -> "AffineTransform":
        return cls.from_values(scale=scale)

    @classmethod
    def rotate_x(cls, theta: float, degrees: bool = True) -> "AffineTransform":
        return cls.from_values(rotation=axis_rotation(0, theta, degrees))

    @classmethod
    def rotate_y(cls, theta: float, degrees: bool = True) -> "AffineTransform":
        """
        Rotation about the vertical axis. A positive angle turns north toward
        east, so rotate_y(90) maps (0, 0, -1) to (1, 0, 0).
        """
        return cls.from_values(rotation=axis_rotation(1, theta, degrees))

    @classmethod
    def rotate_z(cls, theta: float, degrees: bool = True) -> "AffineTransform":
        return cls.from_values(rotation=axis_rotation(2, theta, degrees))

    @classmethod
    def mirror(cls, axis: str) -> "AffineTransform":
        """
        Reflection across the plane perpendicular to one axis.

        Args:
            axis: "x", "y" or "z".

        Returns:
            A self-inverse AffineTransform negating that coordinate.
        """
        try:
            index = _AXES[axis]
        except KeyError:
            raise ValueError(f"Invalid axis: {axis!r}") from None
        scale = np.ones(3, dtype=np_float64)
        scale[index] = -1.0
        return cls.from_values(scale=scale)

    ########
    # Properties
    #

    @property
    def translation(self) -> ndarray:
        return self.matrix[:3, 3].copy()

    @property
    def rotation(self) -> ndarray:
        """The linear 3x3 block (rotation, reflection and scale combined)."""
        return self.matrix[:3, :3].copy()

    ########
    # Transform methods
    #

    def apply(self, point: VectorLike) -> ndarray:
        """
        Apply this transform to a 3D point (affine).

        Args:
            point: length-3 array.

        Returns:
            Transformed length-3 point.
        """
        p = np_append(np_asarray(point, dtype=np_float64), 1.0)
        return (self.matrix @ p)[:3]

    transform_point = apply

    def transform_vector(self, vector: VectorLike) -> ndarray:
        """
        Apply this transform to a 3D vector (no translation, no normalization).

        Args:
            vector: length-3 array.

        Returns:
            Transformed length-3 vector.
        """
        v = np_append(np_asarray(vector, dtype=np_float64), 0.0)
        return (self.matrix @ v)[:3]

    def inverse(self) -> "AffineTransform":
        """
        Invert this AffineTransform.

        Returns:
            Inverted AffineTransform.

        Raises:
            ValueError: if the matrix is singular.
        """
        try:
            inv_mat = np_inv(self.matrix)
        except LinAlgError as exc:
            raise ValueError("Transform is not invertible") from exc
        return self.__class__(inv_mat)

    def combine(self, other: Transform) -> Transform:
        if isinstance(other, AffineTransform):
            # first self, then other
            return self.__class__(other.matrix @ self.matrix)
        return super().combine(other)

    def is_identity(self) -> bool:
        return bool(np_allclose(self.matrix, _EYE4))

    def determinant(self) -> float:
        """Determinant of the linear block; negative for reflections."""
        return float(np_det(self.matrix[:3, :3]))

    #########
    # Dunder methods
    #

    def __eq__(self, other: object) -> bool:
        """
        True if `other` is the same class and matrices are equal within a small tolerance.
        """
        if self.__class__ is not other.__class__:
            return False
        return bool(np_allclose(self.matrix, other.matrix))

    __hash__ = None

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        mat = np_array2string(self.matrix, precision=6, separator=', ')
        return f"{cls}(matrix=\n{mat}\n)"

    def __copy__(self) -> "AffineTransform":
        return self.__class__(self.matrix)

    def __deepcopy__(self, memo) -> "AffineTransform":
        # matrices are numeric, so shallow vs deep is effectively the same here
        return self.__copy__()

    def __reduce__(self):
        return (self.__class__, (self.matrix.copy(),))


class CombinedTransform(Transform):
    """
    An ordered chain of transforms, applied first to last.
    """
    __slots__ = ("transforms",)

    def __init__(self, transforms: Iterable[Transform]):
        flat: List[Transform] = []
        for t in transforms:
            if t is None:
                raise ValueError("CombinedTransform cannot contain None")
            if isinstance(t, CombinedTransform):
                flat.extend(t.transforms)
            else:
                flat.append(t)
        self.transforms: Tuple[Transform, ...] = tuple(flat)

    def apply(self, point: VectorLike) -> ndarray:
        p = np_asarray(point, dtype=np_float64)
        for t in self.transforms:
            p = t.apply(p)
        return p

    def inverse(self) -> "CombinedTransform":
        return CombinedTransform(t.inverse() for t in reversed(self.transforms))

    def combine(self, other: Transform) -> Transform:
        if other.is_identity():
            return self
        return CombinedTransform(self.transforms + (other,))

    def is_identity(self) -> bool:
        return all(t.is_identity() for t in self.transforms)

    def __repr__(self) -> str:
        return f"CombinedTransform({list(self.transforms)!r})"
