# direction.py

from dataclasses import dataclass, field
from typing import Optional, Tuple
import math
import numpy as np
from numpy import float64 as np_float64
from numpy import ndarray


@dataclass(frozen=True, slots=True)
class DirectionalValue:
    """
    One member of a block kind's finite set of orientation states.

    Attributes:
        name (str): the value as stored on the block, e.g. "north".
        direction (ndarray | None): the facing vector, or None for values
            such as "none" that have no direction and are never produced by remapping.
    """

    name: str
    direction: Optional[ndarray] = field(default=None, compare=False)

    def __post_init__(self):
        if self.direction is not None:
            vec = np.array(self.direction, dtype=np_float64)
            if vec.shape != (3,):
                raise ValueError(f"Direction must be a 3D vector, got {vec.shape}")
            if not np.any(vec):
                # the zero vector means "no direction"
                vec = None
            else:
                vec.setflags(write=False)
            object.__setattr__(self, "direction", vec)

    @property
    def has_direction(self) -> bool:
        return self.direction is not None

    def __repr__(self) -> str:
        if self.direction is None:
            return f"DirectionalValue({self.name!r})"
        return f"DirectionalValue({self.name!r}, direction={self.direction.tolist()})"


# world axes: +x east, +y up, +z south
NORTH = DirectionalValue("north", (0, 0, -1))
EAST = DirectionalValue("east", (1, 0, 0))
SOUTH = DirectionalValue("south", (0, 0, 1))
WEST = DirectionalValue("west", (-1, 0, 0))
UP = DirectionalValue("up", (0, 1, 0))
DOWN = DirectionalValue("down", (0, -1, 0))
NONE = DirectionalValue("none")

CARDINALS: Tuple[DirectionalValue, ...] = (NORTH, EAST, SOUTH, WEST, UP, DOWN)
HORIZONTALS: Tuple[DirectionalValue, ...] = (NORTH, EAST, SOUTH, WEST)


def _rotation_values() -> Tuple[DirectionalValue, ...]:
    # 16-point compass used by signs and banners: 0 is south, 4 west, 8 north, 12 east
    values = []
    for step in range(16):
        angle = math.radians(step * 22.5)
        x = -math.sin(angle)
        z = math.cos(angle)
        # keep the four cardinal steps exact
        x = 0.0 if abs(x) < 1e-12 else x
        z = 0.0 if abs(z) < 1e-12 else z
        values.append(DirectionalValue(str(step), (x, 0.0, z)))
    return tuple(values)


COMPASS_16: Tuple[DirectionalValue, ...] = _rotation_values()

_NAME_TO_VALUE = {v.name: v for v in CARDINALS + (NONE,)}


def from_name(name: str) -> DirectionalValue:
    """Look up one of the six cardinal values (or "none") by name."""
    try:
        return _NAME_TO_VALUE[name]
    except KeyError:
        raise ValueError(f"Unknown direction name: {name!r}") from None
