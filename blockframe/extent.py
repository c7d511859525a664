# extent.py

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Union, List
import numpy as np
from numpy import ndarray

from blockframe.block import BlockState, AIR

PositionLike = Union[ndarray, List, Tuple]


class ExtentError(Exception):
    """Base class for failures raised by an extent."""


class OutOfBoundsError(ExtentError):
    def __init__(self, position: Tuple[int, int, int]):
        super().__init__(f"Position {position} is outside the extent")
        self.position = position


def block_position(position: PositionLike) -> Tuple[int, int, int]:
    """Convert a point to the integer block coordinates that contain it."""
    p = np.floor(np.asarray(position, dtype=np.float64))
    if p.shape != (3,):
        raise ValueError(f"Position must be a 3D vector, got {p.shape}")
    return int(p[0]), int(p[1]), int(p[2])


class Extent(ABC):
    """
    Block access: read and write blocks by position.
    """

    @abstractmethod
    def get_block(self, position: PositionLike) -> BlockState:
        ...

    @abstractmethod
    def get_full_block(self, position: PositionLike) -> BlockState:
        ...

    def get_lazy_block(self, position: PositionLike) -> BlockState:
        return self.get_block(position)

    @abstractmethod
    def set_block(self, position: PositionLike, block: BlockState) -> bool:
        """
        Store a block.

        Returns:
            True if the stored block changed.
        """

    @abstractmethod
    def get_minimum_point(self) -> Tuple[int, int, int]:
        ...

    @abstractmethod
    def get_maximum_point(self) -> Tuple[int, int, int]:
        ...

    def contains(self, position: PositionLike) -> bool:
        p = block_position(position)
        lo = self.get_minimum_point()
        hi = self.get_maximum_point()
        return all(lo[i] <= p[i] <= hi[i] for i in range(3))


class MemoryExtent(Extent):
    """
    A bounded, dict-backed extent. Unset positions read as `default`.
    """

    def __init__(self, minimum: PositionLike, maximum: PositionLike, default: BlockState = AIR):
        lo = block_position(minimum)
        hi = block_position(maximum)
        if any(lo[i] > hi[i] for i in range(3)):
            raise ValueError(f"Minimum {lo} exceeds maximum {hi}")
        self._minimum = lo
        self._maximum = hi
        self._default = default
        self._blocks: Dict[Tuple[int, int, int], BlockState] = {}

    def _checked(self, position: PositionLike) -> Tuple[int, int, int]:
        p = block_position(position)
        if not self.contains(p):
            raise OutOfBoundsError(p)
        return p

    def get_block(self, position: PositionLike) -> BlockState:
        return self._blocks.get(self._checked(position), self._default)

    def get_full_block(self, position: PositionLike) -> BlockState:
        return self.get_block(position)

    def set_block(self, position: PositionLike, block: BlockState) -> bool:
        if block is None:
            raise ValueError("Cannot store None")
        p = self._checked(position)
        previous = self._blocks.get(p, self._default)
        if block == self._default:
            self._blocks.pop(p, None)
        else:
            self._blocks[p] = block
        return previous != block

    def get_minimum_point(self) -> Tuple[int, int, int]:
        return self._minimum

    def get_maximum_point(self) -> Tuple[int, int, int]:
        return self._maximum

    def __len__(self) -> int:
        return len(self._blocks)
