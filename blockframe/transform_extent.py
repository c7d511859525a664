# transform_extent.py

from typing import Tuple

from blockframe.block import BlockState
from blockframe.extent import Extent, PositionLike
from blockframe.registry import BlockRegistry
from blockframe.remap import RemapConfig, DEFAULT_CONFIG, transform_block
from blockframe.transform import Transform


class TransformingExtent(Extent):
    """
    Wraps an extent so that block orientations, but not positions, appear
    transformed.

    Reads return blocks with their directional properties remapped through
    the transform; writes remap through the inverse before storing, so the
    wrapped extent always holds blocks in the untransformed frame. Failures
    from the wrapped extent propagate unchanged.
    """

    def __init__(
        self,
        extent: Extent,
        transform: Transform,
        registry: BlockRegistry,
        config: RemapConfig = DEFAULT_CONFIG,
    ):
        if extent is None:
            raise ValueError("extent cannot be None")
        if transform is None:
            raise ValueError("transform cannot be None")
        if registry is None:
            raise ValueError("registry cannot be None")
        self._extent = extent
        self._transform = transform
        self._inverse = transform.inverse()
        self._registry = registry
        self._config = config

    @property
    def extent(self) -> Extent:
        return self._extent

    @property
    def transform(self) -> Transform:
        return self._transform

    def get_transform(self) -> Transform:
        return self._transform

    def _transform_block(self, block: BlockState, reverse: bool) -> BlockState:
        transform = self._inverse if reverse else self._transform
        return transform_block(block, transform, self._registry, self._config)

    def get_block(self, position: PositionLike) -> BlockState:
        return self._transform_block(self._extent.get_block(position), False)

    def get_full_block(self, position: PositionLike) -> BlockState:
        return self._transform_block(self._extent.get_full_block(position), False)

    def get_lazy_block(self, position: PositionLike) -> BlockState:
        return self._transform_block(self._extent.get_lazy_block(position), False)

    def set_block(self, position: PositionLike, block: BlockState) -> bool:
        return self._extent.set_block(position, self._transform_block(block, True))

    def get_minimum_point(self) -> Tuple[int, int, int]:
        return self._extent.get_minimum_point()

    def get_maximum_point(self) -> Tuple[int, int, int]:
        return self._extent.get_maximum_point()

    def contains(self, position: PositionLike) -> bool:
        return self._extent.contains(position)

    def __repr__(self) -> str:
        return f"TransformingExtent({self._extent!r}, {self._transform!r})"
