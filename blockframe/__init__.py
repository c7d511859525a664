"""
Blockframe: keeps block orientations consistent when a block world is viewed
through a rotation, reflection or any composition of them.

Reads through a TransformingExtent see each block's facing remapped to the
closest value its block kind supports; writes are mapped back through the
inverse transform before they reach the wrapped extent.
"""

__version__ = version = "0.1.0"

import logging

# exposing the public API of the package
from blockframe.block import BlockState, AIR
from blockframe.direction import DirectionalValue
from blockframe.extent import Extent, MemoryExtent, ExtentError, OutOfBoundsError
from blockframe.registry import BlockRegistry, Property, DirectionalProperty, PropertyKind
from blockframe.remap import RemapConfig, TieBreak, remap, remap_direction, transform_block
from blockframe.transform import Transform, Identity, AffineTransform, CombinedTransform
from blockframe.transform_extent import TransformingExtent

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BlockState",
    "AIR",
    "DirectionalValue",
    "Extent",
    "MemoryExtent",
    "ExtentError",
    "OutOfBoundsError",
    "BlockRegistry",
    "Property",
    "DirectionalProperty",
    "PropertyKind",
    "RemapConfig",
    "TieBreak",
    "remap",
    "remap_direction",
    "transform_block",
    "Transform",
    "Identity",
    "AffineTransform",
    "CombinedTransform",
    "TransformingExtent",
]
