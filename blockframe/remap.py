# remap.py

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple
import numpy as np
from numpy import asarray as np_asarray
from numpy import float64 as np_float64
from numpy import ndarray

from blockframe.block import BlockState
from blockframe.direction import DirectionalValue
from blockframe.geometry import closest_direction
from blockframe.registry import BlockRegistry, Property
from blockframe.transform import Transform

logger = logging.getLogger(__name__)


class TieBreak(Enum):
    """Which of several equally good candidates a remap keeps."""
    FIRST = 0
    LAST = 1


@dataclass(frozen=True)
class RemapConfig:
    """
    Attributes:
        tie_break (TieBreak): candidate kept when dot products are equal.
            Depends on the registry's value order, so it is configurable.
    """
    tie_break: TieBreak = TieBreak.LAST


DEFAULT_CONFIG = RemapConfig()


def _candidates(prop: Property) -> Tuple[ndarray, List[DirectionalValue]]:
    values = [v for v in prop.values if v.has_direction]
    directions = np.empty((len(values), 3), dtype=np_float64)
    for i, v in enumerate(values):
        directions[i] = v.direction
    return directions, values


def remap_direction(
    prop: Property,
    transform: Transform,
    direction: ndarray,
    config: RemapConfig = DEFAULT_CONFIG,
) -> Optional[DirectionalValue]:
    """
    Pick the value of `prop` whose direction best matches `direction` after
    it has been transformed.

    Parameters:
        prop (Property): a directional property descriptor.
        transform (Transform): the transform to apply.
        direction (ndarray): length-3 direction vector, not necessarily unit length.
        config (RemapConfig, optional): tie-break settings.

    Returns:
        DirectionalValue | None: the closest value, or None if no value of
        `prop` has a direction or the transform collapses `direction`.
    """
    new_direction = transform.transform_direction(np_asarray(direction, dtype=np_float64))
    directions, values = _candidates(prop)
    index = closest_direction(directions, new_direction, config.tie_break is TieBreak.LAST)
    if index < 0:
        return None
    return values[index]


def remap(
    prop: Property,
    transform: Transform,
    value: DirectionalValue,
    config: RemapConfig = DEFAULT_CONFIG,
) -> Optional[DirectionalValue]:
    """
    Map one DirectionalValue to the value of `prop` that best approximates
    its transformed direction.

    Returns None when `value` has no direction or when no candidate does;
    the caller then keeps the value it had.
    """
    if not value.has_direction:
        return None
    return remap_direction(prop, transform, value.direction, config)


def transform_block(
    block: BlockState,
    transform: Transform,
    registry: BlockRegistry,
    config: RemapConfig = DEFAULT_CONFIG,
) -> BlockState:
    """
    Rewrite every directional property of a block through a transform.

    Only properties the registry marks as directional are touched. The input
    block is never modified; if nothing changes (including when the registry
    knows nothing about the block kind) the same instance is returned.

    Parameters:
        block (BlockState): the block to transform.
        transform (Transform): transform applied to each direction.
        registry (BlockRegistry): source of the block kind's property descriptors.
        config (RemapConfig, optional): tie-break settings.

    Returns:
        BlockState: the transformed block.
    """
    states = registry.get_states(block)
    if states is None:
        return block

    changed = block
    for prop in states.values():
        if not prop.is_directional:
            continue
        value = block.get_state(prop.name)
        if value is None:
            continue
        if not isinstance(value, DirectionalValue):
            raise ValueError(f"{block.block_type}: {prop.name} must hold a DirectionalValue, got {value!r}")
        new_value = remap(prop, transform, value, config)
        if new_value is not None and new_value != value:
            logger.debug("%s: %s %s -> %s", block.block_type, prop.name, value.name, new_value.name)
            changed = changed.with_state(prop.name, new_value)
    return changed
