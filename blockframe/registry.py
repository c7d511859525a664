# registry.py

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from blockframe.block import BlockState
from blockframe.direction import DirectionalValue, CARDINALS, HORIZONTALS, COMPASS_16

logger = logging.getLogger(__name__)


class PropertyKind(Enum):
    DIRECTIONAL = 0
    OTHER = 1


@dataclass(frozen=True)
class Property:
    """
    Describes one block property and its finite, ordered set of values.

    The `kind` tag says how the property may be treated; only
    PropertyKind.DIRECTIONAL properties are ever remapped.
    """

    name: str
    values: Tuple[Any, ...]
    kind: PropertyKind = PropertyKind.OTHER

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def is_directional(self) -> bool:
        return self.kind is PropertyKind.DIRECTIONAL


@dataclass(frozen=True)
class DirectionalProperty(Property):
    """A property whose values are DirectionalValues."""

    kind: PropertyKind = field(default=PropertyKind.DIRECTIONAL, init=False)

    def __post_init__(self):
        super().__post_init__()
        for v in self.values:
            if not isinstance(v, DirectionalValue):
                raise ValueError(f"{self.name}: expected DirectionalValue, got {v!r}")


FACING = DirectionalProperty("facing", CARDINALS)
HORIZONTAL_FACING = DirectionalProperty("facing", HORIZONTALS)
ROTATION = DirectionalProperty("rotation", COMPASS_16)
AXIS = Property("axis", ("x", "y", "z"))


class BlockRegistry:
    """
    Lookup service from a block kind to its property descriptors.

    A block kind that was never registered has no property information;
    `get_states` returns None for it.
    """

    def __init__(self):
        self._states: Dict[str, Mapping[str, Property]] = {}

    def register(self, block_type: str, properties: Iterable[Property]) -> None:
        states = {}
        for prop in properties:
            if prop.name in states:
                raise ValueError(f"{block_type}: duplicate property {prop.name!r}")
            states[prop.name] = prop
        self._states[block_type] = MappingProxyType(states)

    def get_states(self, block: Union[str, BlockState]) -> Optional[Mapping[str, Property]]:
        block_type = block.block_type if isinstance(block, BlockState) else block
        states = self._states.get(block_type)
        if states is None:
            logger.debug("no property information for %s", block_type)
        return states

    def __contains__(self, block_type: str) -> bool:
        return block_type in self._states

    def __len__(self) -> int:
        return len(self._states)
