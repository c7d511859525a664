# block.py

from types import MappingProxyType
from typing import Any, Mapping, Optional


class BlockState:
    """
    An immutable block: its type id plus a mapping of property name to value.

    Attributes:
        block_type (str): block kind identifier, e.g. "minecraft:furnace".
        states (Mapping[str, Any]): read-only view of the property values.
    """
    __slots__ = ("_block_type", "_states")

    def __init__(self, block_type: str, states: Optional[Mapping[str, Any]] = None):
        if not block_type:
            raise ValueError("BlockState needs a block type")
        self._block_type = block_type
        self._states = MappingProxyType(dict(states or {}))

    @property
    def block_type(self) -> str:
        return self._block_type

    @property
    def states(self) -> Mapping[str, Any]:
        return self._states

    def get_state(self, name: str, default: Any = None) -> Any:
        return self._states.get(name, default)

    def with_state(self, name: str, value: Any) -> "BlockState":
        """
        Return a copy of this block with one property replaced.

        Args:
            name: property name.
            value: the new value.

        Returns:
            A new BlockState; this one is left untouched.
        """
        states = dict(self._states)
        states[name] = value
        return self.__class__(self._block_type, states)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlockState):
            return NotImplemented
        return self._block_type == other._block_type and dict(self._states) == dict(other._states)

    def __hash__(self) -> int:
        return hash((self._block_type, frozenset(self._states.items())))

    def __repr__(self) -> str:
        if not self._states:
            return f"BlockState({self._block_type!r})"
        return f"BlockState({self._block_type!r}, {dict(self._states)!r})"

    def __reduce__(self):
        return (self.__class__, (self._block_type, dict(self._states)))


AIR = BlockState("minecraft:air")
