from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional


@dataclass
class FingerTableEntry:
    """
    One row of a finger table: the half-open interval [start, end) and the
    first node on the ring responsible for it.
    """
    start: int
    end: int
    successor: 'Node'

    def __str__(self):
        return f"[Start: {self.start}, Interval: ({self.start}, {self.end}), Successor: {self.successor.name}]"


class Node:
    """
    Chord node holding its ring identifier, successor pointer, finger table
    and the keys it is responsible for.
    """

    def __init__(self, name: str):
        self.name = name

        # Assigned by ChordProtocol.build_overlay_network
        self.node_id: Optional[int] = None
        self.successor: Optional['Node'] = None

        # Assigned by ChordProtocol.build_finger_table
        self.finger_table: List[FingerTableEntry] = []

        # key name -> key index
        self._data: Dict[str, int] = {}

    def add_key(self, key_name: str, key_index: int):
        self._data[key_name] = key_index

    def clear_keys(self):
        self._data.clear()

    @property
    def keys(self) -> Dict[str, int]:
        return dict(self._data)

    @property
    def key_indexes(self) -> FrozenSet[int]:
        return frozenset(self._data.values())

    def has_key(self, key_index: int) -> bool:
        return key_index in self._data.values()

    def __repr__(self):
        successor = self.successor.name if self.successor is not None else None
        return f"Node(name={self.name!r}, node_id={self.node_id}, successor={successor!r})"
