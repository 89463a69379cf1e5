from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


class RouterState(Enum):
    AT_NODE = auto()
    FOUND = auto()
    ABORTED = auto()


@dataclass(frozen=True)
class Hop:
    """
    One transition of the lookup router from `src` to `dst`.

    `finger` is the 1-based index of the finger table entry that was followed,
    or None when the router fell back to the ring successor.
    """
    src: str
    dst: str
    finger: Optional[int] = None

    @property
    def via_successor(self) -> bool:
        return self.finger is None
