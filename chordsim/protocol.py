from bisect import bisect_left
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from chordsim.config import M
from chordsim.errors import (
    ConfigurationError,
    HashCollisionError,
    LookupOnEmptyTopologyError,
    RoutingAbort,
)
from chordsim.events import Hop, RouterState
from chordsim.hashing import ConsistentHashing
from chordsim.logging_config import get_logger
from chordsim.network import Network
from chordsim.node import FingerTableEntry, Node
from chordsim.utils import in_finger_interval, mod_add, ring_size

logger = get_logger(__name__)


@dataclass(frozen=True)
class LookUpResponse:
    """
    Result of a single lookup: the names of the nodes visited, in order, and
    the node deemed responsible for the key.
    """
    route: Tuple[str, ...]
    node_id: int
    node_name: str
    hops: Tuple[Hop, ...] = ()
    # True when the answer came from the authoritative ring scan instead of the fingers
    fallback: bool = False

    @property
    def hop_count(self) -> int:
        return len(self.hops)


class ChordProtocol:
    """
    Static Chord: places the nodes of a network on the identifier ring, builds
    their finger tables and routes lookups over them.

    The three phases must run in order:
      1) build_overlay_network()  identifiers and ring successors
      2) build_finger_table()     m fingers per node
      3) lookup(key_index)        any number of times
    """

    def __init__(self, m: int = M, strict_collisions: bool = False):
        """
        m:                  number of bits in the identifier space
        strict_collisions:  raise HashCollisionError instead of breaking ties on node name
        """
        self.max_id = ring_size(m)
        self.m = m
        self.strict_collisions = strict_collisions
        self.network: Optional[Network] = None

        # key name -> key index
        self.key_indexes: Dict[str, int] = {}

        self.set_hash_function()

    def set_hash_function(self, hash_function: Optional[Callable[[str], int]] = None):
        """
        Set the function mapping names to identifiers. Defaults to SHA-1 consistent hashing over m bits.
        """
        self.ch = hash_function if hash_function is not None else ConsistentHashing(self.m)

    def set_network(self, network: Network):
        self.network = network

    def get_network(self) -> Optional[Network]:
        return self.network

    def set_keys(self, key_indexes: Dict[str, int]):
        """
        Set the key indexes that assign_keys() distributes and lookups can be tested against.
        """
        for index in key_indexes.values():
            self._check_key_index(index)
        self.key_indexes = dict(key_indexes)

    def hash_keys(self, key_names: Iterable[str]) -> Dict[str, int]:
        """
        Return {key name: key index} using the protocol's hash function.
        """
        return {name: self.ch(name) for name in key_names}

    # === Ring Builder ===

    def build_overlay_network(self):
        """
        Assign every node its identifier and link it to the next node on the ring.

        Nodes are ordered by (identifier, name), so nodes whose names hash to the
        same identifier are ordered lexically by name.
        """
        topology = self._topology()

        identifiers = {}
        for name in topology:
            node_id = self.ch(name)
            if not 0 <= node_id < self.max_id:
                raise ConfigurationError(
                    f"Hash of {name!r} is {node_id}, outside of the identifier space [0, {self.max_id})")
            identifiers[name] = node_id

        for node_id, names in self._collisions(identifiers).items():
            if self.strict_collisions:
                raise HashCollisionError(node_id, names)
            logger.warning(f"Nodes {', '.join(names)} share identifier {node_id}; ordering them by name")

        for name, node in topology.items():
            node.node_id = identifiers[name]

        ring = self._sorted_ring(topology.values())
        for i, node in enumerate(ring):
            node.successor = ring[(i + 1) % len(ring)]

        logger.info(f"Built ring of {len(ring)} nodes on a {self.m}-bit identifier space")

    @staticmethod
    def _collisions(identifiers: Dict[str, int]) -> Dict[int, List[str]]:
        by_id = defaultdict(list)
        for name, node_id in identifiers.items():
            by_id[node_id].append(name)
        return {node_id: sorted(names) for node_id, names in by_id.items() if len(names) > 1}

    # === Finger Table Builder ===

    def build_finger_table(self):
        """
        Build the finger table of every node. The ith entry (i = 1..m) covers
        [(n + 2^(i-1)) mod 2^m, (n + 2^i) mod 2^m) and points to the first node
        on the ring at or after the start of that interval.
        """
        topology = self._topology()
        unplaced = [name for name, node in topology.items() if node.node_id is None]
        if unplaced:
            raise ConfigurationError(
                f"Nodes {', '.join(unplaced)} have no identifier; build the overlay network first")

        ring = self._sorted_ring(topology.values())
        ring_ids = [node.node_id for node in ring]

        for node in topology.values():
            finger_table = []
            for i in range(1, self.m + 1):
                start = mod_add(node.node_id, 2 ** (i - 1), self.m)
                end = mod_add(node.node_id, 2 ** i, self.m)
                successor = self._find_successor(ring, ring_ids, start)
                finger_table.append(FingerTableEntry(start, end, successor))
            node.finger_table = finger_table

        logger.info(f"Built finger tables with {self.m} entries for {len(topology)} nodes")

    @staticmethod
    def _sorted_ring(nodes: Iterable[Node]) -> List[Node]:
        return sorted(nodes, key=lambda node: (node.node_id, node.name))

    @staticmethod
    def _find_successor(ring: List[Node], ring_ids: List[int], target: int) -> Node:
        """
        First node of the sorted ring whose identifier is >= target, wrapping to the first node.
        """
        idx = bisect_left(ring_ids, target)
        if idx == len(ring):
            idx = 0
        return ring[idx]

    def find_responsible_node(self, key_index: int) -> Node:
        """
        Authoritative owner of key_index: direct scan of all nodes in identifier order.
        """
        topology = self._topology()
        if any(node.node_id is None for node in topology.values()):
            raise LookupOnEmptyTopologyError("Nodes have no identifiers; build the overlay network first")

        ring = self._sorted_ring(topology.values())
        return self._find_successor(ring, [node.node_id for node in ring], key_index)

    # === Key placement ===

    def assign_keys(self):
        """
        Store every key set through set_keys() on the node responsible for it.
        """
        topology = self._topology()
        if any(node.node_id is None for node in topology.values()):
            raise ConfigurationError("Keys can only be assigned once the overlay network is built")

        ring = self._sorted_ring(topology.values())
        ring_ids = [node.node_id for node in ring]
        for node in ring:
            node.clear_keys()
        for name, index in self.key_indexes.items():
            self._find_successor(ring, ring_ids, index).add_key(name, index)

        logger.info(f"Assigned {len(self.key_indexes)} keys to {len(ring)} nodes")

    # === Lookup Router ===

    def lookup(self, key_index: int, start: Optional[str] = None) -> LookUpResponse:
        """
        Route a lookup for key_index through the finger tables, beginning at the
        node named `start` (the first node of the topology by default).

        If routing does not converge, the responsible node is resolved by a
        direct scan of the ring, so a response is always returned.
        """
        topology = self._built_topology()
        self._check_key_index(key_index)
        start_node = topology[start] if start is not None else next(iter(topology.values()))

        route: List[str] = []
        hops: List[Hop] = []
        try:
            node = self._walk(key_index, start_node, route, hops)
            fallback = False
        except RoutingAbort as e:
            logger.warning(f"Lookup for key {key_index} from {start_node.name} fell back to a ring scan: {e}")
            node = self.find_responsible_node(key_index)
            if node.name not in route:
                route.append(node.name)
            fallback = True

        return LookUpResponse(
            route=tuple(route),
            node_id=node.node_id,
            node_name=node.name,
            hops=tuple(hops),
            fallback=fallback,
        )

    def _walk(self, key_index: int, node: Node, route: List[str], hops: List[Hop]) -> Node:
        visited = set()
        state = RouterState.AT_NODE
        while state is RouterState.AT_NODE:
            if node.name in visited:
                raise RoutingAbort(f"revisited {node.name} after {len(hops)} hops")
            visited.add(node.name)
            route.append(node.name)

            if node.has_key(key_index):
                state = RouterState.FOUND
                continue

            next_node, finger = self._next_hop(node, key_index)
            if next_node is None:
                state = RouterState.ABORTED
                continue

            logger.debug(f"Key {key_index}: {node.name} -> {next_node.name} "
                         f"via {'successor' if finger is None else f'finger {finger}'}")
            hops.append(Hop(node.name, next_node.name, finger))
            node = next_node

        if state is RouterState.ABORTED:
            raise RoutingAbort(f"{node.name} has no next hop")
        return node

    @staticmethod
    def _next_hop(node: Node, key_index: int) -> Tuple[Optional[Node], Optional[int]]:
        """
        Largest finger whose interval contains the key, else the ring successor.
        Returns the next node and the 1-based index of the finger used.
        """
        for i in range(len(node.finger_table), 0, -1):
            entry = node.finger_table[i - 1]
            if in_finger_interval(key_index, entry.start, entry.end):
                return entry.successor, i
        return node.successor, None

    # === Helpers ===

    def _topology(self) -> Dict[str, Node]:
        if self.network is None:
            raise ConfigurationError("No network set; call set_network() first")
        topology = self.network.get_topology()
        if not topology:
            raise ConfigurationError("The network has no nodes")
        return topology

    def _built_topology(self) -> Dict[str, Node]:
        if self.network is None or not self.network.get_topology():
            raise LookupOnEmptyTopologyError("Lookup on an empty topology")
        topology = self.network.get_topology()
        for node in topology.values():
            if node.node_id is None or node.successor is None or not node.finger_table:
                raise LookupOnEmptyTopologyError(
                    f"{node.name} has no ring position or finger table; build the ring first")
        return topology

    def _check_key_index(self, key_index: int):
        if not 0 <= key_index < self.max_id:
            raise ValueError(f"Key index {key_index} is outside of the identifier space [0, {self.max_id})")
