import random
from typing import List, Optional

from chordsim.config import M, NODE_NAME_PREFIX, KEY_NAME_PREFIX
from chordsim.errors import LookupOnEmptyTopologyError
from chordsim.logging_config import get_logger
from chordsim.network import Network
from chordsim.node import Node
from chordsim.protocol import ChordProtocol, LookUpResponse

logger = get_logger(__name__)


class SimEnvironment:
    """
    Driver around ChordProtocol that provides:
      - Deterministic seeding
      - Creation of named nodes and keys
      - The build phases (ring, finger tables, key placement) in order
      - Single, per-key and random lookups
    """
    def __init__(self, m: int = M, seed=None, strict_collisions: bool = False):
        self.seed = seed
        self.rng = random.Random(seed)
        self.network = Network()
        self.protocol = ChordProtocol(m, strict_collisions=strict_collisions)
        self.protocol.set_network(self.network)
        self.built = False

    @property
    def m(self) -> int:
        return self.protocol.m

    @property
    def nodes(self):
        return self.network.get_topology()

    def add_nodes(self, count: int, prefix: str = NODE_NAME_PREFIX) -> List[Node]:
        """
        Add `count` nodes named <prefix><i>, continuing the numbering of existing nodes.
        """
        offset = len(self.network)
        added = [self.network.add_node(Node(f"{prefix}{offset + i}")) for i in range(count)]
        self.built = False
        return added

    def add_keys(self, count: int, prefix: str = KEY_NAME_PREFIX):
        """
        Add `count` keys named <prefix><i> and hash them onto the ring.
        """
        offset = len(self.protocol.key_indexes)
        names = [f"{prefix}{offset + i}" for i in range(count)]
        key_indexes = dict(self.protocol.key_indexes)
        key_indexes.update(self.protocol.hash_keys(names))
        self.protocol.set_keys(key_indexes)
        self.built = False

    def build(self):
        """
        Run the ring, finger table and key placement phases.
        """
        self.protocol.build_overlay_network()
        self.protocol.build_finger_table()
        self.protocol.assign_keys()
        self.built = True

    def lookup(self, key_index: int, start: Optional[str] = None) -> LookUpResponse:
        self._check_built()
        return self.protocol.lookup(key_index, start)

    def lookup_all_keys(self, start: Optional[str] = None) -> List[LookUpResponse]:
        """
        Look up every key set on the protocol, in insertion order.
        """
        self._check_built()
        return [self.protocol.lookup(index, start) for index in self.protocol.key_indexes.values()]

    def random_lookups(self, count: int) -> List[LookUpResponse]:
        """
        Look up `count` random stored keys, each from a random start node.
        """
        self._check_built()
        names = list(self.nodes)
        indexes = list(self.protocol.key_indexes.values())
        responses = []
        for _ in range(count):
            key_index = self.rng.choice(indexes)
            start = self.rng.choice(names)
            responses.append(self.protocol.lookup(key_index, start))
        return responses

    def _check_built(self):
        if not self.built:
            raise LookupOnEmptyTopologyError("Nodes or keys changed since the last build; call build() first")

    def describe(self):
        """
        Log every node's position, successor, finger table and stored keys.
        """
        for node in sorted(self.nodes.values(), key=lambda n: (n.node_id, n.name)):
            logger.info(f"{node.name} (id {node.node_id}) -> successor {node.successor.name}, "
                        f"{len(node.key_indexes)} keys")
            for entry in node.finger_table:
                logger.info(f"    {entry}")
