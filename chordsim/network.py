from typing import Dict, Iterable, Iterator

from chordsim.errors import ConfigurationError
from chordsim.node import Node


class Network:
    """
    In-memory topology: an insertion-ordered mapping from node name to Node.
    """

    def __init__(self, nodes: Iterable[Node] = ()):
        self._topology: Dict[str, Node] = {}
        for node in nodes:
            self.add_node(node)

    def add_node(self, node: Node) -> Node:
        if node.name in self._topology:
            raise ConfigurationError(f"Node name {node.name!r} is already part of the network")
        self._topology[node.name] = node
        return node

    def get_node(self, name: str) -> Node:
        return self._topology[name]

    def get_topology(self) -> Dict[str, Node]:
        return self._topology

    def __len__(self):
        return len(self._topology)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._topology.values())

    def __contains__(self, name):
        return name in self._topology
