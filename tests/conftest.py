import pytest

from chordsim.network import Network
from chordsim.node import Node
from chordsim.protocol import ChordProtocol


def make_protocol(identifiers, m, keys=None, strict_collisions=False):
    """
    Build a protocol over nodes whose identifiers are given by `identifiers` ({name: id})
    instead of being hashed. Nodes are added in the order of the mapping.
    """
    protocol = ChordProtocol(m, strict_collisions=strict_collisions)
    protocol.set_hash_function(lambda name: identifiers[name])
    protocol.set_network(Network(Node(name) for name in identifiers))
    if keys is not None:
        protocol.set_keys(keys)
    return protocol


@pytest.fixture
def three_node_ring():
    """m = 3 ring with nodes at 1, 3 and 6, keys 0 and 7 on A, 2 on B, 5 on C."""
    protocol = make_protocol({'A': 1, 'B': 3, 'C': 6}, m=3, keys={'k0': 0, 'k2': 2, 'k5': 5, 'k7': 7})
    protocol.build_overlay_network()
    protocol.build_finger_table()
    protocol.assign_keys()
    return protocol


@pytest.fixture
def protocol_factory():
    return make_protocol
