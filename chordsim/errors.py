"""
Exceptions raised while building or querying the ring.
"""


class ChordError(Exception):
    """Base class for every error raised by chordsim."""


class ConfigurationError(ChordError):
    """Identifier space, network or topology is not usable for building the ring."""


class HashCollisionError(ChordError):
    """Two distinct node names hash to the same identifier."""

    def __init__(self, node_id, names):
        self.node_id = node_id
        self.names = tuple(names)
        super().__init__(f"Identifier {node_id} is shared by nodes {', '.join(self.names)}")


class RoutingAbort(ChordError):
    """Finger-guided routing did not converge. Handled inside ChordProtocol.lookup."""


class LookupOnEmptyTopologyError(ChordError):
    """A lookup was issued before the ring and finger tables were built."""
