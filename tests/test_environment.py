import logging

import pytest

from chordsim.environment import SimEnvironment
from chordsim.errors import LookupOnEmptyTopologyError


def test_add_nodes_and_keys_are_numbered():
    env = SimEnvironment(m=16, seed=0)
    env.add_nodes(3)
    env.add_nodes(2)
    env.add_keys(4)
    assert list(env.nodes) == ['Node_0', 'Node_1', 'Node_2', 'Node_3', 'Node_4']
    assert list(env.protocol.key_indexes) == ['Key_0', 'Key_1', 'Key_2', 'Key_3']
    assert all(0 <= index < 2 ** 16 for index in env.protocol.key_indexes.values())


def test_build_places_every_key_once():
    env = SimEnvironment(m=16, seed=0)
    env.add_nodes(10)
    env.add_keys(200)
    assert not env.built
    env.build()
    assert env.built

    stored = {}
    for node in env.nodes.values():
        stored.update(node.keys)
    assert stored == env.protocol.key_indexes


def test_rebuild_moves_keys_to_new_owners():
    env = SimEnvironment(m=16, seed=0)
    env.add_nodes(5)
    env.add_keys(100)
    env.build()
    env.add_nodes(5)
    assert not env.built
    env.build()

    for name, index in env.protocol.key_indexes.items():
        owner = env.protocol.find_responsible_node(index)
        assert owner.keys[name] == index
    assert sum(len(node.keys) for node in env.nodes.values()) == 100


def test_lookup_defaults_to_first_node():
    env = SimEnvironment(m=16, seed=0)
    env.add_nodes(8)
    env.add_keys(20)
    env.build()
    for response in env.lookup_all_keys():
        assert response.route[0] == 'Node_0'


def test_random_lookups_are_seeded():
    def routes(seed):
        env = SimEnvironment(m=16, seed=seed)
        env.add_nodes(16)
        env.add_keys(50)
        env.build()
        return [response.route for response in env.random_lookups(25)]

    assert routes(11) == routes(11)
    assert len(routes(11)) == 25


def test_describe_logs_every_finger(caplog):
    env = SimEnvironment(m=4, seed=0)
    env.add_nodes(3)
    env.build()
    with caplog.at_level(logging.INFO, logger='chordsim.environment'):
        env.describe()
    fingers = [record for record in caplog.records if 'Successor:' in record.getMessage()]
    assert len(fingers) == 3 * 4


def test_lookups_require_a_fresh_build():
    env = SimEnvironment(m=16, seed=0)
    env.add_nodes(4)
    env.add_keys(10)
    with pytest.raises(LookupOnEmptyTopologyError):
        env.lookup(0)

    env.build()
    assert env.lookup(0).node_name in env.nodes

    env.add_keys(5)
    with pytest.raises(LookupOnEmptyTopologyError):
        env.lookup_all_keys()
    env.build()
    assert len(env.lookup_all_keys()) == 15

    env.add_nodes(2)
    with pytest.raises(LookupOnEmptyTopologyError):
        env.random_lookups(3)
