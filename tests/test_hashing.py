from chordsim.hashing import ConsistentHashing


def test_hash_range_and_consistency():
    for m in (3, 8, 16, 32):
        ch = ConsistentHashing(m)
        for name in ('Node_0', 'Node_1', 'Key_42', ''):
            value = ch.hash(name)
            assert 0 <= value < 2 ** m
            assert ch.hash(name) == value
            assert ch(name) == value


def test_hash_keeps_leading_bits():
    name = 'Node_7'
    wide = ConsistentHashing(32).hash(name)
    narrow = ConsistentHashing(8).hash(name)
    assert wide >> 24 == narrow


def test_hash_full_digest_for_large_m():
    assert ConsistentHashing(160).hash('a') < 2 ** 160
    assert ConsistentHashing(200).hash('a') == ConsistentHashing(160).hash('a')


def test_hash_differs_between_names():
    ch = ConsistentHashing(32)
    assert ch.hash('Node_0') != ch.hash('Node_1')
