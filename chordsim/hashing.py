import hashlib

from chordsim.config import M
from chordsim.utils import ring_size

# SHA-1 digests are 160 bits long
DIGEST_BITS = 160


class ConsistentHashing:
    """
    Maps names onto the identifier ring [0, 2^m) using the leading m bits of their SHA-1 digest.
    """

    def __init__(self, m: int = M):
        self.m = m
        self.max_id = ring_size(m)

    def hash(self, name: str) -> int:
        digest = hashlib.sha1(name.encode('utf-8')).digest()
        value = int.from_bytes(digest, 'big')
        if self.m >= DIGEST_BITS:
            return value
        return value >> (DIGEST_BITS - self.m)

    def __call__(self, name: str) -> int:
        return self.hash(name)
