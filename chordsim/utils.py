from chordsim.config import M
from chordsim.errors import ConfigurationError


def ring_size(m: int = M) -> int:
    """
    Return the number of identifiers on a ring of m bits, 2^m.
    """
    if m <= 0:
        raise ConfigurationError(f"Identifier length m must be positive, got {m}")
    return 2 ** m


def in_finger_interval(key: int, start: int, end: int) -> bool:
    """
    Return True if key lies in the half-open finger interval [start, end).

    An interval whose start equals its end covers the whole ring.
    """
    if start < end:
        return start <= key < end
    if start > end:
        # Wraps past 0
        return key >= start or key < end
    return True


def mod_add(a: int, b: int, m: int = M) -> int:
    """
    Return (a + b) mod 2^m.
    """
    return (a + b) % ring_size(m)
