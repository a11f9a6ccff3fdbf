"""
The `fockstate.hashing` module includes the stable 64-bit string hash used to hash Fock states.
"""

from hashlib import blake2b


def hash_function(s: str) -> int:
    """Compute a 64-bit hash of a string that is stable across processes.

    Unlike the builtin `hash`, the result does not depend on `PYTHONHASHSEED`.

    Args:
        s: string to hash

    Returns:
        Unsigned 64-bit integer
    """
    return int.from_bytes(blake2b(s.encode("utf-8"), digest_size=8).digest(), "little")
