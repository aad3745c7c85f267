"""Pure functions for stable content fingerprints.

The measurement arena keys cached text widths by element id and a fingerprint
of everything the measurement depends on (text, font size, font). A
cryptographic digest keeps the fingerprint stable across processes, unlike the
salted built-in ``hash()``.
"""

import hashlib
from typing import Any, Union


def compute_string_hash(
    data: Union[str, bytes],
    hash_algorithm: str = 'sha256'
) -> str:
    """Compute hash of a string or bytes.

    Args:
        data: String or bytes to hash
        hash_algorithm: Hash algorithm name

    Returns:
        Hexadecimal hash digest string

    Raises:
        ValueError: If hash algorithm is not supported

    Examples:
        >>> compute_string_hash("hello world")
        'b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9'
        >>> compute_string_hash("test", "md5")
        '098f6bcd4621d373cade4e832627b4f6'
    """
    try:
        hash_obj = hashlib.new(hash_algorithm)
    except ValueError as e:
        raise ValueError(
            f"Unsupported hash algorithm '{hash_algorithm}': {str(e)}"
        ) from e

    if isinstance(data, str):
        data = data.encode('utf-8')

    hash_obj.update(data)
    return hash_obj.hexdigest()


def fingerprint(*parts: Any) -> str:
    """Short, order-sensitive fingerprint of arbitrary values.

    Each part is rendered with ``repr``, joined with a unit separator and
    hashed with blake2b.

    Examples:
        >>> fingerprint("Hello", 60) == fingerprint("Hello", 60)
        True
        >>> fingerprint("Hello", 60) == fingerprint("Hello", 61)
        False
    """
    joined = "\x1f".join(repr(p) for p in parts)
    return compute_string_hash(joined, 'blake2b')[:32]
