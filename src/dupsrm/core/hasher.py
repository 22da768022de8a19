"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file hashing using pluggable hash algorithms.

Each algorithm is a small strategy object producing incremental hash states.
HasherImpl streams a file through the selected strategy in fixed-size chunks and
returns the lowercase hex digest. Read errors are raised as HashError, never
swallowed: a missing digest would let a real duplicate escape detection.
"""

import hashlib
import logging
from typing import Dict

import xxhash
from Crypto.Hash import RIPEMD160

from dupsrm.core.errors import HashError
from dupsrm.core.interfaces import Hasher, HashAlgorithm, HashState
from dupsrm.core.models import HashAlgorithmName

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


# Use the same way to implement and use any other hashing algorithm
class HashlibAlgorithmImpl(HashAlgorithm):
    """Cryptographic and legacy digests from the standard library, created via hashlib.new()."""

    def __init__(self, name: str, **params):
        self.name = name
        self._params = params

    def new(self) -> HashState:
        return hashlib.new(self.name, **self._params)


class XXHashAlgorithmImpl(HashAlgorithm):
    """Non-cryptographic xxHash checksums, looked up by constructor name in the xxhash module."""

    def __init__(self, name: str):
        self.name = name
        self._factory = getattr(xxhash, name)

    def new(self) -> HashState:
        return self._factory()


class PyCryptodomeAlgorithmImpl(HashAlgorithm):
    """Digests missing from hashlib on modern OpenSSL builds, taken from a pycryptodome hash module."""

    def __init__(self, name: str, module):
        self.name = name
        self._module = module

    def new(self) -> HashState:
        return self._module.new()


_ALGORITHMS: Dict[HashAlgorithmName, HashAlgorithm] = {
    HashAlgorithmName.SHA2_256: HashlibAlgorithmImpl("sha256"),
    HashAlgorithmName.SHA3_256: HashlibAlgorithmImpl("sha3_256"),
    HashAlgorithmName.BLAKE2B_256: HashlibAlgorithmImpl("blake2b", digest_size=32),
    HashAlgorithmName.RIPEMD_160: PyCryptodomeAlgorithmImpl("ripemd160", RIPEMD160),
    HashAlgorithmName.SHA1: HashlibAlgorithmImpl("sha1"),
    HashAlgorithmName.MD5: HashlibAlgorithmImpl("md5"),
    HashAlgorithmName.XXH64: XXHashAlgorithmImpl("xxh64"),
    HashAlgorithmName.XXH3_128: XXHashAlgorithmImpl("xxh3_128"),
}


def get_algorithm(name: HashAlgorithmName) -> HashAlgorithm:
    """Returns the strategy implementing the given algorithm."""
    return _ALGORITHMS[name]


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Reads each file sequentially, so memory use does not depend on file size.
    """

    def __init__(self, algorithm: HashAlgorithm, chunk_size: int = CHUNK_SIZE):
        self.algorithm = algorithm
        self.chunk_size = chunk_size

    @classmethod
    def for_name(cls, name: HashAlgorithmName) -> "HasherImpl":
        return cls(get_algorithm(name))

    def compute_digest(self, path: str) -> str:
        """Computes the hex digest of the full content of a file."""
        state = self.algorithm.new()
        try:
            with open(path, 'rb') as f:
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    state.update(chunk)
        except OSError as e:
            raise HashError(path, e.strerror or str(e)) from e
        digest = state.hexdigest()
        logger.debug(f"{self.algorithm.name} {digest} {path}")
        return digest
