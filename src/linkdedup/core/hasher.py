"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements the content digest of a file using a pluggable hash algorithm.

The digest is "<content length>_<hex hash>". The length prefix guarantees that
files of different size never compare equal, whatever the algorithm.
"""

import logging
import xxhash
from linkdedup.core.models import File
from linkdedup.core.errors import UnreadableFileError
from linkdedup.core.interfaces import Hasher, HashAlgorithm

logger = logging.getLogger(__name__)


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    @staticmethod
    def hash(data: bytes) -> bytes:
        return xxhash.xxh64(data).digest()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Reads the whole file; there is no partial or cached hashing.
    """

    def __init__(self, algorithm: HashAlgorithm = None):
        self.algorithm = algorithm or XXHashAlgorithmImpl()

    def compute_digest(self, file: File) -> str:
        """
        Computes the digest of the file's full content.

        Raises:
            UnreadableFileError: If the file cannot be opened or read
        """
        try:
            with open(file.path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise UnreadableFileError(file.path, e) from e

        digest = f"{len(data)}_{self.algorithm.hash(data).hex()}"
        logger.debug(f"Digest {digest} for {file.path}")
        return digest
