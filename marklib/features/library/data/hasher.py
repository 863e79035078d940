import hashlib
from ..domain.interfaces import IHasher

BLOCK_SIZE = 65536


class SHA256Hasher(IHasher):
    def calculate_sha256(self, data: bytes) -> str:
        """
        Feeds the content in 64kb blocks so a large book never gets
        copied whole just to be hashed.
        """
        sha256_hash = hashlib.sha256()
        view = memoryview(data)
        for offset in range(0, len(view), BLOCK_SIZE):
            sha256_hash.update(view[offset:offset + BLOCK_SIZE])
        return sha256_hash.hexdigest()
