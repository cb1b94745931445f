import hashlib
import logging
from typing import override

logger = logging.getLogger(__name__)


class DigestError(RuntimeError):
    pass


class DigestAlgorithm:
    digest_size: int

    def digest(self, data: bytes) -> bytes:
        raise NotImplementedError


class HashlibDigest(DigestAlgorithm):
    name: str

    def __init__(self, name: str = 'sha256', digest_size: int = 32):
        self.name = name
        self.digest_size = digest_size

    @override
    def digest(self, data: bytes) -> bytes:
        try:
            h = hashlib.new(self.name, data)
        except (ValueError, TypeError) as e:
            msg = f'Digest {self.name!r} is not available: {e}'
            raise DigestError(msg) from e

        result = h.digest()
        if len(result) != self.digest_size:
            msg = f'Expected a {self.digest_size}-byte digest from {self.name!r}, but got {len(result)} bytes'
            raise DigestError(msg)

        logger.debug('Digested %d bytes with %s', len(data), self.name)
        return result
