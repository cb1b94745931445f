import logging

from demo_config import DemoConfig
from ecdsa_custom import ECDSA
from ecdsa_library import EcdsaLibrary
from hex_encoding import InvalidHexError, bytes_to_hex, hex_to_bytes
from signature_algorithm import KeyPair, MalformedSignatureError, PrivateKey, PublicKey, SignatureAlgorithm

logger = logging.getLogger(__name__)


def algorithm_from_config(config: DemoConfig) -> SignatureAlgorithm:
    if config.backend == 'custom':
        return ECDSA(config.curve, deterministic=config.deterministic_signatures)
    return EcdsaLibrary(config.curve, deterministic=config.deterministic_signatures)


class SignatureService:
    """ECDSA with a SHA-256 pre-hash over UTF-8 encoded text messages.

    The service is stateless: every call depends only on its arguments and
    the configured algorithm, so one instance can be shared freely.
    """

    algorithm: SignatureAlgorithm

    def __init__(self, algorithm: SignatureAlgorithm | None = None):
        self.algorithm = algorithm if algorithm is not None else EcdsaLibrary()

    @classmethod
    def from_config(cls, config: DemoConfig) -> 'SignatureService':
        return cls(algorithm_from_config(config))

    def generate_key_pair(self) -> KeyPair:
        private_key, public_key = self.algorithm.generate_key_pair()
        return KeyPair(private_key, public_key)

    def sign(self, message: str, private_key: PrivateKey) -> bytes:
        signature = self.algorithm.sign_message(message.encode(), private_key)
        logger.debug('Signed a %d-character message', len(message))
        return signature

    def sign_hex(self, message: str, private_key: PrivateKey) -> str:
        return bytes_to_hex(self.sign(message, private_key))

    def decode_signature(self, signature: bytes | str) -> bytes:
        """Turn a signature (raw or hex text) into bytes of the scheme's fixed size.

        Raises MalformedSignatureError when the input cannot be a signature at
        all. A signature of the right size that fails verification is not
        malformed.
        """
        if isinstance(signature, str):
            try:
                signature = hex_to_bytes(signature)
            except InvalidHexError as e:
                msg = f'Signature is not valid hex: {e}'
                raise MalformedSignatureError(msg) from e

        expected = self.algorithm.signature_length
        if len(signature) != expected:
            msg = f'Expected a {expected}-byte signature, but got {len(signature)} bytes'
            raise MalformedSignatureError(msg)

        return signature

    def verify(self, message: str, signature: bytes | str, public_key: PublicKey) -> bool:
        raw = self.decode_signature(signature)
        valid = self.algorithm.verify_signature(message.encode(), public_key, raw)
        logger.debug('Signature verification result: %s', valid)
        return valid


_default_service = SignatureService()


def generate_key_pair() -> KeyPair:
    return _default_service.generate_key_pair()


def sign(message: str, private_key: PrivateKey) -> bytes:
    return _default_service.sign(message, private_key)


def verify(message: str, signature: bytes | str, public_key: PublicKey) -> bool:
    return _default_service.verify(message, signature, public_key)
