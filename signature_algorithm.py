from dataclasses import dataclass


class SignatureError(Exception):
    pass


class KeyGenerationError(SignatureError):
    pass


class SigningError(SignatureError):
    pass


# Distinct from a well-formed signature that simply does not verify
class MalformedSignatureError(SignatureError, ValueError):
    pass


class PrivateKey:
    pass


class PublicKey:
    pass


@dataclass(frozen=True)
class KeyPair:
    private_key: PrivateKey
    public_key: PublicKey


class SignatureAlgorithm:
    @property
    def signature_length(self) -> int:
        raise NotImplementedError

    def generate_key_pair(self) -> tuple[PrivateKey, PublicKey]:
        raise NotImplementedError

    def sign_message(self, message: bytes, private_key: PrivateKey) -> bytes:
        raise NotImplementedError

    def verify_signature(self, message: bytes, public_key: PublicKey, signature: bytes) -> bool:
        raise NotImplementedError
