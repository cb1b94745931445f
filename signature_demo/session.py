"""Interactive sign / verify / tamper flow of the signature demo.

A key pair is generated once, a message is signed, and the signature can then
be verified as-is or against a tampered message or a tampered signature:

    NO_KEYS -> KEYS_READY -> SIGNED -> VERIFIED
                              ^  |        |
                              +--+--------+  (sign again)

Verification never discards the current signature, so any number of
verifications may follow a single signing.
"""

import enum
import logging
from dataclasses import dataclass

from hex_encoding import bytes_to_hex
from signature_algorithm import KeyPair

from .service import SignatureService

logger = logging.getLogger(__name__)


class SessionStateError(RuntimeError):
    pass


class SessionState(enum.Enum):
    NO_KEYS = 'no keys'
    KEYS_READY = 'keys ready'
    SIGNED = 'signed'
    VERIFIED = 'verified'


class VerificationKind(enum.Enum):
    ORIGINAL = 'original'
    TAMPERED_MESSAGE = 'tampered message'
    TAMPERED_SIGNATURE = 'tampered signature'


@dataclass(frozen=True)
class VerificationOutcome:
    kind: VerificationKind
    message: str
    signature: str
    valid: bool


_CAN_SIGN = frozenset({SessionState.KEYS_READY, SessionState.SIGNED, SessionState.VERIFIED})
_CAN_VERIFY = frozenset({SessionState.SIGNED, SessionState.VERIFIED})


class SignatureSession:
    service: SignatureService

    def __init__(self, service: SignatureService | None = None):
        self.service = service if service is not None else SignatureService()
        self._state = SessionState.NO_KEYS
        self._key_pair: KeyPair | None = None
        self._message: str | None = None
        self._signature: str | None = None
        self._outcome: VerificationOutcome | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def key_pair(self) -> KeyPair | None:
        return self._key_pair

    @property
    def message(self) -> str | None:
        return self._message

    @property
    def signature(self) -> str | None:
        """Current signature as lowercase hex."""
        return self._signature

    @property
    def outcome(self) -> VerificationOutcome | None:
        return self._outcome

    def _require(self, allowed: frozenset[SessionState], action: str) -> None:
        if self._state not in allowed:
            msg = f'Cannot {action} in state {self._state.value!r}'
            raise SessionStateError(msg)

    def generate_keys(self) -> KeyPair:
        self._require(frozenset({SessionState.NO_KEYS}), 'generate keys')
        self._key_pair = self.service.generate_key_pair()
        self._state = SessionState.KEYS_READY
        return self._key_pair

    def sign(self, message: str) -> str:
        self._require(_CAN_SIGN, 'sign')
        assert self._key_pair is not None  # noqa: S101

        signature = bytes_to_hex(self.service.sign(message, self._key_pair.private_key))

        # a new signature invalidates the previous verification outcome
        self._message = message
        self._signature = signature
        self._outcome = None
        self._state = SessionState.SIGNED
        return signature

    def _verify(self, kind: VerificationKind, message: str, signature: str) -> VerificationOutcome:
        self._require(_CAN_VERIFY, f'verify ({kind.value})')
        assert self._key_pair is not None  # noqa: S101

        valid = self.service.verify(message, signature, self._key_pair.public_key)
        self._outcome = VerificationOutcome(kind, message, signature, valid)
        self._state = SessionState.VERIFIED
        logger.debug('Verification (%s): %s', kind.value, valid)
        return self._outcome

    def verify(self) -> VerificationOutcome:
        return self._verify(VerificationKind.ORIGINAL, self._message or '', self._signature or '')

    def verify_tampered_message(self, tampered_message: str) -> VerificationOutcome:
        return self._verify(VerificationKind.TAMPERED_MESSAGE, tampered_message, self._signature or '')

    def verify_tampered_signature(self, tampered_signature: str) -> VerificationOutcome:
        return self._verify(VerificationKind.TAMPERED_SIGNATURE, self._message or '', tampered_signature)
