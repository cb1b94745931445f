from hex_encoding import bytes_to_hex, hex_to_bytes

from .service import SignatureService, algorithm_from_config, generate_key_pair, sign, verify
from .session import SessionState, SessionStateError, SignatureSession, VerificationKind, VerificationOutcome

__all__ = [
    'SessionState',
    'SessionStateError',
    'SignatureService',
    'SignatureSession',
    'VerificationKind',
    'VerificationOutcome',
    'algorithm_from_config',
    'bytes_to_hex',
    'generate_key_pair',
    'hex_to_bytes',
    'sign',
    'verify',
]
