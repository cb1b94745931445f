import re

_HEX = re.compile(r'[0-9a-fA-F]*')
_BITS = re.compile(r'[01]*')


class InvalidHexError(ValueError):
    pass


class InvalidBitsError(ValueError):
    pass


def bytes_to_hex(data: bytes) -> str:
    # two lowercase digits per byte, no separators
    return ''.join(f'{b:02x}' for b in data)


def hex_to_bytes(text: str) -> bytes:
    if len(text) % 2:
        msg = f'Hex string must have an even length, but got: {len(text)}'
        raise InvalidHexError(msg)

    # bytes.fromhex() skips whitespace, which is not a valid encoding here
    if not _HEX.fullmatch(text):
        msg = f'Hex string contains non-hex characters: {text!r}'
        raise InvalidHexError(msg)

    return bytes(int(text[i : i + 2], 16) for i in range(0, len(text), 2))


def hex_to_bits(text: str) -> str:
    """Expand every hex digit into 4 bits, most significant bit first."""
    if not _HEX.fullmatch(text):
        msg = f'Hex string contains non-hex characters: {text!r}'
        raise InvalidHexError(msg)

    return ''.join(f'{int(h, 16):04b}' for h in text)


def bytes_to_bits(data: bytes) -> str:
    return ''.join(f'{b:08b}' for b in data)


def bits_to_bytes(bits: str) -> bytes:
    if len(bits) % 8 or not _BITS.fullmatch(bits):
        msg = f'Expected a string of 0/1 with a length divisible by 8, but got: {bits!r}'
        raise InvalidBitsError(msg)

    return bytes(int(bits[i : i + 8], 2) for i in range(0, len(bits), 8))
