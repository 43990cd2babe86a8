"""
Hex codec for scalars and curve points.

Scalars travel as fixed-width, zero-padded, lowercase big-endian hex with no
prefix. Points travel in compressed SEC1 form. A leading 0x is tolerated on
input and never produced on output; ensure_0x is the one explicit place the
prefix gets added, for libraries that insist on it.
"""

import string

from ecdsa import SECP256k1, VerifyingKey, numbertheory
from ecdsa.ecdsa import InvalidPointError
from ecdsa.errors import MalformedPointError

from .curve import O, SCALAR_BYTES, Point, compressed_hex, order, valid
from .errors import InvalidPoint, MalformedHex, NonCanonicalScalar, ScalarTooLong


def strip_0x(s: str) -> str:
    return s[2:] if s[:2] in ("0x", "0X") else s


def ensure_0x(s: str) -> str:
    return s if s.startswith("0x") else f"0x{s}"


def pad_hex(s: str) -> str:
    return f"0{s}" if len(s) % 2 else s


def truncate_hex(s: str) -> str:
    """Shorten long hex for log lines. Only ever pass public values."""
    if len(s) <= 20:
        return s
    return f"{s[:10]}...{s[-10:]}"


def _hex_bytes(hex_str) -> bytes:
    if not isinstance(hex_str, str):
        raise MalformedHex(f"Expected a hex string, got {type(hex_str).__name__}")
    body = strip_0x(hex_str)
    if not body:
        raise MalformedHex("Empty hex string")
    # bytes.fromhex skips whitespace, so check the alphabet first
    if not all(c in string.hexdigits for c in body):
        raise MalformedHex(f"Not valid hexadecimal: {hex_str!r}")
    return bytes.fromhex(pad_hex(body))


def decode_scalar(hex_str: str) -> int:
    raw = _hex_bytes(hex_str)
    if len(raw) > SCALAR_BYTES:
        raise ScalarTooLong(
            f"Scalar is {len(raw)} bytes, field width is {SCALAR_BYTES}",
            expected=SCALAR_BYTES, actual=len(raw))
    value = int.from_bytes(raw, byteorder="big")
    if value >= order:
        raise NonCanonicalScalar("Scalar is not reduced modulo the group order")
    return value


def encode_scalar(value: int) -> str:
    if not isinstance(value, int) or not 0 <= value < order:
        raise NonCanonicalScalar(f"Not a field element: {value!r}")
    return value.to_bytes(SCALAR_BYTES, byteorder="big").hex()


def decode_point(hex_str: str) -> Point:
    try:
        raw = _hex_bytes(hex_str)
    except MalformedHex as e:
        raise InvalidPoint(str(e)) from e
    if raw == b"\x00":
        return O
    try:
        vk = VerifyingKey.from_string(
            raw, curve=SECP256k1, valid_encodings=("compressed", "uncompressed"))
    except (MalformedPointError, InvalidPointError, numbertheory.Error, ValueError) as e:
        raise InvalidPoint(f"Not a secp256k1 point: {truncate_hex(strip_0x(hex_str))}") from e
    point = Point(int(vk.pubkey.point.x()), int(vk.pubkey.point.y()))
    if not valid(point):
        raise InvalidPoint("Decoded point is not on the curve")
    return point


def encode_point(point: Point) -> str:
    if not valid(point):
        raise InvalidPoint(f"Not a secp256k1 point: {point!r}")
    return compressed_hex(point)
