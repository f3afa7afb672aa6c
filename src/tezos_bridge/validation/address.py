"""Tezos address encoding — Base58Check with Tezos prefixes.

Supported address kinds:
- ``tz1`` / ``tz2`` / ``tz3`` / ``tz4`` implicit accounts (Ed25519,
  secp256k1, P-256, BLS public key hashes)
- ``KT1`` originated contracts

Each is a 3-byte prefix followed by a 20-byte hash, Base58Check encoded
with a 4-byte SHA256d checksum (36 characters).
"""

from __future__ import annotations

import hashlib

_B58_ALPHABET = b"123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

_HASH_SIZE = 20

PREFIXES: dict[str, bytes] = {
    "tz1": bytes([6, 161, 159]),
    "tz2": bytes([6, 161, 161]),
    "tz3": bytes([6, 161, 164]),
    "tz4": bytes([6, 161, 166]),
    "KT1": bytes([2, 90, 121]),
}


def _checksum(payload: bytes) -> bytes:
    """First four bytes of SHA256(SHA256(payload))."""
    return hashlib.sha256(hashlib.sha256(payload).digest()).digest()[:4]


def base58_encode(payload: bytes) -> str:
    """Encode raw bytes to Base58 (no checksum)."""
    n = int.from_bytes(payload, "big")
    digits = bytearray()
    while n:
        n, remainder = divmod(n, 58)
        digits.append(_B58_ALPHABET[remainder])
    zeros = len(payload) - len(payload.lstrip(b"\x00"))
    return "1" * zeros + digits[::-1].decode("ascii")


def base58_decode(s: str) -> bytes:
    """Decode Base58 string to raw bytes (no checksum).

    Raises:
        ValueError: On characters outside the Base58 alphabet.
    """
    n = 0
    for char in s:
        index = _B58_ALPHABET.find(char.encode("utf-8"))
        if index < 0:
            msg = f"Invalid Base58 character: {char!r}"
            raise ValueError(msg)
        n = n * 58 + index
    body = n.to_bytes((n.bit_length() + 7) // 8, "big")
    # each leading "1" stands for one zero byte
    zeros = len(s) - len(s.lstrip("1"))
    return b"\x00" * zeros + body


def base58check_encode(payload: bytes) -> str:
    """Encode bytes with a 4-byte SHA256d checksum (Base58Check)."""
    return base58_encode(payload + _checksum(payload))


def base58check_decode(s: str) -> bytes:
    """Decode a Base58Check string, verifying the checksum.

    Raises:
        ValueError: If the checksum is invalid.
    """
    raw = base58_decode(s)
    if len(raw) < 4:
        msg = "Base58Check string too short"
        raise ValueError(msg)
    payload, checksum = raw[:-4], raw[-4:]
    if checksum != _checksum(payload):
        msg = "Base58Check checksum mismatch"
        raise ValueError(msg)
    return payload


def encode_address(kind: str, key_hash: bytes) -> str:
    """Encode a 20-byte hash as a Tezos address of the given kind.

    Raises:
        ValueError: On an unknown kind or a hash of the wrong size.
    """
    if kind not in PREFIXES:
        msg = f"Unknown address kind: {kind}"
        raise ValueError(msg)
    if len(key_hash) != _HASH_SIZE:
        msg = f"Invalid hash length: {len(key_hash)}"
        raise ValueError(msg)
    return base58check_encode(PREFIXES[kind] + key_hash)


def decode_address(address: str) -> tuple[str, bytes]:
    """Decode a Tezos address into ``(kind, hash)``.

    Raises:
        ValueError: If the address is malformed.
    """
    payload = base58check_decode(address)
    if len(payload) != len(PREFIXES["tz1"]) + _HASH_SIZE:
        msg = f"Invalid address payload length: {len(payload)}"
        raise ValueError(msg)
    prefix, key_hash = payload[:3], payload[3:]
    for kind, expected in PREFIXES.items():
        if prefix == expected:
            return kind, key_hash
    msg = "Unknown address prefix"
    raise ValueError(msg)


def validate_address(address: str) -> bool:
    """Check if a string is a well-formed Tezos address."""
    try:
        decode_address(address)
    except ValueError:
        return False
    return True


def is_contract_address(address: str) -> bool:
    """True for a valid ``KT1`` originated contract address."""
    try:
        kind, _ = decode_address(address)
    except ValueError:
        return False
    return kind == "KT1"
