# utils/encoding.py
"""
String helpers shared by the coin, merchant and audit code:
 - hash_string: one-way SHA-256 commitment over a string, hex encoded
 - xor_hex: bytewise xor of two equal-length hex strings
 - make_guid: random coin identifier (hex, so it never contains '-')
"""
import hashlib
from Crypto.Random import get_random_bytes
from .. import constants

def hash_string(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()

def xor_bytes(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise ValueError(f"xor operands differ in length: {len(a)} != {len(b)}")
    return bytes(x ^ y for x, y in zip(a, b))

def xor_hex(a: str, b: str) -> str:
    return xor_bytes(bytes.fromhex(a), bytes.fromhex(b)).hex()

def make_guid(n_bytes: int = None) -> str:
    if n_bytes is None:
        n_bytes = constants.DEFAULTS.get("GUID_BYTE_LEN", 48)
    return get_random_bytes(n_bytes).hex()
