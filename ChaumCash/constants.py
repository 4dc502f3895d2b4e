"""
constants.py

Centralized constants for ChaumCash. Protocol tags, redundancy factor and
key sizes live here so no module hard-codes them.
"""

from typing import Dict, Any

DEFAULTS: Dict[str, Any] = {
    # RNG / seed handling (None -> fresh OS entropy)
    "DEFAULT_SEED": None,

    # Canonical coin form: first field must equal this tag
    "ISSUER_TAG": "ELECTRONIC_PURCHASE",
    # Prefix xor'ed together with the owner label inside every share pair
    "IDENTITY_MARKER": "IdentityString",

    # Number of left/right share pairs per coin (redundancy factor k)
    "COIN_RIS_LENGTH": 20,

    # Bank key material
    "RSA_KEY_BITS": 2048,
    "RSA_PUBLIC_EXPONENT": 65537,

    # Coin identifiers: hex of this many random bytes
    "GUID_BYTE_LEN": 48,

    # Serialized form delimiters
    "FIELD_SEPARATOR": "-",
    "HASH_SEPARATOR": ",",
}

# convenience accessors
ISSUER_TAG = DEFAULTS["ISSUER_TAG"]
IDENTITY_MARKER = DEFAULTS["IDENTITY_MARKER"]
COIN_RIS_LENGTH = DEFAULTS["COIN_RIS_LENGTH"]


def update_from_dict(d):
    DEFAULTS.update(d)
    # update convenience names
    globals()["ISSUER_TAG"] = DEFAULTS["ISSUER_TAG"]
    globals()["IDENTITY_MARKER"] = DEFAULTS["IDENTITY_MARKER"]
    globals()["COIN_RIS_LENGTH"] = DEFAULTS["COIN_RIS_LENGTH"]
