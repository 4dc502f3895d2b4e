"""
logger.py

Centralized logging helpers with sanitization so identity shares, blinding
factors and key material never reach the log.
"""

import logging
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger("ChaumCash")

_SENSITIVE_KEYS = {
    "owner",
    "owner_label",
    "purchaser",
    "identity_left",
    "identity_right",
    "shares",
    "ris",
    "blinding_factor",
    "private_key",
    "d",
    "seed",
}


def _sanitize(obj: Any) -> Any:
    """
    Recursively sanitize common containers to avoid logging secrets.
    """
    if isinstance(obj, dict):
        out = {}
        for k, v in obj.items():
            if str(k).lower() in _SENSITIVE_KEYS:
                out[k] = "<REDACTED>"
            else:
                out[k] = _sanitize(v)
        return out
    elif isinstance(obj, (list, tuple)):
        return type(obj)(_sanitize(x) for x in obj)
    else:
        return obj


def secure_log(level: str, msg: str, **kwargs):
    """
    Log while sanitizing kwargs.
    Example: secure_log('info', 'coin created', coin_id=guid, owner='alice')
    """
    lg = getattr(logger, level.lower(), logger.info)
    sanitized = {k: ("<REDACTED>" if k.lower() in _SENSITIVE_KEYS else _sanitize(v)) for k, v in kwargs.items()}
    lg(msg + " | " + str(sanitized))
