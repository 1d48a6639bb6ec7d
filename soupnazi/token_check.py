"""
Syntax checking for license tokens.

Licenses are JWTs. This only checks that a token *parses* as one: three
segments, a JSON header naming an algorithm, a JSON object payload.
Signatures are NOT verified here; that is a trust decision made elsewhere.
"""

import logging
from typing import Callable

import jwt


logger = logging.getLogger(__name__)

TokenValidator = Callable[[str], bool]


def is_valid_jwt(token: str) -> bool:
    """Check that a token is a syntactically valid JWT."""
    if not token:
        return False
    try:
        header = jwt.get_unverified_header(token)
        jwt.decode(token, options={"verify_signature": False})
    except (jwt.PyJWTError, UnicodeError) as e:
        logger.debug(f"Token failed JWT syntax check: {e}")
        return False
    return bool(header.get("alg"))
