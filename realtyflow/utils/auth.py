"""
Credential utilities: bearer token issuance and verification.
Tokens carry only the subject's identity, never its role.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, ExpiredSignatureError, jwt
from realtyflow.config import settings


class IdentityClaim:
    """Decoded identity claim. Lives only for the duration of one request."""
    
    def __init__(self, email: str, exp: datetime, iat: Optional[datetime] = None, extra: Optional[Dict[str, Any]] = None):
        self.email = email
        self.exp = exp
        self.iat = iat
        self.extra = extra or {}
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IdentityClaim":
        """Create IdentityClaim from a decoded token payload."""
        iat = data.get("iat")
        extra = {k: v for k, v in data.items() if k not in ("email", "exp", "iat")}
        return cls(
            email=data["email"],
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(iat, tz=timezone.utc) if iat else None,
            extra=extra
        )


def create_access_token(
    identity: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Sign a credential for the submitted identity payload.
    
    Args:
        identity: Identity payload; must contain "email"
        expires_delta: Optional custom validity, defaults to the configured number of days
        
    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.token_expire_days))
    
    to_encode = {k: v for k, v in identity.items() if k not in ("exp", "iat", "role")}
    to_encode.update({"exp": expire, "iat": now})
    
    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def verify_token(token: str) -> IdentityClaim:
    """
    Verify signature and expiry, and decode the identity claim.
    
    Raises:
        ExpiredSignatureError: If the token has expired
        JWTError: If the token is malformed, badly signed or missing the subject email
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm]
    )
    
    if not payload.get("email") or not payload.get("exp"):
        raise JWTError("Invalid token payload")
    
    return IdentityClaim.from_dict(payload)


__all__ = [
    "IdentityClaim",
    "create_access_token",
    "verify_token",
    "JWTError",
    "ExpiredSignatureError",
]
