"""
Authentication service: credential issuance and identity claim verification.
Roles are never placed in the credential; they are resolved per request.
"""

from typing import Dict, Any, Tuple
from datetime import timedelta
from realtyflow.config import settings
from realtyflow.utils.auth import (
    IdentityClaim,
    create_access_token,
    verify_token,
    JWTError,
    ExpiredSignatureError,
)
from realtyflow.utils.exceptions import InvalidTokenError, TokenExpiredError
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Issues bearer credentials for identities vouched for by the external
    identity provider and decodes them back into identity claims.
    """
    
    def __init__(self, expire_days: int = None):
        self.expire_days = expire_days or settings.token_expire_days
    
    def issue_token(self, identity: Dict[str, Any]) -> Tuple[str, int]:
        """
        Sign a credential for the submitted identity payload.
        
        Returns:
            Tuple of (token, validity in seconds)
        """
        validity = timedelta(days=self.expire_days)
        token = create_access_token(identity, expires_delta=validity)
        logger.info(f"Issued credential for {identity.get('email')}")
        return token, int(validity.total_seconds())
    
    def decode_claim(self, token: str) -> IdentityClaim:
        """
        Verify a credential and return its identity claim.
        
        Raises:
            TokenExpiredError: If the credential has expired
            InvalidTokenError: If the signature or payload is invalid
        """
        try:
            return verify_token(token)
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            logger.debug(f"Credential rejected: {e}")
            raise InvalidTokenError()
