"""
External identity provider client.
Revokes the sign-in identity behind a deleted account.
"""

from typing import Optional
from starlette.concurrency import run_in_threadpool
from firebase_admin import auth as firebase_auth, credentials
from firebase_admin.exceptions import FirebaseError
from realtyflow.config import settings
from realtyflow.utils.exceptions import UpstreamServiceError
import firebase_admin
import json
import logging

logger = logging.getLogger(__name__)

APP_NAME = "realtyflow"


class IdentityProviderClient:
    """
    Thin async wrapper over the Firebase Admin SDK.
    The SDK app is initialized on first use from the configured service account.
    """
    
    def __init__(self, service_account: Optional[str] = None):
        self._service_account = service_account
        self._app = None
    
    def _get_app(self):
        if self._app is not None:
            return self._app
        
        try:
            self._app = firebase_admin.get_app(APP_NAME)
            return self._app
        except ValueError:
            pass
        
        if not self._service_account:
            raise UpstreamServiceError("Identity provider", "service account is not configured")
        
        try:
            certificate = credentials.Certificate(json.loads(self._service_account))
        except ValueError as e:
            raise UpstreamServiceError("Identity provider", f"invalid service account: {e}")
        
        self._app = firebase_admin.initialize_app(certificate, name=APP_NAME)
        return self._app
    
    async def delete_identity(self, uid: str) -> None:
        """
        Delete the external identity with the given uid.
        
        Raises:
            UpstreamServiceError: If the provider rejects or fails the call
        """
        app = self._get_app()
        try:
            await run_in_threadpool(firebase_auth.delete_user, uid, app=app)
        except (FirebaseError, ValueError) as e:
            logger.error(f"Identity provider failed to delete {uid}: {e}")
            raise UpstreamServiceError("Identity provider", str(e))
        logger.info(f"Revoked external identity {uid}")


identity_provider = IdentityProviderClient(settings.firebase_service_account)
