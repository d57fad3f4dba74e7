"""
Session Resolver

Builds request headers from the identity provider's current session.
Authorization is best-effort: without a session the headers simply
omit it and the backend decides what an anonymous caller may do.
"""

from loguru import logger

from readshelf.identity.base import IdentityProvider


JSON_CONTENT_TYPE = "application/json"


class SessionResolver:
    """Resolves per-request headers from the identity provider."""
    
    def __init__(self, identity: IdentityProvider):
        self.identity = identity
    
    async def get_auth_headers(self) -> dict[str, str]:
        """
        Build headers for an authorized request.
        
        Never raises. The session is fetched fresh on every call.
        
        Returns:
            ``Content-Type`` always, plus ``Authorization`` when a
            session with an id token exists
        """
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        
        try:
            session = await self.identity.fetch_session()
        except Exception as e:
            logger.debug(f"No session available, sending anonymous request: {e}")
            return headers
        
        token = getattr(session, "id_token", None)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        else:
            logger.debug("Session has no id token, sending anonymous request")
        
        return headers
