import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from jobportal.core.security import TokenClaims, decode_access_token

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenClaims:
    """Verify the bearer token and return its claim set."""
    if not credentials or not credentials.credentials:
        logger.info("Auth failed: missing bearer credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization token is missing or invalid.",
        )
    claims = decode_access_token(credentials.credentials)
    if claims is None:
        logger.info("Auth failed: invalid or expired token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token.",
        )
    return claims


def get_current_admin(
    claims: TokenClaims = Depends(get_current_claims),
) -> TokenClaims:
    """Require a token whose role claim is admin."""
    if not claims.is_admin:
        logger.info("Auth failed: user %s is not an admin", claims.user_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not authorized to perform this action.",
        )
    return claims
