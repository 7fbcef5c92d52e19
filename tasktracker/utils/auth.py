from typing import Optional

from jose import jwt, JWTError, ExpiredSignatureError
from jose.exceptions import JWTClaimsError

from tasktracker.errors import AuthError, AuthFailure


def extract_bearer(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an `Authorization: Bearer ...` header value.

    Returns None when the header is absent. A present header with any other
    shape raises AuthError(MALFORMED).
    """
    if authorization is None or not authorization.strip():
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    raise AuthError(AuthFailure.MALFORMED)


class TokenVerifier:
    """Stateless HMAC verification of bearer tokens against a shared secret."""

    def __init__(self, secret: str, algorithm: str = "HS256", leeway: int = 0):
        self._secret = secret
        self._algorithm = algorithm
        self._leeway = leeway

    def verify(self, token: Optional[str]) -> str:
        """Return the token subject or raise AuthError with the failure reason.

        Purely local: no I/O, no lookups.
        """
        if not token:
            raise AuthError(AuthFailure.MISSING)
        try:
            jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except JWTError:
            raise AuthError(AuthFailure.MALFORMED)

        try:
            # jwt.decode validates exp automatically
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"leeway": self._leeway},
            )
        except ExpiredSignatureError:
            raise AuthError(AuthFailure.EXPIRED)
        except JWTClaimsError:
            raise AuthError(AuthFailure.MALFORMED)
        except JWTError:
            raise AuthError(AuthFailure.INVALID_SIGNATURE)

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject.strip():
            raise AuthError(AuthFailure.MALFORMED)
        return subject
