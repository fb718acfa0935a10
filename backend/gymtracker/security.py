from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from passlib.context import CryptContext
from jose import jwt
from jose.exceptions import JWTError
from gymtracker.settings import get_settings

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(p: str) -> str:
    return pwd_ctx.hash(p)

def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    return pwd_ctx.verify(plain, hashed)

def create_profile_token(profile_id: int, *, expires_minutes: Optional[int] = None) -> str:
    """Bearer token whose subject is the profile id."""
    s = get_settings()
    now = datetime.now(timezone.utc)
    ttl = s.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    claims: Dict[str, Any] = {
        "sub": str(profile_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=ttl)).timestamp()),
    }
    return jwt.encode(claims, s.SECRET_KEY, algorithm=s.ALGORITHM)

def profile_id_from_token(token: str) -> int:
    """Profile id carried by a valid token.

    Raises ``ExpiredSignatureError`` for stale tokens and ``JWTError`` for
    anything else that is wrong with it.
    """
    s = get_settings()
    claims = jwt.decode(token, s.SECRET_KEY, algorithms=[s.ALGORITHM], options={"require_exp": True})
    sub = claims.get("sub")
    if sub is None or not str(sub).isdigit():
        raise JWTError("token has no profile subject")
    return int(sub)
