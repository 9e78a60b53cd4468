"""Admin authentication.

Admins authenticate with an opaque bearer token issued by ``create_admin.py``.
Only the SHA-256 of the token is stored.
"""

import hashlib
import logging
import secrets
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import Admin

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_admin_token() -> str:
    return secrets.token_urlsafe(32)


def create_admin(db: Session, email: str) -> tuple[Admin, str]:
    """
    Provision an admin, or rotate the token of an existing one.

    Returns:
        (admin, plaintext token) - the token cannot be recovered later
    """
    email = email.strip().lower()
    token = generate_admin_token()

    admin = db.query(Admin).filter(Admin.email == email).first()
    if admin:
        logger.info(f"🔄 Rotating token for admin {admin.id}")
        admin.token_hash = hash_token(token)
    else:
        admin = Admin(email=email, token_hash=hash_token(token))
        db.add(admin)

    db.commit()
    db.refresh(admin)
    logger.info(f"✅ Admin {admin.id} provisioned")
    return admin, token


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Admin:
    """Resolve the admin behind the bearer token, 401 otherwise"""

    if not credentials or not credentials.credentials:
        logger.warning("⚠️ Admin endpoint called without credentials")
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    admin = (
        db.query(Admin).filter(Admin.token_hash == hash_token(credentials.credentials)).first()
    )
    if not admin:
        logger.warning("⚠️ Admin endpoint called with an unknown token")
        raise HTTPException(
            status_code=401,
            detail="Invalid or revoked token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug(f"✅ Admin {admin.id} authenticated")
    return admin
