"""
Admin provisioning script
Usage: python create_admin.py <email>

Creates the admin (or rotates its token) and prints the bearer token once.
"""
import sys
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from booking_app import models  # noqa: F401
from booking_app.auth import create_admin
from booking_app.database import Base, SessionLocal, engine
from booking_app.shared.validators import validate_email

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def provision_admin(email: str) -> str:
    """Create the admin and return its plaintext token"""
    email = validate_email(email)

    Base.metadata.create_all(bind=engine, checkfirst=True)

    db = SessionLocal()
    try:
        admin, token = create_admin(db, email)
    finally:
        db.close()

    logger.info(f"✅ Admin ready: {email} (id {admin.id})")
    return token


if __name__ == "__main__":
    if len(sys.argv) < 2:
        logger.error("Usage: python create_admin.py <email>")
        sys.exit(1)

    try:
        token = provision_admin(sys.argv[1])
    except ValueError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"❌ Provisioning failed: {e}")
        sys.exit(1)

    logger.info("🔑 Bearer token (store it now, it will not be shown again):")
    print(token)
