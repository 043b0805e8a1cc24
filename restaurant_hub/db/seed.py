"""Database seeding helpers."""

import logging

from sqlalchemy.orm import Session

from restaurant_hub.core.config import settings
from restaurant_hub.core.security import get_password_hash
from restaurant_hub.services.user_service import create_user, get_user_by_email

logger = logging.getLogger(__name__)


def ensure_admin_user(session: Session) -> bool:
    """Create or re-activate the bootstrap admin when ADMIN_EMAIL and ADMIN_PASSWORD are set.

    Returns:
        bool: True when an admin account is present after this call.
    """
    if not settings.admin_email or not settings.admin_password:
        logger.info("[BOOTSTRAP] ADMIN_EMAIL/ADMIN_PASSWORD not set; skipping admin seed.")
        return False

    existing = get_user_by_email(session, settings.admin_email)
    if existing is not None:
        updates_applied = False
        if not existing.is_active:
            existing.is_active = True
            updates_applied = True
            logger.info("[BOOTSTRAP] Admin exists but was inactive; account re-activated.")
        if existing.role != "admin":
            logger.warning("[BOOTSTRAP] %s promoted to admin (old=%s).", existing.email, existing.role)
            existing.role = "admin"
            updates_applied = True
        if updates_applied:
            session.commit()
        return True

    create_user(
        session,
        email=settings.admin_email,
        hashed_password=get_password_hash(settings.admin_password),
        first_name="Admin",
        last_name="User",
        role="admin",
    )
    logger.warning("[SECURITY] Bootstrap admin created for %s.", settings.admin_email)
    return True
