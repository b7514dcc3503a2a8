"""Service helpers for forum members."""
from __future__ import annotations

import logging
from collections.abc import Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kgotla.models import User

logger = logging.getLogger(__name__)


def get_or_create_user(db: Session, user_id: str, claims: Mapping[str, object]) -> User:
    """Return the member for ``user_id``, provisioning it on first sight.

    Profile fields are seeded from the token's ``email`` and ``name`` claims
    when present; later logins never overwrite edits the member made.
    """
    user = db.get(User, user_id)
    if user is not None:
        return user

    email = claims.get("email")
    name = claims.get("name")
    user = User(
        id=user_id,
        email=email if isinstance(email, str) else None,
        display_name=name if isinstance(name, str) else None,
    )
    try:
        with db.begin_nested():
            db.add(user)
    except IntegrityError:
        # Another request provisioned the same member first.
        existing = db.get(User, user_id)
        if existing is None:
            raise
        return existing

    db.commit()
    logger.info("Provisioned user %s", user_id)
    return user
