"""
User Service - Lazy user creation from verified token claims
"""

import logging

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from analyst.models.user import User, utcnow

logger = logging.getLogger(__name__)

UNKNOWN_EMAIL = "unknown@example.com"

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def get_or_create_user(db: Session, user_id: str, email: str = None) -> User:
    """
    Return the user row, inserting it on first sight

    Uses INSERT ... ON CONFLICT DO NOTHING, so two first requests racing
    for the same new user never hit a duplicate-key error.
    """
    dialect = db.get_bind().dialect.name
    insert = _DIALECT_INSERTS.get(dialect)
    if insert is None:
        raise RuntimeError(f"Unsupported database dialect for user upsert: {dialect}")

    statement = insert(User).values(
        id=user_id,
        email=email or UNKNOWN_EMAIL,
        created_at=utcnow(),
    ).on_conflict_do_nothing(index_elements=["id"])

    result = db.execute(statement)
    db.commit()
    if result.rowcount:
        logger.info(f"Created user {user_id}")

    return db.query(User).filter(User.id == user_id).one()
