from __future__ import annotations

import logging
from typing import Optional

from src.accounts.config import settings
from src.accounts.infra.db.models import Base
from src.accounts.infra.db.session import create_engine_for_url, create_sqlalchemy_session_factory
from src.accounts.infra.db.sql_users import SqlUserRepository
from src.accounts.services.accounts.service import AccountService, account_service

logger = logging.getLogger(__name__)


def init_sql_repositories(
    database_url: Optional[str] = None,
    *,
    service: AccountService = account_service,
    enabled: Optional[bool] = None,
) -> bool:
    """Optionally switch the in-memory user store to the SQL-backed one.

    Called from application startup. If USE_SQL_REPOS is not enabled or
    DATABASE_URL is not configured, this is a no-op and the in-memory store
    remains active. Returns True when the SQL store was installed.
    """

    if not (settings.use_sql_repos if enabled is None else enabled):
        return False

    db_url = database_url or settings.database_url
    if not db_url:
        logger.warning("USE_SQL_REPOS is enabled but DATABASE_URL is not set; keeping in-memory user store")
        return False

    engine = create_engine_for_url(db_url)

    # Create the users table and its unique indexes if they do not exist. In a
    # real deployment this should be handled by migrations.
    Base.metadata.create_all(engine)

    service.users = SqlUserRepository(create_sqlalchemy_session_factory(engine))
    logger.info("SQL user store initialized")
    return True
