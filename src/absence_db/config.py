"""Database configuration for the absence answer store.

Connection parameters come from ``DATABASE_URL`` when set, otherwise from
the ``PG_HOST`` / ``PG_PORT`` / ``PG_USER`` / ``PG_PASSWORD`` /
``PG_DATABASE`` variables used by the docker-compose setup.

Alembic needs a plain ``postgresql://`` URL; the runtime engine needs the
``postgresql+asyncpg://`` form.  Both are derived from the same source.
"""

import os

_SYNC_SCHEME = "postgresql://"
_ASYNC_SCHEME = "postgresql+asyncpg://"


def _configured_url() -> str:
    """Return the configured URL in whatever scheme the operator supplied."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return "{scheme}{user}:{password}@{host}:{port}/{database}".format(
        scheme=_SYNC_SCHEME,
        user=os.getenv("PG_USER", "absence"),
        password=os.getenv("PG_PASSWORD", "absence"),
        host=os.getenv("PG_HOST", "localhost"),
        port=os.getenv("PG_PORT", "5432"),
        database=os.getenv("PG_DATABASE", "absence_tracking"),
    )


def get_sync_url() -> str:
    """URL for Alembic migrations (synchronous driver)."""
    return _configured_url().replace(_ASYNC_SCHEME, _SYNC_SCHEME, 1)


def get_async_url() -> str:
    """URL for the runtime engine (asyncpg driver)."""
    url = _configured_url()
    if url.startswith(_SYNC_SCHEME):
        return _ASYNC_SCHEME + url[len(_SYNC_SCHEME):]
    return url
