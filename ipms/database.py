"""Async engine, declarative base and the per-request session dependency."""

import ssl
from collections.abc import AsyncGenerator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from ipms.config import settings

# libpq-style query options asyncpg rejects; SSL goes through connect_args instead
_LIBPQ_SSL_PARAMS = {"sslmode", "ssl"}


def _permissive_ssl() -> ssl.SSLContext:
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


def _verify_ca_ssl() -> ssl.SSLContext:
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    return ctx


# sslmode / ssl value -> SSL context factory; None means plain TCP
_SSL_MODES = {
    "disable": None,
    "false": None,
    "allow": _permissive_ssl,
    "prefer": _permissive_ssl,
    "require": _permissive_ssl,
    "true": _permissive_ssl,
    "verify-ca": _verify_ca_ssl,
    "verify-full": ssl.create_default_context,
}


def get_engine_url_and_connect_args(url: str | None = None) -> tuple[str, dict]:
    """
    Split a configured database URL into what create_async_engine accepts.
    An sslmode/ssl query option is removed from the URL and turned into
    connect_args: disable gives no SSL, require/prefer encrypt without
    checking the certificate, verify-ca/verify-full check it.
    """
    url = url or settings.database_url
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    modes = [v.lower() for k, v in query if k in _LIBPQ_SSL_PARAMS]
    if not modes:
        return url, {}

    mode = modes[-1]
    if mode not in _SSL_MODES:
        raise ValueError(f"Unsupported sslmode {mode!r} in database URL")
    kept = [(k, v) for k, v in query if k not in _LIBPQ_SSL_PARAMS]
    url = urlunsplit(parts._replace(query=urlencode(kept)))
    factory = _SSL_MODES[mode]
    return url, ({"ssl": factory()} if factory else {})


class Base(DeclarativeBase):
    pass


_db_url, _connect_args = get_engine_url_and_connect_args()

engine = create_async_engine(
    _db_url,
    echo=settings.db_echo,
    connect_args=_connect_args,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request. Everything written while handling the request
    (idea update, history row, review) commits together or not at all.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
