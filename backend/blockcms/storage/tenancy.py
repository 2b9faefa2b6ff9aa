"""
Tenant resolution and per-tenant stores.

Multi-tenant mode gives every tenant an isolated store:

- ``sqlite``: a dedicated database file ``<DATA_DIR>/<tenant>.db``
- ``postgres``: a dedicated schema ``tenant_<tenant>`` in a shared database

Engines are created on first use and cached for the life of the process;
sessions are opened per request.
"""
from __future__ import annotations

import logging
import os
import re
import threading
from typing import Callable, Dict, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blockcms.domain.errors import InternalError, ValidationError
from blockcms.extensions import db
from .scope import RequestScope

logger = logging.getLogger(__name__)

TENANT_HEADER = "X-Tenant-ID"
DEFAULT_TENANT = "default"

# Tenant ids become file names and schema names
_TENANT_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,63}$")


def extract_tenant_id(headers, host: Optional[str]) -> str:
    """
    Resolution order:
    1. explicit ``X-Tenant-ID`` header
    2. first label of the host when it has more than two labels
    3. the literal ``default`` tenant
    """
    tenant_id = (headers.get(TENANT_HEADER) or "").strip()
    if tenant_id:
        return tenant_id

    hostname = (host or "").split(":", 1)[0]
    if hostname:
        parts = hostname.split(".")
        if len(parts) > 2 and parts[0]:
            return parts[0]

    return DEFAULT_TENANT


def enable_sqlite_foreign_keys(engine: Engine) -> Engine:
    """SQLite ignores REFERENCES clauses unless the pragma is set per connection."""
    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _set_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def assert_valid_tenant_id(tenant_id: str) -> str:
    if not _TENANT_ID_RE.match(tenant_id):
        raise ValidationError("Invalid tenant identifier")
    return tenant_id


class TenantStoreRegistry:
    """Creates and caches one engine per tenant."""

    def __init__(
        self,
        *,
        driver: str,
        data_dir: str,
        database_url: Optional[str] = None,
        on_store_ready: Optional[Callable[[RequestScope], None]] = None,
    ):
        self.driver = driver
        self.data_dir = data_dir
        self.database_url = database_url
        self.on_store_ready = on_store_ready
        self._engines: Dict[str, Engine] = {}
        self._lock = threading.Lock()

    def engine_for(self, tenant_id: str) -> Engine:
        engine = self._engines.get(tenant_id)
        if engine is not None:
            return engine

        with self._lock:
            engine = self._engines.get(tenant_id)
            if engine is None:
                engine = self._connect(tenant_id)
                self._engines[tenant_id] = engine
        return engine

    def _connect(self, tenant_id: str) -> Engine:
        if self.driver == "sqlite":
            engine = self._connect_sqlite(tenant_id)
        elif self.driver == "postgres":
            engine = self._connect_postgres(tenant_id)
        else:
            raise InternalError(f"Unsupported database driver: {self.driver}")

        db.metadata.create_all(engine)
        if self.on_store_ready is not None:
            with Session(bind=engine) as session:
                self.on_store_ready(RequestScope(tenant_id=tenant_id, session=session))
        logger.info("Tenant store ready for %s (%s)", tenant_id, self.driver)
        return engine

    def _connect_sqlite(self, tenant_id: str) -> Engine:
        os.makedirs(self.data_dir, exist_ok=True)
        db_path = os.path.join(os.path.abspath(self.data_dir), f"{tenant_id}.db")
        return enable_sqlite_foreign_keys(create_engine(f"sqlite:///{db_path}"))

    def _connect_postgres(self, tenant_id: str) -> Engine:
        if not self.database_url:
            raise InternalError("TENANT_DATABASE_URL is not configured")

        schema = f"tenant_{tenant_id}"
        base = create_engine(self.database_url)
        with base.begin() as conn:
            conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{schema}"'))

        # Unqualified tables resolve to the tenant schema
        return base.execution_options(schema_translate_map={None: schema})

    def dispose(self) -> None:
        with self._lock:
            for engine in self._engines.values():
                engine.dispose()
            self._engines.clear()


class MultiTenantResolver:
    def __init__(self, registry: TenantStoreRegistry):
        self.registry = registry

    def resolve(self, request) -> RequestScope:
        tenant_id = assert_valid_tenant_id(
            extract_tenant_id(request.headers, request.host)
        )

        try:
            engine = self.registry.engine_for(tenant_id)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Failed to open store for tenant %s: %s", tenant_id, exc)
            raise InternalError("Failed to connect to tenant database") from exc

        return RequestScope(
            tenant_id=tenant_id,
            session=Session(bind=engine),
            owns_session=True,
        )


def build_resolver(config, on_store_ready=None) -> Optional[MultiTenantResolver]:
    """Returns None in single-tenant mode."""
    if not config.get("MULTI_TENANT"):
        return None

    registry = TenantStoreRegistry(
        driver=config.get("DB_DRIVER", "sqlite"),
        data_dir=config.get("DATA_DIR", "./data"),
        database_url=config.get("TENANT_DATABASE_URL") or config.get("SQLALCHEMY_DATABASE_URI"),
        on_store_ready=on_store_ready,
    )
    return MultiTenantResolver(registry)
