import logging

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.orm import Session

from blockcms.domain.errors import NotFoundError, ValidationError
from blockcms.models.user import ROLE_ADMIN, User
from blockcms.repositories.user_repository import UserRepository
from blockcms.storage.scope import RequestScope, default_scope
from blockcms.storage.tenancy import assert_valid_tenant_id

logger = logging.getLogger(__name__)


def seed_admin(scope, *, email, name, password):
    """
    Create an admin account unless one with ``email`` already exists.

    Returns ``(user, created)``.
    """
    if not password:
        raise ValidationError("An admin password is required")

    repo = UserRepository(scope)
    try:
        return repo.get_by_email(email), False
    except NotFoundError:
        pass

    user = User(name=name, email=email, role=ROLE_ADMIN)
    user.set_password(password)
    repo.create(user)
    return user, True


def seed_admin_if_empty(scope, config):
    """Startup seed: only for a store with no users and a configured password."""
    if not config.get("ADMIN_PASSWORD"):
        return None

    repo = UserRepository(scope)
    if repo.count() > 0:
        return None

    user, _ = seed_admin(
        scope,
        email=config["ADMIN_EMAIL"],
        name=config["ADMIN_NAME"],
        password=config["ADMIN_PASSWORD"],
    )
    logger.info("Seeded admin user %s (tenant=%r)", user.email, scope.tenant_id)
    return user


@click.command("seed-admin")
@click.option("--email", default=None, help="Defaults to ADMIN_EMAIL")
@click.option("--name", default=None, help="Defaults to ADMIN_NAME")
@click.option("--password", default=None, help="Defaults to ADMIN_PASSWORD")
@click.option("--tenant", default=None, help="Tenant store to seed (multi-tenant mode)")
@with_appcontext
def seed_admin_command(email, name, password, tenant):
    """Create the initial admin user."""
    config = current_app.config
    kwargs = dict(
        email=email or config["ADMIN_EMAIL"],
        name=name or config["ADMIN_NAME"],
        password=password or config.get("ADMIN_PASSWORD"),
    )

    resolver = current_app.extensions.get("tenant_resolver")
    try:
        if resolver is not None:
            tenant_id = assert_valid_tenant_id(tenant or "default")
            with Session(bind=resolver.registry.engine_for(tenant_id)) as session:
                scope = RequestScope(tenant_id=tenant_id, session=session)
                user, created = seed_admin(scope, **kwargs)
        else:
            user, created = seed_admin(default_scope(), **kwargs)
    except ValidationError as exc:
        raise click.ClickException(exc.message) from exc

    if created:
        click.echo(f"Created admin user {user.email}")
    else:
        click.echo(f"Admin user {user.email} already exists")
