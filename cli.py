import asyncio
from typing import Optional

import typer
from pydantic import ValidationError

from src.core import exceptions
from src.core.config import settings
from src.core.database import Database
from src.core.security.tokens import IdentityResolver
from src.apps.accounts.repositories.user_repository import UserRepository
from src.apps.accounts.schemas.user import UserCreate
from src.apps.accounts.services.user_service import UserService

app = typer.Typer(help="Management commands for the blog API.")


# ---------------------------
# Helpers
# ---------------------------
def get_identity_resolver() -> IdentityResolver:
    return IdentityResolver(
        secret=settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


async def _with_database(action):
    """Run ``action(database)`` against a freshly created schema, then dispose."""
    database = Database(settings.ASYNC_DATABASE_URL, echo=settings.DATABASE_ECHO)
    try:
        await database.create_all()
        return await action(database)
    finally:
        await database.disconnect()


# ---------------------------
# Commands
# ---------------------------
@app.command()
def init_db():
    """Create all database tables."""
    async def noop(database):
        return None

    asyncio.run(_with_database(noop))
    print(f"✅ Database ready: {settings.ASYNC_DATABASE_URL}")


@app.command()
def create_user(
    username: str,
    email: str,
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
):
    """Register a new user account."""
    try:
        user_in = UserCreate(username=username, email=email, password=password)
    except ValidationError as e:
        print(f"❌ Invalid user data: {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    async def register(database):
        service = UserService(UserRepository(database.get_session), get_identity_resolver())
        return await service.register(user_in)

    try:
        result = asyncio.run(_with_database(register))
    except exceptions.AppException as e:
        print(f"❌ {e.detail}")
        raise typer.Exit(1)

    print(f"✅ Created user {result['data'].username} ({result['data'].id})")


@app.command()
def issue_token(
    email: str,
    minutes: Optional[int] = typer.Option(None, "--minutes", "-m", help="Token lifetime in minutes"),
):
    """Print a bearer token for an existing user."""
    async def find(database):
        return await UserRepository(database.get_session).get_by_email(email.lower())

    user = asyncio.run(_with_database(find))
    if user is None:
        print(f"❌ No user with email {email}")
        raise typer.Exit(1)

    resolver = get_identity_resolver()
    if minutes is not None:
        resolver.expire_minutes = minutes
    print(resolver.issue_token(user.id, username=user.username))


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Enable auto-reload in development."),
):
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("src.main:app", host=host, port=port, reload=reload, log_level="info")


# ---------------------------
# Entrypoint
# ---------------------------
if __name__ == "__main__":
    app()

    """
python cli.py init-db
python cli.py create-user alice alice@example.com --password secret123
python cli.py issue-token alice@example.com
python cli.py serve --port 8000 --reload
"""
