"""Concurrent provisioning of user accounts."""

from concurrent.futures import ThreadPoolExecutor

import structlog

from graph_seeder.backend import Backend
from graph_seeder.errors import RemoteError
from graph_seeder.models import Outcome

logger = structlog.get_logger()


def _create_user(backend: Backend, username: str) -> Outcome:
    try:
        user_id = backend.create_user(
            username=username,
            display_name=username,
            email=f"{username}@example.com",
            is_admin=False,
        )
    except RemoteError as e:
        logger.error("Failed to create user", username=username, error=str(e))
        return Outcome(username, "failed", error=str(e))
    return Outcome(username, "ok", value=user_id)


def provision_users(backend: Backend, usernames: list[str], max_workers: int | None = None) -> list[Outcome]:
    """Create every user concurrently and wait for all of them.

    Args:
        backend: Backend used to create the accounts
        usernames: Usernames to create; display name and email are derived from them
        max_workers: Size of the thread pool (defaults to one thread per user)

    Returns:
        One Outcome per username, in the order given
    """
    if not usernames:
        return []

    logger.info("Provisioning users", count=len(usernames))
    with ThreadPoolExecutor(max_workers=max_workers or len(usernames)) as executor:
        outcomes = list(executor.map(lambda username: _create_user(backend, username), usernames))

    logger.info("Users provisioned", resolved=len(resolved_user_ids(outcomes)), requested=len(usernames))
    return outcomes


def resolved_user_ids(outcomes: list[Outcome]) -> list[str]:
    """Return the IDs of the users that were created successfully."""
    return [outcome.value for outcome in outcomes if outcome.ok]
