"""Single-owner authorization for mutations.

A drink belongs to exactly one user, the one who posted it. Only that
user may update or delete it. Reads are not gated.
"""

import structlog

from brewlog.errors import ForbiddenError

logger = structlog.get_logger()


def authorize_mutation(caller_id: int, owner_id: int) -> bool:
    """Return True if the caller owns the resource, else raise ForbiddenError."""
    if caller_id == owner_id:
        return True
    logger.info(
        "brewlog.mutation_forbidden", caller_id=caller_id, owner_id=owner_id
    )
    raise ForbiddenError(caller_id=caller_id, owner_id=owner_id)
