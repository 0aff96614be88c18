"""
Identifier service.

Produces the opaque unique identifiers stamped onto fields, enums and
cross-document links in the metadata descriptor.
"""

import itertools
import uuid
from typing import Callable

IdentifierFactory = Callable[[], str]


def generate_id() -> str:
    """Return a new random 128-bit identifier in canonical UUID form."""
    return str(uuid.uuid4())


def sequential_ids(prefix: str = "ID") -> IdentifierFactory:
    """
    Build a deterministic identifier factory.

    Useful for reproducible descriptor output and tests. Each call of the
    returned function yields ``PREFIX-0001``, ``PREFIX-0002``, ...

    Args:
        prefix: Text placed before the running counter

    Returns:
        Zero-argument callable producing identifiers
    """
    counter = itertools.count(1)

    def _next_id() -> str:
        return f"{prefix}-{next(counter):04d}"

    return _next_id
