"""The protean domains served by this process.

Initialization walks each domain's package and registers its aggregates,
commands, handlers and repositories. It must run once per process, before
the first command is processed.
"""

from catalogue.domain import catalogue
from ordering.domain import ordering
from payments.domain import payments

DOMAINS = (catalogue, ordering, payments)

_initialized = False


def init_domains() -> None:
    """Initialize every domain, once."""
    global _initialized
    if _initialized:
        return
    for domain in DOMAINS:
        domain.init()
    _initialized = True
