"""Checks that the external command-line tools are installed.

Both the Azure CLI (``az``) and Azure Functions Core Tools (``func``) must
be reachable on the search path before any cloud call is made.  There is
no partial mode: the first missing tool aborts the run.
"""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

from funcapp_provisioner.core.constants import REQUIRED_TOOLS
from funcapp_provisioner.core.exceptions import MissingToolError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger("funcapp_provisioner.core.prerequisites")


def is_command_available(name: str, which: Callable[[str], str | None] = shutil.which) -> bool:
    """Return ``True`` if *name* resolves to an executable on the search path."""
    return which(name) is not None


def check_prerequisites(
    tools: Iterable[tuple[str, str]] = REQUIRED_TOOLS,
    which: Callable[[str], str | None] = shutil.which,
) -> None:
    """Verify every required tool is installed.

    Args:
        tools: ``(executable, install hint)`` pairs, checked in order.
        which: Search-path lookup, ``shutil.which`` by default.

    Raises:
        MissingToolError: For the first tool that cannot be found.
    """
    for name, hint in tools:
        if not is_command_available(name, which):
            raise MissingToolError(name, hint)
        logger.info("Found required tool | tool=%s", name)
