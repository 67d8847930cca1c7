"""
Translation of simulation error payloads into SDK errors

The runtime reports the account lock limit only through the textual form of
the simulation error, so detection is a substring match on that text.
"""

import logging
from typing import Any

from .exceptions import TooManyAccountLocksError

logger = logging.getLogger(__name__)

TOO_MANY_ACCOUNT_LOCKS_MARKER = "TooManyAccountLocks"


def raise_for_simulation_error(err: Any) -> None:
    """
    Raise a named error for simulation failures the SDK knows how to explain

    Args:
        err: Error payload of a simulation result (string, dict, solders error...)

    Raises:
        TooManyAccountLocksError: If the error text contains the lock-limit marker

    Any other error is left for the caller to inspect on the outcome.
    """
    if err is None:
        return

    if TOO_MANY_ACCOUNT_LOCKS_MARKER in str(err):
        logger.warning(f"Simulation hit the account lock limit: {err}")
        raise TooManyAccountLocksError(simulation_error=err)

    logger.debug(f"Simulation returned error: {err}")
