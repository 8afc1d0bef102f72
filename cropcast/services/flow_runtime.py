import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

from cropcast.core.config import settings
from cropcast.core.exceptions import TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

INVALID_INPUT_MESSAGE = "Invalid input provided. Please check the form fields."


async def run_with_timeout(awaitable: Awaitable[T], timeout: Optional[float] = None) -> T:
    """Awaits a flow's model work, cancelling it once the request budget is spent."""
    timeout = settings.REQUEST_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.warning("Model work timed out after %.1fs", timeout)
        raise TransportError(f"Model request timed out after {timeout}s") from exc
