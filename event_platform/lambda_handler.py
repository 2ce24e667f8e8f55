"""
AWS Lambda entry points.

- ``api_handler``: every API Gateway HTTP API route
- ``attendee_counter_handler``: DynamoDB Stream batches of the platform table

Dependencies are built once per process on first use and reused across warm
invocations.
"""

import functools
import logging
from typing import Any, Dict, Optional

from .api import default_router
from .config import PlatformConfig
from .core import Dependencies, build_dependencies
from .handlers import AttendeeCounterProcessor

logger = logging.getLogger(__name__)


def configure_logging(config: PlatformConfig) -> None:
    """Set the root level; the Lambda runtime installs the root handler itself."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s %(message)s")
    root.setLevel(config.log_level_number)


@functools.lru_cache(maxsize=1)
def get_dependencies() -> Dependencies:
    deps = build_dependencies()
    configure_logging(deps.config)
    return deps


def api_handler(event: Dict[str, Any], context: Any = None, deps: Optional[Dependencies] = None) -> Dict[str, Any]:
    """Dispatch an API Gateway event to its route function."""
    deps = deps or get_dependencies()
    return default_router.dispatch(event, deps)


def attendee_counter_handler(
    event: Dict[str, Any],
    context: Any = None,
    deps: Optional[Dependencies] = None
) -> Dict[str, int]:
    """
    Apply a DynamoDB Stream batch to event attendee counters.

    Errors propagate so the event source mapping retries the batch.
    """
    deps = deps or get_dependencies()
    records = event.get('Records') or []
    logger.info(f"Attendee counter received {len(records)} records")
    summary = AttendeeCounterProcessor(deps.table).process_batch(records)
    return summary.model_dump()
