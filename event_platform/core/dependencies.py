"""
Per-process dependency container.

Lambda entry points build one Dependencies instance per process and pass it
explicitly into every route function and the attendee counter processor, so
no module holds a mutable client of its own.
"""

import logging
from typing import Optional

from ..config import PlatformConfig
from .blob_gateway import BlobGateway, create_blob_gateway
from .table_gateway import TableGateway, create_table_gateway

logger = logging.getLogger(__name__)


class Dependencies:
    """Configuration plus the lazily-connected gateways derived from it."""

    def __init__(
        self,
        config: PlatformConfig,
        table: Optional[TableGateway] = None,
        blobs: Optional[BlobGateway] = None
    ):
        self.config = config
        self._table = table
        self._blobs = blobs

    @property
    def table(self) -> TableGateway:
        if self._table is None:
            self._table = create_table_gateway(self.config)
        return self._table

    @property
    def blobs(self) -> BlobGateway:
        if self._blobs is None:
            self._blobs = create_blob_gateway(self.config)
        return self._blobs


def build_dependencies(config: Optional[PlatformConfig] = None) -> Dependencies:
    """Create the container from an explicit config or from the environment."""
    config = config or PlatformConfig.from_env()
    logger.debug(
        f"Building dependencies: table={config.table_name!r} bucket={config.bucket_name!r} "
        f"region={config.region_name} environment={config.environment}"
    )
    return Dependencies(config)
