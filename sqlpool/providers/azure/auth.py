"""Azure SDK client factory: the typed dependency handed to every adapter operation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from azure.identity import ClientSecretCredential, DefaultAzureCredential
from azure.mgmt.sql import SqlManagementClient

if TYPE_CHECKING:
    from azure.core.credentials import TokenCredential

    from ...config import Settings

logger = logging.getLogger(__name__)


class AzureClients:
    """Lazily-initialised container for the Azure management clients.

    A pre-built ``sql`` client may be passed in, in which case no
    credential is ever created.
    """

    def __init__(
        self,
        subscription_id: str,
        credential: Optional[TokenCredential] = None,
        sql: Optional[Any] = None,
    ):
        self.subscription_id = subscription_id
        self._credential = credential
        self._sql = sql

    @classmethod
    def from_settings(cls, cfg: Settings) -> AzureClients:
        if not cfg.subscription_id:
            raise ValueError("No Azure subscription configured, set SQLPOOL_SUBSCRIPTION_ID")
        credential: Optional[TokenCredential] = None
        if cfg.has_service_principal:
            logger.info("Using service principal %s for tenant %s", cfg.client_id, cfg.tenant_id)
            credential = ClientSecretCredential(cfg.tenant_id, cfg.client_id, cfg.client_secret)
        return cls(cfg.subscription_id, credential=credential)

    @property
    def credential(self) -> TokenCredential:
        if self._credential is None:
            logger.info("Using DefaultAzureCredential")
            self._credential = DefaultAzureCredential()
        return self._credential

    @property
    def sql(self) -> SqlManagementClient:
        if self._sql is None:
            self._sql = SqlManagementClient(self.credential, self.subscription_id)
        return self._sql

    @property
    def elastic_pools(self) -> Any:
        """The ``ElasticPoolsOperations`` group (get / begin_create_or_update / begin_delete)."""
        return self.sql.elastic_pools
