import logging
from typing import Optional, Union

import shopify
from pydantic import AnyUrl, BaseModel, ConfigDict, ValidationError, field_validator

from shopigo.core.errors import ClientConstructionError
from shopigo.core.versions import ApiVersion, resolve_version

logger = logging.getLogger(__name__)


class ClientConfig(BaseModel):
    host_url: AnyUrl
    client_id: str = ""

    model_config = ConfigDict(frozen=True)

    @field_validator("host_url")
    @classmethod
    def require_host(cls, value: AnyUrl) -> AnyUrl:
        if not value.host:
            raise ValueError("host URL must be absolute (scheme and host)")
        return value


class ShopifyClient:
    """Outbound API client handle bound to this app's host and client id."""

    def __init__(self, config: ClientConfig):
        self.config = config

    @classmethod
    def create(cls, host_url: str, client_id: str) -> "ShopifyClient":
        """
        Validate the client configuration and build a client.

        Raises:
            ClientConstructionError if the host URL is not an absolute URL
        """
        try:
            config = ClientConfig(host_url=host_url, client_id=client_id)
        except ValidationError as e:
            raise ClientConstructionError(f"Failed to initialize Shopify client: {e}") from e
        logger.debug(f"Shopify client created for {host_url}")
        return cls(config)

    @property
    def client_id(self) -> str:
        return self.config.client_id

    def admin_api_url(self, shop_domain: str, version: Union[ApiVersion, str, None], resource: str = "") -> str:
        """Admin REST endpoint URL for a shop, e.g. ``shop.json``."""
        release = resolve_version(version).release
        base = f"https://{shop_domain.rstrip('/')}/admin/api/{release}"
        return f"{base}/{resource.lstrip('/')}" if resource else base

    def session_for(
        self,
        shop_domain: str,
        access_token: str,
        version: Union[ApiVersion, str, None] = ApiVersion.LATEST,
        access_scopes: Optional[str] = None,
    ) -> shopify.Session:
        """Build a ShopifyAPI session for one shop; activation is left to the caller."""
        release = resolve_version(version).release
        return shopify.Session(shop_domain.rstrip("/"), release, access_token, access_scopes)
