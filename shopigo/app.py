import logging
from typing import Any, Callable, Optional
from urllib.parse import urlencode

from shopigo.core.errors import (
    CallbackURLDerivationError,
    ConfigurationError,
    InvalidHostURL,
    InvalidShopDomain,
)
from shopigo.core.urls import join_url, validate_url
from shopigo.core.versions import ApiVersion
from shopigo.schemas.app_config import (
    DEFAULT_AUTH_BEGIN_PATH,
    DEFAULT_AUTH_CALLBACK_PATH,
    AppConfig,
)
from shopigo.services.client import ShopifyClient
from shopigo.services.session_store import InMemorySessionStore, SessionStore
from shopigo.services.shop_domain import ShopDomainMatcher

logger = logging.getLogger(__name__)

Option = Callable[["AppBuilder"], None]


class AppBuilder:
    """
    Mutable construction state for an App.

    Options receive the builder and may overwrite any field. ``build``
    freezes the state into an AppConfig.
    """

    def __init__(self, base: AppConfig, client: ShopifyClient):
        self.client = client
        self.host_url = base.host_url
        self.credentials = base.credentials
        self.api_version = base.api_version
        self.retries = base.retries
        self.embedded = base.embedded
        self.auth_begin_path = base.auth_begin_path
        self.auth_callback_path = base.auth_callback_path
        self.auth_callback_url = base.auth_callback_url
        self.bypass_auth_session_id = base.bypass_auth_session_id
        self.scopes = base.scopes
        self.install_hook = base.install_hook
        self.uninstall_path = base.uninstall_path
        self.default_shop = base.default_shop
        self.shop_matcher = base.shop_matcher
        self.session_store: Optional[SessionStore] = None

    def set_auth_callback_path(self, path: str) -> None:
        """Set the callback path and re-derive the callback URL from the current host."""
        try:
            url = join_url(self.host_url, path)
        except (TypeError, ValueError) as e:
            raise CallbackURLDerivationError(
                f"Cannot derive auth callback URL from {self.host_url!r} and {path!r}: {e}"
            ) from e
        self.auth_callback_path = path
        self.auth_callback_url = url

    def apply_defaults(self) -> None:
        self.api_version = ApiVersion.LATEST
        self.embedded = True
        self.auth_begin_path = DEFAULT_AUTH_BEGIN_PATH
        self.set_auth_callback_path(DEFAULT_AUTH_CALLBACK_PATH)
        self.session_store = InMemorySessionStore()
        self.shop_matcher = ShopDomainMatcher()
        logger.debug(f"Defaults applied, auth callback URL {self.auth_callback_url}")

    def build(self) -> "App":
        config = AppConfig(
            host_url=self.host_url,
            credentials=self.credentials,
            api_version=self.api_version,
            retries=self.retries,
            embedded=self.embedded,
            auth_begin_path=self.auth_begin_path,
            auth_callback_path=self.auth_callback_path,
            auth_callback_url=self.auth_callback_url,
            bypass_auth_session_id=self.bypass_auth_session_id,
            scopes=self.scopes,
            install_hook=self.install_hook,
            uninstall_path=self.uninstall_path,
            default_shop=self.default_shop,
            shop_matcher=self.shop_matcher,
        )
        return App(config, self.client, self.session_store)


class App:
    """Built app: frozen configuration, outbound client and session store."""

    def __init__(self, config: AppConfig, client: ShopifyClient, session_store: SessionStore):
        self._config = config
        self._client = client
        self._session_store = session_store

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def client(self) -> ShopifyClient:
        return self._client

    @property
    def session_store(self) -> SessionStore:
        return self._session_store

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not found on App itself
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._config, name)

    def is_valid_shop(self, shop: str) -> bool:
        return self._config.shop_matcher.matches(shop)

    def authorization_url(self, shop: str, state: str, redirect_uri: Optional[str] = None) -> str:
        """
        Build the platform OAuth authorization URL for a shop.

        Args:
            shop: The shop's domain (e.g., 'myshop.myshopify.com')
            state: Opaque anti-forgery value echoed back on the callback
            redirect_uri: Defaults to the configured auth callback URL

        Raises:
            InvalidShopDomain if the shop is not on a trusted domain
        """
        if not self.is_valid_shop(shop):
            raise InvalidShopDomain(f"Untrusted shop domain: {shop!r}")
        params = {
            "client_id": self._config.client_id,
            "scope": self._config.scopes,
            "redirect_uri": redirect_uri or self._config.auth_callback_url,
            "state": state,
        }
        return f"https://{shop.rstrip('/')}/admin/oauth/authorize?{urlencode(params)}"

    def run_install_hook(self) -> bool:
        if self._config.install_hook is None:
            return False
        self._config.install_hook()
        return True

    def __repr__(self) -> str:
        return f"App(host_url={self._config.host_url!r}, api_version={self._config.api_version.value!r})"


def build_app(config: AppConfig, *options: Option) -> App:
    """
    Validate the base configuration, apply defaults and then each option in order.

    Construction is all-or-nothing: any ConfigurationError propagates and no
    App is returned.
    """
    try:
        validate_url(config.host_url)
    except ValueError as e:
        logger.error(f"Invalid host URL {config.host_url!r}: {e}")
        raise InvalidHostURL(f"Invalid host URL {config.host_url!r}: {e}") from e

    try:
        client = ShopifyClient.create(config.host_url, config.credentials.client_id)
        builder = AppBuilder(config, client)
        builder.apply_defaults()
        for position, option in enumerate(options):
            option(builder)
            logger.debug(f"Applied option {position} ({getattr(option, '__qualname__', option)})")
    except ConfigurationError as e:
        logger.error(f"App construction failed: {e}")
        raise

    try:
        app = builder.build()
    except ValueError as e:
        # pydantic validation of option values, e.g. a negative retry count
        logger.error(f"Invalid app configuration: {e}")
        raise ConfigurationError(f"Invalid app configuration: {e}") from e
    logger.info(f"App built for {config.host_url} (api version {app.config.api_version.value})")
    return app


def build_app_from_settings(settings=None, *extra_options: Option) -> App:
    """Build an App from environment settings; extra options are applied last."""
    from shopigo.core.config import get_settings
    from shopigo.options import options_from_settings

    settings = settings or get_settings()
    config = AppConfig(
        host_url=settings.HOST_URL,
        credentials={
            "client_id": settings.SHOPIFY_API_KEY,
            "client_secret": settings.SHOPIFY_API_SECRET,
        },
    )
    return build_app(config, *options_from_settings(settings), *extra_options)


__all__ = ["App", "AppBuilder", "Option", "build_app", "build_app_from_settings"]
