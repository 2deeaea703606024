import logging
from typing import Any, Callable, Iterable, List, Union

from shopigo.app import AppBuilder, Option
from shopigo.core.errors import ConfigurationError
from shopigo.core.versions import ApiVersion, resolve_version
from shopigo.schemas.shop import Shop
from shopigo.services.session_store import SessionStore
from shopigo.services.shop_domain import ShopDomainMatcher

logger = logging.getLogger(__name__)


def canonicalize_scopes(scopes: Union[Iterable[str], str]) -> str:
    """
    Sort scopes and join them with commas. Duplicates are kept.

    A bare string is one scope, not a sequence of characters.
    """
    if isinstance(scopes, str):
        scopes = [scopes]
    return ",".join(sorted(scopes))


def with_version(version: Union[ApiVersion, str]) -> Option:
    def option(a: AppBuilder) -> None:
        a.api_version = resolve_version(version)
    return option


def with_retry(n: int) -> Option:
    def option(a: AppBuilder) -> None:
        if n < 0:
            raise ConfigurationError(f"Retry count must be non-negative, got {n}")
        a.retries = n
    return option


def with_default_auth(shop: Shop) -> Option:
    def option(a: AppBuilder) -> None:
        a.default_shop = shop
    return option


def with_scopes(scopes: Union[Iterable[str], str]) -> Option:
    # Sorted now so later changes to the caller's list have no effect
    canonical = canonicalize_scopes(scopes)

    def option(a: AppBuilder) -> None:
        a.scopes = canonical
    return option


def with_auth_begin_endpoint(path: str) -> Option:
    def option(a: AppBuilder) -> None:
        a.auth_begin_path = path
    return option


def with_auth_callback_endpoint(path: str) -> Option:
    """Set the callback path; the callback URL is re-derived from the host URL."""
    def option(a: AppBuilder) -> None:
        a.set_auth_callback_path(path)
    return option


def bypass_auth_with_session_id(session_id: str) -> Option:
    def option(a: AppBuilder) -> None:
        a.bypass_auth_session_id = session_id
    return option


def with_session_store(store: SessionStore) -> Option:
    def option(a: AppBuilder) -> None:
        a.session_store = store
    return option


def with_install_hook(hook: Callable[[], Any]) -> Option:
    def option(a: AppBuilder) -> None:
        a.install_hook = hook
    return option


def with_uninstall_hook(path: str) -> Option:
    def option(a: AppBuilder) -> None:
        a.uninstall_path = path
    return option


def with_is_embedded(embedded: bool) -> Option:
    def option(a: AppBuilder) -> None:
        a.embedded = embedded
    return option


def with_custom_shop_domains(*domains: str) -> Option:
    """Replace the shop matcher with one trusting the defaults plus ``domains``."""
    def option(a: AppBuilder) -> None:
        a.shop_matcher = ShopDomainMatcher(domains)
    return option


def options_from_settings(settings) -> List[Option]:
    """Translate environment settings into builder options."""
    options = [
        with_version(settings.SHOPIFY_API_VERSION),
        with_retry(settings.SHOPIFY_RETRIES),
        with_is_embedded(settings.SHOPIFY_EMBEDDED),
        with_auth_begin_endpoint(settings.SHOPIFY_AUTH_BEGIN_PATH),
        with_auth_callback_endpoint(settings.SHOPIFY_AUTH_CALLBACK_PATH),
    ]
    if settings.scope_list:
        options.append(with_scopes(settings.scope_list))
    if settings.custom_shop_domain_list:
        options.append(with_custom_shop_domains(*settings.custom_shop_domain_list))
    if settings.SHOPIFY_BYPASS_SESSION_ID:
        options.append(bypass_auth_with_session_id(settings.SHOPIFY_BYPASS_SESSION_ID))
    if settings.SHOPIFY_UNINSTALL_PATH:
        options.append(with_uninstall_hook(settings.SHOPIFY_UNINSTALL_PATH))
    logger.debug(f"Built {len(options)} options from settings")
    return options
