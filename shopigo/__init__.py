from shopigo.app import App, AppBuilder, Option, build_app, build_app_from_settings
from shopigo.core.errors import (
    CallbackURLDerivationError,
    ClientConstructionError,
    ConfigurationError,
    DomainPatternCompilationError,
    InvalidHostURL,
    InvalidShopDomain,
    SessionStoreError,
)
from shopigo.core.versions import ApiVersion
from shopigo.options import (
    bypass_auth_with_session_id,
    canonicalize_scopes,
    with_auth_begin_endpoint,
    with_auth_callback_endpoint,
    with_custom_shop_domains,
    with_default_auth,
    with_install_hook,
    with_is_embedded,
    with_retry,
    with_scopes,
    with_session_store,
    with_uninstall_hook,
    with_version,
)
from shopigo.schemas import AppConfig, Credentials, Session, Shop
from shopigo.services.session_store import InMemorySessionStore, SessionStore
from shopigo.services.shop_domain import DEFAULT_SHOP_DOMAINS, ShopDomainMatcher
