import logging

import pytest
from pydantic import ValidationError

from shopigo import (
    ApiVersion,
    AppConfig,
    CallbackURLDerivationError,
    ClientConstructionError,
    ConfigurationError,
    Credentials,
    DomainPatternCompilationError,
    InMemorySessionStore,
    InvalidHostURL,
    InvalidShopDomain,
    Shop,
    build_app,
    bypass_auth_with_session_id,
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
from shopigo.core.urls import join_url

HOST_URL = "https://app.example.com"


@pytest.fixture
def config():
    return AppConfig(
        host_url=HOST_URL,
        credentials=Credentials(client_id="client-id", client_secret="client-secret"),
    )


@pytest.mark.parametrize("host_url", [
    "https://app.example.com",
    "https://app.example.com/",
    "http://localhost:8000",
    "https://app.example.com/nested/base",
])
def test_defaults_applied(host_url):
    """A build without options uses the default endpoints and matcher"""
    app = build_app(AppConfig(host_url=host_url))

    assert app.config.api_version is ApiVersion.LATEST
    assert app.config.embedded is True
    assert app.config.retries == 0
    assert app.config.auth_begin_path == "/auth/begin"
    assert app.config.auth_callback_path == "/auth/install"
    assert app.config.auth_callback_url == join_url(host_url, "/auth/install")
    assert isinstance(app.session_store, InMemorySessionStore)
    assert app.is_valid_shop("my-shop1.myshopify.com")


def test_callback_url_for_plain_host(config):
    app = build_app(config)
    assert app.auth_callback_url == "https://app.example.com/auth/install"


def test_config_values_reach_client(config):
    app = build_app(config)
    assert app.client.client_id == "client-id"
    assert app.client_secret == "client-secret"


@pytest.mark.parametrize("token", ["2099-01", "", "v2023-04", "unstable"])
def test_unknown_version_falls_back_to_latest(config, token):
    app = build_app(config, with_version(token))
    assert app.config.api_version is ApiVersion.LATEST


def test_known_versions_are_kept(config):
    assert build_app(config, with_version("2023-04")).api_version is ApiVersion.V2023_04
    assert build_app(config, with_version(ApiVersion.V2023_07)).api_version is ApiVersion.V2023_07


def test_scopes_are_order_independent(config):
    first = build_app(config, with_scopes(["write_orders", "read_products"]))
    second = build_app(config, with_scopes(["read_products", "write_orders"]))

    assert first.config.scopes == "read_products,write_orders"
    assert first.config.scopes == second.config.scopes
    assert first.config.scope_list == ["read_products", "write_orders"]


def test_scopes_keep_duplicates(config):
    app = build_app(config, with_scopes(["write_orders", "read_products", "read_products"]))
    assert app.config.scopes == "read_products,read_products,write_orders"


def test_scopes_option_replaces_previous(config):
    app = build_app(config, with_scopes(["read_orders"]), with_scopes(["write_products"]))
    assert app.config.scopes == "write_products"


def test_scopes_do_not_follow_caller_mutation(config):
    scopes = ["write_orders", "read_products"]
    option = with_scopes(scopes)
    scopes.append("read_customers")
    assert build_app(config, option).config.scopes == "read_products,write_orders"


def test_auth_callback_endpoint_recomputes_url(config):
    app = build_app(config, with_auth_callback_endpoint("/custom/cb"))
    assert app.config.auth_callback_path == "/custom/cb"
    assert app.config.auth_callback_url == "https://app.example.com/custom/cb"


def test_auth_callback_endpoint_last_write_wins(config):
    app = build_app(
        config,
        with_auth_callback_endpoint("/custom/cb"),
        with_auth_callback_endpoint("/other/cb"),
    )
    assert app.config.auth_callback_url == "https://app.example.com/other/cb"


def test_auth_callback_endpoint_uses_host_path():
    app = build_app(AppConfig(host_url="https://example.com/base/"), with_auth_callback_endpoint("/custom/cb"))
    assert app.config.auth_callback_url == "https://example.com/base/custom/cb"


@pytest.mark.parametrize("path", ["/bad\x00path", "/bad%zzpath"])
def test_malformed_callback_path_aborts_build(config, path):
    with pytest.raises(CallbackURLDerivationError):
        build_app(config, with_auth_callback_endpoint(path))


@pytest.mark.parametrize("host_url", [
    "https://exa\x7fmple.com",
    "https://example.com/\nadmin",
    ":no-scheme",
    "http://[::1",
    "https://example.com:99999",
])
def test_invalid_host_url(host_url):
    with pytest.raises(InvalidHostURL):
        build_app(AppConfig(host_url=host_url))


def test_relative_host_url_fails_client_construction():
    """Relative URLs parse, but the outbound client needs an absolute URL"""
    with pytest.raises(ClientConstructionError) as exc_info:
        build_app(AppConfig(host_url="/relative/path"))
    assert isinstance(exc_info.value, ConfigurationError)
    assert exc_info.value.__cause__ is not None


def test_custom_shop_domains(config):
    app = build_app(config, with_custom_shop_domains("example.org"))

    assert app.is_valid_shop("tenant.example.org")
    assert app.is_valid_shop("tenant.myshopify.com")
    assert app.is_valid_shop("tenant.shopify.com")
    assert app.is_valid_shop("tenant.myshopify.io")
    assert not app.is_valid_shop("tenant.evil.com")


def test_custom_shop_domains_replace_previous_call(config):
    app = build_app(
        config,
        with_custom_shop_domains("first.com"),
        with_custom_shop_domains("second.org"),
    )
    assert app.is_valid_shop("tenant.second.org")
    assert not app.is_valid_shop("tenant.first.com")
    assert app.is_valid_shop("tenant.myshopify.com")


def test_invalid_custom_shop_domain_aborts_build(config):
    with pytest.raises(DomainPatternCompilationError):
        build_app(config, with_custom_shop_domains("bad|(domain"))


def test_negative_retry_aborts_build(config):
    with pytest.raises(ConfigurationError):
        build_app(config, with_retry(-1))


def test_simple_options(config):
    store = InMemorySessionStore()
    shop = Shop(domain="default.myshopify.com")
    app = build_app(
        config,
        with_retry(3),
        with_is_embedded(False),
        with_auth_begin_endpoint("/login"),
        with_default_auth(shop),
        bypass_auth_with_session_id("offline_default.myshopify.com"),
        with_uninstall_hook("/webhooks/uninstall"),
        with_session_store(store),
    )

    assert app.config.retries == 3
    assert app.config.embedded is False
    assert app.config.auth_begin_path == "/login"
    assert app.config.default_shop == shop
    assert app.config.bypasses_auth
    assert app.config.bypass_auth_session_id == "offline_default.myshopify.com"
    assert app.config.uninstall_path == "/webhooks/uninstall"
    assert app.session_store is store


def test_default_session_store_not_shared(config):
    assert build_app(config).session_store is not build_app(config).session_store


def test_install_hook(config):
    calls = []
    app = build_app(config, with_install_hook(lambda: calls.append("installed")))

    assert app.run_install_hook() is True
    assert calls == ["installed"]
    assert build_app(config).run_install_hook() is False


def test_config_is_frozen(config):
    app = build_app(config)
    with pytest.raises(ValidationError):
        app.config.retries = 5


def test_empty_credentials_are_allowed():
    app = build_app(AppConfig(host_url=HOST_URL))
    assert app.config.credentials.is_complete() is False


def test_authorization_url(config):
    from urllib.parse import parse_qs, urlsplit

    app = build_app(config, with_scopes(["write_orders", "read_products"]))
    url = app.authorization_url("tenant.myshopify.com", state="nonce-123")

    parts = urlsplit(url)
    query = parse_qs(parts.query)
    assert parts.netloc == "tenant.myshopify.com"
    assert parts.path == "/admin/oauth/authorize"
    assert query["client_id"] == ["client-id"]
    assert query["scope"] == ["read_products,write_orders"]
    assert query["redirect_uri"] == ["https://app.example.com/auth/install"]
    assert query["state"] == ["nonce-123"]


def test_authorization_url_rejects_untrusted_shop(config):
    app = build_app(config)
    with pytest.raises(InvalidShopDomain):
        app.authorization_url("tenant.evil.com", state="nonce")


@pytest.mark.parametrize("host_url", ["ftp://files.example.com", "app://example.com"])
def test_absolute_non_http_host_url(host_url):
    """Every absolute URL is an acceptable host, whatever its scheme"""
    app = build_app(AppConfig(host_url=host_url))
    assert app.config.auth_callback_url == f"{host_url}/auth/install"


def test_single_scope_string_is_one_scope(config):
    app = build_app(config, with_scopes("write_orders"))
    assert app.config.scopes == "write_orders"
    assert app.config.scope_list == ["write_orders"]


def test_custom_shop_domain_with_trailing_newline_aborts_build(config):
    with pytest.raises(DomainPatternCompilationError):
        build_app(config, with_custom_shop_domains("example.org\n"))


def test_construction_failures_are_logged(config, caplog):
    with caplog.at_level(logging.ERROR, logger="shopigo.app"):
        with pytest.raises(CallbackURLDerivationError):
            build_app(config, with_auth_callback_endpoint("/bad\x00path"))
        with pytest.raises(DomainPatternCompilationError):
            build_app(config, with_custom_shop_domains("bad|(domain"))
        with pytest.raises(ClientConstructionError):
            build_app(AppConfig(host_url="/relative/path"))

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 3


def test_option_application_is_logged(config, caplog):
    with caplog.at_level(logging.DEBUG, logger="shopigo.app"):
        build_app(config, with_retry(2), with_is_embedded(False))

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Defaults applied") for m in messages)
    assert any("with_retry" in m for m in messages)
    assert any("with_is_embedded" in m for m in messages)
