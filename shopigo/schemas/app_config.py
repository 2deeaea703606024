from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from shopigo.core.versions import ApiVersion
from shopigo.schemas.shop import Shop
from shopigo.services.shop_domain import ShopDomainMatcher

DEFAULT_AUTH_BEGIN_PATH = "/auth/begin"
DEFAULT_AUTH_CALLBACK_PATH = "/auth/install"


class Credentials(BaseModel):
    client_id: str = ""
    client_secret: str = ""

    model_config = ConfigDict(frozen=True)

    def is_complete(self) -> bool:
        return bool(self.client_id and self.client_secret)


class AppConfig(BaseModel):
    """
    Configuration of one running app instance.

    Callers construct it with ``host_url`` and ``credentials``; every other
    field is filled in by ``build_app`` from defaults and options. Instances
    are frozen.
    """

    host_url: str
    credentials: Credentials = Field(default_factory=Credentials)

    api_version: ApiVersion = ApiVersion.LATEST
    retries: int = Field(default=0, ge=0)
    embedded: bool = True
    auth_begin_path: str = DEFAULT_AUTH_BEGIN_PATH
    auth_callback_path: str = DEFAULT_AUTH_CALLBACK_PATH
    auth_callback_url: str = ""
    bypass_auth_session_id: Optional[str] = None
    scopes: str = ""
    install_hook: Optional[Callable[[], Any]] = None
    uninstall_path: Optional[str] = None
    default_shop: Optional[Shop] = None
    shop_matcher: Optional[ShopDomainMatcher] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def client_id(self) -> str:
        return self.credentials.client_id

    @property
    def client_secret(self) -> str:
        return self.credentials.client_secret

    @property
    def scope_list(self) -> List[str]:
        return self.scopes.split(",") if self.scopes else []

    @property
    def bypasses_auth(self) -> bool:
        return bool(self.bypass_auth_session_id)
