from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List, Optional
import logging
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "shopigo"
    LOG_LEVEL: str = "INFO"

    # Externally reachable base URL of this application
    HOST_URL: str = "http://localhost:8000"

    SHOPIFY_API_KEY: str = ""
    SHOPIFY_API_SECRET: str = ""
    SHOPIFY_API_VERSION: str = "latest"
    SHOPIFY_SCOPES: str = ""
    SHOPIFY_RETRIES: int = 0
    SHOPIFY_EMBEDDED: bool = True
    SHOPIFY_AUTH_BEGIN_PATH: str = "/auth/begin"
    SHOPIFY_AUTH_CALLBACK_PATH: str = "/auth/install"
    SHOPIFY_CUSTOM_SHOP_DOMAINS: str = ""
    SHOPIFY_BYPASS_SESSION_ID: Optional[str] = None
    SHOPIFY_UNINSTALL_PATH: Optional[str] = None

    model_config = SettingsConfigDict(case_sensitive=True)

    @property
    def scope_list(self) -> List[str]:
        return _split_csv(self.SHOPIFY_SCOPES)

    @property
    def custom_shop_domain_list(self) -> List[str]:
        return _split_csv(self.SHOPIFY_CUSTOM_SHOP_DOMAINS)


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from LOG_LEVEL unless a level is given."""
    logging.basicConfig(
        level=(level or get_settings().LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
