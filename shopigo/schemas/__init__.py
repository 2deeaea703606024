from .app_config import AppConfig, Credentials
from .session import Session
from .shop import Shop

__all__ = ["AppConfig", "Credentials", "Session", "Shop"]
