from pydantic import BaseModel, ConfigDict
from typing import Optional


class Shop(BaseModel):
    """Reference to a single tenant storefront."""

    domain: str
    id: Optional[str] = None

    model_config = ConfigDict(frozen=True)
