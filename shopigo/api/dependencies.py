from typing import Awaitable, Callable

from fastapi import HTTPException, Request, status

from shopigo.app import App

SHOP_DOMAIN_HEADER = "X-Shopify-Shop-Domain"


def shop_domain_validator(app: App) -> Callable[[Request], Awaitable[str]]:
    """
    Build a FastAPI dependency that returns the trusted shop domain of a request.

    The shop is read from the ``shop`` query parameter, falling back to the
    X-Shopify-Shop-Domain header.

    Usage:
        @router.get("/products")
        async def list_products(shop: str = Depends(shop_domain_validator(app))):
            ...
    """
    async def validate_shop(request: Request) -> str:
        shop = request.query_params.get("shop") or request.headers.get(SHOP_DOMAIN_HEADER)
        if not shop:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing shop parameter",
            )
        if not app.is_valid_shop(shop):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid shop domain: {shop}",
            )
        return shop.rstrip("/")

    return validate_shop
