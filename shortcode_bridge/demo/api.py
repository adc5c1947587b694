from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse
from jinja2 import Environment

from .schemas import DataPayload, Product

logger = logging.getLogger(__name__)

router = APIRouter(tags=["shortcodes"])

_PRODUCTS = [
    Product(id=1, name="Lorem ipsum dolor", image_url="https://picsum.photos/210/300", price=39.99),
    Product(id=2, name="Donec rutrum dui", image_url="https://picsum.photos/220/300", price=59.99),
    Product(id=3, name="Mauris imperdiet massa", image_url="https://picsum.photos/230/300", price=29.99),
    Product(id=4, name="Sed tristique tellus", image_url="https://picsum.photos/240/300", price=9.99),
    Product(id=5, name="Vivamus tempus", image_url="https://picsum.photos/250/300", price=49.99),
    Product(id=6, name="Aliquam rutrum viverra", image_url="https://picsum.photos/260/300", price=19.99),
]


def _templates(request: Request) -> Environment:
    return request.app.state.templates


def select_products(limit: int = 4, orderby: str = "id") -> list[Product]:
    if orderby == "name":
        ordered = sorted(_PRODUCTS, key=lambda product: product.name)
    elif orderby == "price":
        ordered = sorted(_PRODUCTS, key=lambda product: product.price)
    else:
        ordered = sorted(_PRODUCTS, key=lambda product: product.id)
    limit = max(0, min(limit, len(ordered)))
    return ordered[:limit]


@router.post("/data")
async def data(payload: DataPayload) -> DataPayload:
    return DataPayload(foo=f"ok {payload.foo}", bar=f"ok {payload.bar}")


@router.get("/products", response_class=HTMLResponse)
def products(
    request: Request,
    limit: int = Query(default=4),
    orderby: str = Query(default="id"),
) -> HTMLResponse:
    selected = select_products(limit, orderby)
    logger.debug("Rendering %d products ordered by %s", len(selected), orderby)
    rendered = _templates(request).get_template("shortcodes/products.html").render(products=selected)
    return HTMLResponse(rendered)


# Sync on purpose: rendering may run blocking shortcodes, which hold this
# threadpool worker for a full round trip to the data endpoints.
@router.get("/test", response_class=HTMLResponse)
def test_page(request: Request) -> HTMLResponse:
    rendered = _templates(request).get_template("test_shortcode.html").render()
    return HTMLResponse(rendered)


__all__ = ["router", "select_products"]
