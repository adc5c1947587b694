from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DataPayload(BaseModel):
    foo: str
    bar: str

    model_config = ConfigDict(extra="forbid")


class Product(BaseModel):
    id: int
    name: str
    image_url: str
    price: float


__all__ = ["DataPayload", "Product"]
