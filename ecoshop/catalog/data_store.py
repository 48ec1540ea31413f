from __future__ import annotations

import logging
import threading
import uuid
from pathlib import Path

import pandas as pd

from ..config import DEFAULT_APP_CONFIG
from ..errors import NotFoundError
from .models import ProductCreate, ProductOut

logger = logging.getLogger(__name__)

CATALOG_COLUMNS: list[str] = [
    "id",
    "name",
    "category",
    "sustainability_score",
    "price",
    "currency",
    "image_url",
]

_lock = threading.Lock()
_products: dict[str, ProductOut] | None = None


def _load(path: Path) -> dict[str, ProductOut]:
    df = pd.read_csv(path, dtype={"id": str})

    missing = [c for c in CATALOG_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Catalog file {path} is missing columns: {missing}")

    df["currency"] = df["currency"].fillna(DEFAULT_APP_CONFIG.default_currency)
    df["image_url"] = df["image_url"].fillna("")
    df["sustainability_score"] = pd.to_numeric(df["sustainability_score"], errors="coerce").fillna(0.0).astype(float)
    df["price"] = pd.to_numeric(df["price"], errors="coerce").astype(float)
    df = df.dropna(subset=["id", "name", "category", "price"])

    products: dict[str, ProductOut] = {}
    for record in df[CATALOG_COLUMNS].to_dict(orient="records"):
        product = ProductOut(**record)
        products[product.id] = product

    logger.info("Loaded %d products from %s", len(products), path)
    return products


def _catalog() -> dict[str, ProductOut]:
    """Return the in-memory catalog, seeding it from CSV on first call."""
    global _products
    if _products is None:
        with _lock:
            if _products is None:
                _products = _load(DEFAULT_APP_CONFIG.catalog_csv)
    return _products


def list_products() -> list[ProductOut]:
    """All products in catalog order."""
    return list(_catalog().values())


def find_product(product_id: str) -> ProductOut | None:
    return _catalog().get(product_id)


def get_product(product_id: str) -> ProductOut:
    product = find_product(product_id)
    if product is None:
        raise NotFoundError("product", product_id)
    return product


def add_product(body: ProductCreate) -> ProductOut:
    catalog = _catalog()
    product = ProductOut(
        id=f"p-{uuid.uuid4().hex[:12]}",
        name=body.name.strip(),
        category=body.category.strip(),
        sustainability_score=body.sustainability_score,
        price=body.price,
        currency=(body.currency or DEFAULT_APP_CONFIG.default_currency).upper(),
        image_url=body.image_url,
    )
    with _lock:
        catalog[product.id] = product
    logger.info("Product added", extra={"product_id": product.id, "category": product.category})
    return product


def replace_catalog(products: list[ProductOut]) -> None:
    """Swap the whole catalog, keeping the given order."""
    global _products
    with _lock:
        _products = {p.id: p for p in products}


def reset_catalog() -> None:
    """Drop the in-memory catalog so the next access reloads the CSV."""
    global _products
    with _lock:
        _products = None
