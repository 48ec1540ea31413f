"""
Product catalog.

Responsibilities:
- Seed the catalog from the bundled CSV on first access.
- Keep products in catalog (insertion) order for stable ranking.
- Add and fetch products for the catalog handlers.
"""
