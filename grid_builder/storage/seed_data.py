"""Catalog the in-memory store starts with."""

from decimal import Decimal

from grid_builder.models.catalog import Alignment, Price, Product, Template


def _product(product_id: str, name: str, image: str, amount: str) -> Product:
    return Product(id=product_id, name=name, image=image, price=Price(amount=Decimal(amount), currency="EUR"))


SEED_PRODUCTS: tuple[Product, ...] = (
    _product("prod_001", "Blue Jean", "https://images.unsplash.com/photo-1542272604-787c3835535d?w=400", "36.87"),
    _product("prod_002", "White T-Shirt", "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=400", "19.99"),
    _product("prod_003", "Leather Jacket", "https://images.unsplash.com/photo-1551028719-00167b16eac5?w=400", "89.95"),
    _product("prod_004", "Summer Dress", "https://images.unsplash.com/photo-1623609163859-ca93c959b98a?w=400", "45.50"),
    _product("prod_005", "Running Shoes", "https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=400", "59.99"),
    _product("prod_006", "Wool Beanie", "https://images.unsplash.com/photo-1576871337622-98d48d1cf531?w=400", "15.75"),
    _product("prod_007", "Blue Jean", "https://images.unsplash.com/photo-1542272604-787c3835535d?w=400", "36.87"),
    _product("prod_008", "Backpack", "https://images.unsplash.com/photo-1553062407-98eeb64c6a62?w=400", "49.95"),
    _product("prod_009", "Watch", "https://images.unsplash.com/photo-1614164185128-e4ec99c436d7?w=400", "125.00"),
    _product("prod_010", "Sneakers", "https://images.unsplash.com/photo-1597045566677-8cf032ed6634?w=400", "75.50"),
)

SEED_TEMPLATES: tuple[Template, ...] = (
    Template(id="template_001", name="Aesthetic Left", alignment=Alignment.LEFT),
    Template(id="template_002", name="Centered Style", alignment=Alignment.CENTER),
    Template(id="template_003", name="Right Aligned", alignment=Alignment.RIGHT),
)

TEMPLATE_ID_BY_ALIGNMENT: dict[Alignment, str] = {template.alignment: template.id for template in SEED_TEMPLATES}
DEFAULT_TEMPLATE_ID = TEMPLATE_ID_BY_ALIGNMENT[Alignment.LEFT]
