from typing import Dict, Any, List

# This file holds the in-memory catalog, seeded like the public demo service.

PRODUCTS: Dict[int, Dict[str, Any]] = {}
_NEXT_ID: List[int] = [1]

SEED: List[Dict[str, Any]] = [
    {"title": "Essence Mascara Lash Princess", "price": 9.99, "category": "beauty", "stock": 5,
     "description": "Volumizing and lengthening mascara.", "brand": "Essence"},
    {"title": "Eyeshadow Palette with Mirror", "price": 19.99, "category": "beauty", "stock": 44,
     "description": "Versatile range of eye shadow shades.", "brand": "Glamour Beauty"},
    {"title": "Powder Canister", "price": 14.99, "category": "beauty", "stock": 59,
     "description": "Finely milled setting powder.", "brand": "Velvet Touch"},
    {"title": "Red Lipstick", "price": 12.99, "category": "beauty", "stock": 68,
     "description": "Classic bold red lipstick.", "brand": "Chic Cosmetics"},
    {"title": "Red Nail Polish", "price": 8.99, "category": "beauty", "stock": 71,
     "description": "Rich and glossy red hue.", "brand": "Nail Couture"},
    {"title": "Calvin Klein CK One", "price": 49.99, "category": "fragrances", "stock": 17,
     "description": "Clean and refreshing unisex fragrance.", "brand": "Calvin Klein"},
    {"title": "Chanel Coco Noir Eau De", "price": 129.99, "category": "fragrances", "stock": 41,
     "description": "Elegant and mysterious fragrance.", "brand": "Chanel"},
    {"title": "Dior J'adore", "price": 89.99, "category": "fragrances", "stock": 91,
     "description": "Luxurious floral fragrance.", "brand": "Dior"},
    {"title": "Dolce Shine Eau de", "price": 69.99, "category": "fragrances", "stock": 3,
     "description": "Youthful and vibrant fragrance.", "brand": "Dolce & Gabbana"},
    {"title": "Gucci Bloom Eau de", "price": 79.99, "category": "fragrances", "stock": 93,
     "description": "Floral and captivating fragrance.", "brand": "Gucci"},
    {"title": "Annibale Colombo Bed", "price": 1899.99, "category": "furniture", "stock": 0,
     "description": "Luxurious and elegant bed frame.", "brand": "Annibale Colombo"},
    {"title": "Annibale Colombo Sofa", "price": 2499.99, "category": "furniture", "stock": 60,
     "description": "Sophisticated and comfortable sofa.", "brand": "Annibale Colombo"},
]

def _allocate_id() -> int:
    pid = _NEXT_ID[0]
    _NEXT_ID[0] = pid + 1
    return pid

def seed_catalog() -> None:
    PRODUCTS.clear()
    _NEXT_ID[0] = 1
    for item in SEED:
        pid = _allocate_id()
        PRODUCTS[pid] = {"id": pid, **item}

seed_catalog()
