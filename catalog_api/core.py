from pydantic import BaseModel, ConfigDict
from typing import Optional, Dict, Any

class ProductIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str
    price: float = 0
    category: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    stock: Optional[int] = None

class ProductUpdateIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    stock: Optional[int] = None

def _make_product_dict(product_id: int, p: ProductIn) -> Dict[str, Any]:
    # echo back exactly what was sent, like the public demo service does
    return {"id": product_id, **p.model_dump(exclude_unset=True)}
