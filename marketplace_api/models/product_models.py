from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, List, Optional


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    details: str = ""
    stock: int = Field(..., ge=0)
    image: Optional[str] = None


class ProductUpdate(BaseModel):
    """Mise à jour partielle : seuls les champs fournis sont écrasés."""
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = Field(None, min_length=1)
    details: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    image: Optional[str] = None


class ProductResponse(BaseModel):
    product_id: str
    name: str
    price: float
    category: str
    brand: str
    details: str = ""
    stock: int
    image: Optional[str] = None
    seller_email: str
    ratings: List[Any] = []
    created_at: datetime
    updated_at: datetime


class ProductPage(BaseModel):
    products: List[ProductResponse]
    categories: List[str]
    brands: List[str]
    totalProducts: int


class ProductIdBody(BaseModel):
    product_id: str = Field(..., min_length=1)
