# backoffice/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # JSON uses camelCase keys; snake_case is accepted on input too
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# 🔗 Summaries embedded in other entities
class UserSummary(CamelModel):
    id: int
    email: str
    name: Optional[str] = None


class CategorySummary(CamelModel):
    id: int
    name: str


class ProductSummary(CamelModel):
    id: int
    name: str
    price: float


class FeedbackSummary(CamelModel):
    id: int
    content: Optional[str] = None
    rating: int
    author_id: int
    product_id: int
    created_at: datetime


# 👤 User
class UserCreate(CamelModel):
    email: EmailStr
    name: Optional[str] = None


class UserUpdate(CamelModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = None


class UserOut(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    feedbacks: List[FeedbackSummary] = []


# 🗂️ Category
class CategoryCreate(CamelModel):
    name: str


class CategoryUpdate(CamelModel):
    name: Optional[str] = None


class CategoryOut(CamelModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime


# 🏷️ Brand
class BrandCreate(CamelModel):
    name: str


class BrandUpdate(CamelModel):
    name: Optional[str] = None


class BrandOut(CamelModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime


# 🛍️ Product
class ProductCreate(CamelModel):
    name: str
    description: Optional[str] = None
    price: float
    stock: int = 0
    category_id: int


class ProductUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    category_id: Optional[int] = None


class ProductOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    stock: int
    category_id: int
    category: Optional[CategorySummary] = None
    feedbacks: List[FeedbackSummary] = []
    created_at: datetime
    updated_at: datetime


# ⭐ Feedback
class FeedbackCreate(CamelModel):
    content: Optional[str] = None
    rating: int
    author_id: int
    product_id: int


class FeedbackUpdate(CamelModel):
    content: Optional[str] = None
    rating: Optional[int] = None
    author_id: Optional[int] = None
    product_id: Optional[int] = None


class FeedbackOut(CamelModel):
    id: int
    content: Optional[str] = None
    rating: int
    author_id: int
    product_id: int
    author: Optional[UserSummary] = None
    product: Optional[ProductSummary] = None
    created_at: datetime
    updated_at: datetime


# 📊 Dashboard
class DashboardStats(BaseModel):
    users: int
    products: int
    categories: int
    brands: int
    feedbacks: int
