from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, Text, ForeignKey, DateTime,
    Numeric, CheckConstraint, Index
)
from sqlalchemy.orm import relationship
from .database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    # set on the client side so rows never need a refresh after commit
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


# 👤 User
class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)

    feedbacks = relationship("Feedback", back_populates="author", cascade="all, delete-orphan", passive_deletes=True)


class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    # products are never deleted along with their category; the FK refuses it
    products = relationship("Product", back_populates="category", passive_deletes="all")


class Brand(TimestampMixin, Base):
    __tablename__ = "brands"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)


class Product(TimestampMixin, Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False)

    category = relationship("Category", back_populates="products")
    feedbacks = relationship("Feedback", back_populates="product", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_nonneg"),
        CheckConstraint("stock >= 0", name="ck_products_stock_nonneg"),
        Index("ix_products_category", "category_id"),
    )


class Feedback(TimestampMixin, Base):
    __tablename__ = "feedbacks"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=True)
    rating = Column(Integer, nullable=False, default=0)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)

    author = relationship("User", back_populates="feedbacks")
    product = relationship("Product", back_populates="feedbacks")

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_feedbacks_rating_range"),
        Index("ix_feedbacks_product", "product_id"),
    )
