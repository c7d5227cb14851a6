"""
Catalog and reference data SQLAlchemy models.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from .base import BaseModel


class CustomerModel(BaseModel):
    """Customer database model."""

    __tablename__ = "customers"

    name = Column(String(255), nullable=False)
    email = Column(String(255))
    phone = Column(String(32))

    service_locations = relationship(
        "ServiceLocationModel", back_populates="customer", cascade="all, delete-orphan"
    )


class ServiceLocationModel(BaseModel):
    """Saved service location of a customer."""

    __tablename__ = "service_locations"

    customer_id = Column(Uuid(as_uuid=True), ForeignKey("customers.id"), nullable=False, index=True)
    name = Column(String(255))
    address = Column(Text, nullable=False)
    latitude = Column(Float)
    longitude = Column(Float)
    is_default = Column(Boolean, nullable=False, default=False)

    customer = relationship("CustomerModel", back_populates="service_locations")


class ProductModel(BaseModel):
    """Rentable product type."""

    __tablename__ = "products"

    name = Column(String(255), nullable=False)
    default_price = Column(Numeric(10, 2), nullable=False, default=0)
    stock_total = Column(Integer, nullable=False, default=0)
    track_inventory = Column(Boolean, nullable=False, default=False)

    units = relationship("ProductItemModel", back_populates="product", cascade="all, delete-orphan")


class ProductItemModel(BaseModel):
    """Individually tracked unit of a product."""

    __tablename__ = "product_items"

    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id"), nullable=False, index=True)
    item_code = Column(String(64), nullable=False)
    status = Column(String(32), nullable=False, default="available")
    attributes = Column(JSON)

    product = relationship("ProductModel", back_populates="units")


class ServiceCatalogModel(BaseModel):
    """Service offered for jobs."""

    __tablename__ = "service_catalog"

    name = Column(String(255), nullable=False)
    service_code = Column(String(64))
    description = Column(Text)
    pricing_method = Column(String(32), nullable=False, default="per_visit")
    per_visit_cost = Column(Numeric(10, 2), nullable=False, default=0)
    per_hour_cost = Column(Numeric(10, 2), nullable=False, default=0)
    flat_rate_cost = Column(Numeric(10, 2), nullable=False, default=0)
    estimated_duration_hours = Column(Numeric(6, 2), nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)


class DriverModel(BaseModel):
    __tablename__ = "drivers"

    name = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)


class VehicleModel(BaseModel):
    __tablename__ = "vehicles"

    license_plate = Column(String(32), nullable=False)
    capacity = Column(Integer)
    is_active = Column(Boolean, nullable=False, default=True)
