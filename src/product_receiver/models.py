from pydantic import BaseModel, Field
from typing import Any, Optional

EVENT_TYPES = (
    "product.created",
    "product.updated",
    "product.deleted",
    "product.stock.low",
    "product.stock.out",
)


class Product(BaseModel):
    """Product record carried by catalog events"""

    id: Optional[int] = None
    name: Optional[str] = None
    price: Optional[float] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    stock_quantity: Optional[int] = Field(None, alias="stockQuantity")

    class Config:
        populate_by_name = True
        extra = "allow"


class ProductEvent(BaseModel):
    """Event envelope posted to /webhooks/products"""

    event_type: Optional[str] = Field(None, alias="eventType")
    event_id: Optional[str] = Field(None, alias="eventId")
    timestamp: Optional[Any] = None  # ISO string or epoch, echoed as sent
    product: Optional[Product] = None
    metadata: Optional[str] = None

    class Config:
        populate_by_name = True
        extra = "allow"


class AckResponse(BaseModel):
    """Response for an accepted webhook"""

    received: bool = True
    event_id: Optional[str] = Field(None, alias="eventId")
    processed_at: str = Field(..., alias="processedAt")

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    """Response for GET /health"""

    status: str  # "healthy"
    webhook_secret_configured: bool = Field(..., alias="webhookSecretConfigured")
    timestamp: str

    class Config:
        populate_by_name = True


class SetSecretRequest(BaseModel):
    """Request body for POST /set-secret"""

    secret: str


class SetSecretResponse(BaseModel):
    message: str
    webhook_secret_configured: bool = Field(..., alias="webhookSecretConfigured")

    class Config:
        populate_by_name = True
