from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum
from pydantic import BaseModel as PydanticBaseModel, ConfigDict


class ProductType(str, Enum):
    ONE_TIME = "one_time"
    SUBSCRIPTION = "subscription"


class BaseModel(PydanticBaseModel):
    """Base model class for all API payloads"""
    model_config = ConfigDict(extra='ignore')

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary"""
        return self.model_dump(mode='json')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseModel':
        """Create model from dictionary"""
        return cls.model_validate(data)

    @classmethod
    def from_list(cls, items: List[Dict[str, Any]]) -> list:
        return [cls.model_validate(item) for item in items or []]


class Product(BaseModel):
    """Catalog entry; the price stays a decimal string as sent by the API"""
    id: int
    slug: str
    name: str
    description: Optional[str] = None
    price: str
    currency: str
    product_type: ProductType
    credits_granted: Optional[int] = None
    monthly_credits: Optional[int] = None


class Subscription(BaseModel):
    id: int
    user_id: Optional[int] = None
    product_id: int
    provider: Optional[str] = None
    provider_subscription_id: Optional[str] = None
    status: str
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    canceled_at: Optional[datetime] = None

    @property
    def is_canceled(self) -> bool:
        return self.status == "canceled"


class CreditsStatus(BaseModel):
    credits: int
    monthly_quota: int
    free_generation_used: bool


class UploadItem(BaseModel):
    id: int
    status: str
    original_filename: str
    cleaned_url: Optional[str] = None
    created_at: Optional[datetime] = None


class UploadResponse(BaseModel):
    message: str
    upload_id: int
    task_id: str


class AuthResponse(BaseModel):
    token: Optional[str] = None
    user_id: int
    verification_required: bool = False


class PaymentResponse(BaseModel):
    payment_url: Optional[str] = None
    transaction_id: int


class VideoFile(BaseModel):
    """Local video sent as the multipart ``file`` field of an upload"""
    filename: str
    content: bytes
    content_type: str = "video/mp4"

    @classmethod
    def from_upload(cls, uploaded) -> 'VideoFile':
        """Build from a Streamlit ``UploadedFile``."""
        return cls(
            filename=uploaded.name,
            content=uploaded.getvalue(),
            content_type=uploaded.type or "video/mp4"
        )
