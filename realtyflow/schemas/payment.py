"""
Pydantic schemas for the payment gateway bridge.
"""

from pydantic import BaseModel, Field
from decimal import Decimal


class PaymentIntentRequest(BaseModel):
    price: Decimal = Field(..., gt=0, description="Amount in major currency units", examples=[275000])


class PaymentIntentResponse(BaseModel):
    client_secret: str = Field(..., serialization_alias="clientSecret", description="Gateway authorization handle for the client")
