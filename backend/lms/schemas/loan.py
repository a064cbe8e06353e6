from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer
from pydantic.alias_generators import to_camel
from datetime import datetime
from decimal import Decimal
from uuid import UUID

# exact decimal string on the wire, always two places: "1500.00"
MoneyOut = Annotated[Decimal, PlainSerializer(lambda d: f"{d:.2f}", return_type=str, when_used="json")]

class LoanCreate(BaseModel):
    amount: Decimal = Field(gt=0, max_digits=18, decimal_places=2)
    applicant_name: str = Field(min_length=1, max_length=200)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class PaymentCreate(BaseModel):
    payment_amount: Decimal = Field(gt=0, max_digits=18, decimal_places=2)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class LoanOut(BaseModel):
    id: UUID
    amount: MoneyOut
    current_balance: MoneyOut
    applicant_name: str
    status: str  # active | paid
    created_at: datetime
    updated_at: datetime | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        frozen = True
