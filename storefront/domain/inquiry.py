"""
Inquiry Domain Model

Messages sent by visitors through the contact form.
"""
from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional, Literal
from datetime import datetime


InquiryStatus = Literal['new', 'read', 'replied']


class Inquiry(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: str
    status: InquiryStatus = 'new'
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['created_at'] = self.created_at.isoformat()
        if self.updated_at:
            data['updated_at'] = self.updated_at.isoformat()
        return data


class InquiryCreate(BaseModel):
    """Contact form submission"""
    name: str = Field(..., min_length=2)
    email: EmailStr
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: str = Field(..., min_length=5)


class InquiryStatusUpdate(BaseModel):
    status: InquiryStatus
