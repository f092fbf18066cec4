from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, PositiveInt
from pydantic.config import ConfigDict

BookingStatus = Literal["pending", "approved", "rejected"]
MessageStatus = Literal["unread", "read", "replied"]
ApplicationStatus = Literal["pending", "approved", "rejected"]


# -------------------- Auth --------------------
class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserPublic(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserProfile(UserPublic):
    created_at: datetime


class AdminPublic(BaseModel):
    id: int
    name: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserPublic


class AdminAuthResponse(BaseModel):
    message: str
    token: str
    admin: AdminPublic


# -------------------- Events --------------------
class EventWrite(BaseModel):
    """Body of both create and full update."""
    event_name: str = Field(..., min_length=1, max_length=200)
    event_date: date
    event_time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


class EventRead(BaseModel):
    id: int
    user_id: int
    event_name: str
    event_date: date
    event_time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# -------------------- Vendors --------------------
class VendorWrite(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    contact_info: Optional[str] = None
    price_range: Optional[str] = None
    # free-form, no range check server side
    rating: Optional[float] = None


class VendorRead(BaseModel):
    id: int
    name: str
    category: str
    contact_info: Optional[str] = None
    price_range: Optional[str] = None
    rating: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# -------------------- Bookings --------------------
class BookingCreate(BaseModel):
    vendor_id: PositiveInt
    booking_date: date
    notes: Optional[str] = None


class BookingRead(BaseModel):
    id: int
    user_id: int
    vendor_id: int
    booking_date: date
    status: str
    notes: Optional[str] = None
    created_at: datetime
    vendor_name: str
    category: str


class AdminBookingRead(BookingRead):
    user_name: str
    user_email: str


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


# -------------------- Contact messages --------------------
class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    subject: Optional[str] = None
    message: str = Field(..., min_length=1)


class MessageRead(BaseModel):
    id: int
    name: str
    email: str
    subject: Optional[str] = None
    message: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageStatusUpdate(BaseModel):
    status: MessageStatus


# -------------------- Vendor applications --------------------
class VendorApplicationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    category: str = Field(..., min_length=1, max_length=100)
    business_name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    experience_years: Optional[int] = Field(default=None, ge=0)
    portfolio_url: Optional[str] = None


class ApplicationRead(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    category: str
    business_name: str
    description: Optional[str] = None
    experience_years: Optional[int] = None
    portfolio_url: Optional[str] = None
    status: str
    admin_notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus
    admin_notes: Optional[str] = None


class ApproveRequest(BaseModel):
    admin_notes: Optional[str] = None


# -------------------- Admin dashboard --------------------
class Stats(BaseModel):
    totalUsers: int
    totalBookings: int
    totalVendors: int
    unreadMessages: int
    pendingApplications: int
