"""Admin back-office routes, mounted under /api/admin.

Every route except login requires an admin token whose role is ``admin``.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from . import auth, crud, schemas
from .config import Settings
from .deps import current_admin, get_db, get_settings
from .errors import AuthError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()
guarded = APIRouter(dependencies=[Depends(current_admin)])


@router.post("/login", response_model=schemas.AdminAuthResponse)
async def admin_login(payload: schemas.LoginRequest, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    admin = crud.authenticate_admin(db, payload.email, payload.password)
    if not admin:
        logger.warning("failed admin login for %s", payload.email)
        raise AuthError("Invalid credentials", 401)
    logger.info("admin login: %s", admin.email)
    token = auth.admin_token(admin.id, admin.email, admin.role, settings.jwt_secret, settings.token_ttl_seconds)
    return {"message": "Admin login successful", "token": token, "admin": schemas.AdminPublic.model_validate(admin)}


@guarded.get("/stats", response_model=schemas.Stats)
async def stats(db: Session = Depends(get_db)):
    return crud.get_stats(db)


# -------------------- Bookings --------------------
@guarded.get("/bookings", response_model=List[schemas.AdminBookingRead])
async def list_bookings(db: Session = Depends(get_db)):
    return crud.list_all_bookings(db)


@guarded.patch("/bookings/{booking_id}")
async def update_booking(booking_id: int, payload: schemas.BookingStatusUpdate, db: Session = Depends(get_db)):
    if not crud.update_booking_status(db, booking_id, payload.status):
        raise NotFoundError("Booking not found")
    return {"message": "Booking status updated successfully"}


# -------------------- Vendors --------------------
@guarded.get("/vendors", response_model=List[schemas.VendorRead])
async def list_vendors(db: Session = Depends(get_db)):
    return crud.list_vendors_newest_first(db)


@guarded.post("/vendors", status_code=201)
async def create_vendor(payload: schemas.VendorWrite, db: Session = Depends(get_db)):
    vendor = crud.create_vendor(db, payload)
    return {"message": "Vendor created successfully", "vendorId": vendor.id}


@guarded.patch("/vendors/{vendor_id}")
async def update_vendor(vendor_id: int, payload: schemas.VendorWrite, db: Session = Depends(get_db)):
    if not crud.update_vendor(db, vendor_id, payload):
        raise NotFoundError("Vendor not found")
    return {"message": "Vendor updated successfully"}


@guarded.delete("/vendors/{vendor_id}")
async def delete_vendor(vendor_id: int, db: Session = Depends(get_db)):
    if not crud.delete_vendor(db, vendor_id):
        raise NotFoundError("Vendor not found")
    logger.info("vendor %s deleted", vendor_id)
    return {"message": "Vendor deleted successfully"}


# -------------------- Messages --------------------
@guarded.get("/messages", response_model=List[schemas.MessageRead])
async def list_messages(db: Session = Depends(get_db)):
    return crud.list_messages(db)


@guarded.patch("/messages/{message_id}")
async def update_message(message_id: int, payload: schemas.MessageStatusUpdate, db: Session = Depends(get_db)):
    if not crud.update_message_status(db, message_id, payload.status):
        raise NotFoundError("Message not found")
    return {"message": "Message status updated successfully"}


# -------------------- Vendor applications --------------------
@guarded.get("/vendor-applications", response_model=List[schemas.ApplicationRead])
async def list_applications(db: Session = Depends(get_db)):
    return crud.list_applications(db)


@guarded.patch("/vendor-applications/{application_id}")
async def update_application(application_id: int, payload: schemas.ApplicationStatusUpdate, db: Session = Depends(get_db)):
    if not crud.update_application_status(db, application_id, payload.status, payload.admin_notes):
        raise NotFoundError("Application not found")
    return {"message": "Application status updated successfully"}


@guarded.post("/vendor-applications/{application_id}/approve")
async def approve_application(
    application_id: int,
    payload: Optional[schemas.ApproveRequest] = Body(default=None),
    db: Session = Depends(get_db),
):
    notes = payload.admin_notes if payload else None
    vendor = crud.approve_application(db, application_id, notes)
    return {"message": "Application approved and vendor created successfully", "vendorId": vendor.id}


router.include_router(guarded)
