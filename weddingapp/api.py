"""Public and user-scoped routes, mounted under /api."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from . import auth, crud, schemas
from .auth import UserPrincipal
from .config import Settings
from .deps import current_user, get_db, get_settings
from .errors import AuthError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


# -------------------- Auth --------------------
def _user_auth_response(user, settings: Settings, message: str) -> dict:
    token = auth.user_token(user.id, user.email, settings.jwt_secret, settings.token_ttl_seconds)
    return {"message": message, "token": token, "user": schemas.UserPublic.model_validate(user)}


@router.post("/auth/register", response_model=schemas.AuthResponse, status_code=201)
async def register(payload: schemas.RegisterRequest, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    user = crud.create_user(db, payload.name, payload.email, payload.password)
    logger.info("registered user %s", user.id)
    return _user_auth_response(user, settings, "User created successfully")


@router.post("/auth/login", response_model=schemas.AuthResponse)
async def login(payload: schemas.LoginRequest, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    user = crud.authenticate_user(db, payload.email, payload.password)
    if not user:
        # unknown email and wrong password look the same to the caller
        logger.info("failed login for %s", payload.email)
        raise AuthError("Invalid credentials", 401)
    return _user_auth_response(user, settings, "Login successful")


@router.get("/user/profile", response_model=schemas.UserProfile)
async def profile(principal: UserPrincipal = Depends(current_user), db: Session = Depends(get_db)):
    user = crud.get_user(db, principal.user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


# -------------------- Events --------------------
@router.post("/events", status_code=201)
async def create_event(payload: schemas.EventWrite, principal: UserPrincipal = Depends(current_user), db: Session = Depends(get_db)):
    event = crud.create_event(db, principal.user_id, payload)
    return {"message": "Event created successfully", "eventId": event.id}


@router.get("/events", response_model=List[schemas.EventRead])
async def list_events(principal: UserPrincipal = Depends(current_user), db: Session = Depends(get_db)):
    return crud.list_events(db, principal.user_id)


@router.get("/events/{event_id}", response_model=schemas.EventRead)
async def get_event(event_id: int, principal: UserPrincipal = Depends(current_user), db: Session = Depends(get_db)):
    event = crud.get_event(db, principal.user_id, event_id)
    if not event:
        raise NotFoundError("Event not found")
    return event


@router.put("/events/{event_id}")
async def update_event(event_id: int, payload: schemas.EventWrite, principal: UserPrincipal = Depends(current_user), db: Session = Depends(get_db)):
    if not crud.update_event(db, principal.user_id, event_id, payload):
        raise NotFoundError("Event not found")
    return {"message": "Event updated successfully"}


@router.delete("/events/{event_id}")
async def delete_event(event_id: int, principal: UserPrincipal = Depends(current_user), db: Session = Depends(get_db)):
    if not crud.delete_event(db, principal.user_id, event_id):
        raise NotFoundError("Event not found")
    return {"message": "Event deleted successfully"}


@router.put("/events/{event_id}/cancel")
async def cancel_event(event_id: int, principal: UserPrincipal = Depends(current_user), db: Session = Depends(get_db)):
    if not crud.cancel_event(db, principal.user_id, event_id):
        raise NotFoundError("Event not found")
    return {"message": "Event cancelled successfully"}


# -------------------- Vendors & bookings --------------------
@router.get("/vendors", response_model=List[schemas.VendorRead])
async def list_vendors(category: Optional[str] = Query(None, max_length=100), db: Session = Depends(get_db)):
    return crud.list_vendors(db, category)


@router.post("/bookings", status_code=201)
async def create_booking(payload: schemas.BookingCreate, principal: UserPrincipal = Depends(current_user), db: Session = Depends(get_db)):
    booking = crud.create_booking(db, principal.user_id, payload)
    return {"message": "Booking created successfully", "bookingId": booking.id}


@router.get("/bookings", response_model=List[schemas.BookingRead])
async def list_bookings(principal: UserPrincipal = Depends(current_user), db: Session = Depends(get_db)):
    return crud.list_user_bookings(db, principal.user_id)


# -------------------- Public intake --------------------
@router.post("/contact", status_code=201)
async def contact(payload: schemas.ContactCreate, db: Session = Depends(get_db)):
    message = crud.create_message(db, payload)
    return {"message": "Message sent successfully! We'll get back to you soon.", "messageId": message.id}


@router.post("/vendor-application", status_code=201)
async def vendor_application(payload: schemas.VendorApplicationCreate, db: Session = Depends(get_db)):
    application = crud.create_application(db, payload)
    return {
        "message": "Vendor application submitted successfully! We'll review and get back to you soon.",
        "applicationId": application.id,
    }
