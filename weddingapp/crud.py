"""One function per statement.

Mutations on owner-scoped rows filter on the caller's id as well as the row
id, so a row owned by someone else is indistinguishable from a missing one.
Update and delete helpers return whether a row matched.
"""
import logging
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from . import auth, models, schemas
from .errors import ConflictError, NotFoundError, StoreError
from .utils import clean_text

logger = logging.getLogger(__name__)

APPROVED_VENDOR_PRICE_RANGE = "Contact for pricing"


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("commit failed")
        raise StoreError() from e


def _execute_rowcount(db: Session, stmt) -> bool:
    try:
        result = db.execute(stmt.execution_options(synchronize_session=False))
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("statement failed")
        raise StoreError() from e
    _commit(db)
    return result.rowcount > 0


# -------------------- Users --------------------
def get_user(db: Session, user_id: int) -> models.User | None:
    return db.get(models.User, user_id)


def get_user_by_email(db: Session, email: str) -> models.User | None:
    return db.query(models.User).filter(models.User.email == email).first()


def create_user(db: Session, name: str, email: str, password: str) -> models.User:
    if get_user_by_email(db, email):
        raise ConflictError("User already exists")
    db_user = models.User(name=name, email=email, password_hash=auth.hash_password(password))
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError as e:
        # lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("User already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("creating user failed")
        raise StoreError() from e
    db.refresh(db_user)
    return db_user


def authenticate_user(db: Session, email: str, password: str) -> models.User | None:
    user = get_user_by_email(db, email)
    if not user:
        auth.dummy_verify()
        return None
    if not auth.verify_password(password, user.password_hash):
        return None
    return user


# -------------------- Admins --------------------
def get_admin_by_email(db: Session, email: str) -> models.AdminUser | None:
    return db.query(models.AdminUser).filter(models.AdminUser.email == email).first()


def create_admin(db: Session, name: str, email: str, password: str, role: str = "admin") -> models.AdminUser:
    if get_admin_by_email(db, email):
        raise ConflictError("Admin already exists")
    admin = models.AdminUser(name=name, email=email, password_hash=auth.hash_password(password), role=role)
    db.add(admin)
    _commit(db)
    db.refresh(admin)
    return admin


def authenticate_admin(db: Session, email: str, password: str) -> models.AdminUser | None:
    admin = get_admin_by_email(db, email)
    if not admin:
        auth.dummy_verify()
        return None
    if not auth.verify_password(password, admin.password_hash):
        return None
    return admin


# -------------------- Events --------------------
def create_event(db: Session, user_id: int, event: schemas.EventWrite) -> models.WeddingEvent:
    db_event = models.WeddingEvent(user_id=user_id, **event.model_dump())
    db.add(db_event)
    _commit(db)
    db.refresh(db_event)
    return db_event


def list_events(db: Session, user_id: int) -> List[models.WeddingEvent]:
    return (
        db.query(models.WeddingEvent)
        .filter(models.WeddingEvent.user_id == user_id)
        .order_by(models.WeddingEvent.event_date.asc(), models.WeddingEvent.id.asc())
        .all()
    )


def get_event(db: Session, user_id: int, event_id: int) -> models.WeddingEvent | None:
    return (
        db.query(models.WeddingEvent)
        .filter(models.WeddingEvent.id == event_id, models.WeddingEvent.user_id == user_id)
        .first()
    )


def update_event(db: Session, user_id: int, event_id: int, event: schemas.EventWrite) -> bool:
    stmt = (
        update(models.WeddingEvent)
        .where(models.WeddingEvent.id == event_id, models.WeddingEvent.user_id == user_id)
        .values(**event.model_dump())
    )
    return _execute_rowcount(db, stmt)


def cancel_event(db: Session, user_id: int, event_id: int) -> bool:
    # no way back to 'active'; cancelling twice still matches the row
    stmt = (
        update(models.WeddingEvent)
        .where(models.WeddingEvent.id == event_id, models.WeddingEvent.user_id == user_id)
        .values(status="cancelled")
    )
    return _execute_rowcount(db, stmt)


def delete_event(db: Session, user_id: int, event_id: int) -> bool:
    stmt = delete(models.WeddingEvent).where(
        models.WeddingEvent.id == event_id, models.WeddingEvent.user_id == user_id
    )
    return _execute_rowcount(db, stmt)


# -------------------- Vendors --------------------
def list_vendors(db: Session, category: Optional[str] = None) -> List[models.Vendor]:
    query = db.query(models.Vendor)
    if category:
        query = query.filter(models.Vendor.category == category)
    return query.order_by(models.Vendor.rating.desc(), models.Vendor.id.asc()).all()


def list_vendors_newest_first(db: Session) -> List[models.Vendor]:
    return db.query(models.Vendor).order_by(models.Vendor.created_at.desc(), models.Vendor.id.desc()).all()


def get_vendor(db: Session, vendor_id: int) -> models.Vendor | None:
    return db.get(models.Vendor, vendor_id)


def _vendor_values(vendor: schemas.VendorWrite) -> dict:
    return {
        "name": vendor.name,
        "category": vendor.category,
        "contact_info": vendor.contact_info or "",
        "price_range": vendor.price_range or "",
        "rating": vendor.rating or 0,
    }


def create_vendor(db: Session, vendor: schemas.VendorWrite) -> models.Vendor:
    db_vendor = models.Vendor(**_vendor_values(vendor))
    db.add(db_vendor)
    _commit(db)
    db.refresh(db_vendor)
    return db_vendor


def update_vendor(db: Session, vendor_id: int, vendor: schemas.VendorWrite) -> bool:
    stmt = update(models.Vendor).where(models.Vendor.id == vendor_id).values(**_vendor_values(vendor))
    return _execute_rowcount(db, stmt)


def delete_vendor(db: Session, vendor_id: int) -> bool:
    # hard delete; existing bookings keep pointing at the old id
    return _execute_rowcount(db, delete(models.Vendor).where(models.Vendor.id == vendor_id))


# -------------------- Bookings --------------------
def create_booking(db: Session, user_id: int, booking: schemas.BookingCreate) -> models.VendorBooking:
    if not get_vendor(db, booking.vendor_id):
        raise NotFoundError("Vendor not found")
    db_booking = models.VendorBooking(
        user_id=user_id,
        vendor_id=booking.vendor_id,
        booking_date=booking.booking_date,
        notes=booking.notes,
    )
    db.add(db_booking)
    _commit(db)
    db.refresh(db_booking)
    return db_booking


def _booking_rows(db: Session, stmt) -> List[dict]:
    return [dict(row._mapping) for row in db.execute(stmt)]


def list_user_bookings(db: Session, user_id: int) -> List[dict]:
    # inner join: bookings of deleted vendors drop out
    stmt = (
        select(
            models.VendorBooking.__table__,
            models.Vendor.name.label("vendor_name"),
            models.Vendor.category,
        )
        .join(models.Vendor, models.Vendor.id == models.VendorBooking.vendor_id)
        .where(models.VendorBooking.user_id == user_id)
        .order_by(models.VendorBooking.booking_date.asc(), models.VendorBooking.id.asc())
    )
    return _booking_rows(db, stmt)


def list_all_bookings(db: Session) -> List[dict]:
    stmt = (
        select(
            models.VendorBooking.__table__,
            models.Vendor.name.label("vendor_name"),
            models.Vendor.category,
            models.User.name.label("user_name"),
            models.User.email.label("user_email"),
        )
        .join(models.Vendor, models.Vendor.id == models.VendorBooking.vendor_id)
        .join(models.User, models.User.id == models.VendorBooking.user_id)
        .order_by(models.VendorBooking.created_at.desc(), models.VendorBooking.id.desc())
    )
    return _booking_rows(db, stmt)


def update_booking_status(db: Session, booking_id: int, status: str) -> bool:
    # any status can follow any other after the first decision
    stmt = update(models.VendorBooking).where(models.VendorBooking.id == booking_id).values(status=status)
    return _execute_rowcount(db, stmt)


# -------------------- Contact messages --------------------
def create_message(db: Session, message: schemas.ContactCreate) -> models.ContactMessage:
    db_message = models.ContactMessage(
        name=clean_text(message.name),
        email=message.email,
        subject=clean_text(message.subject) or "",
        message=clean_text(message.message),
    )
    db.add(db_message)
    _commit(db)
    db.refresh(db_message)
    return db_message


def list_messages(db: Session) -> List[models.ContactMessage]:
    return (
        db.query(models.ContactMessage)
        .order_by(models.ContactMessage.created_at.desc(), models.ContactMessage.id.desc())
        .all()
    )


def update_message_status(db: Session, message_id: int, status: str) -> bool:
    stmt = update(models.ContactMessage).where(models.ContactMessage.id == message_id).values(status=status)
    return _execute_rowcount(db, stmt)


# -------------------- Vendor applications --------------------
def create_application(db: Session, application: schemas.VendorApplicationCreate) -> models.VendorApplication:
    db_application = models.VendorApplication(
        name=clean_text(application.name),
        email=application.email,
        phone=clean_text(application.phone) or "",
        category=clean_text(application.category),
        business_name=clean_text(application.business_name),
        description=clean_text(application.description) or "",
        experience_years=application.experience_years or 0,
        portfolio_url=clean_text(application.portfolio_url) or "",
    )
    db.add(db_application)
    _commit(db)
    db.refresh(db_application)
    return db_application


def list_applications(db: Session) -> List[models.VendorApplication]:
    return (
        db.query(models.VendorApplication)
        .order_by(models.VendorApplication.created_at.desc(), models.VendorApplication.id.desc())
        .all()
    )


def update_application_status(db: Session, application_id: int, status: str, admin_notes: Optional[str] = None) -> bool:
    stmt = (
        update(models.VendorApplication)
        .where(models.VendorApplication.id == application_id)
        .values(status=status, admin_notes=admin_notes or "")
    )
    return _execute_rowcount(db, stmt)


def vendor_contact_info(application: models.VendorApplication) -> str:
    contact = f"Email: {application.email}"
    if application.phone:
        contact += f", Phone: {application.phone}"
    return contact


def approve_application(db: Session, application_id: int, admin_notes: Optional[str] = None) -> models.Vendor:
    """Mark the application approved and create its vendor in one commit.

    Raises NotFoundError for an unknown id and ConflictError when the
    application was already approved, so an approval never yields a second
    vendor.
    """
    application = db.get(models.VendorApplication, application_id)
    if not application:
        raise NotFoundError("Application not found")

    # the status check and the write are one statement, so two concurrent
    # approvals cannot both see a pending row
    stmt = (
        update(models.VendorApplication)
        .where(models.VendorApplication.id == application_id, models.VendorApplication.status != "approved")
        .values(status="approved", admin_notes=admin_notes or "")
    )
    try:
        result = db.execute(stmt.execution_options(synchronize_session=False))
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("approving application failed")
        raise StoreError() from e
    if result.rowcount == 0:
        db.rollback()
        raise ConflictError("Application already approved")

    vendor = models.Vendor(
        name=application.business_name,
        category=application.category,
        contact_info=vendor_contact_info(application),
        price_range=APPROVED_VENDOR_PRICE_RANGE,
        rating=0,
    )
    db.add(vendor)
    _commit(db)
    db.refresh(vendor)
    logger.info("application %s approved as vendor %s", application_id, vendor.id)
    return vendor


# -------------------- Dashboard --------------------
def _count(db: Session, model, *criteria) -> int:
    stmt = select(func.count()).select_from(model)
    if criteria:
        stmt = stmt.where(*criteria)
    return db.scalar(stmt)


def get_stats(db: Session) -> dict:
    # five separate reads, no snapshot across them
    return {
        "totalUsers": _count(db, models.User),
        "totalBookings": _count(db, models.VendorBooking),
        "totalVendors": _count(db, models.Vendor),
        "unreadMessages": _count(db, models.ContactMessage, models.ContactMessage.status == "unread"),
        "pendingApplications": _count(db, models.VendorApplication, models.VendorApplication.status == "pending"),
    }
