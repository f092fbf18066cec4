from datetime import date

import pytest
from pytest import raises

from weddingapp import crud, models, schemas
from weddingapp.db import Store
from weddingapp.errors import ConflictError, NotFoundError


def test_create_user_hashes_password(db_session):
    user = crud.create_user(db_session, "Alice", "alice@example.com", "secret")
    assert user.id is not None
    assert user.password_hash != "secret"
    assert crud.authenticate_user(db_session, "alice@example.com", "secret").id == user.id


def test_duplicate_email_conflict(db_session):
    crud.create_user(db_session, "Alice", "alice@example.com", "secret")
    with raises(ConflictError):
        crud.create_user(db_session, "Alice Again", "alice@example.com", "other")


def test_user_and_admin_emails_are_separate_namespaces(db_session):
    crud.create_user(db_session, "Sam", "sam@example.com", "userpass")
    admin = crud.create_admin(db_session, "Sam", "sam@example.com", "adminpass")
    assert admin.role == "admin"
    assert crud.authenticate_admin(db_session, "sam@example.com", "userpass") is None
    assert crud.authenticate_user(db_session, "sam@example.com", "adminpass") is None


def test_authenticate_unknown_email(db_session):
    assert crud.authenticate_user(db_session, "nobody@example.com", "secret") is None


def test_events_ordered_by_date_and_owner_scoped(db_session):
    alice = crud.create_user(db_session, "Alice", "alice@example.com", "a")
    bob = crud.create_user(db_session, "Bob", "bob@example.com", "b")
    crud.create_event(db_session, alice.id, schemas.EventWrite(event_name="Reception", event_date=date(2027, 9, 1)))
    crud.create_event(db_session, alice.id, schemas.EventWrite(event_name="Rehearsal", event_date=date(2027, 6, 1)))
    bob_event = crud.create_event(db_session, bob.id, schemas.EventWrite(event_name="Bob's", event_date=date(2027, 1, 1)))

    names = [e.event_name for e in crud.list_events(db_session, alice.id)]
    assert names == ["Rehearsal", "Reception"]

    assert crud.get_event(db_session, alice.id, bob_event.id) is None
    assert crud.cancel_event(db_session, alice.id, bob_event.id) is False
    assert crud.delete_event(db_session, alice.id, bob_event.id) is False


def test_cancel_twice_still_matches(db_session):
    user = crud.create_user(db_session, "Alice", "alice@example.com", "a")
    event = crud.create_event(db_session, user.id, schemas.EventWrite(event_name="Ceremony", event_date=date(2027, 6, 12)))
    assert crud.cancel_event(db_session, user.id, event.id) is True
    assert crud.cancel_event(db_session, user.id, event.id) is True
    assert crud.get_event(db_session, user.id, event.id).status == "cancelled"


def test_vendor_defaults(db_session):
    vendor = crud.create_vendor(db_session, schemas.VendorWrite(name="Blooms", category="Florist"))
    assert vendor.contact_info == ""
    assert vendor.price_range == ""
    assert vendor.rating == 0


def test_booking_for_unknown_vendor(db_session):
    user = crud.create_user(db_session, "Alice", "alice@example.com", "a")
    with raises(NotFoundError):
        crud.create_booking(db_session, user.id, schemas.BookingCreate(vendor_id=999, booking_date=date(2027, 6, 12)))


def _application(db_session, phone="555-0100"):
    return crud.create_application(
        db_session,
        schemas.VendorApplicationCreate(
            name="Pat", email="pat@example.com", phone=phone, category="Photography", business_name="Pat Photo",
        ),
    )


def test_approve_creates_one_vendor(db_session):
    application = _application(db_session)
    vendor = crud.approve_application(db_session, application.id, "looks good")

    assert vendor.name == "Pat Photo"
    assert vendor.category == "Photography"
    assert vendor.contact_info == "Email: pat@example.com, Phone: 555-0100"
    assert vendor.price_range == "Contact for pricing"
    assert vendor.rating == 0

    db_session.refresh(application)
    assert application.status == "approved"
    assert application.admin_notes == "looks good"
    assert db_session.query(models.Vendor).count() == 1


def test_approve_without_phone(db_session):
    application = _application(db_session, phone=None)
    vendor = crud.approve_application(db_session, application.id)
    assert vendor.contact_info == "Email: pat@example.com"


def test_reapprove_is_refused_and_creates_no_duplicate(db_session):
    application = _application(db_session)
    crud.approve_application(db_session, application.id)
    with raises(ConflictError):
        crud.approve_application(db_session, application.id)
    assert db_session.query(models.Vendor).count() == 1


def test_rejected_application_can_still_be_approved(db_session):
    application = _application(db_session)
    assert crud.update_application_status(db_session, application.id, "rejected", "incomplete portfolio")
    crud.approve_application(db_session, application.id)
    assert db_session.query(models.Vendor).count() == 1


def test_approve_unknown_application(db_session):
    with raises(NotFoundError):
        crud.approve_application(db_session, 12345)


@pytest.mark.parametrize("unread,read", [(3, 2), (0, 1)])
def test_stats_counts(db_session, unread, read):
    for i in range(unread + read):
        crud.create_message(db_session, schemas.ContactCreate(name=f"Guest {i}", email="guest@example.com", message="Hello"))
    for message in crud.list_messages(db_session)[:read]:
        crud.update_message_status(db_session, message.id, "read")

    stats = crud.get_stats(db_session)
    assert stats["unreadMessages"] == unread
    assert stats["totalUsers"] == 0
    assert stats["pendingApplications"] == 0


def test_approve_from_stale_session_creates_no_duplicate(tmp_path):
    store = Store(f"sqlite:///{tmp_path / 'approvals.db'}")
    store.open()
    first = store.session_factory()
    second = store.session_factory()
    try:
        application = _application(first)
        # the second session loads the row while it is still pending
        stale = second.get(models.VendorApplication, application.id)
        assert stale.status == "pending"

        crud.approve_application(first, application.id)
        with raises(ConflictError):
            crud.approve_application(second, application.id)
        assert first.query(models.Vendor).count() == 1
    finally:
        first.close()
        second.close()
        store.close()
