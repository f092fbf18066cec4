from weddingapp import models


def _message(client, i=0, **extra):
    body = {"name": f"Guest {i}", "email": "guest@example.com", "message": "When are you free?", **extra}
    r = client.post("/api/contact", json=body)
    assert r.status_code == 201
    return r.json()["messageId"]


def _application(client, **extra):
    body = {
        "name": "Pat",
        "email": "pat@example.com",
        "phone": "555-0100",
        "category": "Photography",
        "business_name": "Pat Photo",
        **extra,
    }
    r = client.post("/api/vendor-application", json=body)
    assert r.status_code == 201
    return r.json()["applicationId"]


def test_contact_requires_fields(client):
    r = client.post("/api/contact", json={"name": "Guest", "email": "guest@example.com"})
    assert r.status_code == 400
    assert "message" in r.json()["error"]


def test_contact_strips_markup(client, admin_headers):
    _message(client, message="<b>Hi</b> there<script>x</script>", subject="<i>Dates</i>")
    stored = client.get("/api/admin/messages", headers=admin_headers).json()[0]
    assert "<" not in stored["message"]
    assert stored["subject"] == "Dates"
    assert stored["status"] == "unread"


def test_contact_keeps_plain_text_as_typed(client, admin_headers):
    _message(client, message="budget < 5k & venue", subject="Q&A")
    stored = client.get("/api/admin/messages", headers=admin_headers).json()[0]
    assert stored["message"] == "budget < 5k & venue"
    assert stored["subject"] == "Q&A"


def test_message_status_updates(client, admin_headers):
    first = _message(client, 1)
    second = _message(client, 2)
    r = client.patch(f"/api/admin/messages/{first}", json={"status": "replied"}, headers=admin_headers)
    assert r.status_code == 200

    messages = client.get("/api/admin/messages", headers=admin_headers).json()
    assert [m["id"] for m in messages] == [second, first]
    assert messages[1]["status"] == "replied"

    assert client.patch(f"/api/admin/messages/{first}", json={"status": "archived"}, headers=admin_headers).status_code == 400
    assert client.patch("/api/admin/messages/999", json={"status": "read"}, headers=admin_headers).status_code == 404


def test_stats_match_status_predicates(client, register, admin_headers, vendor_id):
    user = register()
    for i in range(5):
        _message(client, i)
    ids = [m["id"] for m in client.get("/api/admin/messages", headers=admin_headers).json()]
    for mid in ids[:2]:
        client.patch(f"/api/admin/messages/{mid}", json={"status": "read"}, headers=admin_headers)

    _application(client)
    rejected = _application(client, business_name="Other")
    client.patch(f"/api/admin/vendor-applications/{rejected}", json={"status": "rejected"}, headers=admin_headers)

    client.post(
        "/api/bookings",
        json={"vendor_id": vendor_id, "booking_date": "2027-06-12"},
        headers={"Authorization": f"Bearer {user['token']}"},
    )

    r = client.get("/api/admin/stats", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {
        "totalUsers": 1,
        "totalBookings": 1,
        "totalVendors": 1,
        "unreadMessages": 3,
        "pendingApplications": 1,
    }


def test_application_defaults(client, admin_headers):
    _application(client, phone=None)
    app = client.get("/api/admin/vendor-applications", headers=admin_headers).json()[0]
    assert app["status"] == "pending"
    assert app["phone"] == ""
    assert app["experience_years"] == 0
    assert app["portfolio_url"] == ""


def test_application_status_update(client, admin_headers):
    aid = _application(client)
    r = client.patch(f"/api/admin/vendor-applications/{aid}", json={"status": "rejected", "admin_notes": "No portfolio"}, headers=admin_headers)
    assert r.status_code == 200
    app = client.get("/api/admin/vendor-applications", headers=admin_headers).json()[0]
    assert app["status"] == "rejected"
    assert app["admin_notes"] == "No portfolio"

    assert client.patch("/api/admin/vendor-applications/999", json={"status": "rejected"}, headers=admin_headers).status_code == 404
    assert client.patch(f"/api/admin/vendor-applications/{aid}", json={}, headers=admin_headers).status_code == 400


def test_approve_application_creates_vendor(client, db_session, admin_headers):
    aid = _application(client)
    r = client.post(f"/api/admin/vendor-applications/{aid}/approve", json={"admin_notes": "Welcome"}, headers=admin_headers)
    assert r.status_code == 200
    vendor_id = r.json()["vendorId"]

    vendors = client.get("/api/vendors").json()
    assert len(vendors) == 1
    assert vendors[0]["id"] == vendor_id
    assert vendors[0]["name"] == "Pat Photo"
    assert vendors[0]["category"] == "Photography"
    assert vendors[0]["price_range"] == "Contact for pricing"
    assert vendors[0]["rating"] == 0

    app = client.get("/api/admin/vendor-applications", headers=admin_headers).json()[0]
    assert app["status"] == "approved"
    assert app["admin_notes"] == "Welcome"


def test_reapprove_is_blocked(client, db_session, admin_headers):
    # approving twice used to insert a second vendor; it is now refused
    aid = _application(client)
    assert client.post(f"/api/admin/vendor-applications/{aid}/approve", headers=admin_headers).status_code == 200
    again = client.post(f"/api/admin/vendor-applications/{aid}/approve", headers=admin_headers)
    assert again.status_code == 400
    assert again.json()["error"] == "Application already approved"
    assert db_session.query(models.Vendor).count() == 1


def test_approved_vendor_with_ampersand_is_found_by_category(client, admin_headers):
    aid = _application(client, category="Food & Catering", business_name="Tom & Jerry Cakes")
    assert client.post(f"/api/admin/vendor-applications/{aid}/approve", headers=admin_headers).status_code == 200

    vendors = client.get("/api/vendors", params={"category": "Food & Catering"}).json()
    assert len(vendors) == 1
    assert vendors[0]["name"] == "Tom & Jerry Cakes"
    assert vendors[0]["category"] == "Food & Catering"


def test_approve_unknown_application(client, admin_headers):
    r = client.post("/api/admin/vendor-applications/999/approve", json={}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Application not found"


def test_admin_routes_require_token(client):
    for path in ("/api/admin/stats", "/api/admin/bookings", "/api/admin/vendors", "/api/admin/messages", "/api/admin/vendor-applications"):
        assert client.get(path).status_code == 401


def test_unknown_route_uses_error_shape(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert "error" in r.json()
