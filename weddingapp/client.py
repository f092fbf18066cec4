"""Python client for the wedding planner API.

Each API group attaches the right bearer token (user or admin), sends JSON,
and either returns the decoded body or raises :class:`ApiError` with the
server's message. Successful logins persist the token and the public profile
in a :class:`Storage`; logouts clear them. Subscribers registered on
:class:`AuthEvents` are told about every login and logout.
"""
import json
import logging
import os
from typing import Any, Callable, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "authToken"
USER_KEY = "user"
ADMIN_TOKEN_KEY = "adminToken"
ADMIN_USER_KEY = "adminUser"

NETWORK_ERROR = "Unable to reach the server. Please check your connection."


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# -------------------- Storage --------------------
class MemoryStorage:
    """Key/value storage holding plaintext JSON strings."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage(MemoryStorage):
    """Same as MemoryStorage, persisted to a JSON file after every change."""

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as fh:
                self._data = json.load(fh)

    def _flush(self) -> None:
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(self._data, fh)

    def set_item(self, key: str, value: str) -> None:
        super().set_item(key, value)
        self._flush()

    def remove_item(self, key: str) -> None:
        super().remove_item(key)
        self._flush()


# -------------------- Auth-state observer --------------------
AuthListener = Callable[[str, Optional[dict]], None]


class AuthEvents:
    """Notifies listeners with ``(kind, profile)`` on login, ``(kind, None)`` on logout."""

    def __init__(self):
        self._listeners: List[AuthListener] = []

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, kind: str, profile: Optional[dict]) -> None:
        for listener in list(self._listeners):
            listener(kind, profile)


# -------------------- Transport --------------------
class ApiClient:
    def __init__(self, base_url: str, storage: Optional[MemoryStorage] = None, session=None, auth_events: Optional[AuthEvents] = None):
        self.base_url = base_url.rstrip("/")
        self.storage = storage if storage is not None else MemoryStorage()
        # anything with a requests-style .request(); fastapi's TestClient qualifies
        self.session = session if session is not None else requests.Session()
        self.auth_events = auth_events if auth_events is not None else AuthEvents()

        self.auth = AuthAPI(self)
        self.events = EventsAPI(self)
        self.vendors = VendorsAPI(self)
        self.bookings = BookingsAPI(self)
        self.contact = ContactAPI(self)
        self.vendor_applications = VendorApplicationAPI(self)
        self.admin = AdminAPI(self)

    def request(self, method: str, endpoint: str, token_key: Optional[str] = AUTH_TOKEN_KEY, json_body: Any = None, params: Optional[dict] = None) -> Any:
        headers = {"Content-Type": "application/json"}
        token = self.storage.get_item(token_key) if token_key else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{endpoint}",
                json=json_body,
                params=params,
                headers=headers,
            )
        except requests.RequestException as e:
            logger.warning("request %s %s failed: %s", method, endpoint, e)
            raise ApiError(NETWORK_ERROR) from e

        if not 200 <= response.status_code < 300:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            message = error_data.get("error") if isinstance(error_data, dict) else None
            raise ApiError(message or f"HTTP error! status: {response.status_code}", response.status_code)
        return response.json()

    # session state helpers
    def _store_json(self, key: str, value: Any) -> None:
        self.storage.set_item(key, json.dumps(value))

    def _load_json(self, key: str) -> Any:
        raw = self.storage.get_item(key)
        return json.loads(raw) if raw else None

    def is_authenticated(self) -> bool:
        return bool(self.storage.get_item(AUTH_TOKEN_KEY))

    def is_admin_authenticated(self) -> bool:
        return bool(self.storage.get_item(ADMIN_TOKEN_KEY))

    def stored_user(self) -> Optional[dict]:
        return self._load_json(USER_KEY)

    def stored_admin(self) -> Optional[dict]:
        return self._load_json(ADMIN_USER_KEY)


class _Group:
    token_key = AUTH_TOKEN_KEY

    def __init__(self, client: ApiClient):
        self.client = client

    def _call(self, method: str, endpoint: str, body: Any = None, params: Optional[dict] = None) -> Any:
        return self.client.request(method, endpoint, self.token_key, body, params)


class AuthAPI(_Group):
    def _remember(self, response: dict) -> dict:
        if response.get("token"):
            self.client.storage.set_item(AUTH_TOKEN_KEY, response["token"])
            self.client._store_json(USER_KEY, response.get("user"))
            self.client.auth_events.notify("user", response.get("user"))
        return response

    def register(self, name: str, email: str, password: str) -> dict:
        return self._remember(self._call("POST", "/auth/register", {"name": name, "email": email, "password": password}))

    def login(self, email: str, password: str) -> dict:
        return self._remember(self._call("POST", "/auth/login", {"email": email, "password": password}))

    def logout(self) -> None:
        self.client.storage.remove_item(AUTH_TOKEN_KEY)
        self.client.storage.remove_item(USER_KEY)
        self.client.auth_events.notify("user", None)

    def get_profile(self) -> dict:
        return self._call("GET", "/user/profile")


class EventsAPI(_Group):
    def create_event(self, event_name: str, event_date: str, event_time: Optional[str] = None, location: Optional[str] = None, description: Optional[str] = None) -> dict:
        body = {"event_name": event_name, "event_date": event_date, "event_time": event_time, "location": location, "description": description}
        return self._call("POST", "/events", body)

    def update_event(self, event_id: int, event_name: str, event_date: str, event_time: Optional[str] = None, location: Optional[str] = None, description: Optional[str] = None) -> dict:
        body = {"event_name": event_name, "event_date": event_date, "event_time": event_time, "location": location, "description": description}
        return self._call("PUT", f"/events/{event_id}", body)

    def delete_event(self, event_id: int) -> dict:
        return self._call("DELETE", f"/events/{event_id}")

    def cancel_event(self, event_id: int) -> dict:
        return self._call("PUT", f"/events/{event_id}/cancel")

    def get_events(self) -> list:
        return self._call("GET", "/events")

    def get_event(self, event_id: int) -> dict:
        return self._call("GET", f"/events/{event_id}")


class VendorsAPI(_Group):
    def get_vendors(self, category: Optional[str] = None) -> list:
        return self._call("GET", "/vendors", params={"category": category} if category else None)


class BookingsAPI(_Group):
    def create_booking(self, vendor_id: int, booking_date: str, notes: Optional[str] = None) -> dict:
        return self._call("POST", "/bookings", {"vendor_id": vendor_id, "booking_date": booking_date, "notes": notes})

    def get_bookings(self) -> list:
        return self._call("GET", "/bookings")


class ContactAPI(_Group):
    def send_message(self, name: str, email: str, message: str, subject: Optional[str] = None) -> dict:
        return self._call("POST", "/contact", {"name": name, "email": email, "subject": subject, "message": message})


class VendorApplicationAPI(_Group):
    def submit_application(self, **application) -> dict:
        """Fields: name, email, category, business_name and optionally phone,
        description, experience_years, portfolio_url."""
        return self._call("POST", "/vendor-application", application)


class AdminAPI(_Group):
    token_key = ADMIN_TOKEN_KEY

    def login(self, email: str, password: str) -> dict:
        # no token attached to the login call itself
        data = self.client.request("POST", "/admin/login", None, {"email": email, "password": password})
        if data.get("token"):
            self.client.storage.set_item(ADMIN_TOKEN_KEY, data["token"])
            self.client._store_json(ADMIN_USER_KEY, data.get("admin"))
            self.client.auth_events.notify("admin", data.get("admin"))
        return data

    def logout(self) -> None:
        self.client.storage.remove_item(ADMIN_TOKEN_KEY)
        self.client.storage.remove_item(ADMIN_USER_KEY)
        self.client.auth_events.notify("admin", None)

    def get_stats(self) -> dict:
        return self._call("GET", "/admin/stats")

    def get_bookings(self) -> list:
        return self._call("GET", "/admin/bookings")

    def update_booking_status(self, booking_id: int, status: str) -> dict:
        return self._call("PATCH", f"/admin/bookings/{booking_id}", {"status": status})

    def get_vendors(self) -> list:
        return self._call("GET", "/admin/vendors")

    def add_vendor(self, name: str, category: str, contact_info: Optional[str] = None, price_range: Optional[str] = None, rating: Optional[float] = None) -> dict:
        body = {"name": name, "category": category, "contact_info": contact_info, "price_range": price_range, "rating": rating}
        return self._call("POST", "/admin/vendors", body)

    def update_vendor(self, vendor_id: int, name: str, category: str, contact_info: Optional[str] = None, price_range: Optional[str] = None, rating: Optional[float] = None) -> dict:
        body = {"name": name, "category": category, "contact_info": contact_info, "price_range": price_range, "rating": rating}
        return self._call("PATCH", f"/admin/vendors/{vendor_id}", body)

    def delete_vendor(self, vendor_id: int) -> dict:
        return self._call("DELETE", f"/admin/vendors/{vendor_id}")

    def get_messages(self) -> list:
        return self._call("GET", "/admin/messages")

    def update_message_status(self, message_id: int, status: str) -> dict:
        return self._call("PATCH", f"/admin/messages/{message_id}", {"status": status})

    def get_vendor_applications(self) -> list:
        return self._call("GET", "/admin/vendor-applications")

    def update_vendor_application_status(self, application_id: int, status: str, admin_notes: Optional[str] = None) -> dict:
        return self._call("PATCH", f"/admin/vendor-applications/{application_id}", {"status": status, "admin_notes": admin_notes})

    def approve_vendor_application(self, application_id: int, admin_notes: Optional[str] = None) -> dict:
        return self._call("POST", f"/admin/vendor-applications/{application_id}/approve", {"admin_notes": admin_notes})
