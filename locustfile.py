from locust import HttpUser, task, between
import random


class CoupleUser(HttpUser):
    wait_time = between(0.1, 0.5)

    def on_start(self):
        # Register a fresh couple account for this simulated client
        n = random.randint(1, 1_000_000_000)
        r = self.client.post("/api/auth/register", json={"name": f"couple_{n}", "email": f"couple_{n}@example.com", "password": "secret"})
        self.headers = {"Authorization": f"Bearer {r.json()['token']}"} if r.status_code == 201 else None

    @task(3)
    def list_vendors(self):
        self.client.get("/api/vendors")

    @task(2)
    def create_event(self):
        if not self.headers:
            return
        day = random.randint(1, 28)
        self.client.post("/api/events", json={"event_name": "Ceremony", "event_date": f"2027-06-{day:02d}"}, headers=self.headers)

    @task(1)
    def book_vendor(self):
        if not self.headers:
            return
        vendors = self.client.get("/api/vendors").json()
        if not vendors:
            return
        vendor = random.choice(vendors)
        self.client.post("/api/bookings", json={"vendor_id": vendor["id"], "booking_date": "2027-06-15"}, headers=self.headers, name="/api/bookings")

    @task(1)
    def list_events(self):
        if self.headers:
            self.client.get("/api/events", headers=self.headers)
