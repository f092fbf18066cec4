"""
Insert the sample vendor catalogue into an empty vendors table.

Usage:
  python -m seed.seed_vendors --db sqlite:///./wedding.db
"""
import argparse
import logging

from weddingapp import crud, schemas
from weddingapp.db import Store
from weddingapp.logging_setup import setup_logging

logger = logging.getLogger(__name__)

SAMPLE_VENDORS = [
    {"name": "Elegant Events Photography", "category": "Photography", "contact_info": "contact@elegantevents.com | (555) 123-4567", "price_range": "$2000-$5000", "rating": 4.8},
    {"name": "Dream Wedding Venues", "category": "Venue", "contact_info": "info@dreamvenues.com | (555) 234-5678", "price_range": "$5000-$15000", "rating": 4.9},
    {"name": "Blissful Blooms Florist", "category": "Florist", "contact_info": "hello@blissfulblooms.com | (555) 345-6789", "price_range": "$800-$2500", "rating": 4.7},
    {"name": "Harmony Wedding Band", "category": "Entertainment", "contact_info": "book@harmonyband.com | (555) 456-7890", "price_range": "$1500-$4000", "rating": 4.6},
    {"name": "Culinary Delights Catering", "category": "Catering", "contact_info": "events@culinarydelights.com | (555) 567-8901", "price_range": "$50-$150 per person", "rating": 4.8},
    {"name": "Perfect Match DJ Services", "category": "Entertainment", "contact_info": "dj@perfectmatch.com | (555) 678-9012", "price_range": "$800-$2000", "rating": 4.5},
    {"name": "Timeless Beauty Salon", "category": "Beauty", "contact_info": "beauty@timeless.com | (555) 789-0123", "price_range": "$300-$800", "rating": 4.7},
    {"name": "Luxury Limo Service", "category": "Transportation", "contact_info": "rides@luxurylimo.com | (555) 890-1234", "price_range": "$200-$500", "rating": 4.4},
]


def seed_vendors(store: Store) -> int:
    """Return how many vendors were inserted (0 if the table was not empty)."""
    db = store.session_factory()
    try:
        if crud.list_vendors(db):
            logger.info("vendors already exist, skipping seed")
            return 0
        for vendor in SAMPLE_VENDORS:
            crud.create_vendor(db, schemas.VendorWrite(**vendor))
        logger.info("seeded %d vendors", len(SAMPLE_VENDORS))
        return len(SAMPLE_VENDORS)
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--db", default="sqlite:///./wedding.db", help="SQLAlchemy database URL")
    args = parser.parse_args()

    setup_logging()
    store = Store(args.db)
    store.open()
    try:
        seed_vendors(store)
    finally:
        store.close()


if __name__ == "__main__":
    main()
