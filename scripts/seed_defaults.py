"""
Seed the bootstrap admin and the default areas into the configured store.

Usage:
  python scripts/seed_defaults.py

This script is idempotent: the admin and the areas are only created when absent.
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Load environment variables first
from dotenv import load_dotenv
load_dotenv()

from nexus.config import settings
from nexus.logging import setup_logging
from nexus.storage import SqlDocumentStore, StoreError, build_store
from nexus.storage.gateway import PersistenceGateway


def seed_defaults():
    store = build_store(settings)
    if isinstance(store, SqlDocumentStore):
        store.create_schema()
    gateway = PersistenceGateway(store, settings)
    try:
        gateway.init()
    except StoreError as e:
        print(f"ERROR: store unavailable: {e}")
        return 1

    print(f"Users: {len(gateway.get_users())}")
    for area in gateway.get_areas():
        print(f"  - {area.id}: {area.name}")
    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(seed_defaults())
