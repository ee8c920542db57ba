import sys
import os

# Add repo root to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../"))

from workbench.db import SessionLocal, create_tables
from workbench.models import InventoryItem, Workspace
from workbench.settings import settings

SAMPLE_INVENTORY = [
    {"name": "Maltodextrin", "unit": "kg", "cas_number": "9050-36-6", "category": "Makroelementy"},
    {"name": "Ascorbic acid", "unit": "g", "cas_number": "50-81-7", "category": "Witaminy"},
    {"name": "Magnesium citrate", "unit": "g", "cas_number": "3344-18-1", "category": "Minerały"},
    {"name": "Capsule shell", "unit": "szt.", "cas_number": None, "category": None},
]


def seed_workspace():
    print(f"Connecting to {settings.database_url}...")
    create_tables()
    session = SessionLocal()()

    try:
        workspace = session.query(Workspace).filter(Workspace.slug == settings.default_workspace_slug).first()
        if not workspace:
            workspace = Workspace(slug=settings.default_workspace_slug, name="Local Workspace")
            session.add(workspace)
            session.flush()
            print(f"Created workspace '{workspace.slug}'")

        created = 0
        for data in SAMPLE_INVENTORY:
            exists = session.query(InventoryItem).filter(
                InventoryItem.workspace_id == workspace.id,
                InventoryItem.name == data["name"],
            ).first()
            if exists:
                continue
            session.add(InventoryItem(workspace_id=workspace.id, **data))
            created += 1

        session.commit()
        print(f"Seed complete. {created} inventory items created.")

    except Exception as e:
        session.rollback()
        print(f"Error: {e}")
        raise
    finally:
        session.close()

if __name__ == "__main__":
    seed_workspace()
