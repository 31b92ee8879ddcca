# create_tables.py
import os

from taskboard.database import Base, SessionLocal, engine
from taskboard.models import Role, User
from taskboard.services import task_store
from taskboard.utils.security import hash_password

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")


def create_tables(drop_existing: bool = False):
    """Create all tables"""
    if drop_existing:
        Base.metadata.drop_all(bind=engine)
        print("Dropped existing tables")
    Base.metadata.create_all(bind=engine)
    print("All tables created successfully!")


def create_default_admin():
    """Create a default admin user"""
    db = SessionLocal()
    try:
        if db.query(User).filter(User.email == ADMIN_EMAIL).first():
            print(f"Admin user already exists: {ADMIN_EMAIL}")
            return
        task_store.create_user(
            db,
            email=ADMIN_EMAIL,
            hashed_password=hash_password(ADMIN_PASSWORD),
            full_name="System Administrator",
            role=Role.ADMIN,
        )
        print(f"Default admin created: {ADMIN_EMAIL} / {ADMIN_PASSWORD}")
    finally:
        db.close()


if __name__ == "__main__":
    create_tables(drop_existing=os.getenv("DROP_EXISTING", "false").lower() == "true")
    create_default_admin()
