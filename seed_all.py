"""
Master Database Seeding Script
Creates database tables and populates them with demo users and tasks
"""

from datetime import timedelta

from create_tables import create_default_admin, create_tables
from demo_data import DEMO_TASKS, DEMO_USERS
from taskboard.database import SessionLocal
from taskboard.models import Role, Task, TaskPriority, TaskStatus, User
from taskboard.services import task_store
from taskboard.utils.dates import utc_now
from taskboard.utils.security import hash_password


def seed_demo_users(db):
    """Create demo users, skipping any that already exist"""
    created = 0
    for data in DEMO_USERS:
        if db.query(User).filter(User.email == data["email"]).first():
            print(f"[SKIP] User already exists: {data['email']}")
            continue
        task_store.create_user(
            db,
            email=data["email"],
            hashed_password=hash_password(data["password"]),
            full_name=data["full_name"],
            role=Role(data["role"]),
        )
        created += 1
    print(f"[SUCCESS] Created {created} demo users")


def seed_demo_tasks(db):
    """Create demo tasks with deadlines around the current date"""
    now = utc_now()
    users = {u.email: u for u in db.query(User).all()}
    created = 0
    for data in DEMO_TASKS:
        owner = users.get(data["owner"])
        if owner is None:
            print(f"[SKIP] Unknown owner for task '{data['title']}': {data['owner']}")
            continue
        if db.query(Task).filter(Task.user_id == owner.id, Task.title == data["title"]).first():
            print(f"[SKIP] Task already exists: {data['title']}")
            continue

        task = Task(
            user_id=owner.id,
            title=data["title"],
            description=data["description"],
            status=TaskStatus(data["status"]),
            priority=TaskPriority(data["priority"]),
            deadline=now + timedelta(days=data["deadline_offset_days"]),
        )
        if task.status == TaskStatus.COMPLETED:
            task.completed_at = now + timedelta(days=data["completed_offset_days"])
        db.add(task)
        created += 1
    db.commit()
    print(f"[SUCCESS] Created {created} demo tasks")


def main():
    print("=" * 60)
    print("Seeding Taskboard database")
    print("=" * 60)

    create_tables()
    create_default_admin()

    db = SessionLocal()
    try:
        seed_demo_users(db)
        seed_demo_tasks(db)
    finally:
        db.close()

    print("\nDemo accounts use the password 'password123'")


if __name__ == "__main__":
    main()
