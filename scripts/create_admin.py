#!/usr/bin/env python3
"""
Create Admin Script

Creates the database tables (if missing) and a placement-cell admin account.
Usage: python scripts/create_admin.py <email> <name> <password>
"""
import sys
sys.path.insert(0, '.')

from sqlalchemy import select

from portal.core.auth import hash_password
from portal.db.database import get_db_session, init_db
from portal.models import User


def main(argv):
    if len(argv) != 4:
        print(__doc__)
        return 1

    email, name, password = argv[1].lower(), argv[2], argv[3]
    if len(password) < 8:
        print("❌ Password must be at least 8 characters")
        return 1

    init_db()
    with get_db_session() as db:
        if db.scalar(select(User.id).where(User.email == email)):
            print(f"⚠️  {email} already exists, nothing to do")
            return 0
        db.add(User(email=email, name=name, password=hash_password(password), role="admin"))

    print(f"✅ Admin {email} created")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
