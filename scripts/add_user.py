import argparse
import sys

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from growtrack.auth import hash_password
from growtrack.config import get_settings
from growtrack.models import User


def main():
    parser = argparse.ArgumentParser(description="Add a new user account to Growtrack")
    parser.add_argument("--email", required=True, help="Login email")
    parser.add_argument("--password", required=True, help="Initial password")
    parser.add_argument("--name", help="Display name (optional)")

    args = parser.parse_args()

    settings = get_settings()
    engine = create_engine(settings.database_url)
    Session = sessionmaker(bind=engine)
    session = Session()

    try:
        email = args.email.strip().lower()
        existing = session.query(User).filter(User.email == email).first()
        if existing:
            print(f"User '{email}' already exists.")
            return 1

        user = User(
            email=email,
            name=args.name,
            password_hash=hash_password(args.password),
            is_active=True,
        )
        session.add(user)
        session.commit()

        print("\nUser created")
        print("--------------------------------")
        print(f"Id:    {user.id}")
        print(f"Email: {user.email}")
        print(f"Name:  {user.name or '-'}")
        print("--------------------------------")
        return 0
    except Exception as e:
        print(f"Error: {e}")
        session.rollback()
        return 1
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
