"""Script to create (or promote) an admin account."""
import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from worktracker.config import settings  # noqa: E402
from worktracker.database import AsyncSessionLocal  # noqa: E402
from worktracker.services.bootstrap_service import ensure_default_admin  # noqa: E402


async def init_admin(email: str, password: str, first_name: str, last_name: str) -> None:
    """Create the admin user if it does not exist."""
    async with AsyncSessionLocal() as db:
        admin_user = await ensure_default_admin(
            db,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
        )
        print(f"✓ Admin account ready: {admin_user.email}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--email", default=settings.DEFAULT_ADMIN_EMAIL or "admin@example.com")
    parser.add_argument("--password", default=settings.DEFAULT_ADMIN_PASSWORD)
    parser.add_argument("--first-name", default="System")
    parser.add_argument("--last-name", default="Administrator")
    args = parser.parse_args()
    asyncio.run(init_admin(args.email, args.password, args.first_name, args.last_name))


if __name__ == "__main__":
    main()
