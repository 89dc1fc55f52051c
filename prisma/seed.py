#!/usr/bin/env python3
import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import jwt

# Add the project root to Python path so we can import taskauthz
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from prisma import Prisma  # noqa: E402
from taskauthz.core.settings import settings  # noqa: E402
from taskauthz.shared.permissions import DEFAULT_ROLE, Role  # noqa: E402


async def get_or_create_organization(
    prisma: Prisma, name: str, parent_id: int | None = None
) -> int:
    """Create an organization by name unless it already exists."""
    existing = await prisma.organization.find_first(where={"name": name})
    if existing:
        print(f"ℹ️ Organization already exists: {name} ({existing.id})")
        return existing.id

    data = {"name": name, "level": 0 if parent_id is None else 1}
    if parent_id is not None:
        data["parentId"] = parent_id
    organization = await prisma.organization.create(data=data)
    print(f"✅ Created organization: {name} ({organization.id})")
    return organization.id


async def get_or_create_user(
    prisma: Prisma,
    email: str,
    display_name: str,
    org_id: int,
    role: Role = DEFAULT_ROLE,
) -> int:
    existing = await prisma.user.find_unique(where={"email": email})
    if existing:
        print(f"ℹ️ User already exists: {email}")
        return existing.id

    user = await prisma.user.create(
        data={
            "email": email,
            "displayName": display_name,
            "role": role.value,
            "orgId": org_id,
        }
    )
    print(f"✅ Created user: {email} ({role.value})")
    return user.id


def issue_dev_token(user_id: int, role: Role, org_id: int, email: str) -> str:
    """Sign a development bearer token with JWT_SECRET."""
    payload = {
        "sub": str(user_id),
        "role": role.value,
        "orgId": org_id,
        "email": email,
        "iat": datetime.now(timezone.utc),
        "exp": datetime.now(timezone.utc) + timedelta(days=7),
    }
    return jwt.encode(payload, settings.JWT_SECRET or "", algorithm="HS256")


async def main():
    print("🌱 Starting database seed...")

    prisma = Prisma()
    await prisma.connect()

    try:
        root_id = await get_or_create_organization(prisma, "Root HQ")
        child_a_id = await get_or_create_organization(
            prisma, "Child Division A", parent_id=root_id
        )
        child_b_id = await get_or_create_organization(
            prisma, "Child Division B", parent_id=root_id
        )

        users = [
            ("owner@test.com", "Owner User", Role.Owner, root_id),
            ("adminA@test.com", "Admin A", Role.Admin, child_a_id),
            ("viewerB@test.com", "Viewer B", Role.Viewer, child_b_id),
        ]

        print("\n📋 Logins you can now use:")
        for email, display_name, role, org_id in users:
            user_id = await get_or_create_user(
                prisma, email, display_name, org_id, role
            )
            if settings.JWT_SECRET:
                token = issue_dev_token(user_id, role, org_id, email)
                print(f"   {role.value:<7} {email:<18} Bearer {token}")
            else:
                print(f"   {role.value:<7} {email:<18} (set JWT_SECRET to print a token)")

        print("\n🎉 Seed complete")
    except Exception as e:
        print(f"❌ Seed failed: {e}")
        raise
    finally:
        await prisma.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
