"""
Administrative commands.

    mediroster init-db
    mediroster create-user admin1 --password secret --name "Front Office" --role admin
"""

import argparse
import asyncio
import getpass

from fastapi import HTTPException

from mediroster.db.session import close_db, get_session_factory, init_db
from mediroster.services.user_service import ROLES, UserService

async def _create_user(args: argparse.Namespace) -> None:
    password = args.password or getpass.getpass("Password: ")
    async with get_session_factory()() as session:
        user = await UserService(session).create_user(
            username=args.username,
            password=password,
            name=args.name or args.username,
            role=args.role,
            email=args.email,
        )
    print(f"Created {user.role} user {user.username} ({user.id})")

async def _run(args: argparse.Namespace) -> None:
    try:
        if args.command == "init-db":
            await init_db()
        elif args.command == "create-user":
            await _create_user(args)
    finally:
        await close_db()

def main() -> None:
    parser = argparse.ArgumentParser(prog="mediroster", description="MediRoster administration")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="create database tables")

    create_user = subparsers.add_parser("create-user", help="create a login user")
    create_user.add_argument("username")
    create_user.add_argument("--password", help="prompted for when omitted")
    create_user.add_argument("--name")
    create_user.add_argument("--email")
    create_user.add_argument("--role", choices=ROLES, default="admin")

    args = parser.parse_args()
    try:
        asyncio.run(_run(args))
    except HTTPException as e:
        parser.exit(1, f"error: {e.detail}\n")

if __name__ == "__main__":
    main()
