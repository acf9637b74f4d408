"""CLI for the admin service: bootstrap and recover the admin account."""
import argparse
import sys

from berry_admin.database import SessionLocal, Base, engine
from berry_admin.errors import AdminServiceError
from berry_admin.services import admin_auth
from berry_admin.services.session_store import purge_expired


def cmd_create_admin(args: argparse.Namespace) -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        admin = admin_auth.create_admin(db, args.email, args.password, args.display_name)
        print(f"Admin created: {admin.email}")
        return 0
    except AdminServiceError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()


def cmd_reset_password(args: argparse.Namespace) -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        admin = admin_auth.set_password(db, args.email, args.password)
        print(f"Password updated for: {admin.email}")
        return 0
    except AdminServiceError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()


def cmd_purge_expired(args: argparse.Namespace) -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        sessions, resets = purge_expired(db)
        print(f"Purged {sessions} sessions, {resets} reset codes")
        return 0
    except AdminServiceError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Berry Rewards admin CLI")
    sub = parser.add_subparsers(dest="cmd", required=True)

    create = sub.add_parser("create-admin", help="Create the admin account (only once)")
    create.add_argument("--email", required=True, help="Admin email")
    create.add_argument("--password", required=True, help="Admin password")
    create.add_argument("--display-name", default=None, help="Display name")
    create.set_defaults(func=cmd_create_admin)

    reset = sub.add_parser("reset-password", help="Reset admin password and drop its sessions")
    reset.add_argument("--email", required=True, help="Admin email")
    reset.add_argument("--password", required=True, help="New password")
    reset.set_defaults(func=cmd_reset_password)

    purge = sub.add_parser("purge-expired", help="Delete expired sessions and reset codes")
    purge.set_defaults(func=cmd_purge_expired)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
