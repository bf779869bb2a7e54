"""
Create an operator account from the command line.

Usage:
    python create_admin.py supervisor 'S3cret-pass' --admin
"""

import argparse
import sys

from pydantic import ValidationError as SchemaValidationError

from bodega.fastapi.core.exceptions import DomainError
from bodega.fastapi.crud.operator import create_operator
from bodega.fastapi.dependencies.database import SessionLocal, init_db
from bodega.fastapi.schemas.operator import OperatorCreate


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create an operator account.")
    parser.add_argument("username", help="Login name (3-50 characters)")
    parser.add_argument("password", help="Password (minimum 8 characters)")
    parser.add_argument("--admin", action="store_true",
                        help="Grant access to metrics and clearing records")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        operator_data = OperatorCreate(username=args.username, password=args.password, is_admin=args.admin)
    except SchemaValidationError as e:
        print(f"Invalid account data: {e}", file=sys.stderr)
        return 2

    init_db()
    db = SessionLocal()
    try:
        operator = create_operator(db, operator_data)
    except DomainError as e:
        print(f"Error creating operator: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created {operator.role} '{operator.username}' (id {operator.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
