#!/usr/bin/env python3
"""Manage the address access table from the server console.

The first administrator address has to be added here, since the HTTP
endpoints already require an administrator address.
"""

import sys
from pathlib import Path

# Add the backend root to the import path
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

from sqlmodel import Session, select

from campaign_calendar.db import engine, init_db
from campaign_calendar.models import Department
from campaign_calendar.services.access import AccessTableError
from campaign_calendar.services.permissions import load_access_table, store_access_table


def show_table():
    """Print both parts of the access table."""
    print("=" * 60)
    print("Access table")
    print("=" * 60)

    with Session(engine) as session:
        table = load_access_table(session)
        names = {str(d.id): d.name for d in session.exec(select(Department)).all()}

    print("\nAdministrator addresses:")
    for address in table.elevated or ["(none)"]:
        print(f"  {address}")

    print("\nDepartment addresses:")
    if not table.department_map:
        print("  (none)")
    for address, department_id in table.department_map.items():
        print(f"  {address:<40} {names.get(department_id, '(deleted department)')}")


def add_admin_address():
    address = input("\nAdministrator address: ").strip()
    with Session(engine) as session:
        table = load_access_table(session)
        try:
            table.add_elevated(address)
        except AccessTableError as e:
            print(f"\n✗ {e}")
            return
        store_access_table(session, table)
    print(f"\n✓ {address} now has administrator access")


def remove_admin_address():
    address = input("\nAddress to remove: ").strip()
    with Session(engine) as session:
        table = load_access_table(session)
        table.remove_elevated(address)
        store_access_table(session, table)
    print(f"\n✓ {address} removed")


def main():
    init_db()
    while True:
        print("\n" + "=" * 60)
        print("Access management")
        print("=" * 60)
        print("1. Show access table")
        print("2. Add administrator address")
        print("3. Remove administrator address")
        print("4. Exit")
        print("=" * 60)

        choice = input("\nChoose an action (1-4): ").strip()

        if choice == "1":
            show_table()
        elif choice == "2":
            add_admin_address()
        elif choice == "3":
            remove_admin_address()
        elif choice == "4":
            print("\nBye")
            break
        else:
            print("\n✗ Unknown choice, try again.")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nCancelled")
