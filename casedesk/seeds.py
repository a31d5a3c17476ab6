from __future__ import annotations

import argparse
import logging
from typing import Dict, List

from faker import Faker

from . import crud
from .config import settings
from .database import Base, engine, session_scope
from .stores import CaseStore, ClientStore, UserStore
from .stores.sql import SqlCaseStore, SqlClientStore, SqlUserStore

logger = logging.getLogger(__name__)

fake = Faker()
Faker.seed(1234)

DEMO_PASSWORD = "DemoPass123!"
PRIORITIES = ["LOW", "MEDIUM", "HIGH"]
STATUSES = ["OPEN", "IN_PROGRESS", "RELEASED"]


def seed(
    users: UserStore,
    cases: CaseStore,
    clients: ClientStore,
    inspectors_count: int,
    clients_count: int,
    cases_count: int,
) -> Dict[str, int]:
    """Seed demo data; safe to run repeatedly.

    - Inspectors are uniquely identified by email: inspector{n}@example.com
    - Clients and cases are only added, never deduplicated
    - Every case is assigned to one of the inspectors, round robin
    """
    inspectors: List = []
    for i in range(1, inspectors_count + 1):
        email = f"inspector{i}@example.com"
        inspector = users.find_by_email(email)
        if not inspector:
            inspector = crud.create_user(
                users,
                name=fake.name(),
                email=email,
                password=DEMO_PASSWORD,
                role="INSPECTOR",
            )
        inspectors.append(inspector)

    created_clients = [
        crud.create_client(
            clients,
            company_name=fake.company(),
            contact_name=fake.name(),
            email=fake.company_email(),
            phone=fake.phone_number(),
            address=fake.address().replace("\n", ", "),
        )
        for _ in range(clients_count)
    ]

    created_cases = 0
    if inspectors:
        for n in range(cases_count):
            inspector = inspectors[n % len(inspectors)]
            client = created_clients[n % len(created_clients)] if created_clients else None
            crud.create_case(
                cases,
                users,
                title=fake.catch_phrase(),
                description=fake.paragraph(nb_sentences=3),
                inspector_id=inspector.id,
                client_id=client.id if client else None,
                priority=PRIORITIES[n % len(PRIORITIES)],
                status=STATUSES[n % len(STATUSES)],
                file_reference=fake.bothify("AZ-####/??").upper(),
                deadline=fake.date_between(start_date="today", end_date="+60d"),
                location=fake.city(),
            )
            created_cases += 1

    return {
        "inspectors": len(inspectors),
        "clients": len(created_clients),
        "cases": created_cases,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the CaseDesk database with demo data.")
    parser.add_argument(
        "--inspectors",
        type=int,
        default=3,
        help="Number of inspector accounts (default: 3).",
    )
    parser.add_argument(
        "--clients",
        type=int,
        default=5,
        help="Number of clients to create (default: 5).",
    )
    parser.add_argument(
        "--cases",
        type=int,
        default=10,
        help="Number of cases to create (default: 10).",
    )
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)
    Base.metadata.create_all(bind=engine)
    with session_scope() as session:
        counts = seed(
            SqlUserStore(session),
            SqlCaseStore(session),
            SqlClientStore(session),
            inspectors_count=args.inspectors,
            clients_count=args.clients,
            cases_count=args.cases,
        )
    logger.info("Seeding complete: %s", counts)
    print("Seeding complete.")


if __name__ == "__main__":
    main()
