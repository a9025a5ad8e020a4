# peertutor/jobs.py
"""
Command-line entry point for the external scheduler and for bootstrapping.

    python -m peertutor.jobs sweep              # run from cron, e.g. every 15 minutes
    python -m peertutor.jobs seed-subjects
    python -m peertutor.jobs create-tutor NAME PASSWORD [--admin]
"""

import argparse
import logging
import sys
from typing import Optional

from .auth import hash_password
from .config import configure_logging
from .db import create_db_and_tables
from .errors import SchedulingError
from .rollover import run_sweep
from .store import TutorStore
from .subjects import seed_subjects

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="peertutor.jobs")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("sweep", help="expire past slots and roll recurring slots forward")
    sub.add_parser("seed-subjects", help="load the default subject catalogue")

    create = sub.add_parser("create-tutor", help="add a tutor account")
    create.add_argument("tutor_id")
    create.add_argument("password")
    create.add_argument("--name", default=None)
    create.add_argument("--admin", action="store_true")
    return parser


def main(argv=None, store: Optional[TutorStore] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    if store is None:
        create_db_and_tables()
        store = TutorStore()

    if args.command == "sweep":
        report = run_sweep(store)
        print(report.model_dump_json())
        return 1 if report.failures else 0

    if args.command == "seed-subjects":
        subjects = seed_subjects(store)
        logger.info("Seeded %d subjects", len(subjects))
        return 0

    try:
        store.create_tutor(
            args.tutor_id,
            name=args.name or args.tutor_id,
            password_hash=hash_password(args.password),
            is_admin=args.admin,
        )
    except SchedulingError as exc:
        logger.error("Could not create tutor %s: %s", args.tutor_id, exc)
        return 1
    logger.info("Created tutor %s", args.tutor_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
