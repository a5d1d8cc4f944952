#!/usr/bin/env python3
"""
Resync the public job listing from owner jobs.

Replays the forward sync over every owners/{ownerId}/jobs/{jobId} document so
publicJobs reflects jobs written before the triggers were deployed. Archived
jobs have their public copy removed; everything else is merge-upserted.
Public documents without an owner job are left alone.

Usage:
    python scripts/resync_public_jobs.py [--owner OWNER_ID] [--limit N] [--dry-run]

Environment Variables:
    - FIREBASE_PROJECT_ID or GOOGLE_CLOUD_PROJECT
    - FIRESTORE_EMULATOR_HOST (local), or ALLOW_PROD_FIRESTORE=1 to target production
    - JOB_SYNC_* collection overrides (see jobsync/common/config.py)
"""

from __future__ import annotations

import argparse
import os
import sys

# Add repo root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from jobsync.common.config import load_config
from jobsync.common.logging import init_structured_logging
from jobsync.persistence.document_store import FirestoreDocumentStore
from jobsync.persistence.firebase_client import get_firestore_client
from jobsync.resync import iter_owner_jobs, resync_public_jobs


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Replay forward job sync over existing owner jobs.")
    p.add_argument("--owner", default=None, help="Only resync jobs of this owner id.")
    p.add_argument("--limit", type=int, default=None, help="Stop after N jobs.")
    p.add_argument("--dry-run", action="store_true", help="Report what would change without writing.")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = load_config()
    init_structured_logging(service=f"{config.service_name}-resync", env=config.env, level=config.log_level)

    client = get_firestore_client()
    store = FirestoreDocumentStore(client)
    jobs = iter_owner_jobs(client, config, owner_id=args.owner, limit=args.limit)

    try:
        summary = resync_public_jobs(jobs, store=store, config=config, dry_run=bool(args.dry_run))
    except Exception as e:
        print(f"\n✗ Resync failed: {e}", file=sys.stderr)
        return 1

    mode = "DRY RUN" if args.dry_run else "APPLIED"
    print("\n========== RESYNC SUMMARY ==========")
    print(f"Mode:              {mode}")
    print(f"Public upserted:   {summary.upserted}")
    print(f"Public deleted:    {summary.deleted}")
    print(f"Total processed:   {summary.total}")
    print("====================================\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
