"""
jobsync package

Keeps owner-scoped job records and the flattened public job listing in sync
through Firestore change triggers. The core handlers live in `jobsync.sync`;
`jobsync.triggers` adapts Cloud Functions events onto them.
"""
