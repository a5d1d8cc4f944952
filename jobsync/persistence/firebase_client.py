from __future__ import annotations

import os
import sys
import threading
from typing import Optional

import firebase_admin
from firebase_admin import firestore


def is_local_execution() -> bool:
    """
    Heuristic: treat execution as "local" when either:
    - ENV=local, OR
    - we're not on a managed GCP runtime (no K_SERVICE, no FUNCTION_TARGET, and no GAE_* env vars).
    """
    if (os.getenv("ENV") or "").strip().lower() == "local":
        return True

    # Cloud Functions gen2 runs on Cloud Run
    if (os.getenv("K_SERVICE") or "").strip():
        return False
    if (os.getenv("FUNCTION_TARGET") or "").strip():
        return False
    for k in os.environ.keys():
        if str(k).startswith("GAE_"):
            return False

    return True


def require_firestore_emulator_or_allow_prod(*, caller: str) -> None:
    """
    Safety guard: fail-closed locally unless the Firestore emulator is configured.

    Local execution MUST set FIRESTORE_EMULATOR_HOST, unless explicitly overridden with:
      ALLOW_PROD_FIRESTORE=1
    """
    if not is_local_execution():
        return

    if (os.getenv("FIRESTORE_EMULATOR_HOST") or "").strip():
        return

    if (os.getenv("ALLOW_PROD_FIRESTORE") or "").strip() == "1":
        return

    sys.stderr.write(
        "\n".join(
            [
                "ERROR: Refusing to use production Firestore from local execution.",
                f"caller={caller}",
                "",
                "Job sync fails closed locally unless the Firestore emulator is configured.",
                "Fix:",
                "  - Set FIRESTORE_EMULATOR_HOST (example: '127.0.0.1:8080'), OR",
                "  - Intentionally override with ALLOW_PROD_FIRESTORE=1 (DANGEROUS).",
                "",
            ]
        )
        + "\n"
    )
    raise SystemExit(2)


def _resolve_project_id(explicit_project_id: Optional[str] = None) -> Optional[str]:
    if explicit_project_id:
        return explicit_project_id

    return (
        os.getenv("FIREBASE_PROJECT_ID")
        or os.getenv("FIRESTORE_PROJECT_ID")
        or os.getenv("GOOGLE_CLOUD_PROJECT")
        or None
    )


_init_lock = threading.Lock()


def init_firebase_admin(*, project_id: Optional[str] = None) -> None:
    """
    Initialize Firebase Admin SDK exactly once.

    On Cloud Functions the runtime provides Application Default Credentials and
    the project id; locally, FIREBASE_PROJECT_ID / GOOGLE_CLOUD_PROJECT pick the
    project (the emulator accepts any id).
    """
    require_firestore_emulator_or_allow_prod(caller="jobsync.persistence.firebase_client.init_firebase_admin")

    if firebase_admin._apps:
        return

    with _init_lock:
        if firebase_admin._apps:
            return

        resolved_project_id = _resolve_project_id(project_id)
        options = {"projectId": resolved_project_id} if resolved_project_id else None
        try:
            firebase_admin.initialize_app(options=options)
        except Exception as e:
            raise RuntimeError(
                "Failed to initialize Firebase Admin SDK with Application Default Credentials (ADC). "
                "Locally: run `gcloud auth application-default login` or point FIRESTORE_EMULATOR_HOST "
                "at a running emulator."
            ) from e


def get_firestore_client(*, project_id: Optional[str] = None) -> firestore.Client:
    init_firebase_admin(project_id=project_id)
    return firestore.client()
