"""
QuizDB - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("QUIZDB_DB", f"sqlite:///{BASE_DIR / 'quizdb.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("QUIZDB_HOST", "0.0.0.0")
PORT   = int(os.environ.get("QUIZDB_PORT", "3000"))
DEBUG  = os.environ.get("QUIZDB_DEBUG", "0") == "1"

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("QUIZDB_LOG_LEVEL", "INFO").upper()

# ── Uploads ────────────────────────────────────────────────────────────
# Enforced at the HTTP boundary; the import pipeline assumes small inputs.
MAX_UPLOAD_BYTES   = int(os.environ.get("QUIZDB_MAX_UPLOAD_BYTES", str(2 * 1024 * 1024)))
ALLOWED_EXTENSIONS = frozenset({".csv"})

# ── Pagination ─────────────────────────────────────────────────────────
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE     = 100
