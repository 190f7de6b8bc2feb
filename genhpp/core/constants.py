"""
Core constants and enumerations for GenHPP.

This module defines the fixed category lists, labels, and limits shared by
the calculators, request schemas, and CSV export.
"""

from enum import Enum

# Cost breakdown labels (Indonesian, shown to end users)
LABEL_MATERIALS = "Bahan Baku"
LABEL_LABOR = "Tenaga Kerja"
LABEL_OVERHEAD = "Overhead"
LABEL_PACKAGING = "Kemasan"

# Validation limits
MAX_MARGIN_PCT = 1000
MAX_VAT_PCT = 100
MIN_LOAN_AMOUNT = 100_000
MIN_LOAN_RATE_PCT = 0.1
MAX_LOAN_RATE_PCT = 100
MAX_LOAN_TERM_MONTHS = 360
MAX_COMMENT_LENGTH = 500
MIN_REPORT_REASON_LENGTH = 10
MAX_REPORT_REASON_LENGTH = 500

# Display name fallbacks
DEFAULT_PUBLIC_USER_NAME = "Anonymous"
DEFAULT_COMMENT_USER_NAME = "Anonim"


class ExpenseCategory(str, Enum):
    """Operational expense categories."""
    SEWA_TEMPAT = "Sewa Tempat"
    LISTRIK_AIR = "Listrik & Air"
    GAJI_KARYAWAN = "Gaji Karyawan"
    BIAYA_PENGEMASAN = "Biaya Pengemasan"
    PEMASARAN = "Pemasaran"
    LAINNYA = "Lainnya"


class ReportCategory(str, Enum):
    """Content report categories for community posts."""
    KONTEN_SEKSUAL = "Konten Seksual"
    UJARAN_KEBENCIAN = "Ujaran Kebencian"
    KEKERASAN = "Kekerasan"
    SPAM = "Spam"
    PELANGGARAN_HAK_CIPTA = "Pelanggaran Hak Cipta"
    LAINNYA = "Lainnya"


class ReportStatus(str, Enum):
    OPEN = "open"
    RESOLVED = "resolved"


class ChatStatus(str, Enum):
    """
    Matchmaking session lifecycle.

    pending -> active when a second participant joins;
    pending/active -> ended on explicit end.
    """
    PENDING = "pending"
    ACTIVE = "active"
    ENDED = "ended"


class ChatRole(str, Enum):
    """Roles in AI conversation history."""
    USER = "user"
    MODEL = "model"


DEFAULT_NOTIFICATION_TYPE = "admin"
