# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Process-wide Supabase client holder
# - batch.py: Best-effort concurrent batch runner for cleanup work
# - utils.py: Shared utilities (UUID normalization, timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.batch import BatchResult, ItemFailure, run_best_effort
from lib.utils import epoch_millis, normalize_uuid, utc_now_iso

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Batch
    "BatchResult",
    "ItemFailure",
    "run_best_effort",
    # Utils
    "epoch_millis",
    "normalize_uuid",
    "utc_now_iso",
]
