# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: Scheduler module for appointment auto-completion.
# ============================================================================
from .auto_completion_scheduler import AutoCompletionScheduler

__all__ = ["AutoCompletionScheduler"]
