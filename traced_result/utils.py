"""
Environment configuration for the traced_result library.
"""

import os

# Environment variable to log every propagation hop
DEBUG_TRACE = os.environ.get("TRACED_RESULT_DEBUG", "").lower() in ("1", "true", "yes")


__all__ = ["DEBUG_TRACE"]
