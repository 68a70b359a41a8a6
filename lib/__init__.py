# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - utils.py: String helpers (prefix/suffix checks, case conversion)
# - error_reporting.py: Promotes Python warnings to WrappedRuntimeError
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================
