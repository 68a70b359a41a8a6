# =============================================================================
# core/ - Framework-Agnostic Application Logic
# =============================================================================
# This package contains the view layer and its collaborators:
# - application.py: Application container (config, environment, routing)
# - config_store.py: Dotted-key configuration lookup
# - models/: Environment, ExceptionRecord, ResponseBuffer
# - services/: View, exception presenter/logger, translation, routing,
#              cookies, forms
#
# Code in this package does not import FastAPI directly; the error types
# it raises live in app/exceptions.py.
# =============================================================================
