# =============================================================================
# core/services/form_service.py - Form Rendering and CSRF
# =============================================================================
# Template helpers for forms:
# - csrf_token(): token bound to the session
# - csrf_field(): hidden input carrying the token
# - form_row(...): one labelled field rendered by the "row" macro of the
#                  form layout template
# =============================================================================

import hmac
import secrets
from collections.abc import MutableMapping
from typing import Any

from jinja2 import Environment
from markupsafe import Markup

CSRF_SESSION_KEY = "_csrf_token"
CSRF_FIELD_NAME = "_token"
FORM_LAYOUT_TEMPLATE = "Forms/form_layout.html.j2"


class CsrfProvider:
    """Per-session CSRF token."""

    def __init__(self, session: MutableMapping[str, Any]):
        self.session = session

    def token(self) -> str:
        token = self.session.get(CSRF_SESSION_KEY)
        if not token:
            token = secrets.token_urlsafe(32)
            self.session[CSRF_SESSION_KEY] = token
        return token

    def is_csrf_token_valid(self, token: str | None) -> bool:
        expected = self.session.get(CSRF_SESSION_KEY)
        if not expected or not token:
            return False
        return hmac.compare_digest(expected, token)


class FormIntegration:
    """Registers the form helpers on a Jinja2 environment."""

    def __init__(self, csrf: CsrfProvider, layout: str = FORM_LAYOUT_TEMPLATE):
        self.csrf = csrf
        self.layout = layout
        self.environment: Environment | None = None

    def register(self, environment: Environment) -> None:
        self.environment = environment
        environment.globals.update(
            csrf_token=self.csrf.token,
            csrf_field=self.csrf_field,
            form_row=self.form_row,
        )

    def csrf_field(self) -> Markup:
        return Markup('<input type="hidden" name="{}" value="{}">').format(
            CSRF_FIELD_NAME, self.csrf.token()
        )

    def form_row(
        self,
        name: str,
        label: str | None = None,
        type: str = "text",
        value: Any = "",
        errors: list[str] | None = None,
    ) -> Markup:
        """Render one field through the layout's "row" macro."""
        layout = self.environment.get_template(self.layout)
        html = layout.module.row(
            name=name,
            label=label if label is not None else name.replace("_", " ").capitalize(),
            type=type,
            value=value,
            errors=errors or [],
        )
        return Markup(html)
