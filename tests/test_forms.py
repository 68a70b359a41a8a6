# =============================================================================
# tests/test_forms.py - CSRF and Form Helper Tests
# =============================================================================

from jinja2 import DictLoader, Environment

from core.services.form_service import (
    CSRF_FIELD_NAME,
    CSRF_SESSION_KEY,
    CsrfProvider,
    FormIntegration,
)
from tests.conftest import TEMPLATES_DIRECTORY


class TestCsrfProvider:
    """Tests for CsrfProvider."""

    def test_token_stored_in_session(self):
        session = {}
        csrf = CsrfProvider(session)

        token = csrf.token()

        assert session[CSRF_SESSION_KEY] == token
        assert csrf.token() == token

    def test_validation(self):
        csrf = CsrfProvider({})
        token = csrf.token()

        assert csrf.is_csrf_token_valid(token) is True
        assert csrf.is_csrf_token_valid("forged") is False
        assert csrf.is_csrf_token_valid(None) is False

    def test_no_token_in_session(self):
        assert CsrfProvider({}).is_csrf_token_valid("anything") is False


class TestFormIntegration:
    """Tests for the template globals."""

    def make_environment(self, session):
        layout = (TEMPLATES_DIRECTORY / "Forms" / "form_layout.html.j2").read_text(encoding="utf-8")
        environment = Environment(
            loader=DictLoader({"Forms/form_layout.html.j2": layout}),
            autoescape=True,
        )
        FormIntegration(CsrfProvider(session)).register(environment)
        return environment

    def test_csrf_field(self):
        session = {}
        environment = self.make_environment(session)

        html = environment.from_string("{{ csrf_field() }}").render()

        assert f'name="{CSRF_FIELD_NAME}"' in html
        assert session[CSRF_SESSION_KEY] in html

    def test_form_row_escapes_value(self):
        environment = self.make_environment({})

        html = environment.from_string(
            "{{ form_row('display_name', value='<b>Ann</b>', errors=['Too short']) }}"
        ).render()

        assert 'name="display_name"' in html
        assert "Display name" in html
        assert "&lt;b&gt;Ann&lt;/b&gt;" in html
        assert "Too short" in html
