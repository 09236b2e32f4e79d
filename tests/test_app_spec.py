# tests/test_app_spec.py
"""
Tests for AppSpec dataclasses, JSON parsing and configuration.
"""
import pytest

from appbuilder.core.config import LLMSettings, Settings
from appbuilder.core.exceptions import ParseError
from appbuilder.llm.mock_generator import generate_mock_spec
from appbuilder.utils.app_spec import AppSpec, Field, coerce_field_type
from appbuilder.utils.parser import parse_json_response, strip_code_fence


# ═══════════════════════════════════════════════════════
# APP SPEC
# ═══════════════════════════════════════════════════════

class TestAppSpec:

    def test_from_dict_round_trips_mock(self, course_description):
        data = generate_mock_spec(course_description)
        spec = AppSpec.from_dict(data)

        assert spec.app_name == "Course Manager"
        assert spec.entity_names == ["Student", "Course", "Grade"]
        assert spec.to_dict() == data

    def test_permissions_lookup_is_canonical(self, course_description):
        spec = AppSpec.from_dict(generate_mock_spec(course_description))

        assert spec.permissions_for("ADMIN").can_edit == ["Student", "Course", "Grade", "User"]
        assert spec.permissions_for("janitor") is None

    def test_from_dict_tolerates_junk(self):
        spec = AppSpec.from_dict({
            "appName": "X",
            "entities": [{"name": "A", "fields": [{"name": "f", "type": "color"}, "junk"]}, "B"],
            "roles": ["Admin", 3],
            "rolePermissions": {"Admin": {"canEdit": ["A", 1]}, "Ghost": "none"},
        })

        assert spec.entities[0].fields == [Field("f", "text", False)]
        assert spec.roles == ["Admin"]
        assert spec.features == []
        assert list(spec.role_permissions) == ["Admin"]
        assert spec.role_permissions["Admin"].can_edit == ["A"]
        assert spec.role_permissions["Admin"].can_view == []


@pytest.mark.parametrize("value,expected", [
    ("email", "email"),
    ("TEXTAREA", "textarea"),
    ("color", "text"),
    (None, "text"),
    (5, "text"),
])
def test_coerce_field_type(value, expected):
    assert coerce_field_type(value) == expected


# ═══════════════════════════════════════════════════════
# PARSER
# ═══════════════════════════════════════════════════════

class TestParser:

    def test_bare_json(self):
        assert parse_json_response('{"a": 1}') == {"a": 1}

    def test_fenced_json(self):
        raw = 'Here you go:\n```json\n{"a": [1, 2]}\n```\nEnjoy'
        assert parse_json_response(raw) == {"a": [1, 2]}

    def test_bare_fence(self):
        assert strip_code_fence("```\n[1]\n```") == "[1]"

    @pytest.mark.parametrize("raw", ["", "   ", "```json\n```", '{"a": ', "Sure thing!", None, 12])
    def test_rejects(self, raw):
        with pytest.raises(ParseError):
            parse_json_response(raw)


# ═══════════════════════════════════════════════════════
# CONFIG
# ═══════════════════════════════════════════════════════

class TestConfig:

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "real-key")
        monkeypatch.setenv("GEMINI_MODEL", "gemini-1.5-pro")
        monkeypatch.setenv("POLL_MAX_ATTEMPTS", "5")
        monkeypatch.setenv("USE_DB", "true")

        s = Settings()

        assert s.llm.is_configured
        assert s.llm.gemini_model == "gemini-1.5-pro"
        assert s.jobs.poll_max_attempts == 5
        assert s.db.use_db is True

    def test_defaults(self, monkeypatch):
        for name in ("GEMINI_MODEL", "POLL_INTERVAL_SECONDS", "POLL_MAX_ATTEMPTS", "USE_DB"):
            monkeypatch.delenv(name, raising=False)

        s = Settings()

        assert s.llm.gemini_model == "gemini-2.0-flash-exp"
        assert s.jobs.poll_interval_seconds == 1.0
        assert s.jobs.poll_max_attempts == 30
        assert s.db.use_db is False

    @pytest.mark.parametrize("key", [None, "", "   ", "your_gemini_api_key_here"])
    def test_unusable_keys(self, key):
        assert LLMSettings(gemini_api_key=key).is_configured is False
