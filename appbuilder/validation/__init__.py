# appbuilder/validation/__init__.py
"""
Validation module.
"""
from .spec_validator import collect_spec_issues, is_valid_app_spec

__all__ = ["collect_spec_issues", "is_valid_app_spec"]
