# appbuilder/utils/__init__.py
"""
Utility modules - spec data structures, role helpers, response parsing.
"""
