# appbuilder/lib/__init__.py
"""
Library module - monitoring helpers.
"""
