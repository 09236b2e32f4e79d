# appbuilder/__init__.py
"""
App Builder - requirement extraction service.

Turns a free-text app description into a structured app specification
(entities, roles, per-role permissions, features) through asynchronous,
pollable jobs.
"""

__version__ = "1.0.0"
