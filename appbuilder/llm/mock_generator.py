# appbuilder/llm/mock_generator.py
"""
Deterministic keyword-driven spec generator.

Used when no live generator is configured and whenever the live path fails.
Output depends only on the lower-cased description, so the same text always
produces the same spec. Every template already satisfies the permission
invariants.
"""
from typing import Any, Dict

from appbuilder.core.logging import log
from appbuilder.utils.app_spec import AppSpec, Entity, Field, Permission


def _course_manager() -> AppSpec:
    return AppSpec(
        app_name="Course Manager",
        entities=[
            Entity("Student", [
                Field("Name", "text", True),
                Field("Email", "email", True),
                Field("Age", "number", False),
                Field("Student ID", "text", True),
            ]),
            Entity("Course", [
                Field("Title", "text", True),
                Field("Code", "text", True),
                Field("Credits", "number", True),
                Field("Description", "textarea", False),
            ]),
            Entity("Grade", [
                Field("Student", "select", True),
                Field("Course", "select", True),
                Field("Grade", "number", True),
                Field("Date", "date", True),
            ]),
        ],
        roles=["Teacher", "Student", "Admin"],
        features=["Add course", "Enroll students", "View reports", "Manage grades"],
        role_permissions={
            "Student": Permission(
                can_create=["Student"],
                can_view=["Student", "Course", "Grade"],
                can_edit=["Student"],
            ),
            "Teacher": Permission(
                can_create=["Course", "Student", "Grade"],
                can_view=["Course", "Student", "Grade"],
                can_edit=["Course", "Student", "Grade"],
            ),
            "Admin": Permission(
                can_create=["Student", "Course", "Grade", "User"],
                can_view=["Student", "Course", "Grade", "User"],
                can_edit=["Student", "Course", "Grade", "User"],
            ),
        },
    )


def _inventory_manager() -> AppSpec:
    return AppSpec(
        app_name="Inventory Manager",
        entities=[
            Entity("Product", [
                Field("Name", "text", True),
                Field("SKU", "text", True),
                Field("Price", "number", True),
                Field("Quantity", "number", True),
            ]),
            Entity("Supplier", [
                Field("Company Name", "text", True),
                Field("Contact Email", "email", True),
                Field("Phone", "text", False),
            ]),
        ],
        roles=["Manager", "Employee", "Admin"],
        features=["Add products", "Update inventory", "Generate reports", "Manage suppliers"],
        role_permissions={
            "Manager": Permission(
                can_create=["Product", "Supplier"],
                can_view=["Product", "Supplier", "Sale"],
                can_edit=["Product", "Supplier"],
            ),
            "Employee": Permission(
                can_create=["Sale"],
                can_view=["Product", "Sale"],
                can_edit=[],
            ),
            "Admin": Permission(
                can_create=["Product", "Supplier", "Sale", "User"],
                can_view=["Product", "Supplier", "Sale", "User"],
                can_edit=["Product", "Supplier", "Sale", "User"],
            ),
        },
    )


def _business_app() -> AppSpec:
    return AppSpec(
        app_name="Business App",
        entities=[
            Entity("User", [
                Field("Name", "text", True),
                Field("Email", "email", True),
                Field("Role", "select", True),
            ]),
        ],
        roles=["User", "Admin"],
        features=["Manage data", "View reports", "User management"],
        role_permissions={
            "User": Permission(can_create=["User"], can_view=["User"], can_edit=["User"]),
            "Admin": Permission(can_create=["User"], can_view=["User"], can_edit=["User"]),
        },
    )


def select_template(description: str) -> str:
    """Template name for a description. First match wins."""
    text = (description or "").lower()
    if "course" in text and "student" in text:
        return "course"
    if "inventory" in text or "product" in text:
        return "inventory"
    return "generic"


TEMPLATES = {
    "course": _course_manager,
    "inventory": _inventory_manager,
    "generic": _business_app,
}


def generate_mock_spec(description: str) -> Dict[str, Any]:
    """Build a fresh spec dict for the description."""
    template = select_template(description)
    log("MOCK", f"Using '{template}' template")
    return TEMPLATES[template]().to_dict()


class MockGenerator:
    """Callable wrapper so the orchestrator can swap generators in tests."""

    name = "mock"

    def generate(self, description: str) -> Dict[str, Any]:
        return generate_mock_spec(description)
