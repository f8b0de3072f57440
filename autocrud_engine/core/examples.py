"""
Example model definitions.

Useful for documentation, the ``autocrud example`` command and tests.
"""

from typing import Any, Dict, List

EMPLOYEE_MODEL: Dict[str, Any] = {
    "name": "Employee",
    "fields": [
        {"name": "id", "type": "number", "required": True, "unique": True},
        {"name": "name", "type": "string", "required": True},
        {"name": "email", "type": "string", "required": True, "unique": True},
        {"name": "age", "type": "number"},
        {"name": "isActive", "type": "boolean", "default": True},
        {"name": "hireDate", "type": "date"},
        {"name": "ownerId", "type": "number", "required": True},
    ],
    "ownerField": "ownerId",
    "rbac": {
        "Admin": ["all"],
        "Manager": ["create", "read", "update"],
        "Viewer": ["read"],
    },
    "timestamps": True,
}

DEPARTMENT_MODEL: Dict[str, Any] = {
    "name": "Department",
    "fields": [
        {"name": "id", "type": "number", "required": True, "unique": True},
        {"name": "name", "type": "string", "required": True},
        {
            "name": "manager",
            "type": "relation",
            "relation": {
                "model": "Employee",
                "type": "one-to-one",
                "foreignKey": "managerId",
                "references": "id",
            },
        },
    ],
    "rbac": {
        "Admin": ["all"],
        "Manager": ["read", "update"],
    },
    "timestamps": True,
}

PROJECT_MODEL: Dict[str, Any] = {
    "name": "Project",
    "fields": [
        {"name": "id", "type": "number", "required": True, "unique": True},
        {"name": "title", "type": "string", "required": True},
        {"name": "description", "type": "string"},
        {"name": "budget", "type": "number"},
        {"name": "metadata", "type": "json"},
        {
            "name": "employees",
            "type": "relation",
            "relation": {"model": "Employee", "type": "many-to-many"},
        },
    ],
    "rbac": {
        "Admin": ["all"],
        "Manager": ["create", "read", "update"],
        "Employee": ["read"],
    },
    "timestamps": True,
}

PRODUCT_MODEL: Dict[str, Any] = {
    "name": "Product",
    "fields": [
        {"name": "id", "type": "number", "required": True, "unique": True},
        {"name": "name", "type": "string", "required": True},
        {"name": "description", "type": "string"},
        {"name": "price", "type": "number", "required": True},
        {"name": "inStock", "type": "boolean", "default": True},
    ],
    "rbac": {
        "Admin": ["all"],
        "Staff": ["read", "update"],
    },
}

EXAMPLE_MODELS: Dict[str, Dict[str, Any]] = {
    "employee": EMPLOYEE_MODEL,
    "department": DEPARTMENT_MODEL,
    "project": PROJECT_MODEL,
    "product": PRODUCT_MODEL,
}


def list_examples() -> List[str]:
    return sorted(EXAMPLE_MODELS)
