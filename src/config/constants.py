"""Shared application constants.

Constants used by multiple modules are defined here to ensure consistency.
Module-specific constants should be defined as class-level attributes on
their respective service classes instead.
"""

# User roles (role is an open string; these two drive dashboard capability)
ROLE_ADMIN = "admin"
ROLE_EMPLOYEE = "employee"

# Legacy (template-less) report shape
REPORT_PRIORITIES = ("low", "medium", "high")
REPORT_STATUSES = ("pending", "in-progress", "completed")
DEFAULT_REPORT_PRIORITY = "medium"
DEFAULT_REPORT_STATUS = "pending"

# Template field types
FIELD_TYPES = ("text", "textarea", "number", "date", "select")

# Placeholder name for users first seen without profile data
PLACEHOLDER_FIRST_NAME = "User"
