"""Core business logic layer (pure functions over a Plan and the catalog).

Subpackages:
- eligibility: grade-expression parsing and kid eligibility
- schedule: time ranges and conflict detection
- reporting: financial summary
"""
__all__ = ["eligibility", "schedule", "reporting"]
