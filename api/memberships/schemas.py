"""
Project membership (project_assignees) request schemas.
"""

from __future__ import annotations

from core.fields import IdField, LongLabel, StrictBody

DEFAULT_ROLE_IN_PROJECT = "Team Member"


class AddAssigneeToProject(StrictBody):
    assignee_id: IdField
    role_in_project: LongLabel = DEFAULT_ROLE_IN_PROJECT


class AddProjectToAssignee(StrictBody):
    project_id: IdField
    role_in_project: LongLabel = DEFAULT_ROLE_IN_PROJECT
