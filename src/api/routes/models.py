"""Pydantic request models for the HTTP API.

Bodies use camelCase on the wire; snake_case names are accepted too.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def updates(self, *exclude: str) -> dict[str, Any]:
        """Fields the client actually sent, minus the given identity keys."""
        return self.model_dump(exclude_unset=True, exclude=set(exclude))


class ReportCreateRequest(CamelModel):
    user_id: int
    team_id: str = Field(min_length=1)
    template_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    category: Optional[str] = None
    answers: Optional[dict[str, Any]] = None
    template_data: Optional[dict[str, Any]] = None
    sync_to_sheets: bool = True

    @property
    def effective_answers(self) -> Optional[dict[str, Any]]:
        """answers, or the older templateData name for the same map."""
        if self.answers is not None:
            return self.answers
        return self.template_data


class ReportUpdateRequest(CamelModel):
    id: str = Field(min_length=1)
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    category: Optional[str] = None
    answers: Optional[dict[str, Any]] = None
    template_data: Optional[dict[str, Any]] = None

    def updates(self, *exclude: str) -> dict[str, Any]:
        changes = super().updates("id", *exclude)
        template_data = changes.pop("template_data", None)
        if template_data is not None and "answers" not in changes:
            changes["answers"] = template_data
        return changes


class TeamCreateRequest(CamelModel):
    name: str = Field(min_length=1)
    created_by: int
    description: Optional[str] = None
    template_id: Optional[str] = None


class TeamUpdateRequest(CamelModel):
    team_id: str = Field(min_length=1)
    template_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None


class TemplateAssignRequest(CamelModel):
    team_id: str = Field(min_length=1)
    template_id: Optional[str] = None


class UserCreateRequest(CamelModel):
    telegram_id: int
    first_name: str = Field(min_length=1)
    last_name: Optional[str] = None
    username: Optional[str] = None
    photo_url: Optional[str] = None
    team_id: Optional[str] = None


class UserUpdateRequest(CamelModel):
    telegram_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    photo_url: Optional[str] = None
    team_id: Optional[str] = None
    role: Optional[str] = None


class SessionRequest(CamelModel):
    init_data: str
