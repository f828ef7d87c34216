"""Fictitious identity substituted for a real correspondent."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Persona(BaseModel):
    """A display name / address pair with a relationship role."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Display name")
    email: str = Field(description="Output email address")
    role: str = Field(description="Relationship to the mailbox owner")
    company: str = Field(default="", description="Organization tag, empty if none")

    def formatted(self) -> str:
        return f"{self.name} <{self.email}>"
