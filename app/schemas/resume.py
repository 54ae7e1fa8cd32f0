from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

# --- Draft Models ---

class ResumeTemplate(str, Enum):
    """Cosmetic template choice; does not change generated content."""
    MODERN = "modern"
    CLASSIC = "classic"


PersonalInfoField = Literal["name", "email", "phone", "linkedin"]
ResumeSection = Literal["education", "skills", "work_experience", "projects", "certificates"]


class PersonalInfo(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""


class ResumeDraft(BaseModel):
    """Structured resume data edited field by field; never persisted."""
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    education: str = ""
    skills: str = ""
    work_experience: str = ""
    projects: str = ""
    certificates: str = ""
    selected_template: ResumeTemplate = ResumeTemplate.MODERN


# --- API Models ---

class PersonalInfoUpdate(BaseModel):
    field: PersonalInfoField
    value: str


class SectionUpdate(BaseModel):
    value: str


class TemplateUpdate(BaseModel):
    template: ResumeTemplate


class ResumePreview(BaseModel):
    """What the preview pane shows."""
    generated: bool = Field(..., description="True once an AI preview replaced the local one.")
    lines: list[str] = Field(default_factory=list, description="Displayed preview, one entry per line.")
    notice: Optional[str] = Field(default=None, description="Non-blocking notice about the last generation attempt.")


class ResumeSessionState(BaseModel):
    session_id: str
    draft: ResumeDraft
    preview: ResumePreview
