import logging
from typing import Optional

from app.core.exceptions import GenerationError
from app.core.llm import Generator
from app.core.logger import log_async_execution_time
from app.core.prompts import generate_resume_prompt
from app.schemas.resume import (
    PersonalInfoField,
    ResumeDraft,
    ResumePreview,
    ResumeSection,
    ResumeTemplate,
)
from app.services.resume.exporter import DocxExporter
from app.services.resume.preview import render_local_preview

logger = logging.getLogger(__name__)

GENERATION_FAILED_NOTICE = "AI preview could not be generated. Showing the local preview instead."


class ResumeBuilder:
    """
    State of one resume-builder view: the draft being edited and the last
    successful AI preview.

    The local preview is never cached. Once an AI preview exists it is what
    gets displayed and exported; there is no toggle back.
    """

    def __init__(self, generator: Generator):
        self.generator = generator
        self.draft = ResumeDraft()
        self.ai_preview = ""
        self.generated = False
        self.notice: Optional[str] = None

    def update_personal_info(self, field: PersonalInfoField, value: str) -> None:
        setattr(self.draft.personal_info, field, value)

    def update_section(self, section: ResumeSection, value: str) -> None:
        setattr(self.draft, section, value)

    def select_template(self, template: ResumeTemplate) -> None:
        self.draft.selected_template = template

    def local_preview(self) -> str:
        return render_local_preview(self.draft)

    @log_async_execution_time
    async def generate_ai_preview(self) -> ResumePreview:
        """
        Ask the model for a polished resume. On failure the previous state is
        kept and a notice is set for the client.
        """
        prompt = generate_resume_prompt(self.draft)
        try:
            content = await self.generator.generate(prompt)
        except GenerationError as e:
            logger.error(f"Error generating AI preview: {e}")
            self.notice = GENERATION_FAILED_NOTICE
            return self.preview()

        self.ai_preview = content
        self.generated = True
        self.notice = None
        logger.info(f"AI preview generated ({len(content)} chars)")
        return self.preview()

    def displayed_lines(self) -> list[str]:
        text = self.ai_preview if self.generated else self.local_preview()
        return text.split("\n")

    def preview(self) -> ResumePreview:
        return ResumePreview(generated=self.generated, lines=self.displayed_lines(), notice=self.notice)

    def export_content(self) -> str:
        """Text that goes into the exported document."""
        return self.ai_preview or self.local_preview()

    def export_docx(self) -> bytes:
        return DocxExporter.export(self.export_content())
