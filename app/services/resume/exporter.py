import io
import logging

from docx import Document

from app.core.exceptions import ExportError

logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class DocxExporter:
    """
    Serializes resume text into a .docx document.
    One paragraph per line; blank lines become empty paragraphs.
    """

    @staticmethod
    def build_document(content: str):
        document = Document()
        for line in content.split("\n"):
            document.add_paragraph(line)
        return document

    @classmethod
    def export(cls, content: str) -> bytes:
        """
        Build the document and return its bytes.

        Raises:
            ExportError: If the document cannot be assembled or saved.
        """
        try:
            document = cls.build_document(content)
            buffer = io.BytesIO()
            document.save(buffer)
        except Exception as e:
            logger.error(f"Error generating DOCX: {e}", exc_info=True)
            raise ExportError(f"Could not generate the resume document: {e}") from e

        data = buffer.getvalue()
        logger.info(f"Generated DOCX ({len(data) / 1024:.1f}KB, {len(document.paragraphs)} paragraphs)")
        return data
