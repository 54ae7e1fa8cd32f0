"""Local, offline resume preview built straight from the form fields."""
from app.schemas.resume import ResumeDraft

SECTION_RULE = "---------------------------"

PLACEHOLDERS = {
    "name": "Your Name",
    "email": "you@example.com",
    "phone": "123-456-7890",
    "linkedin": "linkedin.com/in/yourprofile",
    "education": "Your education details here.",
    "skills": "Your skills here, separated by commas.",
    "work_experience": "Your work experience details here.",
    "projects": "Your projects details here.",
    "certificates": "Your certificates details here.",
}

SECTION_TITLES = [
    ("education", "EDUCATION"),
    ("skills", "SKILLS"),
    ("work_experience", "WORK EXPERIENCE"),
    ("projects", "PROJECTS"),
    ("certificates", "CERTIFICATES"),
]


def _or_placeholder(value: str, key: str) -> str:
    return value or PLACEHOLDERS[key]


def render_local_preview(draft: ResumeDraft) -> str:
    """
    Render the draft as plain text, substituting placeholder text for every
    empty field. Pure and deterministic; recomputed on every request.
    """
    info = draft.personal_info
    lines = [
        _or_placeholder(info.name, "name"),
        f"Email: {_or_placeholder(info.email, 'email')}   Phone: {_or_placeholder(info.phone, 'phone')}",
        f"LinkedIn: {_or_placeholder(info.linkedin, 'linkedin')}",
    ]
    for key, title in SECTION_TITLES:
        lines.append("")
        lines.append(f"{title} {SECTION_RULE}")
        lines.append(_or_placeholder(getattr(draft, key), key))
    return "\n".join(lines)
