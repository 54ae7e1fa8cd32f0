from typing import List

from app.schemas.resume import ResumeDraft

QUESTION_GENERATION_PROMPT = "Generate 5 technical interview questions for web development:"


def generate_resume_prompt(draft: ResumeDraft) -> str:
    """
    Build the prompt asking for a polished, ATS-friendly resume.
    The draft is embedded verbatim, empty fields included.
    """
    info = draft.personal_info
    return (
        "Create a professional, ATS-friendly resume using the following details.\n"
        "Format it in plain text with clear section headers and bullet points where needed.\n\n"
        "PERSONAL INFORMATION:\n"
        f"Name: {info.name}\n"
        f"Email: {info.email}\n"
        f"Phone: {info.phone}\n"
        f"LinkedIn: {info.linkedin}\n\n"
        f"EDUCATION:\n{draft.education}\n\n"
        f"SKILLS:\n{draft.skills}\n\n"
        f"WORK EXPERIENCE:\n{draft.work_experience}\n\n"
        f"PROJECTS:\n{draft.projects}\n\n"
        f"CERTIFICATES:\n{draft.certificates}\n\n"
        "Use a modern, clean layout similar to top resume builders.\n"
    )


def generate_answer_evaluation_prompt(question: str, answer: str) -> str:
    """Prompt scoring one answer; the model must reply with a JSON object."""
    return (
        "Evaluate the following answer for the question:\n"
        f"\"{question}\"\n"
        f"Answer: \"{answer}\"\n"
        "Please assess the answer based on:\n"
        "- Technical Accuracy (0-50)\n"
        "- Communication (0-30)\n"
        "- Completeness (0-20)\n"
        "Calculate the total score out of 100.\n"
        "Return a valid JSON response in the format:\n"
        "{\"score\": number, \"feedback\": \"Your detailed feedback here\"}\n"
        "Ensure the JSON is valid."
    )


def generate_consolidated_feedback_prompt(answers: List[str]) -> str:
    """Prompt for bullet-point feedback across every answer, in order."""
    pairs = "\n".join(f"Q{i}: {text}" for i, text in enumerate(answers, 1))
    return (
        "Provide comprehensive feedback for these interview responses "
        "in bullet points (each starting with \"-\"):\n"
        f"{pairs}"
    )
