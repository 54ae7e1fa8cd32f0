from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# path -> (page title, template)
VIEWS = {
    "/": ("Home", "home.html"),
    "/resume": ("Resume Builder", "resume.html"),
    "/interview": ("Mock Interview", "interview.html"),
}

views_router = APIRouter()


def render_view(path: str) -> str:
    """Wrap a view's template in the shared navigation shell."""
    title, template = VIEWS[path]
    shell = (TEMPLATES_DIR / "base.html").read_text(encoding="utf-8")
    content = (TEMPLATES_DIR / template).read_text(encoding="utf-8")
    return shell.replace("{title}", title).replace("{content}", content.rstrip("\n"))


@views_router.get("/", response_class=HTMLResponse)
async def home():
    return HTMLResponse(render_view("/"))


@views_router.get("/resume", response_class=HTMLResponse)
async def resume_view():
    return HTMLResponse(render_view("/resume"))


@views_router.get("/interview", response_class=HTMLResponse)
async def interview_view():
    return HTMLResponse(render_view("/interview"))
