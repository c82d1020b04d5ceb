"""
Static landing page
"""

from html import escape
from typing import List, NamedTuple

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from config import Settings
from dependencies import get_app_settings

router = APIRouter(tags=["pages"])


class FeatureCard(NamedTuple):
    icon: str
    title: str
    text: str


FEATURES: List[FeatureCard] = [
    FeatureCard(
        "🚀",
        "Modern Stack",
        "Built with FastAPI, Pydantic, and cutting-edge technologies",
    ),
    FeatureCard(
        "🤖",
        "AI-Powered",
        "Intelligent features powered by advanced machine learning",
    ),
    FeatureCard(
        "☁️",
        "Cloud Native",
        "Scalable architecture designed for modern cloud infrastructure",
    ),
]

STYLES = """
body { margin: 0; font-family: system-ui, sans-serif; }
main { min-height: 100vh; background: linear-gradient(to bottom right, #eff6ff, #e0e7ff); }
.container { max-width: 64rem; margin: 0 auto; padding: 2rem 1rem; text-align: center; }
h1 { font-size: 2.25rem; color: #111827; margin-bottom: 1rem; }
.lead { font-size: 1.25rem; color: #4b5563; margin-bottom: 2rem; }
.grid { display: grid; gap: 1.5rem; grid-template-columns: repeat(auto-fit, minmax(16rem, 1fr)); }
.card { background: #fff; border-radius: 0.5rem; box-shadow: 0 4px 6px rgba(0, 0, 0, 0.1); padding: 1.5rem; }
.card h2 { font-size: 1.5rem; color: #1f2937; margin: 0 0 0.75rem; }
.card p, .footer { color: #4b5563; }
.footer { margin-top: 3rem; color: #6b7280; }
"""


def render_layout(title: str, description: str, body: str) -> str:
    """Wrap page content in the root document layout"""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<title>{escape(title)}</title>\n"
        f'<meta name="description" content="{escape(description)}">\n'
        f"<style>{STYLES}</style>\n"
        "</head>\n"
        f"<body>{body}</body>\n"
        "</html>\n"
    )


def render_home(settings: Settings) -> str:
    cards = "".join(
        '<div class="card">'
        f"<h2>{card.icon} {escape(card.title)}</h2>"
        f"<p>{escape(card.text)}</p>"
        "</div>"
        for card in FEATURES
    )
    body = (
        '<main><div class="container">'
        f"<h1>Welcome to {escape(settings.app_name)}</h1>"
        '<p class="lead">A modern, scalable social platform with AI-powered features</p>'
        f'<div class="grid">{cards}</div>'
        '<p class="footer">Infrastructure is running • Check the README for development setup</p>'
        "</div></main>"
    )
    return render_layout(settings.app_name, settings.app_description, body)


@router.get("/", response_class=HTMLResponse, summary="Landing page")
async def home(settings: Settings = Depends(get_app_settings)):
    return HTMLResponse(render_home(settings))
