# backend-server/app/db/seed.py
import logging

from sqlalchemy.orm import Session

from app.core import security
from app.core.config import settings
from app.db import crud

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES = [
    {
        "name": "Video Production",
        "type": "video",
        "sections": [
            {"name": "Research", "description": "Collect background information and source material"},
            {"name": "Script Drafts", "description": "Write and refine script versions"},
            {"name": "Media Clips", "description": "Organize visual and audio elements"},
            {"name": "Storyboard", "description": "Plan visual sequences and transitions"},
            {"name": "Notes", "description": "General notes and ideas"},
        ],
    },
    {
        "name": "Research Paper",
        "type": "research",
        "sections": [
            {"name": "Literature Review", "description": "Analysis of existing research"},
            {"name": "Methodology", "description": "Research approach and methods"},
            {"name": "Data Collection", "description": "Raw data and observations"},
            {"name": "Analysis", "description": "Data processing and findings"},
            {"name": "Conclusions", "description": "Insights and implications"},
        ],
    },
    {
        "name": "Practical Guide",
        "type": "guide",
        "sections": [
            {"name": "Background", "description": "Context and foundational information"},
            {"name": "Protocol", "description": "Step-by-step instructions"},
            {"name": "Resources", "description": "Supporting materials and references"},
            {"name": "FAQ", "description": "Common questions and answers"},
            {"name": "Case Studies", "description": "Real-world applications and examples"},
        ],
    },
    {
        "name": "Podcast Episode",
        "type": "podcast",
        "sections": [
            {"name": "Topic Research", "description": "Background information on the subject"},
            {"name": "Guest Info", "description": "Notes on interview subjects"},
            {"name": "Questions", "description": "Prepared interview questions"},
            {"name": "Show Notes", "description": "Summary and reference points"},
            {"name": "Follow-up", "description": "Post-recording action items"},
        ],
    },
]

DEMO_USER = {
    "username": "demo",
    "email": "demo@windryft.app",
    "name": "Tadeáš Novák",
    "avatar": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=32&h=32&fit=crop&crop=faces",
}


def seed_defaults(db: Session) -> None:
    """Inserts the reference templates and the demo account when they are missing."""
    if not crud.get_project_templates(db):
        for template in DEFAULT_TEMPLATES:
            crud.create_project_template(db, name=template["name"], type_=template["type"], sections=template["sections"])
        logger.info("Seeded %d project templates", len(DEFAULT_TEMPLATES))

    if crud.get_user_by_username(db, DEMO_USER["username"]) is None:
        crud.create_user(db, hashed_password=security.get_password_hash(settings.DEMO_USER_PASSWORD), **DEMO_USER)
        logger.info("Created demo user '%s'", DEMO_USER["username"])
