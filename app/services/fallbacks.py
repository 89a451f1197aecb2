# backend-server/app/services/fallbacks.py
# Canned answers used when no AI vendor is configured or a vendor call fails.
# JSON fallbacks are picked from the system prompt so they always match the
# shape the calling operation expects.
import json

DEMO_MODE_TEXT = (
    "I'm currently in demo mode with limited capabilities. For the full AI experience, "
    "please ask the administrator to add an API key to the server environment variables."
)
ERROR_TEXT = (
    "I'm having trouble reaching the AI service right now, so this is a limited demo-mode answer. "
    "Please try again later or switch to a different AI provider."
)

ANALYSIS_TEXT = (
    "This is a demo-mode content analysis. The content appears to be about productivity and work "
    "management. Key points include the importance of regular breaks, proper hydration, and strategic "
    "planning of tasks. For detailed AI analysis, please provide a valid API key."
)
PROJECT_HELP_TEXT = (
    "I can help with project organization! Consider breaking your project into clear phases: Research, "
    "Planning, Execution, and Review. For each phase, define specific deliverables and timelines. For more "
    "personalized assistance, please provide a valid API key."
)
IDEAS_TEXT = (
    "Here are some project ideas: 1) Create a high-performance morning routine optimization guide, "
    "2) Develop a tracking system for your key performance metrics, 3) Design a custom note-taking "
    "template for meeting insights. For personalized ideas, please provide a valid API key."
)

RECOMMENDATIONS = [
    {
        "type": "break",
        "title": "Take a strategic break",
        "description": "Regular breaks improve focus and cognitive function. Try the 50-10 rule: "
                       "50 minutes of work followed by a 10-minute break.",
        "icon": "schedule",
        "actionText": "Set timer",
        "secondaryActionText": "Learn more",
    },
    {
        "type": "hydration",
        "title": "Hydration reminder",
        "description": "Proper hydration supports optimal brain function and energy levels.",
        "icon": "local_drink",
        "actionText": "Set reminder",
        "secondaryActionText": "Track intake",
    },
]

CONTENT_ANALYSIS = {
    "summary": "This content appears to be a placeholder or sample. For detailed analysis, please provide your actual content.",
    "keyPoints": ["Sample key point 1", "Sample key point 2", "Sample key point 3"],
    "suggestions": ["Consider expanding this content", "Add specific examples", "Include references"],
}

PROJECT_SUGGESTIONS = {
    "sections": ["Research", "Outline", "Draft", "Review", "Final Version"],
    "tasks": [
        {"name": "Gather reference materials", "section": "Research", "priority": "High"},
        {"name": "Create content structure", "section": "Outline", "priority": "Medium"},
        {"name": "Write first draft", "section": "Draft", "priority": "Medium"},
    ],
    "resources": ["Productivity podcasts", "Scientific journals", "Online courses"],
}

GENERIC_JSON = {"status": "mock", "message": "This is a demo-mode response. Configure an AI API key for real answers."}


def _system_prompt(messages) -> str:
    return " ".join(m.get("content", "") for m in messages if m.get("role") == "system").lower()

def _last_user_message(messages) -> str:
    for m in reversed(messages):
        if m.get("role") == "user":
            return m.get("content", "").lower()
    return ""


def json_for(messages) -> str:
    context = _system_prompt(messages)
    if "productivity recommendations" in context:
        return json.dumps(RECOMMENDATIONS)
    if "content analysis" in context:
        return json.dumps(CONTENT_ANALYSIS)
    if "project management" in context:
        return json.dumps(PROJECT_SUGGESTIONS)
    return json.dumps(GENERIC_JSON)

def text_for(messages, default: str = DEMO_MODE_TEXT) -> str:
    query = _last_user_message(messages)
    context = _system_prompt(messages)
    if any(word in query or word in context for word in ("analyze", "summariz", "key points", "key actionable")):
        return ANALYSIS_TEXT
    if "help" in query or "project" in query:
        return PROJECT_HELP_TEXT
    if "idea" in query:
        return IDEAS_TEXT
    return default


def for_request(messages, json_format: bool) -> str:
    """Answer for a request no vendor could take."""
    return json_for(messages) if json_format else text_for(messages)

def after_error(messages, json_format: bool) -> str:
    """Answer for a request whose vendor call failed."""
    return json_for(messages) if json_format else text_for(messages, default=ERROR_TEXT)
