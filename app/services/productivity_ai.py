# backend-server/app/services/productivity_ai.py
import json
import logging
from typing import Any, List, Optional, TypeVar

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.services.ai_gateway import AIGateway, Completion, Provider

logger = logging.getLogger(__name__)

APP_NAME = "Pocket WinDryft Pro"
RECOMMENDATION_ICONS = (
    "tips_and_updates", "local_drink", "fitness_center", "psychology",
    "hotel", "visibility", "schedule", "brightness_5",
)

T = TypeVar("T")


# --- Typed AI results ---
class AIResult(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True

class SuggestedTask(AIResult):
    name: str
    section: Optional[str] = None
    priority: Optional[str] = None

class ProjectSuggestions(AIResult):
    sections: List[str] = []
    tasks: List[SuggestedTask] = []
    resources: List[str] = []

    @field_validator("sections", "resources", mode="before")
    @classmethod
    def _names_only(cls, value):
        # Models often answer with {"name": ..., "description": ...} objects
        if isinstance(value, list):
            return [item.get("name") or item.get("title") or json.dumps(item) if isinstance(item, dict) else item
                    for item in value]
        return value

    @field_validator("tasks", mode="before")
    @classmethod
    def _plain_tasks(cls, value):
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

class ContentAnalysis(AIResult):
    summary: str = ""
    key_points: List[str] = []
    suggestions: List[str] = []

class RecommendationDraft(AIResult):
    type: str = "focus"
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    icon: str = "tips_and_updates"
    action_text: str = "Got it"
    secondary_action_text: Optional[str] = None

class RecommendationBatch(AIResult):
    recommendations: List[RecommendationDraft] = []

    @model_validator(mode="before")
    @classmethod
    def _wrap_list(cls, value):
        # JSON mode forces an object at the top level on some vendors
        if isinstance(value, list):
            return {"recommendations": value}
        if isinstance(value, dict) and "recommendations" not in value:
            lists = [v for v in value.values() if isinstance(v, list)]
            if len(lists) == 1:
                return {"recommendations": lists[0]}
            if "title" in value:
                return {"recommendations": [value]}
        return value


DEFAULT_PROJECT_SUGGESTIONS = ProjectSuggestions(
    sections=["Research", "Planning", "Implementation", "Review"],
    tasks=[
        SuggestedTask(name="Define project scope", section="Planning", priority="High"),
        SuggestedTask(name="Gather materials", section="Research", priority="Medium"),
        SuggestedTask(name="Create outline", section="Planning", priority="Medium"),
    ],
    resources=["Productivity books", "Online tutorials", "Research podcasts"],
)

DEFAULT_CONTENT_ANALYSIS = ContentAnalysis(
    summary="Analysis completed, but encountered an error formatting the results",
    key_points=["Unable to extract key points from the provided content"],
    suggestions=["Try providing more detailed content for better analysis"],
)

DEFAULT_RECOMMENDATIONS = [
    RecommendationDraft(
        type="break",
        title="Schedule strategic breaks",
        description="Taking short breaks every 50-90 minutes can help maintain optimal focus and "
                    "cognitive function throughout your workday.",
        icon="schedule",
        action_text="Set break timer",
        secondary_action_text="Learn more",
    ),
    RecommendationDraft(
        type="focus",
        title="Morning sunlight exposure",
        description="Getting 10-30 minutes of morning sunlight exposure can help regulate your circadian "
                    "rhythm and improve focus during the day.",
        icon="brightness_5",
        action_text="Set reminder",
        secondary_action_text="Read research",
    ),
]


def _strip_code_fence(raw: str) -> str:
    raw = (raw or "").strip()
    if raw.startswith("```"):
        raw = raw.split("\n", 1)[1] if "\n" in raw else ""
        raw = raw.rsplit("```", 1)[0]
    return raw.strip()

def parse_json_or_default(raw: str, type_: Any, default: T) -> T:
    """
    Validates a model's JSON answer against ``type_``.
    Any malformed or wrongly shaped answer yields ``default`` instead.
    """
    try:
        return TypeAdapter(type_).validate_json(_strip_code_fence(raw))
    except ValidationError as e:
        logger.warning("Unusable JSON from AI provider (%d errors), using default payload", e.error_count())
        return default


# --- Operations ---
async def generate_project_suggestions(gateway: AIGateway, project_type: str, project_name: str,
                                       project_description: str = "", provider=Provider.AUTO) -> ProjectSuggestions:
    messages = [
        {
            "role": "system",
            "content": "You are an AI assistant specialized in project management. Generate helpful suggestions "
                       "for organizing a new project. Provide suggestions in JSON format with the keys "
                       "\"sections\" (list of strings), \"tasks\" (list of {name, section, priority}) and "
                       "\"resources\" (list of strings).",
        },
        {
            "role": "user",
            "content": f'I\'m creating a new {project_type} project called "{project_name}". '
                       f'Description: "{project_description}". Please provide suggestions for organizing this project.',
        },
    ]
    raw = await gateway.complete(messages, json_format=True, provider=provider)
    return parse_json_or_default(raw, ProjectSuggestions, DEFAULT_PROJECT_SUGGESTIONS)


async def analyze_content(gateway: AIGateway, content: str, provider=Provider.AUTO) -> ContentAnalysis:
    messages = [
        {
            "role": "system",
            "content": "You are an AI assistant specialized in content analysis. Analyze the provided content and "
                       "provide insights in JSON format with the keys \"summary\" (string), \"keyPoints\" "
                       "(list of strings) and \"suggestions\" (list of strings).",
        },
        {"role": "user", "content": content},
    ]
    raw = await gateway.complete(messages, json_format=True, provider=provider)
    return parse_json_or_default(raw, ContentAnalysis, DEFAULT_CONTENT_ANALYSIS)


async def summarize_content(gateway: AIGateway, content: str, max_length: int = 500, provider=Provider.AUTO) -> str:
    messages = [
        {
            "role": "system",
            "content": f"You are an AI assistant specialized in summarizing content. Create a concise summary of the "
                       f"provided content within approximately {max_length} characters. The summary should be clear, "
                       f"readable, and capture the main points.",
        },
        {"role": "user", "content": content},
    ]
    return await gateway.complete(messages, provider=provider)


async def extract_key_points(gateway: AIGateway, content: str, max_points: int = 5, provider=Provider.AUTO) -> str:
    messages = [
        {
            "role": "system",
            "content": f"You are an AI assistant specialized in extracting key actionable points from content. "
                       f"Extract exactly {max_points} important points from the provided content. "
                       f"Each point should be concise, clear, and focus on actionable information. "
                       f"Format as a numbered list with one key point per line.",
        },
        {"role": "user", "content": content},
    ]
    return await gateway.complete(messages, provider=provider)


async def generate_assistant_response(gateway: AIGateway, message: str, context: str = "",
                                      provider=Provider.AUTO) -> Completion:
    messages = [
        {
            "role": "system",
            "content": f"You are an AI assistant in a productivity app called {APP_NAME}. "
                       f"You help users with their projects by providing suggestions, organizing information, "
                       f"and answering questions.\nContext about the current project: {context or 'none'}",
        },
        {"role": "user", "content": message},
    ]
    return await gateway.generate(messages, provider=provider)


async def generate_productivity_recommendations(gateway: AIGateway, work_data: dict,
                                                provider=Provider.AUTO) -> List[RecommendationDraft]:
    messages = [
        {
            "role": "system",
            "content": f"You are an AI assistant in a productivity app called {APP_NAME}. "
                       f"Generate 1-3 personalized productivity recommendations based on the user's work data. "
                       f"Respond with JSON in the format: "
                       f'[{{"type": string, "title": string, "description": string, "icon": string, '
                       f'"actionText": string, "secondaryActionText": string}}]\n'
                       f"For type, use one of: break, hydration, exercise, nsdr, focus, light. "
                       f"For icon, use one of: {', '.join(RECOMMENDATION_ICONS)}. "
                       f"Keep recommendations brief, practical and science-based.",
        },
        {
            "role": "user",
            "content": f"Generate productivity recommendations based on this work data: {json.dumps(work_data, default=str)}",
        },
    ]
    raw = await gateway.complete(messages, json_format=True, provider=provider)
    batch = parse_json_or_default(raw, RecommendationBatch, RecommendationBatch(recommendations=DEFAULT_RECOMMENDATIONS))
    return (batch.recommendations or DEFAULT_RECOMMENDATIONS)[:3]
