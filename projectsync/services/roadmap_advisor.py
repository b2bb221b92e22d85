"""Roadmap advisor - asks Gemini to break a project down into goals."""
import logging
from typing import Optional

import httpx
from google import genai
from google.genai import errors, types
from pydantic import ValidationError as PydanticValidationError

from projectsync.config import Settings, settings
from projectsync.errors import AIServiceError
from projectsync.models.goal import GoalPriority
from projectsync.models.roadmap import RoadmapRecommendation


logger = logging.getLogger(__name__)

ROADMAP_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "suggestedGoals": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "title": types.Schema(type=types.Type.STRING),
                    "description": types.Schema(type=types.Type.STRING),
                    "priority": types.Schema(
                        type=types.Type.STRING,
                        enum=[priority.value for priority in GoalPriority],
                    ),
                },
                required=["title", "description", "priority"],
            ),
        ),
        "advice": types.Schema(type=types.Type.STRING),
    },
    required=["suggestedGoals", "advice"],
)


def build_prompt(title: str, description: str, goal_count: int = 5) -> str:
    """Build the roadmap prompt for a project."""
    return (
        f"Analyze the following project and suggest {goal_count} specific, "
        f"actionable short-term goals to get started. "
        f"Project: {title}. Description: {description}"
    )


class RoadmapAdvisor:
    """Client for the Gemini structured-output roadmap request."""

    def __init__(
        self,
        client: Optional[genai.Client],
        model: str = "gemini-3-flash-preview",
        goal_count: int = 5,
    ):
        """
        Initialize the advisor.

        Args:
            client: google-genai client, or None when no API key is configured
            model: Gemini model name
            goal_count: Number of goals to ask for
        """
        self.client = client
        self.model = model
        self.goal_count = goal_count

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "RoadmapAdvisor":
        """Build an advisor from application settings."""
        client = genai.Client(api_key=config.gemini_api_key) if config.gemini_api_key else None
        return cls(client, model=config.gemini_model, goal_count=config.roadmap_goal_count)

    async def request_roadmap(self, title: str, description: str) -> RoadmapRecommendation:
        """
        Ask Gemini for a roadmap of goals for a project.

        Args:
            title: Project title
            description: Project description

        Returns:
            Suggested goals and free-text advice

        Raises:
            AIServiceError: If the API key is missing, the request fails, or
                the response does not match the roadmap schema
        """
        if self.client is None:
            raise AIServiceError("Gemini API key is not configured")

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=build_prompt(title, description, self.goal_count),
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=ROADMAP_SCHEMA,
                ),
            )
        except (errors.APIError, httpx.HTTPError) as e:
            logger.error("Gemini request failed: %s", e)
            raise AIServiceError("AI analysis failed.") from e

        text = response.text
        if not text:
            logger.error("Gemini returned an empty response")
            raise AIServiceError("AI analysis failed.")

        try:
            return RoadmapRecommendation.model_validate_json(text)
        except PydanticValidationError as e:
            logger.error("Failed to parse Gemini response: %s", e)
            raise AIServiceError("AI analysis failed.") from e
