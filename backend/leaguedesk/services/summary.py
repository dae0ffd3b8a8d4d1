"""AI-written team performance summaries.

The text itself comes from a generative model behind an HTTP API. Results are
cached per (team id, matches played, points) so the model is only asked
again once the team's record changes.
"""

import json
import logging
from typing import Awaitable, Callable, Optional

import httpx
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from leaguedesk.config import get_settings
from leaguedesk.errors import ExternalServiceError
from leaguedesk.models.team import Team
from leaguedesk.schemas.summary import (
    TeamPerformanceInput,
    TeamPerformanceResponse,
    TeamPerformanceSummary,
)
from leaguedesk.services.cache import ContentCache, team_summary_policy
from leaguedesk.services.partitioning import get_team_in_league

logger = logging.getLogger(__name__)

SummaryGenerator = Callable[[TeamPerformanceInput], Awaitable[TeamPerformanceSummary]]

PROMPT_TEMPLATE = """You are an expert football analyst providing performance summaries for amateur football teams.

Based on the provided statistics, create a brief summary of the team's performance, highlighting their strengths and weaknesses. Also, suggest potential areas of improvement for the team.

Team Name: {team_name}
Matches Played: {matches_played}
Matches Won: {matches_won}
Matches Drawn: {matches_drawn}
Matches Lost: {matches_lost}
Goals Scored: {goals_scored}
Goals Conceded: {goals_conceded}
Goal Difference: {goal_difference}

Respond with a JSON object with two string fields: "summary" (the performance summary) and "improvementAreas" (suggested areas for improvement)."""


def build_performance_input(team: Team) -> TeamPerformanceInput:
    return TeamPerformanceInput(
        team_name=team.name,
        matches_played=team.played,
        matches_won=team.won,
        matches_drawn=team.drawn,
        matches_lost=team.lost,
        goals_scored=team.goals_scored,
        goals_conceded=team.goals_conceded,
        goal_difference=team.goal_difference,
    )


def build_prompt(payload: TeamPerformanceInput) -> str:
    return PROMPT_TEMPLATE.format(**payload.model_dump())


def _extract_text(body: dict) -> str:
    try:
        parts = body["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def parse_summary_text(text: str) -> TeamPerformanceSummary:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
    try:
        return TeamPerformanceSummary.model_validate(json.loads(cleaned))
    except (json.JSONDecodeError, SchemaValidationError) as exc:
        raise ExternalServiceError("The AI service returned an unreadable analysis.") from exc


async def generate_performance_summary(
    payload: TeamPerformanceInput,
    client: Optional[httpx.AsyncClient] = None,
) -> TeamPerformanceSummary:
    """Ask the generative model for a summary of one team's record."""
    settings = get_settings()
    if not settings.genai_enabled or not settings.genai_api_key:
        raise ExternalServiceError("AI analysis is not configured for this deployment.")

    url = f"{settings.genai_base_url.rstrip('/')}/models/{settings.genai_model}:generateContent"
    request_body = {
        "contents": [{"role": "user", "parts": [{"text": build_prompt(payload)}]}],
        "generationConfig": {"responseMimeType": "application/json"},
    }

    owns_client = client is None
    client = client or httpx.AsyncClient()
    try:
        response = await client.post(
            url,
            params={"key": settings.genai_api_key},
            json=request_body,
        )
    except httpx.HTTPError as exc:
        logger.error(f"AI summary request failed for {payload.team_name}: {exc}", exc_info=True)
        raise ExternalServiceError("Failed to reach the AI service. Please retry.") from exc
    finally:
        if owns_client:
            await client.aclose()

    if response.status_code != 200:
        logger.error(f"AI summary API error: {response.status_code} - {response.text}")
        raise ExternalServiceError(f"The AI service failed with status {response.status_code}. Please retry.")

    try:
        body = response.json()
    except ValueError as exc:
        raise ExternalServiceError("The AI service returned an unreadable analysis.") from exc

    text = _extract_text(body)
    if not text:
        raise ExternalServiceError("The AI service returned an empty analysis.")
    return parse_summary_text(text)


class PerformanceSummaryService:
    @staticmethod
    async def get_summary(
        db: Session,
        league_id: str,
        team_id: str,
        generator: SummaryGenerator = generate_performance_summary,
    ) -> TeamPerformanceResponse:
        team = get_team_in_league(db, league_id, team_id)
        cache = ContentCache(db, team_summary_policy())
        cache_parts = (team.id, team.played, team.points)

        cached = cache.get(*cache_parts)
        if cached is not None:
            try:
                result = TeamPerformanceSummary.model_validate(cached)
                logger.debug("Loaded analysis for team %s from cache", team.id)
                return TeamPerformanceResponse(
                    team_id=team.id,
                    summary=result.summary,
                    improvement_areas=result.improvement_areas,
                    cached=True,
                )
            except SchemaValidationError:
                logger.warning("Failed to parse cached analysis for team %s", team.id)

        result = await generator(build_performance_input(team))
        cache.put(result.model_dump(by_alias=True), *cache_parts)
        return TeamPerformanceResponse(
            team_id=team.id,
            summary=result.summary,
            improvement_areas=result.improvement_areas,
            cached=False,
        )
