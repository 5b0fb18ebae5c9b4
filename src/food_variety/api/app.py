"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date, datetime

from fastapi import FastAPI, HTTPException, Request, status

from food_variety.api.models import (
    AliasOut,
    ConfirmRequest,
    CurrentWeekOut,
    DictationStateOut,
    FoodOut,
    FragmentRequest,
    HistoryEntryOut,
    MatchRequest,
    MatchResponse,
    WeekDetailOut,
    WeekFoodOut,
    WeekStartSetting,
    WeekSummaryOut,
)
from food_variety.app_logging import configure_logging
from food_variety.containers import AppContainer, initialize_container
from food_variety.domain.foods import CompareEntry
from food_variety.domain.history import HistoryEntry, WeekEntry
from food_variety.services.dictation import DictationSession
from food_variety.services.history import HistoryService, entries_for_food
from food_variety.text import format_date, format_date_with_time


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await initialize_container(app.state.container)
        except Exception:
            logger.exception("Failed to load food data")
            await app.state.container.close_resources()
            raise
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.state.dictation = None

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/week/current")
    async def current_week(request: Request) -> CurrentWeekOut:
        """Return this week's distinct foods and progress towards the goal."""
        state_container: AppContainer = request.app.state.container
        history = state_container.history_service
        week = history.get_count_for_today()
        now = history.now()
        summary = _week_summary(week, state_container.settings.weekly_goal)
        return CurrentWeekOut(
            **summary.model_dump(),
            today_label=format_date(now),
            days_remaining=history.days_remaining(week, now),
            foods=[FoodOut(name=food.name, category=food.category) for food in week.foods],
        )

    @app.get("/history/weeks")
    async def list_weeks(request: Request) -> list[WeekSummaryOut]:
        """Return one summary per week, most recent first."""
        state_container: AppContainer = request.app.state.container
        goal = state_container.settings.weekly_goal
        return [
            _week_summary(week, goal)
            for week in state_container.history_service.get_counts_per_week()
        ]

    @app.get("/history/weeks/{start}")
    async def week_detail(start: date, request: Request) -> WeekDetailOut:
        """Return the foods eaten in the week containing the given date."""
        state_container: AppContainer = request.app.state.container
        history = state_container.history_service
        week = history.get_week_entry_for_date(datetime(start.year, start.month, start.day))
        entries = history.get_list_for_week(week)
        summary = _week_summary(week, state_container.settings.weekly_goal)
        return WeekDetailOut(
            **summary.model_dump(),
            foods=[
                WeekFoodOut(
                    name=food.name,
                    category=food.category,
                    entries=[
                        _history_entry(entry, history)
                        for entry in entries_for_food(food, entries)
                    ],
                )
                for food in week.foods
            ],
        )

    @app.post("/history", status_code=status.HTTP_201_CREATED)
    async def confirm_entries(payload: ConfirmRequest, request: Request) -> list[HistoryEntryOut]:
        """Record confirmed matches as eaten now."""
        state_container: AppContainer = request.app.state.container
        matches: list[CompareEntry] = []
        for confirmed in payload.entries:
            match = state_container.catalog.find_alias(confirmed.alias, confirmed.food)
            if match is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f'Unknown alias "{confirmed.alias}" for food "{confirmed.food}"',
                )
            matches.append(match)
        added = state_container.history_service.add(matches)
        return [_history_entry(entry, state_container.history_service) for entry in added]

    @app.delete("/history", status_code=status.HTTP_204_NO_CONTENT)
    async def clear_history(request: Request) -> None:
        """Remove every recorded entry."""
        state_container: AppContainer = request.app.state.container
        state_container.history_service.clear()
        logger.info("History cleared")

    @app.post("/matches")
    async def match_text(payload: MatchRequest, request: Request) -> MatchResponse:
        """Return the foods recognized in free text."""
        state_container: AppContainer = request.app.state.container
        matches = state_container.matcher.process_text(payload.text)
        return MatchResponse(matches=[_alias(match) for match in matches])

    @app.post("/dictation", status_code=status.HTTP_201_CREATED)
    async def start_dictation(request: Request) -> DictationStateOut:
        """Start a new dictation, discarding any unfinished one."""
        state_container: AppContainer = request.app.state.container
        current: DictationSession | None = request.app.state.dictation
        if current is not None and current.active:
            current.cancel()
        session = DictationSession(state_container.matcher)
        request.app.state.dictation = session
        return _dictation_state(session, stop_requested=False)

    @app.post("/dictation/fragments")
    async def add_dictation_fragment(
        payload: FragmentRequest, request: Request
    ) -> DictationStateOut:
        """Add a speech recognition result to the running dictation."""
        session = _active_dictation(request)
        stop_requested = session.add_fragment(payload.text, payload.is_final)
        return _dictation_state(session, stop_requested=stop_requested)

    @app.post("/dictation/finish")
    async def finish_dictation(request: Request) -> MatchResponse:
        """Stop dictating and return the foods recognized in the transcript."""
        session = _active_dictation(request)
        matches = session.finish()
        request.app.state.dictation = None
        return MatchResponse(matches=[_alias(match) for match in matches])

    @app.get("/foods/aliases")
    async def list_aliases(request: Request, query: str | None = None) -> list[AliasOut]:
        """Return every alias alphabetically, optionally filtered."""
        state_container: AppContainer = request.app.state.container
        return [_alias(entry) for entry in state_container.catalog.filter_list(query)]

    @app.get("/settings/week-start")
    async def get_week_start(request: Request) -> WeekStartSetting:
        state_container: AppContainer = request.app.state.container
        return WeekStartSetting(
            value=state_container.user_settings_service.get_start_day_of_week()
        )

    @app.put("/settings/week-start")
    async def set_week_start(payload: WeekStartSetting, request: Request) -> WeekStartSetting:
        """Change the first day of the week; past weeks are regrouped too."""
        state_container: AppContainer = request.app.state.container
        state_container.user_settings_service.set_start_day_of_week(payload.value)
        return payload

    return app


def _active_dictation(request: Request) -> DictationSession:
    session: DictationSession | None = request.app.state.dictation
    if session is None or not session.active:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="No dictation in progress"
        )
    return session


def _dictation_state(session: DictationSession, stop_requested: bool) -> DictationStateOut:
    return DictationStateOut(
        transcript=session.transcript,
        interim_text=session.interim_text,
        stop_requested=stop_requested,
    )


def _alias(entry: CompareEntry) -> AliasOut:
    return AliasOut(alias=entry.original, food=entry.food.name, category=entry.food.category)


def _history_entry(entry: HistoryEntry, history: HistoryService) -> HistoryEntryOut:
    return HistoryEntryOut(
        food=entry.food.name,
        consumed_name=entry.consumed_name,
        date=entry.date,
        label=format_date_with_time(history.localize(entry.date)),
    )


def _week_summary(week: WeekEntry, goal: int) -> WeekSummaryOut:
    return WeekSummaryOut(
        start_date=week.start_date,
        end_date=week.end_date,
        start_label=format_date(week.start_date),
        end_label=format_date(week.end_date),
        count=week.count,
        goal=goal,
        goal_reached=week.goal_reached(goal),
    )
