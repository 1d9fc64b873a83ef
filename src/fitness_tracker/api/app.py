"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse

from fitness_tracker.api.models import (
    ExerciseTextRequest,
    FoodImageRequest,
    NavigateRequest,
    OnboardingRequest,
)
from fitness_tracker.api.ui import APP_UI_HTML
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.entries import EntryKind, LogEntry
from fitness_tracker.domain.profile import Goal, Profile
from fitness_tracker.errors import (
    FlowBusyError,
    MissingInputError,
    NavigationError,
    ValidationError,
)
from fitness_tracker.services import stats as stats_service
from fitness_tracker.services.session import (
    EXERCISE_EXAMPLES,
    AppView,
    LoggerFlow,
    SessionService,
)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "errors": exc.errors},
        )

    @app.exception_handler(NavigationError)
    @app.exception_handler(FlowBusyError)
    async def conflict_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
        )

    @app.exception_handler(MissingInputError)
    async def missing_input_handler(
        request: Request, exc: MissingInputError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Single-page UI that drives the JSON API."""
        return HTMLResponse(APP_UI_HTML)

    @app.get("/state")
    async def get_state(request: Request) -> dict[str, object]:
        """Render the active view."""
        return await _render(_session(request))

    @app.post("/onboarding")
    async def onboarding(
        payload: OnboardingRequest, request: Request
    ) -> dict[str, object]:
        """Complete the one-time profile setup."""
        session = _session(request)
        session.complete_onboarding(
            name=payload.name,
            weight_kg=payload.weight_kg,
            height_cm=payload.height_cm,
            age_years=payload.age_years,
            goal=payload.goal,
        )
        return await _render(session)

    @app.post("/navigate")
    async def navigate(payload: NavigateRequest, request: Request) -> dict[str, object]:
        """Switch between the dashboard and the logger views."""
        session = _session(request)
        if payload.action == "start_food_log":
            session.start_food_log()
        elif payload.action == "start_exercise_log":
            session.start_exercise_log()
        else:
            session.back()
        return await _render(session)

    @app.put("/food/image")
    async def select_food_image(
        payload: FoodImageRequest, request: Request
    ) -> dict[str, object]:
        """Attach a photo to the food logger."""
        session = _session(request)
        session.select_food_image(_decode_image(payload.image_base64))
        return await _render(session)

    @app.delete("/food/image")
    async def clear_food_image(request: Request) -> dict[str, object]:
        """Remove the selected photo."""
        session = _session(request)
        session.clear_food_image()
        return await _render(session)

    @app.post("/food/analyze")
    async def analyze_food(request: Request) -> dict[str, object]:
        """Analyze the selected photo and log the meal."""
        session = _session(request)
        entry = await session.submit_food()
        if entry is None:
            logger.info("Food analysis failed; photo kept for retry")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=session.state.food_flow.error,
            )
        rendered = await _render(session)
        rendered["entry"] = _serialize_entry(LogEntry.of_food(entry))
        return rendered

    @app.put("/exercise/text")
    async def set_exercise_text(
        payload: ExerciseTextRequest, request: Request
    ) -> dict[str, object]:
        """Update the workout description draft."""
        session = _session(request)
        session.set_exercise_text(payload.text)
        return await _render(session)

    @app.post("/exercise/analyze")
    async def analyze_exercise(request: Request) -> dict[str, object]:
        """Analyze the workout description and log it."""
        session = _session(request)
        entry = await session.submit_exercise()
        if entry is None:
            logger.info("Exercise analysis failed; description kept for editing")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=session.state.exercise_flow.error,
            )
        rendered = await _render(session)
        rendered["entry"] = _serialize_entry(LogEntry.of_exercise(entry))
        return rendered

    return app


def _session(request: Request) -> SessionService:
    state_container: AppContainer = request.app.state.container
    return state_container.session_service


async def _render(session: SessionService) -> dict[str, object]:
    """Build the payload for whichever view is active."""
    view = session.view
    rendered: dict[str, object] = {"view": view.value}
    if view is AppView.ONBOARDING:
        rendered["goals"] = [goal.value for goal in Goal]
        return rendered

    profile = session.profile
    if profile is None:
        raise NavigationError("Complete onboarding first.")
    rendered["profile"] = _serialize_profile(profile)
    if view is AppView.FOOD_LOG:
        rendered["food_log"] = _serialize_flow(session.state.food_flow)
    elif view is AppView.EXERCISE_LOG:
        rendered["exercise_log"] = _serialize_flow(session.state.exercise_flow)
        rendered["examples"] = list(EXERCISE_EXAMPLES)
    else:
        rendered["dashboard"] = await _render_dashboard(session, profile)
    return rendered


async def _render_dashboard(
    session: SessionService, profile: Profile
) -> dict[str, object]:
    stats = session.stats
    return {
        "greeting": f"Hello, {profile.name}",
        "calorie_target": profile.calorie_target,
        "remaining_calories": stats_service.remaining_calories(
            profile.calorie_target, stats
        ),
        "progress": stats_service.progress_fraction(profile.calorie_target, stats),
        "stats": asdict(stats),
        "has_macro_data": stats_service.has_macro_data(stats),
        "macros": [asdict(share) for share in stats_service.macro_breakdown(stats)],
        "insight": await session.daily_insight(),
        "entries": [_serialize_entry(entry) for entry in session.entries()],
    }


def _serialize_profile(profile: Profile) -> dict[str, object]:
    payload = asdict(profile)
    payload["goal"] = profile.goal.value
    return payload


def _serialize_flow(flow: LoggerFlow) -> dict[str, object]:
    return {
        "status": flow.status.value,
        "error": flow.error,
        "has_image": flow.image is not None,
        "text": flow.text,
    }


def _serialize_entry(entry: LogEntry) -> dict[str, object]:
    """Flatten a tagged entry for the activity feed."""
    if entry.kind is EntryKind.FOOD and entry.food is not None:
        food = entry.food
        return {
            "kind": entry.kind.value,
            **asdict(food),
            "summary": f"{food.calories:g} kcal • P:{food.protein_g:g}g",
            "delta": f"+{food.calories:g}",
        }
    if entry.kind is EntryKind.EXERCISE and entry.exercise is not None:
        exercise = entry.exercise
        return {
            "kind": entry.kind.value,
            **asdict(exercise),
            "summary": f"{exercise.duration_minutes:g} min",
            "delta": f"-{exercise.calories_burned:g}",
        }
    raise ValueError(f"Entry payload does not match kind {entry.kind}")


def _decode_image(raw: str) -> bytes:
    """Decode base64 image data, accepting an optional data URL prefix."""
    data = raw.partition(",")[2] if raw.startswith("data:") else raw
    try:
        decoded = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Image must be base64 encoded.",
        ) from exc
    if not decoded:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Image is empty."
        )
    return decoded
