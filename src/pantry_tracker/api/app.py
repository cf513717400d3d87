"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from pantry_tracker.api.models import (
    AddIngredientRequest,
    DetailsRequest,
    EstimateRequest,
    ExactExpirationRequest,
    OpenedChangeRequest,
    RipenessChangeRequest,
    ScanRequest,
    StartEditRequest,
    TypeChangeRequest,
)
from pantry_tracker.app_logging import configure_logging
from pantry_tracker.containers import AppContainer
from pantry_tracker.domain.errors import (
    EditSessionNotFoundError,
    IngredientNotFoundError,
    NoPendingTransitionError,
    PantryError,
    PersistenceError,
    ProductLookupError,
    ProductNotFoundError,
    ValidationError,
)
from pantry_tracker.domain.ingredients import Ingredient
from pantry_tracker.domain.lifecycle import Transition
from pantry_tracker.services.dates import parse_date
from pantry_tracker.services.lifecycle import EditSession
from pantry_tracker.services.queries import VIEW_ALL, apply_list_filters, needs_checking
from pantry_tracker.services.records import serialize_ingredient

_ERROR_STATUS: dict[type[PantryError], int] = {
    ValidationError: 422,
    IngredientNotFoundError: 404,
    EditSessionNotFoundError: 404,
    ProductNotFoundError: 404,
    NoPendingTransitionError: 409,
    ProductLookupError: 502,
    PersistenceError: 503,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(PantryError)
    async def pantry_error_handler(request: Request, exc: PantryError) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/ingredients")
    async def list_ingredients(  # noqa: PLR0913
        request: Request,
        view: str = VIEW_ALL,
        category: str | None = None,
        location: str | None = None,
        type: str | None = None,  # noqa: A002
    ) -> dict[str, object]:
        """List ingredients with the inventory screen filters."""
        state_container: AppContainer = request.app.state.container
        settings = state_container.settings
        results = apply_list_filters(
            state_container.inventory_service.list_ingredients(),
            view=view,
            category=category,
            location=location,
            confection_type=type,
            recent_limit=settings.recently_added_limit,
        )
        now = state_container.clock()
        return {
            "ingredients": [
                _ingredient_payload(item, now, settings.needs_check_days)
                for item in results
            ]
        }

    @app.get("/ingredients/expiring")
    async def list_expiring(
        request: Request, days: int | None = None
    ) -> dict[str, object]:
        """List ingredients expiring soon, soonest first."""
        state_container: AppContainer = request.app.state.container
        settings = state_container.settings
        threshold = settings.expiring_soon_days if days is None else days
        now = state_container.clock()
        return {
            "ingredients": [
                _ingredient_payload(item, now, settings.needs_check_days)
                for item in state_container.inventory_service.list_expiring(threshold)
            ]
        }

    @app.post("/ingredients", status_code=status.HTTP_201_CREATED)
    async def add_ingredient(
        payload: AddIngredientRequest, request: Request
    ) -> dict[str, object]:
        """Add an ingredient from the add form."""
        state_container: AppContainer = request.app.state.container
        ingredient = state_container.inventory_service.add_ingredient(
            payload.name,
            brand=payload.brand,
            category=payload.category,
            location=payload.location,
            confection_type=payload.type,
            expiration_date=parse_date(payload.expiration_date),
            estimate=payload.estimate,
        )
        return {"ingredient": serialize_ingredient(ingredient)}

    @app.delete("/ingredients/{position}")
    async def delete_ingredient(position: int, request: Request) -> dict[str, str]:
        """Delete the ingredient at a position in the list."""
        state_container: AppContainer = request.app.state.container
        service = state_container.inventory_service
        service.delete_ingredient(service.get_at(position))
        return {"status": "deleted"}

    @app.post("/ingredients/scan", status_code=status.HTTP_201_CREATED)
    async def scan_product(payload: ScanRequest, request: Request) -> dict[str, object]:
        """Look up a scanned barcode and add the product by name."""
        state_container: AppContainer = request.app.state.container
        name = await state_container.product_lookup_service.lookup_name(payload.code)
        ingredient = state_container.inventory_service.add_scanned_product(name)
        return {"ingredient": serialize_ingredient(ingredient)}

    @app.post("/sessions", status_code=status.HTTP_201_CREATED)
    async def start_session(
        payload: StartEditRequest, request: Request
    ) -> dict[str, object]:
        """Open an edit session for an ingredient."""
        state_container: AppContainer = request.app.state.container
        session = state_container.inventory_service.start_edit(payload.name)
        session_id = state_container.edit_sessions.open(session)
        return _session_payload(session_id, session, Transition(session.draft))

    @app.get("/sessions/{session_id}")
    async def get_session(session_id: UUID, request: Request) -> dict[str, object]:
        """Return the draft and any change awaiting confirmation."""
        session = _get_session(request, session_id)
        return _session_payload(
            session_id, session, session.pending or Transition(session.draft)
        )

    @app.post("/sessions/{session_id}/type")
    async def change_type(
        session_id: UUID, payload: TypeChangeRequest, request: Request
    ) -> dict[str, object]:
        """Change the confection type."""
        session = _get_session(request, session_id)
        transition = session.apply_type_change(payload.type)
        return _session_payload(session_id, session, transition)

    @app.post("/sessions/{session_id}/ripeness")
    async def change_ripeness(
        session_id: UUID, payload: RipenessChangeRequest, request: Request
    ) -> dict[str, object]:
        """Change the ripeness status."""
        session = _get_session(request, session_id)
        transition = session.apply_ripeness_change(payload.status)
        return _session_payload(session_id, session, transition)

    @app.post("/sessions/{session_id}/opened")
    async def change_opened(
        session_id: UUID, payload: OpenedChangeRequest, request: Request
    ) -> dict[str, object]:
        """Open or close the package."""
        session = _get_session(request, session_id)
        transition = session.apply_opened_change(payload.opened)
        return _session_payload(session_id, session, transition)

    @app.post("/sessions/{session_id}/check")
    async def check_ripeness(session_id: UUID, request: Request) -> dict[str, object]:
        """Mark the ripeness as checked."""
        session = _get_session(request, session_id)
        transition = session.apply_manual_check()
        return _session_payload(session_id, session, transition)

    @app.post("/sessions/{session_id}/details")
    async def change_details(
        session_id: UUID, payload: DetailsRequest, request: Request
    ) -> dict[str, object]:
        """Edit name, brand, category or location."""
        session = _get_session(request, session_id)
        transition = session.set_details(
            name=payload.name,
            brand=payload.brand,
            category=payload.category,
            location=payload.location,
        )
        return _session_payload(session_id, session, transition)

    @app.post("/sessions/{session_id}/expiration")
    async def change_expiration(
        session_id: UUID, payload: ExactExpirationRequest, request: Request
    ) -> dict[str, object]:
        """Set an exact expiration date."""
        session = _get_session(request, session_id)
        transition = session.set_exact_expiration(payload.date)
        return _session_payload(session_id, session, transition)

    @app.post("/sessions/{session_id}/estimate")
    async def change_estimate(
        session_id: UUID, payload: EstimateRequest, request: Request
    ) -> dict[str, object]:
        """Set the expiration from an estimate label."""
        session = _get_session(request, session_id)
        transition = session.set_estimated_expiration(payload.estimate)
        return _session_payload(session_id, session, transition)

    @app.post("/sessions/{session_id}/confirm")
    async def confirm_change(session_id: UUID, request: Request) -> dict[str, object]:
        """Accept the change awaiting confirmation."""
        session = _get_session(request, session_id)
        return _session_payload(session_id, session, Transition(session.commit()))

    @app.post("/sessions/{session_id}/decline")
    async def decline_change(session_id: UUID, request: Request) -> dict[str, object]:
        """Decline the change awaiting confirmation."""
        session = _get_session(request, session_id)
        return _session_payload(session_id, session, Transition(session.cancel()))

    @app.post("/sessions/{session_id}/save")
    async def save_session(session_id: UUID, request: Request) -> dict[str, object]:
        """Save the draft back to the inventory and close the session."""
        state_container: AppContainer = request.app.state.container
        session = _get_session(request, session_id)
        try:
            ingredient = state_container.inventory_service.save_edit(session)
        except PersistenceError:
            logger.exception(
                "Failed to save ingredient", extra={"ingredient": session.draft.name}
            )
            raise
        state_container.edit_sessions.close(session_id)
        return {"ingredient": serialize_ingredient(ingredient)}

    @app.delete("/sessions/{session_id}")
    async def discard_session(session_id: UUID, request: Request) -> dict[str, str]:
        """Discard the draft without touching the inventory."""
        state_container: AppContainer = request.app.state.container
        state_container.edit_sessions.close(session_id)
        return {"status": "discarded"}

    return app


def _status_for(exc: PantryError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in _ERROR_STATUS:
            return _ERROR_STATUS[error_type]
    return status.HTTP_400_BAD_REQUEST


def _get_session(request: Request, session_id: UUID) -> EditSession:
    state_container: AppContainer = request.app.state.container
    return state_container.edit_sessions.get(session_id)


def _ingredient_payload(
    ingredient: Ingredient, now: datetime, needs_check_days: int
) -> dict[str, object]:
    payload = serialize_ingredient(ingredient)
    payload["needsChecking"] = needs_checking(ingredient, now, needs_check_days)
    return payload


def _session_payload(
    session_id: UUID, session: EditSession, transition: Transition
) -> dict[str, object]:
    notice = transition.notice
    confirmation = transition.confirmation
    return {
        "session_id": str(session_id),
        "ingredient": serialize_ingredient(transition.proposed),
        "notice": (
            {"title": notice.title, "message": notice.message} if notice else None
        ),
        "confirmation": (
            {"title": confirmation.title, "message": confirmation.message}
            if confirmation
            else None
        ),
        "pending": session.pending is not None,
    }
