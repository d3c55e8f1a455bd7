from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from typing import Optional
import logging

from lunchpick.infra.Data_Source import DataSource, HttpDataSource, InMemoryDataSource
from lunchpick.infra.Entity_Store import EntityStore
from lunchpick.infra.Recommendation_Repository import RecommendationRepository
from lunchpick.logic.recommendations.controller import RecommendationViewController
from lunchpick.events.Event_Bus import EventBus
from lunchpick.events.web_observers import EventLog
from lunchpick.utilities.config import DATA_SOURCE

# Routers
from lunchpick.api.routes import console, mock_api

# Logging
logger = logging.getLogger("lunchpick_app")


def build_data_source(mock_source: InMemoryDataSource) -> DataSource:
    """Data source for the console, chosen by the DATA_SOURCE setting."""
    if DATA_SOURCE == "http":
        logger.info("Console data source: HTTP API")
        return HttpDataSource()
    if DATA_SOURCE != "memory":
        logger.warning("Unknown DATA_SOURCE %r; falling back to the in-memory mock", DATA_SOURCE)
    return mock_source


def create_app(data_source: Optional[DataSource] = None,
               mock_source: Optional[InMemoryDataSource] = None,
               bus: Optional[EventBus] = None) -> FastAPI:
    """Wire data source, stores and controller into a FastAPI app.

    The mock API under /api is always served from an in-memory source; when
    no console data source is given and DATA_SOURCE is "memory", the console
    shares that same source so edits made through either surface agree.
    """
    app = FastAPI(title="LunchPick Admin Console")
    mock_source = mock_source or InMemoryDataSource()
    if data_source is None:
        data_source = build_data_source(mock_source)
    bus = bus or EventBus()

    store = EntityStore(data_source)
    repository = RecommendationRepository(data_source)
    app.state.mock_source = mock_source
    app.state.data_source = data_source
    app.state.store = store
    app.state.controller = RecommendationViewController(store, repository, bus=bus)
    app.state.event_log = EventLog()
    app.state.event_log.attach(bus)

    app.include_router(mock_api.router)
    app.include_router(console.router)

    @app.on_event("startup")
    async def _startup():
        ok = await app.state.controller.start()
        if ok:
            logger.info("Console session started for %s", app.state.controller.date_key)
        else:
            logger.error("Console session started with errors: %s", app.state.controller.error)

    @app.on_event("shutdown")
    async def _shutdown():
        await data_source.aclose()

    @app.get("/", include_in_schema=False)
    def index():
        return RedirectResponse(url="/console/state")

    return app


app = create_app()
