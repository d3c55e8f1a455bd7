"""Console API: the recommendation editor's observable state and commands.

All endpoints are coroutines so the controller is only touched from the
event loop thread. Every command answers with the controller snapshot.
Failures inside a command are recovered by the controller and reported in
the snapshot's "error" field rather than as an HTTP error.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
import logging

from lunchpick.events.web_observers import EventLog
from lunchpick.infra.Entity_Store import EntityStore
from lunchpick.logic.recommendations.controller import RecommendationViewController
from lunchpick.utilities.errors import InvalidInputError, ReferentialError, TransportError
from lunchpick.utilities.validators import DateSelection, DraftFieldUpdate, MenuFilter, MenuToggle

router = APIRouter(prefix="/console")
logger = logging.getLogger(__name__)


def get_controller(request: Request) -> RecommendationViewController:
    return request.app.state.controller


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_event_log(request: Request) -> EventLog:
    return request.app.state.event_log


# -------------------- State & cursor --------------------
@router.get("/state")
async def state(controller: RecommendationViewController = Depends(get_controller)):
    return controller.snapshot()

@router.post("/date")
async def select_date(selection: DateSelection, controller: RecommendationViewController = Depends(get_controller)):
    controller.set_selected_date(selection.date)
    return controller.snapshot()

@router.post("/date/next")
async def next_day(controller: RecommendationViewController = Depends(get_controller)):
    controller.shift_date(1)
    return controller.snapshot()

@router.post("/date/prev")
async def previous_day(controller: RecommendationViewController = Depends(get_controller)):
    controller.shift_date(-1)
    return controller.snapshot()


# -------------------- Draft --------------------
@router.patch("/draft/{meal}")
async def update_draft(meal: str, update: DraftFieldUpdate,
                       controller: RecommendationViewController = Depends(get_controller)):
    controller.update_draft_field(meal, update.field, update.value)
    return controller.snapshot()

@router.post("/draft/{meal}/menus")
async def toggle_menu(meal: str, toggle: MenuToggle,
                      controller: RecommendationViewController = Depends(get_controller)):
    controller.toggle_menu_selection(meal, toggle.menu_id, toggle.selected)
    return controller.snapshot()

@router.post("/generate")
async def generate(controller: RecommendationViewController = Depends(get_controller)):
    controller.generate()
    return controller.snapshot()

@router.post("/discard")
async def discard(controller: RecommendationViewController = Depends(get_controller)):
    controller.discard_changes()
    return controller.snapshot()

@router.post("/save")
async def save(controller: RecommendationViewController = Depends(get_controller)):
    await controller.save()
    return controller.snapshot()

@router.post("/refresh")
async def refresh(controller: RecommendationViewController = Depends(get_controller)):
    await controller.refresh()
    return controller.snapshot()


# -------------------- Reference data --------------------
@router.get("/restaurants")
async def restaurants(store: EntityStore = Depends(get_store)):
    return {"restaurants": [r.to_dict() for r in store.restaurants]}

@router.get("/menus")
async def menus(restaurant_id: Optional[str] = Query(default=None, alias="restaurantId"),
                category: Optional[str] = Query(default=None),
                min_price: Optional[int] = Query(default=None, alias="minPrice", ge=0),
                max_price: Optional[int] = Query(default=None, alias="maxPrice", ge=0),
                store: EntityStore = Depends(get_store)):
    criteria = MenuFilter(restaurant_id=restaurant_id, category=category, min_price=min_price, max_price=max_price)
    found = store.filter_menus(criteria.restaurant_id, criteria.category, criteria.min_price, criteria.max_price)
    return {
        "menus": [dict(m.to_dict(), restaurantName=store.restaurant_name(m.restaurant_id)) for m in found],
        "count": len(found),
        "total": len(store.menus),
        "categories": store.menu_categories(),
    }


async def _write(call, *args):
    """Run an entity-store write, mapping its failures to HTTP errors."""
    try:
        result = await call(*args)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ReferentialError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TransportError as e:
        logger.error("Entity write failed: %s", e)
        raise HTTPException(status_code=e.status or 502, detail=e.message)
    return result.to_dict() if result is not None else {"success": True}

@router.post("/restaurants")
async def create_restaurant(data: dict, store: EntityStore = Depends(get_store)):
    return await _write(store.create_restaurant, data)

@router.put("/restaurants/{restaurant_id}")
async def update_restaurant(restaurant_id: str, data: dict, store: EntityStore = Depends(get_store)):
    return await _write(store.update_restaurant, restaurant_id, data)

@router.delete("/restaurants/{restaurant_id}")
async def delete_restaurant(restaurant_id: str, store: EntityStore = Depends(get_store)):
    return await _write(store.delete_restaurant, restaurant_id)

@router.post("/menus")
async def create_menu(data: dict, store: EntityStore = Depends(get_store)):
    return await _write(store.create_menu, data)

@router.put("/menus/{menu_id}")
async def update_menu(menu_id: str, data: dict, store: EntityStore = Depends(get_store)):
    return await _write(store.update_menu, menu_id, data)

@router.delete("/menus/{menu_id}")
async def delete_menu(menu_id: str, store: EntityStore = Depends(get_store)):
    return await _write(store.delete_menu, menu_id)


# -------------------- Events --------------------
@router.get("/events")
async def events(since: Optional[int] = Query(default=None, ge=0), log: EventLog = Depends(get_event_log)):
    return log.since(since)
