"""HTTP face of the in-memory mock responder.

Serves the data-access endpoints under /api so the HTTP data source has a
real server to talk to before the production API exists.
"""
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
import logging

from lunchpick.utilities.errors import TransportError
from lunchpick.utilities.validators import RecommendationInput

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


async def _forward(request: Request, method: str, path: str, body: dict = None):
    source = request.app.state.mock_source
    try:
        data = await source.request(method, path, body)
    except TransportError as e:
        raise HTTPException(status_code=e.status or 500, detail=e.message)
    if method == "GET" and isinstance(data, dict) and "error" in data:
        return JSONResponse(status_code=404, content=data)
    return data


# -------------------- Restaurants --------------------
@router.get("/restaurants")
async def list_restaurants(request: Request):
    return await _forward(request, "GET", "/restaurants")

@router.get("/restaurants/{restaurant_id}")
async def get_restaurant(request: Request, restaurant_id: str):
    return await _forward(request, "GET", f"/restaurants/{restaurant_id}")

@router.get("/restaurants/{restaurant_id}/menus")
async def list_restaurant_menus(request: Request, restaurant_id: str):
    return await _forward(request, "GET", f"/restaurants/{restaurant_id}/menus")

@router.post("/restaurants")
async def create_restaurant(request: Request, data: dict):
    return await _forward(request, "POST", "/restaurants", data)

@router.put("/restaurants/{restaurant_id}")
async def update_restaurant(request: Request, restaurant_id: str, data: dict):
    return await _forward(request, "PUT", f"/restaurants/{restaurant_id}", data)

@router.delete("/restaurants/{restaurant_id}")
async def delete_restaurant(request: Request, restaurant_id: str):
    return await _forward(request, "DELETE", f"/restaurants/{restaurant_id}")


# -------------------- Menus --------------------
@router.get("/menus")
async def list_menus(request: Request):
    return await _forward(request, "GET", "/menus")

@router.get("/menus/{menu_id}")
async def get_menu(request: Request, menu_id: str):
    return await _forward(request, "GET", f"/menus/{menu_id}")

@router.post("/menus")
async def create_menu(request: Request, data: dict):
    return await _forward(request, "POST", "/menus", data)

@router.put("/menus/{menu_id}")
async def update_menu(request: Request, menu_id: str, data: dict):
    return await _forward(request, "PUT", f"/menus/{menu_id}", data)

@router.delete("/menus/{menu_id}")
async def delete_menu(request: Request, menu_id: str):
    return await _forward(request, "DELETE", f"/menus/{menu_id}")


# -------------------- Recommendations --------------------
@router.get("/recommendations")
async def list_recommendations(request: Request):
    return await _forward(request, "GET", "/recommendations")

@router.get("/recommendations/{date}")
async def get_recommendation(request: Request, date: str):
    return await _forward(request, "GET", f"/recommendations/{date}")

@router.post("/recommendations")
async def create_recommendation(request: Request, payload: RecommendationInput):
    logger.info("Mock API create recommendation %s", payload.date)
    return await _forward(request, "POST", "/recommendations", payload.model_dump(by_alias=True))

@router.put("/recommendations/{date}")
async def update_recommendation(request: Request, date: str, payload: RecommendationInput):
    logger.info("Mock API update recommendation %s", date)
    return await _forward(request, "PUT", f"/recommendations/{date}", payload.model_dump(by_alias=True))
