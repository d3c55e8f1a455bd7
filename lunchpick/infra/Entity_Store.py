"""Entity store: cached Restaurant and Menu reference data.

Collections are only ever replaced wholesale by a load. Writes go to the data
source and are followed by a reload of the affected collection, so readers
never see a half-patched cache.
"""
import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError

from lunchpick.domain.Menu import Menu
from lunchpick.domain.Restaurant import Restaurant
from lunchpick.infra.Data_Source import DataSource
from lunchpick.utilities.constants import UNKNOWN_LABEL
from lunchpick.utilities.errors import InvalidInputError, ReferentialError, TransportError
from lunchpick.utilities.validators import MenuInput, RestaurantInput

logger = logging.getLogger(__name__)


class EntityStore:
    def __init__(self, data_source: DataSource):
        self._source = data_source
        self._restaurants: List[Restaurant] = []
        self._menus: List[Menu] = []

    @property
    def restaurants(self) -> List[Restaurant]:
        return list(self._restaurants)

    @property
    def menus(self) -> List[Menu]:
        return list(self._menus)

    # -------------------- loads --------------------
    async def load_restaurants(self) -> List[Restaurant]:
        """Re-fetch all restaurants. On failure the previous collection stays in place."""
        data = await self._source.request("GET", "/restaurants")
        restaurants = [Restaurant.from_dict(r) for r in _collection(data, "restaurants")]
        self._restaurants = restaurants
        logger.info("Loaded %d restaurants", len(restaurants))
        return list(restaurants)

    async def load_menus(self) -> List[Menu]:
        data = await self._source.request("GET", "/menus")
        menus = [Menu.from_dict(m) for m in _collection(data, "menus")]
        self._menus = menus
        logger.info("Loaded %d menus", len(menus))
        return list(menus)

    async def load(self) -> None:
        await self.load_restaurants()
        await self.load_menus()

    # -------------------- lookups --------------------
    def restaurant(self, restaurant_id: str) -> Optional[Restaurant]:
        for r in self._restaurants:
            if r.id == restaurant_id:
                return r
        return None

    def menu(self, menu_id: str) -> Optional[Menu]:
        for m in self._menus:
            if m.id == menu_id:
                return m
        return None

    def menus_of(self, restaurant_id: str) -> List[Menu]:
        """Menus of a restaurant in cached order; empty for unknown restaurants."""
        return [m for m in self._menus if m.restaurant_id == restaurant_id]

    def first_restaurant_id(self) -> str:
        return self._restaurants[0].id if self._restaurants else ""

    def restaurant_name(self, restaurant_id: str) -> str:
        r = self.restaurant(restaurant_id)
        return r.name if r else UNKNOWN_LABEL

    def menu_names(self, menu_ids: Iterable[str]) -> List[str]:
        names = []
        for menu_id in menu_ids:
            m = self.menu(menu_id)
            names.append(m.name if m else UNKNOWN_LABEL)
        return names

    def filter_menus(self, restaurant_id: Optional[str] = None, category: Optional[str] = None,
                     min_price: Optional[int] = None, max_price: Optional[int] = None) -> List[Menu]:
        result = []
        for m in self._menus:
            if restaurant_id and m.restaurant_id != restaurant_id:
                continue
            if category and m.category != category:
                continue
            if min_price is not None and m.price < min_price:
                continue
            if max_price is not None and m.price > max_price:
                continue
            result.append(m)
        return result

    def menu_categories(self) -> List[str]:
        return list(dict.fromkeys(m.category for m in self._menus if m.category))

    # -------------------- writes --------------------
    async def create_restaurant(self, data: dict) -> Restaurant:
        payload = _validated(RestaurantInput, data)
        created = await self._source.request("POST", "/restaurants", payload)
        await self.load_restaurants()
        return Restaurant.from_dict(created)

    async def update_restaurant(self, restaurant_id: str, data: dict) -> Restaurant:
        current = self.restaurant(restaurant_id)
        # full replacement: start from the cached record, overlay the edits
        merged = current.to_dict() if current else {}
        merged.update(data)
        payload = _validated(RestaurantInput, merged)
        updated = await self._source.request("PUT", f"/restaurants/{restaurant_id}", payload)
        await self.load_restaurants()
        return Restaurant.from_dict(updated)

    async def delete_restaurant(self, restaurant_id: str) -> None:
        await self._source.request("DELETE", f"/restaurants/{restaurant_id}")
        orphaned = len(self.menus_of(restaurant_id))
        if orphaned:
            logger.warning("Deleted restaurant %s still has %d menus", restaurant_id, orphaned)
        await self.load_restaurants()

    async def create_menu(self, data: dict) -> Menu:
        payload = _validated(MenuInput, data)
        self._check_restaurant(payload["restaurantId"])
        created = await self._source.request("POST", "/menus", payload)
        await self.load_menus()
        return Menu.from_dict(created)

    async def update_menu(self, menu_id: str, data: dict) -> Menu:
        current = self.menu(menu_id)
        merged = current.to_dict() if current else {}
        merged.update(data)
        payload = _validated(MenuInput, merged)
        self._check_restaurant(payload["restaurantId"])
        updated = await self._source.request("PUT", f"/menus/{menu_id}", payload)
        await self.load_menus()
        return Menu.from_dict(updated)

    async def delete_menu(self, menu_id: str) -> None:
        await self._source.request("DELETE", f"/menus/{menu_id}")
        await self.load_menus()

    def _check_restaurant(self, restaurant_id: str) -> None:
        if self.restaurant(restaurant_id) is None:
            raise ReferentialError(f"Unknown restaurant: {restaurant_id}")


def _collection(data, key: str) -> List[dict]:
    if not isinstance(data, dict) or not isinstance(data.get(key), list):
        raise TransportError(f"Malformed response: expected a '{key}' list")
    return data[key]


def _validated(model, data: dict) -> dict:
    """Validate with the pydantic model and return the camelCase wire payload."""
    try:
        return model.model_validate(data).model_dump(by_alias=True)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid {model.__name__}: {e.errors()}") from e
