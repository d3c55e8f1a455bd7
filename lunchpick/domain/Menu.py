"""Menu domain entity: a dish offered by one restaurant, priced in minor currency units."""
from typing import List, Optional


class Menu:
    def __init__(self, id: str = "", restaurant_id: str = "", name: str = "", category: str = "",
                 price: int = 0, description: str = "", tags: Optional[List[str]] = None,
                 created_at: Optional[int] = None, updated_at: Optional[int] = None):
        self.id = id
        self.restaurant_id = restaurant_id
        self.name = name
        self.category = category
        self.price = price
        self.description = description
        # tags behave as a set but keep the order they were entered in
        self.tags = list(dict.fromkeys(tags)) if tags else []
        self.created_at = created_at
        self.updated_at = updated_at

    def __str__(self) -> str:
        tags = f" - Tags: {', '.join(self.tags)}" if self.tags else ""
        return f"{self.name} ({self.id}) @ {self.restaurant_id} - {self.price}{tags}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        return isinstance(other, Menu) and self.to_dict() == other.to_dict()

    def belongs_to(self, restaurant_id: str) -> bool:
        return self.restaurant_id == restaurant_id

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        try:
            price = int(d.get("price", 0) or 0)
        except (TypeError, ValueError):
            price = 0
        return Menu(
            id=str(d.get("id", "")),
            restaurant_id=str(d.get("restaurantId", "")),
            name=d.get("name", ""),
            category=d.get("category", ""),
            price=price,
            description=d.get("description", ""),
            tags=list(d.get("tags") or []),
            created_at=d.get("createdAt"),
            updated_at=d.get("updatedAt"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "restaurantId": self.restaurant_id,
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "description": self.description,
            "tags": list(self.tags),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
