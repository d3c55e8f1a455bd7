"""Restaurant domain entity: identity, category, price tier, hours, solo-dining flag, images, specialties."""
from typing import List, Optional


class Restaurant:
    def __init__(self, id: str = "", name: str = "", category: str = "", location: str = "",
                 price_range: str = "", operating_hours: str = "", is_available_for_solo: bool = False,
                 image_urls: Optional[List[str]] = None, specialties: Optional[List[str]] = None,
                 created_at: Optional[int] = None, updated_at: Optional[int] = None):
        self.id = id
        self.name = name
        self.category = category
        self.location = location
        self.price_range = price_range
        self.operating_hours = operating_hours
        self.is_available_for_solo = is_available_for_solo
        self.image_urls = image_urls[:] if image_urls else []
        self.specialties = specialties[:] if specialties else []
        self.created_at = created_at
        self.updated_at = updated_at

    def __str__(self) -> str:
        return f"{self.name} ({self.id}) - {self.category} - {self.price_range} - {self.location}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        return isinstance(other, Restaurant) and self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Build a Restaurant from its camelCase wire form. Unknown keys are ignored.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Restaurant(
            id=str(d.get("id", "")),
            name=d.get("name", ""),
            category=d.get("category", ""),
            location=d.get("location", ""),
            price_range=d.get("priceRange", ""),
            operating_hours=d.get("operatingHours", ""),
            is_available_for_solo=bool(d.get("isAvailableForSolo", False)),
            image_urls=list(d.get("imageUrls") or []),
            specialties=list(d.get("specialties") or []),
            created_at=d.get("createdAt"),
            updated_at=d.get("updatedAt"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "location": self.location,
            "priceRange": self.price_range,
            "operatingHours": self.operating_hours,
            "isAvailableForSolo": self.is_available_for_solo,
            "imageUrls": list(self.image_urls),
            "specialties": list(self.specialties),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
