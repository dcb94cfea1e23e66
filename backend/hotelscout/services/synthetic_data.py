"""Synthetic data generator — placeholder pricing, ratings and amenities for hotels without live offers."""

import hashlib
import random
from datetime import date

AMENITY_VOCABULARY = ["WiFi", "Pool", "Parking", "Restaurant"]

# Bounds for placeholder data
PRICE_MIN = 50
PRICE_MAX = 250        # exclusive
RATING_MIN = 3.0
RATING_SPAN = 2.0
REVIEWS_MIN = 50
REVIEWS_MAX = 550      # exclusive
AMENITIES_MIN = 2
AMENITIES_MAX = 4


def search_seed(city_code: str, check_in: date | str, check_out: date | str) -> int:
    """Deterministic seed for a search so placeholders stay stable across reloads."""
    seed_str = f"hotel_{city_code}_{check_in}_{check_out}"
    return int(hashlib.md5(seed_str.encode()).hexdigest()[:8], 16)


class SyntheticDataGenerator:
    """Single source of randomness for placeholder hotel data."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    @classmethod
    def for_search(cls, city_code: str, check_in: date | str, check_out: date | str) -> "SyntheticDataGenerator":
        return cls(search_seed(city_code, check_in, check_out))

    def price(self) -> int:
        return self._rng.randrange(PRICE_MIN, PRICE_MAX)

    def rating(self) -> float:
        return round(self._rng.random() * RATING_SPAN + RATING_MIN, 1)

    def review_count(self) -> int:
        return self._rng.randrange(REVIEWS_MIN, REVIEWS_MAX)

    def amenities(self) -> list[str]:
        count = self._rng.randint(AMENITIES_MIN, AMENITIES_MAX)
        return AMENITY_VOCABULARY[:count]

    def placeholder_fields(self) -> dict:
        """All synthesized fields for a hotel without a live offer."""
        return {
            "price": float(self.price()),
            "rating": self.rating(),
            "review_count": self.review_count(),
            "amenities": self.amenities(),
            "has_real_price": False,
        }
