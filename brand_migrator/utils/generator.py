import random
from typing import Any, Dict, List, Optional

from faker import Faker

from brand_migrator.utils.normalizers import MIN_LOCATIONS


class BrandGenerator:
    """Produce synthetic brands that already satisfy the canonical schema."""

    def __init__(self, current_year: int, min_year: int = 1980, max_locations: int = 5000,
                 seed: Optional[int] = None, locale: str = 'en_US'):
        if min_year > current_year:
            raise ValueError(f'min_year {min_year} is after current year {current_year}')
        if max_locations < MIN_LOCATIONS:
            raise ValueError(f'max_locations must be >= {MIN_LOCATIONS}')
        self.current_year = current_year
        self.min_year = min_year
        self.max_locations = max_locations
        self.faker = Faker(locale)
        self.rng = random.Random(seed)
        if seed is not None:
            self.faker.seed_instance(seed)

    def generate_brand(self) -> Dict[str, Any]:
        return {
            'brandName': self.faker.company(),
            'yearFounded': self.rng.randint(self.min_year, self.current_year),
            'headquarters': f'{self.faker.city()}, {self.faker.state_abbr()}',
            'numberOfLocations': self.rng.randint(MIN_LOCATIONS, self.max_locations),
        }

    def generate_brands(self, count: int) -> List[Dict[str, Any]]:
        return [self.generate_brand() for _ in range(count)]
