import threading
from typing import Dict

from faker import Faker

from anon_engine.common.constants import DEFAULT_FAKER_LOCALE
from anon_engine.common.errors import FakeValueError
from anon_engine.processors.random_source import RandomSource

# category -> Faker provider method
FAKE_CATEGORIES: Dict[str, str] = {
    "street_address": "street_address",
    "city": "city",
    "company": "company",
    "email": "email",
    "first_name": "first_name",
    "last_name": "last_name",
    "full_name": "name",
    "ipv4": "ipv4",
    "phone_number": "phone_number",
    "state": "state",
    "state_abbr": "state_abbr",
    "user_name": "user_name",
    "zip": "zipcode",
}


class FakeValueService:
    """
    Plausible values for a semantic category, backed by Faker.

    The Faker instance is seeded once from the run's random source, so a fixed
    run seed gives repeatable fake values. Calls are serialized because the
    Faker generator keeps its own random state.
    """

    def __init__(self, rng: RandomSource, locale: str = DEFAULT_FAKER_LOCALE):
        self.locale = locale or DEFAULT_FAKER_LOCALE
        self._faker = Faker(self.locale)
        self._faker.seed_instance(rng.getrandbits(64))
        self._lock = threading.Lock()

    def generate(self, category: str) -> str:
        method_name = FAKE_CATEGORIES.get(category)
        if method_name is None:
            raise FakeValueError(f"Unknown fake value category: {category}")

        with self._lock:
            try:
                method = getattr(self._faker, method_name)
            except AttributeError:
                raise FakeValueError(
                    f"Fake value category '{category}' is not supported by locale '{self.locale}'"
                ) from None
            return str(method())

    def digits(self, count: int) -> str:
        if count <= 0:
            return ""
        with self._lock:
            return self._faker.numerify("#" * count)
