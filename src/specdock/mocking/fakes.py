"""Seeded fake-value provider for example synthesis.

:class:`FakeData` wraps its own :class:`random.Random` instance, so every
synthesis run owns its random state and two runs with the same seed
produce the same values. No process-wide random state is touched.

:meth:`FakeData.value_for_field` implements the field-name heuristic: the
lower-cased field name is matched by substring against the rules below,
first match wins.

=====================  ==========================================
field name contains    value
=====================  ==========================================
``date``               ``YYYY-MM-DD``
``time``               ``HH:MM:SS``
``uuid`` or ``id``     UUID string
``email``              ``first.last@domain``
``name`` + ``first``   first name
``name`` + ``last``    last name
``name``               full name
``city``               city
``country``            country
``phone``              phone number
``postal`` or ``zip``  postal code
``address``            street address
``status``             ``active`` / ``inactive`` / ``pending``
``description``        five-word sentence
``title``              three-word sentence
``url`` or ``link``    URL
(anything else)        single word
=====================  ==========================================
"""

from __future__ import annotations

import random
import uuid
from datetime import date, timedelta
from typing import Any

FIRST_NAMES = (
    "Alice", "Bruno", "Chloe", "Daniel", "Elena", "Farid", "Grace", "Hugo",
    "Ines", "Jonas", "Keiko", "Liam", "Maya", "Noah", "Olivia", "Pablo",
    "Quinn", "Rosa", "Samir", "Tessa", "Umar", "Vera", "Wes", "Yara", "Zoe",
)

LAST_NAMES = (
    "Anderson", "Bernard", "Costa", "Dubois", "Evans", "Fischer", "Garcia",
    "Haddad", "Ivanova", "Jensen", "Kowalski", "Lambert", "Moreau", "Nakamura",
    "Okafor", "Petit", "Rossi", "Schmidt", "Tanaka", "Walker", "Young",
)

CITIES = (
    "Amsterdam", "Berlin", "Chicago", "Dublin", "Edinburgh", "Florence",
    "Geneva", "Helsinki", "Lisbon", "Lyon", "Montreal", "Nairobi", "Osaka",
    "Porto", "Seattle", "Toronto", "Valencia", "Zurich",
)

COUNTRIES = (
    "Argentina", "Australia", "Belgium", "Brazil", "Canada", "Denmark",
    "France", "Germany", "India", "Ireland", "Japan", "Kenya", "Mexico",
    "Norway", "Portugal", "Spain", "Sweden", "United States",
)

STREET_SUFFIXES = ("Street", "Avenue", "Road", "Lane", "Boulevard", "Way")

DOMAINS = ("example.com", "example.org", "example.net", "mail.test")

WORDS = (
    "alpha", "anchor", "beacon", "bridge", "canvas", "cedar", "delta",
    "ember", "falcon", "garden", "harbor", "island", "jasper", "kernel",
    "lantern", "meadow", "nectar", "orbit", "pepper", "quartz", "river",
    "summit", "timber", "union", "velvet", "willow", "yonder", "zephyr",
)

STATUSES = ("active", "inactive", "pending")

_EPOCH = date(2000, 1, 1)
_DATE_SPAN_DAYS = 365 * 30


class FakeData:
    """Random but reproducible values for example payloads.

    Args:
        seed: Seed for the private random generator.
    """

    def __init__(self, seed: int = 0) -> None:
        self._random = random.Random(seed)

    # ------------------------------------------------------------------ #
    # Scalars
    # ------------------------------------------------------------------ #

    def number(self, low: int = 1, high: int = 1000) -> int:
        return self._random.randint(low, high)

    def boolean(self) -> bool:
        return self._random.random() < 0.5

    def word(self) -> str:
        return self._random.choice(WORDS)

    def sentence(self, word_count: int) -> str:
        """A capitalized sentence of *word_count* words ending with a period."""
        words = [self.word() for _ in range(word_count)]
        return " ".join(words).capitalize() + "."

    def date(self) -> str:
        day = _EPOCH + timedelta(days=self._random.randrange(_DATE_SPAN_DAYS))
        return day.isoformat()

    def time(self) -> str:
        return "{:02d}:{:02d}:{:02d}".format(
            self._random.randrange(24),
            self._random.randrange(60),
            self._random.randrange(60),
        )

    def uuid(self) -> str:
        return str(uuid.UUID(int=self._random.getrandbits(128), version=4))

    def first_name(self) -> str:
        return self._random.choice(FIRST_NAMES)

    def last_name(self) -> str:
        return self._random.choice(LAST_NAMES)

    def name(self) -> str:
        return f"{self.first_name()} {self.last_name()}"

    def email(self) -> str:
        local = f"{self.first_name()}.{self.last_name()}".lower()
        return f"{local}@{self._random.choice(DOMAINS)}"

    def city(self) -> str:
        return self._random.choice(CITIES)

    def country(self) -> str:
        return self._random.choice(COUNTRIES)

    def phone(self) -> str:
        return "{:03d}-{:03d}-{:04d}".format(
            self._random.randint(200, 999),
            self._random.randrange(1000),
            self._random.randrange(10000),
        )

    def zip_code(self) -> str:
        return "{:05d}".format(self._random.randrange(100000))

    def address(self) -> str:
        number = self._random.randint(1, 9999)
        street = self.word().capitalize()
        return f"{number} {street} {self._random.choice(STREET_SUFFIXES)}"

    def status(self) -> str:
        return self._random.choice(STATUSES)

    def url(self) -> str:
        return f"https://www.{self.word()}{self.word()}.com/{self.word()}"

    def error_code(self) -> str:
        """An error code of the form ``ERR_`` followed by three digits."""
        return "ERR_{:03d}".format(self._random.randrange(1000))

    # ------------------------------------------------------------------ #
    # Field-name heuristic
    # ------------------------------------------------------------------ #

    def value_for_field(self, field_name: Any) -> str:
        """Return a plausible string for a field called *field_name*.

        YAML reads keys such as ``on`` or ``404`` as booleans and integers,
        so the name is matched by its string form.
        """
        field = str(field_name).lower()

        if "date" in field:
            return self.date()
        if "time" in field:
            return self.time()
        if "uuid" in field or "id" in field:
            return self.uuid()
        if "email" in field:
            return self.email()
        if "name" in field:
            if "first" in field:
                return self.first_name()
            if "last" in field:
                return self.last_name()
            return self.name()
        if "city" in field:
            return self.city()
        if "country" in field:
            return self.country()
        if "phone" in field:
            return self.phone()
        if "postal" in field or "zip" in field:
            return self.zip_code()
        if "address" in field:
            return self.address()
        if "status" in field:
            return self.status()
        if "description" in field:
            return self.sentence(5)
        if "title" in field:
            return self.sentence(3)
        if "url" in field or "link" in field:
            return self.url()
        return self.word()
