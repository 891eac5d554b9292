"""Employment office: the labor pool between persons and businesses."""

import logging
from typing import Callable, Iterable

from citylife.agents.persons import Person
from citylife.business.business import Business, Employee
from citylife.business.policies import assigned_business_match

logger = logging.getLogger(__name__)


class EmploymentOffice:
    """Holds unemployed persons and matches them to businesses with open headcount."""

    def __init__(self, match: Callable[[Person, Business], bool] = assigned_business_match):
        self._match = match
        self._unemployed: list[Person] = []

    @property
    def unemployed(self) -> list[Person]:
        return list(self._unemployed)

    def add_disoccupied_person(self, person: Person) -> None:
        if person not in self._unemployed:
            self._unemployed.append(person)

    def add_disoccupied_people(self, people: Iterable[Person]) -> None:
        for person in people:
            self.add_disoccupied_person(person)

    def hire(self, person: Person, business: Business) -> Employee:
        """Move *person* from the pool onto *business*'s roster as a fresh employee."""
        self._unemployed.remove(person)
        employee = Employee(person)
        business.hire(employee)
        return employee

    def release(self, employees: Iterable[Employee]) -> None:
        """Return fired employees' persons to the pool."""
        for employee in employees:
            self.add_disoccupied_person(employee.person)

    def match(self, businesses: list[Business]) -> int:
        """Offer every unemployed person to businesses in order; return hires made."""
        hires = 0
        for person in list(self._unemployed):
            for business in businesses:
                if business.open_positions > 0 and self._match(person, business):
                    self.hire(person, business)
                    hires += 1
                    break
        if hires:
            logger.debug("Employment office placed %d people, %d still unemployed",
                         hires, len(self._unemployed))
        return hires

    def check_delays(
        self,
        businesses: list[Business],
        current_time: int,
        max_delays: int,
        tick_seconds: int = 60,
    ) -> int:
        """Run every business's delay check and reabsorb the fired; return firings."""
        fired_total = 0
        for business in businesses:
            fired = business.check_employee_delays(current_time, max_delays, tick_seconds=tick_seconds)
            self.release(fired)
            fired_total += len(fired)
        return fired_total
