"""Business and employee records.

One concrete ``Business`` record parameterised by a ``BusinessType``
covers small, medium and big businesses.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from citylife.agents.persons import Person
from citylife.business.policies import experience_weighted_pay, not_working_at_opening
from citylife.core.clock import reached
from citylife.geography.zones import Position, Zone

logger = logging.getLogger(__name__)


def hours(h: int, m: int = 0) -> int:
    """Seconds of day for h:m."""
    return h * 3600 + m * 60


@dataclass(frozen=True)
class BusinessType:
    """Operating profile shared by every business of a kind."""

    name: str
    opening_time: int  # seconds of day
    closing_time: int  # seconds of day
    revenue: float  # daily
    min_employees: int
    max_employees: int
    min_age: int


SMALL = BusinessType("small", hours(9), hours(18), 2000.0, 1, 5, 18)
MEDIUM = BusinessType("medium", hours(8), hours(17), 6000.0, 3, 15, 20)
BIG = BusinessType("big", hours(7, 30), hours(19), 15000.0, 10, 40, 21)

BUSINESS_TYPES: list[BusinessType] = [SMALL, MEDIUM, BIG]


@dataclass(eq=False)
class Employee:
    """A person on a business roster."""

    person: Person
    experience: int = 0
    delay_count: int = 0

    @property
    def name(self) -> str:
        return self.person.name


class Business:
    """A business located in one zone, owning its roster."""

    def __init__(self, business_id: int, business_type: BusinessType, zone: Zone, position: Position):
        self.business_id: int = business_id
        self.business_type: BusinessType = business_type
        self.zone: Zone = zone
        self.position: Position = position
        self.daily_revenue: float = business_type.revenue
        self.revenue: float = 0.0  # accumulated over the days it has been open
        self.days_open: int = 0
        self.employees: list[Employee] = []

    @property
    def name(self) -> str:
        return f"{self.business_type.name.capitalize()}-{self.business_id}"

    @property
    def opening_time(self) -> int:
        return self.business_type.opening_time

    @property
    def closing_time(self) -> int:
        return self.business_type.closing_time

    @property
    def open_positions(self) -> int:
        return max(0, self.business_type.max_employees - len(self.employees))

    def employs(self, person: Person) -> bool:
        return any(e.person is person for e in self.employees)

    def hire(self, employee: Employee) -> None:
        if self.employs(employee.person):
            raise ValueError(f"{employee.name} already works at {self.name}")
        self.employees.append(employee)
        logger.debug("%s hired %s", self.name, employee.name)

    def fire(self, employee: Employee) -> None:
        self.employees.remove(employee)
        logger.info(
            "%s fired %s after %d delays", self.name, employee.name, employee.delay_count
        )

    def check_employee_delays(
        self,
        current_time: int,
        max_delays: int,
        is_late: Callable[["Business", Employee, int], bool] = not_working_at_opening,
        tick_seconds: int = 60,
    ) -> list[Employee]:
        """Count late arrivals at opening time and fire repeat offenders.

        Returns the employees fired by this check.
        """
        if not reached(self.opening_time, current_time, tick_seconds):
            return []
        fired: list[Employee] = []
        for employee in list(self.employees):
            if not is_late(self, employee, current_time):
                continue
            employee.delay_count += 1
            if employee.delay_count > max_delays:
                self.fire(employee)
                fired.append(employee)
        return fired

    def close_day(self) -> float:
        """Book the day's revenue at closing and return the running total."""
        self.days_open += 1
        self.revenue += self.daily_revenue
        return self.revenue

    def calculate_pay(
        self,
        pay_share: float,
        experience_bonus: float,
        pay_policy: Callable[["Business", Employee, float, float], int] = experience_weighted_pay,
    ) -> int:
        """Pay every employee for the day and return the total paid."""
        total = 0
        for employee in self.employees:
            amount = pay_policy(self, employee, pay_share, experience_bonus)
            employee.person.add_money(amount)
            employee.experience += 1
            total += amount
        logger.debug("%s paid %d to %d employees", self.name, total, len(self.employees))
        return total

    def __repr__(self) -> str:
        return f"Business({self.name!r}, zone={self.zone.name}, employees={len(self.employees)})"
