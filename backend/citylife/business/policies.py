"""Default employment policies.

Matching, lateness and pay are pluggable callables; these are the ones the
city uses unless told otherwise.
"""

from typing import TYPE_CHECKING

from citylife.agents.persons import Person, PersonState

if TYPE_CHECKING:
    from citylife.business.business import Business, Employee


def assigned_business_match(person: Person, business: "Business") -> bool:
    """A person applies only to the business they commute to, if old enough."""
    return person.business is business and person.data.age >= business.business_type.min_age


def not_working_at_opening(business: "Business", employee: "Employee", current_time: int) -> bool:
    """Late if not yet at work when the business opens."""
    return employee.person.state != PersonState.WORKING


def experience_weighted_pay(
    business: "Business",
    employee: "Employee",
    pay_share: float,
    experience_bonus: float,
) -> int:
    """Even split of the paid-out share of the daily revenue, scaled up by experience.

    Monotonic in revenue and experience, never negative.
    """
    if not business.employees:
        return 0
    base: float = max(0.0, business.daily_revenue) * pay_share / len(business.employees)
    return int(round(base * (1.0 + experience_bonus * employee.experience)))
