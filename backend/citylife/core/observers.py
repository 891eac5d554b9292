"""Clock observers driving the two per-tick passes.

The person pass is registered first, so transport occupancy and commute
states are settled before the business pass checks delays and pays.
"""

from citylife.agents.persons import Person
from citylife.business.business import Business
from citylife.business.employment import EmploymentOffice
from citylife.core.clock import reached


class PersonObserver:
    """Advances every person's commute state machine."""

    def __init__(self, people: list[Person]):
        self.people = people

    def on_time_update(self, current_time: int, current_day: int) -> None:
        for person in self.people:
            person.check_state(current_time)


class BusinessObserver:
    """Runs delay checks, payroll and daily hiring for every business."""

    def __init__(
        self,
        businesses: list[Business],
        office: EmploymentOffice,
        max_delays: int,
        hiring_time: int,
        pay_share: float,
        experience_bonus: float,
        tick_seconds: int = 60,
    ):
        self.businesses = businesses
        self.office = office
        self.max_delays = max_delays
        self.hiring_time = hiring_time
        self.pay_share = pay_share
        self.experience_bonus = experience_bonus
        self.tick_seconds = tick_seconds

    def on_time_update(self, current_time: int, current_day: int) -> None:
        self.office.check_delays(self.businesses, current_time, self.max_delays, self.tick_seconds)
        for business in self.businesses:
            if reached(business.closing_time, current_time, self.tick_seconds):
                business.close_day()
                business.calculate_pay(self.pay_share, self.experience_bonus)
        if reached(self.hiring_time, current_time, self.tick_seconds):
            self.office.match(self.businesses)
