"""
Unit tests for recurrence projection.

Monthly cadence defaults to the rollover policy: a day missing from the
target month spills into the following month.
"""

import itertools
from datetime import date, datetime, timedelta

import pytest

from barbershop.core.config import MONTHLY_POLICY_CLAMP, MONTHLY_POLICY_ROLLOVER
from barbershop.domain.entities import (
    AppointmentStatus,
    RecurrenceCadence,
    RecurrenceRequest,
    SpecialDay,
)
from barbershop.scheduling.recurrence import add_months, next_occurrence, project
from tests.factories.entity_factories import MONDAY, make_appointment, make_config

EVERY_DAY = (0, 1, 2, 3, 4, 5, 6)


def _weekly(count):
    return RecurrenceRequest(cadence=RecurrenceCadence.WEEKLY, occurrence_count=count)


class TestAddMonths:
    def test_regular_day(self):
        assert add_months(date(2027, 3, 15)) == date(2027, 4, 15)

    def test_rollover_from_january_31(self):
        assert add_months(date(2027, 1, 31), policy=MONTHLY_POLICY_ROLLOVER) == date(2027, 3, 3)

    def test_rollover_in_leap_year(self):
        assert add_months(date(2028, 1, 31)) == date(2028, 3, 2)

    def test_clamp_from_january_31(self):
        assert add_months(date(2027, 1, 31), policy=MONTHLY_POLICY_CLAMP) == date(2027, 2, 28)

    def test_year_boundary(self):
        assert add_months(date(2027, 12, 10)) == date(2028, 1, 10)

    def test_unknown_policy(self):
        with pytest.raises(ValueError, match="Unknown monthly recurrence policy"):
            add_months(date(2027, 1, 31), policy="nearest")


class TestNextOccurrence:
    @pytest.mark.parametrize(
        "cadence,days",
        [
            (RecurrenceCadence.DAILY, 1),
            (RecurrenceCadence.WEEKLY, 7),
            (RecurrenceCadence.BIWEEKLY, 15),
            (RecurrenceCadence.TWENTY_DAYS, 20),
        ],
    )
    def test_fixed_steps(self, cadence, days):
        previous = datetime(2027, 1, 4, 10, 0)
        assert next_occurrence(previous, cadence) == previous + timedelta(days=days)

    def test_monthly_keeps_time_of_day(self):
        assert next_occurrence(
            datetime(2027, 1, 31, 14, 45), RecurrenceCadence.MONTHLY
        ) == datetime(2027, 3, 3, 14, 45)

    def test_none_has_no_step(self):
        with pytest.raises(ValueError):
            next_occurrence(datetime(2027, 1, 4, 10, 0), RecurrenceCadence.NONE)


class TestProject:
    def test_weekly_without_conflicts(self):
        first = make_appointment(day=MONDAY, at="10:00")

        result = project(first, _weekly(4), make_config(), [])

        assert result.created_count == 5
        assert result.skipped_count == 0
        starts = [a.start for a in result.created_appointments]
        assert starts[0] == datetime(2027, 1, 4, 10, 0)
        for earlier, later in zip(starts, starts[1:]):
            assert later - earlier == timedelta(days=7)

    def test_monthly_from_january_31_rolls_into_march(self):
        first = make_appointment(day=date(2027, 1, 31), at="10:00")
        recurrence = RecurrenceRequest(
            cadence=RecurrenceCadence.MONTHLY, occurrence_count=1
        )

        result = project(first, recurrence, make_config(working_days=EVERY_DAY), [])

        assert [a.start.date() for a in result.created_appointments] == [
            date(2027, 1, 31),
            date(2027, 3, 3),
        ]

    def test_monthly_clamp_policy(self):
        first = make_appointment(day=date(2027, 1, 31), at="10:00")
        recurrence = RecurrenceRequest(
            cadence=RecurrenceCadence.MONTHLY, occurrence_count=2
        )

        result = project(
            first,
            recurrence,
            make_config(working_days=EVERY_DAY),
            [],
            monthly_policy=MONTHLY_POLICY_CLAMP,
        )

        # The anchor follows the previous candidate: Feb 28 -> Mar 28
        assert [a.start.date() for a in result.created_appointments] == [
            date(2027, 1, 31),
            date(2027, 2, 28),
            date(2027, 3, 28),
        ]

    def test_daily_skip_keeps_advancing_from_skipped_date(self):
        wednesday = MONDAY + timedelta(days=2)
        existing = [make_appointment(day=wednesday, at="10:00", appointment_id=50)]
        first = make_appointment(day=MONDAY, at="10:00")
        recurrence = RecurrenceRequest(cadence=RecurrenceCadence.DAILY, occurrence_count=3)

        result = project(first, recurrence, make_config(), existing)

        assert result.created_count == 3
        assert result.skipped_count == 1
        assert result.skipped_dates == [wednesday]
        assert [a.start.date() for a in result.created_appointments] == [
            MONDAY,
            MONDAY + timedelta(days=1),
            MONDAY + timedelta(days=3),
        ]

    def test_closed_special_day_is_skipped_not_moved(self):
        next_monday = MONDAY + timedelta(days=7)
        config = make_config(special_days=[SpecialDay(date=next_monday, is_closed=True)])
        first = make_appointment(day=MONDAY, at="10:00")

        result = project(first, _weekly(2), config, [])

        assert result.skipped_dates == [next_monday]
        assert [a.start for a in result.created_appointments] == [
            datetime(2027, 1, 4, 10, 0),
            datetime(2027, 1, 18, 10, 0),
        ]

    def test_first_occurrence_is_unconditional(self):
        sunday = date(2027, 1, 10)
        existing = [make_appointment(day=sunday, at="10:00", appointment_id=9)]
        first = make_appointment(day=sunday, at="10:00")

        result = project(first, _weekly(0), make_config(), existing)

        assert result.created_count == 1
        assert result.created_appointments[0].status == AppointmentStatus.PENDING

    def test_canceled_appointment_does_not_cause_skip(self):
        existing = [
            make_appointment(
                day=MONDAY + timedelta(days=7),
                at="10:00",
                status=AppointmentStatus.CANCELED,
                appointment_id=3,
            )
        ]
        result = project(make_appointment(), _weekly(1), make_config(), existing)
        assert result.skipped_count == 0

    def test_repeats_copy_services_client_and_professional(self):
        first = make_appointment(client_name="Carlos", notes="Prefere tesoura")

        result = project(first, _weekly(2), make_config(), [])

        for appointment in result.created_appointments:
            assert appointment.client_name == "Carlos"
            assert appointment.professional_id == 1
            assert appointment.notes == "Prefere tesoura"
            assert appointment.total_duration_minutes == 30
            assert appointment.status == AppointmentStatus.PENDING
            assert appointment.final_price is None

    def test_none_cadence_creates_only_first(self):
        recurrence = RecurrenceRequest(cadence=RecurrenceCadence.NONE, occurrence_count=5)

        result = project(make_appointment(), recurrence, make_config(), [])

        assert result.created_count == 1
        assert result.skipped_count == 0

    def test_id_factory_assigns_ids(self):
        ids = itertools.count(1)

        result = project(
            make_appointment(), _weekly(2), make_config(), [], id_factory=lambda: next(ids)
        )

        assert [a.id for a in result.created_appointments] == [1, 2, 3]

    def test_stored_appointments_are_not_mutated(self):
        existing = [make_appointment(day=MONDAY + timedelta(days=7), appointment_id=4)]
        snapshot = list(existing)

        project(make_appointment(), _weekly(3), make_config(), existing)

        assert existing == snapshot

    @pytest.mark.parametrize("count", [0, 1, 3, 8])
    @pytest.mark.parametrize(
        "cadence",
        [
            RecurrenceCadence.DAILY,
            RecurrenceCadence.WEEKLY,
            RecurrenceCadence.BIWEEKLY,
            RecurrenceCadence.TWENTY_DAYS,
            RecurrenceCadence.MONTHLY,
        ],
    )
    def test_created_plus_skipped_is_count_plus_one(self, cadence, count):
        # Busy every Tuesday and every 5th of the month at 10:00
        existing = [
            make_appointment(day=MONDAY + timedelta(days=1 + 7 * week), appointment_id=week + 1)
            for week in range(40)
        ] + [
            make_appointment(day=date(2027, month, 5), appointment_id=100 + month)
            for month in range(1, 13)
        ]
        recurrence = RecurrenceRequest(cadence=cadence, occurrence_count=count)

        result = project(make_appointment(), recurrence, make_config(), existing)

        assert result.created_count + result.skipped_count == count + 1

    def test_created_batch_never_overlaps_itself(self):
        recurrence = RecurrenceRequest(cadence=RecurrenceCadence.DAILY, occurrence_count=10)

        result = project(make_appointment(), recurrence, make_config(), [])

        created = result.created_appointments
        for a, b in itertools.combinations(created, 2):
            assert not a.interval.overlaps(b.interval)
