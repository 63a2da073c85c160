"""
Integration tests for the SQLAlchemy repositories against in-memory SQLite.
"""

from datetime import date, datetime, time

import pytest

from barbershop.db.seed import DEFAULT_SERVICES, seed_default_catalog
from barbershop.domain.entities import (
    AppointmentStatus,
    Client,
    Expense,
    ExpenseCategory,
    OperatingHours,
    Professional,
    ServiceItem,
    ShopCalendarConfig,
    ShopProfile,
    SpecialDay,
)
from barbershop.repositories import (
    AppointmentRepository,
    CatalogRepository,
    ClientRepository,
    ExpenseRepository,
    ShopSettingsRepository,
)
from tests.factories.entity_factories import BEARD, HAIRCUT, MONDAY, TUESDAY, make_appointment


@pytest.fixture
def appointment_repo(seeded_catalog):
    return AppointmentRepository(seeded_catalog)


class TestCatalogRepository:
    def test_seed_is_idempotent(self, db_session):
        assert seed_default_catalog(db_session) is True
        assert seed_default_catalog(db_session) is False

        repo = CatalogRepository(db_session)
        assert len(repo.list_services()) == len(DEFAULT_SERVICES)
        assert [p.name for p in repo.list_professionals()] == ["Barbeiro Principal"]

    def test_seeded_service_values(self, seeded_catalog):
        service = CatalogRepository(seeded_catalog).get_service(4)
        assert service.name == "Corte + Barba"
        assert service.price == 60.0
        assert service.duration_minutes == 50

    def test_create_and_fetch(self, db_session):
        repo = CatalogRepository(db_session)

        created = repo.create_service(
            ServiceItem(name="Hidratação", price=35.0, duration_minutes=25)
        )
        professional = repo.create_professional(Professional(name="Rafael"))

        assert created.id is not None
        assert repo.get_service(created.id).name == "Hidratação"
        assert repo.get_professional(professional.id).name == "Rafael"
        assert repo.get_service(999) is None

    def test_update_and_delete_service(self, seeded_catalog):
        repo = CatalogRepository(seeded_catalog)

        updated = repo.update_service(
            ServiceItem(id=3, name=" Design de Sobrancelha ", price=20.0, duration_minutes=20)
        )

        assert updated.name == "Design de Sobrancelha"
        assert repo.get_service(3).price == 20.0
        assert repo.delete_service(3) is True
        assert repo.delete_service(3) is False
        assert repo.get_service(3) is None

    def test_update_missing_service(self, db_session):
        with pytest.raises(ValueError, match="not found"):
            CatalogRepository(db_session).update_service(
                ServiceItem(id=99, name="Corte", price=40.0, duration_minutes=30)
            )

    def test_deleting_professional_keeps_history(self, seeded_catalog):
        catalog = CatalogRepository(seeded_catalog)
        appointments = AppointmentRepository(seeded_catalog)
        rafael = catalog.create_professional(Professional(name="Rafael"))
        (done,) = appointments.create_many([make_appointment(professional_id=rafael.id)])
        done.status = AppointmentStatus.COMPLETED
        appointments.update(done)

        assert catalog.delete_professional(rafael.id) is True

        stored = appointments.get_by_id(done.id)
        assert stored.professional_id is None
        assert stored.status == AppointmentStatus.COMPLETED


class TestAppointmentRepository:
    def test_create_many_assigns_ids(self, appointment_repo):
        created = appointment_repo.create_many(
            [
                make_appointment(at="10:00", services=[HAIRCUT, BEARD]),
                make_appointment(day=TUESDAY, at="10:00"),
            ]
        )

        assert all(a.id for a in created)
        stored = appointment_repo.get_by_id(created[0].id)
        assert stored.start == datetime(2027, 1, 4, 10, 0)
        assert [s.name for s in stored.services] == ["Corte de Cabelo", "Barba"]
        assert stored.total_duration_minutes == 50
        assert stored.status == AppointmentStatus.PENDING

    def test_queries_by_day_and_professional(self, appointment_repo, seeded_catalog):
        other = CatalogRepository(seeded_catalog).create_professional(
            Professional(name="Rafael")
        )
        appointment_repo.create_many(
            [
                make_appointment(at="15:00"),
                make_appointment(at="09:00"),
                make_appointment(at="11:00", professional_id=other.id),
                make_appointment(day=TUESDAY, at="09:00"),
            ]
        )

        day = appointment_repo.get_by_date(MONDAY)
        mine = appointment_repo.get_by_professional_and_date(1, MONDAY)

        assert [a.start.hour for a in day] == [9, 11, 15]
        assert [a.start.hour for a in mine] == [9, 15]

    def test_date_range_is_half_open(self, appointment_repo):
        appointment_repo.create_many(
            [make_appointment(at="09:00"), make_appointment(day=TUESDAY, at="09:00")]
        )

        found = appointment_repo.get_by_date_range(
            datetime(2027, 1, 4, 9, 0), datetime(2027, 1, 5, 9, 0)
        )

        assert [a.start.date() for a in found] == [MONDAY]

    def test_update_persists_status_and_price(self, appointment_repo):
        (created,) = appointment_repo.create_many([make_appointment()])
        created.status = AppointmentStatus.COMPLETED
        created.final_price = created.total_price

        appointment_repo.update(created)

        stored = appointment_repo.get_by_id(created.id)
        assert stored.status == AppointmentStatus.COMPLETED
        assert stored.final_price == 40.0

    def test_update_missing_row(self, appointment_repo):
        ghost = make_appointment(appointment_id=999)
        with pytest.raises(ValueError, match="not found"):
            appointment_repo.update(ghost)

    def test_client_names_and_pending_counts(self, appointment_repo):
        created = appointment_repo.create_many(
            [
                make_appointment(at="09:00", client_name="João Silva"),
                make_appointment(at="10:00", client_name="Maria"),
                make_appointment(day=TUESDAY, at="09:00", client_name="João Silva"),
            ]
        )
        created[2].status = AppointmentStatus.CANCELED
        appointment_repo.update(created[2])

        found = appointment_repo.get_by_client_names([" João Silva ", ""])

        assert [a.id for a in found] == [created[0].id, created[2].id]
        assert appointment_repo.get_by_client_names([]) == []
        assert appointment_repo.count_pending_for_professional(1) == 2
        assert appointment_repo.count_pending_for_professional(2) == 0


class TestShopSettingsRepository:
    def test_defaults_without_row(self, db_session):
        config = ShopSettingsRepository(db_session).get_config()

        assert config.working_days == frozenset({0, 1, 2, 3, 4, 5})
        assert config.default_hours == OperatingHours()
        assert config.special_days == ()

    def test_round_trip_with_special_days(self, db_session):
        repo = ShopSettingsRepository(db_session)
        config = ShopCalendarConfig(
            working_days=frozenset({1, 2, 3, 4, 5, 6}),
            default_hours=OperatingHours.from_strings("08:30", "19:00"),
            special_days=(
                SpecialDay(date=date(2027, 12, 25), is_closed=True),
                SpecialDay(
                    date=date(2027, 12, 24),
                    is_closed=False,
                    hours=OperatingHours.from_strings("09:00", "13:00"),
                ),
            ),
        )

        saved = repo.save_config(config)

        assert saved == config
        assert saved.special_days[0].date == date(2027, 12, 24)
        assert saved.special_day_for(date(2027, 12, 24)).hours.end_time == time(13, 0)

    def test_saving_replaces_special_days(self, db_session):
        repo = ShopSettingsRepository(db_session)
        first = ShopCalendarConfig(special_days=(SpecialDay(date=MONDAY, is_closed=True),))
        repo.save_config(first)

        repo.save_config(first.without_special_day(MONDAY))

        assert repo.get_config().special_days == ()

    def test_profile_defaults_without_row(self, db_session):
        assert ShopSettingsRepository(db_session).get_profile() == ShopProfile()

    def test_saving_profile_first_keeps_default_calendar(self, db_session):
        repo = ShopSettingsRepository(db_session)

        saved = repo.save_profile(
            ShopProfile(name="Barbearia do Zé", address="Rua A, 10", monthly_goal=8000.0)
        )

        assert saved == ShopProfile(
            name="Barbearia do Zé", address="Rua A, 10", monthly_goal=8000.0
        )
        assert repo.get_config() == ShopCalendarConfig()

    def test_saving_calendar_keeps_profile(self, db_session):
        repo = ShopSettingsRepository(db_session)
        repo.save_profile(ShopProfile(name="Barbearia do Zé", monthly_goal=8000.0))

        repo.save_config(ShopCalendarConfig(working_days=frozenset({0, 1, 2})))

        assert repo.get_profile().name == "Barbearia do Zé"
        assert repo.get_config().working_days == frozenset({0, 1, 2})


class TestClientRepository:
    def test_crud(self, seeded_catalog):
        repo = ClientRepository(seeded_catalog)

        created = repo.create(Client(name="Ana Costa", age=25, phone="11 95555-0000"))

        assert created.id is not None
        assert repo.get_by_id(created.id) == created
        assert [c.name for c in repo.list_all()] == ["Ana Costa", "João Silva"]
        assert repo.delete(created.id) is True
        assert repo.delete(created.id) is False
        assert repo.get_by_id(created.id) is None


class TestExpenseRepository:
    def test_month_window_is_half_open(self, db_session):
        repo = ExpenseRepository(db_session)
        days = (date(2027, 1, 31), date(2027, 2, 1), date(2027, 3, 1))
        for day, amount in zip(days, (10.0, 20.0, 30.0)):
            repo.create(
                Expense(description="Material", category="Suprimentos", amount=amount, date=day)
            )

        found = repo.get_by_date_range(date(2027, 2, 1), date(2027, 3, 1))

        assert [e.amount for e in found] == [20.0]
        assert found[0].category is ExpenseCategory.SUPPLIES

    def test_delete(self, db_session):
        repo = ExpenseRepository(db_session)
        expense = repo.create(
            Expense(description="Aluguel", category=ExpenseCategory.RENT, amount=1200.0, date=MONDAY)
        )

        assert repo.delete(expense.id) is True
        assert repo.delete(expense.id) is False
