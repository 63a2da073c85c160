"""Shop operating calendar repository."""

from ..db.base import ShopSettingsModel, SpecialDayModel
from ..domain.entities import (
    OperatingHours,
    ShopCalendarConfig,
    ShopProfile,
    SpecialDay,
    format_time,
)
from ..domain.interfaces import IShopSettingsRepository

SETTINGS_ROW_ID = 1


class ShopSettingsRepository(IShopSettingsRepository):
    """Stores the weekly pattern in one row and special days in their own
    table (one row per date)."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_config(self) -> ShopCalendarConfig:
        settings = self.db.get(ShopSettingsModel, SETTINGS_ROW_ID)
        special_days = tuple(
            self._special_day_to_domain(row)
            for row in self.db.query(SpecialDayModel).order_by(SpecialDayModel.day)
        )
        if settings is None:
            return ShopCalendarConfig(special_days=special_days)

        return ShopCalendarConfig(
            working_days=frozenset(settings.working_days or []),
            default_hours=OperatingHours.from_strings(
                settings.open_time, settings.close_time
            ),
            special_days=special_days,
        )

    def save_config(self, config: ShopCalendarConfig) -> ShopCalendarConfig:
        settings = self._settings_row()
        self._apply_calendar(settings, config)

        try:
            self.db.query(SpecialDayModel).delete()
            for special_day in config.special_days:
                hours = special_day.hours
                self.db.add(
                    SpecialDayModel(
                        day=special_day.date,
                        is_closed=special_day.is_closed,
                        open_time=format_time(hours.start_time) if hours else None,
                        close_time=format_time(hours.end_time) if hours else None,
                    )
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self.get_config()

    def get_profile(self) -> ShopProfile:
        settings = self.db.get(ShopSettingsModel, SETTINGS_ROW_ID)
        if settings is None:
            return ShopProfile()
        return ShopProfile(
            name=settings.shop_name,
            address=settings.shop_address or "",
            monthly_goal=float(settings.monthly_goal),
        )

    def save_profile(self, profile: ShopProfile) -> ShopProfile:
        settings = self._settings_row()
        settings.shop_name = profile.name.strip()
        settings.shop_address = (profile.address or "").strip()
        settings.monthly_goal = profile.monthly_goal
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self.get_profile()

    def _settings_row(self) -> ShopSettingsModel:
        """The settings row, created with the default calendar when missing."""
        settings = self.db.get(ShopSettingsModel, SETTINGS_ROW_ID)
        if settings is None:
            settings = ShopSettingsModel(id=SETTINGS_ROW_ID)
            self._apply_calendar(settings, ShopCalendarConfig())
            self.db.add(settings)
        return settings

    @staticmethod
    def _apply_calendar(settings: ShopSettingsModel, config: ShopCalendarConfig) -> None:
        settings.working_days = sorted(config.working_days)
        settings.open_time = format_time(config.default_hours.start_time)
        settings.close_time = format_time(config.default_hours.end_time)

    @staticmethod
    def _special_day_to_domain(row: SpecialDayModel) -> SpecialDay:
        hours = None
        if not row.is_closed and row.open_time and row.close_time:
            hours = OperatingHours.from_strings(row.open_time, row.close_time)
        return SpecialDay(date=row.day, is_closed=row.is_closed, hours=hours)

