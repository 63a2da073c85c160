"""Shop calendar and profile settings use-cases."""

from dataclasses import replace
from datetime import date

from ..core.logging_config import get_logger
from ..domain.entities import ShopCalendarConfig, ShopProfile
from ..domain.interfaces import IShopSettingsRepository
from ..schemas.dtos import CalendarSettingsRequest, ShopProfileRequest, SpecialDayRequest

logger = get_logger(__name__)


class ShopSettingsService:
    """Reads and edits the operating calendar of the shop."""

    def __init__(self, settings_repo: IShopSettingsRepository):
        self.settings_repo = settings_repo

    def get_calendar(self) -> ShopCalendarConfig:
        return self.settings_repo.get_config()

    def update_weekly_pattern(self, request: CalendarSettingsRequest) -> ShopCalendarConfig:
        """Replace working weekdays and default hours; special days are kept."""
        request.validate()
        current = self.settings_repo.get_config()
        updated = replace(
            current,
            working_days=frozenset(request.working_days),
            default_hours=request.to_hours(),
        )
        saved = self.settings_repo.save_config(updated)
        logger.info(
            "Weekly pattern updated",
            extra={"context": saved.to_dict()},
        )
        return saved

    def set_special_day(self, request: SpecialDayRequest) -> ShopCalendarConfig:
        """Add a special day, replacing any existing entry for the same date."""
        request.validate()
        special_day = request.to_domain()
        current = self.settings_repo.get_config()
        saved = self.settings_repo.save_config(current.with_special_day(special_day))
        logger.info(
            "Special day saved",
            extra={"context": special_day.to_dict()},
        )
        return saved

    def remove_special_day(self, day: date) -> bool:
        """Remove the special day for ``day``; False when there was none."""
        current = self.settings_repo.get_config()
        if current.special_day_for(day) is None:
            return False
        self.settings_repo.save_config(current.without_special_day(day))
        logger.info(
            "Special day removed",
            extra={"context": {"date": day.isoformat()}},
        )
        return True

    def get_profile(self) -> ShopProfile:
        return self.settings_repo.get_profile()

    def update_profile(self, request: ShopProfileRequest) -> ShopProfile:
        request.validate()
        saved = self.settings_repo.save_profile(request.to_domain())
        logger.info("Shop profile updated", extra={"context": saved.to_dict()})
        return saved
