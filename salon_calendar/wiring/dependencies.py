from functools import lru_cache
import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from salon_calendar.core.config import settings
from salon_calendar.application.ports.booking_api import BookingApiPort
from salon_calendar.application.use_cases.booking_board import BookingBoardUseCase
from salon_calendar.application.use_cases.calendar_grid import CalendarGridPositioner
from salon_calendar.application.use_cases.filter_composer import FilterComposer
from salon_calendar.application.use_cases.month_markers import MonthMarkerAggregator
from salon_calendar.application.use_cases.time_buckets import TimeBucketGrouper
from salon_calendar.domain.entities.grid import GridConfig
from salon_calendar.infrastructure.booking_api.http_booking_api import HttpBookingApi
from salon_calendar.infrastructure.booking_api.mock_booking_api import MockBookingApi


def business_now() -> datetime:
    """Wall clock in the business timezone, as a naive local datetime."""
    return datetime.now(ZoneInfo(settings.BUSINESS_TIMEZONE)).replace(tzinfo=None)


def resolve_now(now: datetime | None = None) -> datetime:
    """Reference instant for a request: `now` if given, else the wall clock.

    Aware values are converted to the business timezone and made naive, so they
    compare with booking start times.
    """
    if now is None:
        return business_now()
    if now.tzinfo is not None:
        return now.astimezone(ZoneInfo(settings.BUSINESS_TIMEZONE)).replace(tzinfo=None)
    return now


@lru_cache
def get_booking_api() -> BookingApiPort:
    logger = logging.getLogger(__name__)
    if not settings.BOOKING_API_TOKEN:
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using MockBookingApi (token missing, ENV=dev/local)")
            return MockBookingApi.demo(business_now().date())
        raise ValueError("BOOKING_API_TOKEN is required outside dev/local.")

    logger.info("Using HttpBookingApi")
    return HttpBookingApi()


def get_booking_board() -> BookingBoardUseCase:
    return BookingBoardUseCase(api=get_booking_api())


def get_day_grid() -> CalendarGridPositioner:
    return CalendarGridPositioner.for_day(
        GridConfig(
            hour_height_px=settings.DAY_HOUR_HEIGHT_PX,
            min_height_px=settings.DAY_MIN_HEIGHT_PX,
            start_hour=settings.GRID_START_HOUR,
            end_hour=settings.GRID_END_HOUR,
            default_duration_minutes=settings.DEFAULT_BOOKING_DURATION_MINUTES,
        )
    )


def get_week_grid() -> CalendarGridPositioner:
    return CalendarGridPositioner.for_week(
        GridConfig(
            hour_height_px=settings.WEEK_HOUR_HEIGHT_PX,
            min_height_px=settings.WEEK_MIN_HEIGHT_PX,
            start_hour=settings.GRID_START_HOUR,
            end_hour=settings.GRID_END_HOUR,
            default_duration_minutes=settings.DEFAULT_BOOKING_DURATION_MINUTES,
        )
    )


def get_bucket_grouper() -> TimeBucketGrouper:
    return TimeBucketGrouper()


def get_marker_aggregator() -> MonthMarkerAggregator:
    return MonthMarkerAggregator()


def get_filter_composer() -> FilterComposer:
    return FilterComposer()
