import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from salon_calendar.api.v1.schemas import (
    BookingGroupSchema,
    BookingSchema,
    DateMarkingSchema,
    DayGridResponseSchema,
    DotSchema,
    GridPlacementSchema,
    MonthMarkersResponseSchema,
    StatsResponseSchema,
    StatusChangeRequestSchema,
    StatusChangeResponseSchema,
    TimeSlotSchema,
    WeekDaySchema,
    WeekGridResponseSchema,
)
from salon_calendar.application.exceptions import BookingApiError, BookingNotFoundError, InvalidTransitionError
from salon_calendar.application.use_cases.booking_board import BoardSnapshot, BookingBoardUseCase
from salon_calendar.application.use_cases.booking_stats import employee_load, summarize
from salon_calendar.application.use_cases.calendar_grid import CalendarGridPositioner, week_days, week_label
from salon_calendar.application.use_cases.filter_composer import FilterComposer
from salon_calendar.application.use_cases.month_markers import (
    MonthMarkerAggregator,
    bookings_on,
    resolve_marker_mode,
)
from salon_calendar.application.use_cases.time_buckets import TimeBucketGrouper
from salon_calendar.application.utils.calendar_dates import week_start_of
from salon_calendar.domain.entities.booking_filter import (
    BookingFilter,
    BookingScope,
    EmployeeSelection,
    FilterCategory,
)
from salon_calendar.domain.entities.grid import GridPlacement
from salon_calendar.domain.entities.status_change import StatusChange
from salon_calendar.domain.exceptions import BookingDataError
from salon_calendar.wiring.dependencies import (
    get_booking_board,
    get_bucket_grouper,
    get_day_grid,
    get_filter_composer,
    get_marker_aggregator,
    get_week_grid,
    resolve_now,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _load(board: BookingBoardUseCase, place_id: int) -> BoardSnapshot:
    try:
        return board.load_snapshot(place_id)
    except BookingDataError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except BookingApiError as e:
        raise HTTPException(status_code=502, detail=str(e))


def _placements(placements: list[GridPlacement]) -> list[GridPlacementSchema]:
    return [
        GridPlacementSchema(
            booking=BookingSchema.from_entity(p.booking),
            top=p.top,
            height=p.height,
            column=p.column,
        )
        for p in placements
    ]


def _time_slots(grid: CalendarGridPositioner) -> list[TimeSlotSchema]:
    return [TimeSlotSchema(hour=s.hour, label=s.label, top=s.top) for s in grid.time_slots()]


@router.get("/places/{place_id}/bookings", response_model=list[BookingSchema])
def list_bookings(
    place_id: int,
    category: FilterCategory = FilterCategory.all,
    scope: BookingScope = BookingScope.any,
    employee_ids: list[int] = Query(default=[]),
    now: datetime | None = None,
    board: BookingBoardUseCase = Depends(get_booking_board),
    composer: FilterComposer = Depends(get_filter_composer),
):
    snapshot = _load(board, place_id)
    booking_filter = BookingFilter(
        category=category,
        selection=EmployeeSelection(frozenset(employee_ids)),
        scope=scope,
    )
    result = composer.apply(snapshot.bookings, booking_filter, resolve_now(now))
    return [BookingSchema.from_entity(b) for b in result]


@router.get("/places/{place_id}/groups", response_model=list[BookingGroupSchema])
def grouped_bookings(
    place_id: int,
    upcoming_only: bool = True,
    now: datetime | None = None,
    board: BookingBoardUseCase = Depends(get_booking_board),
    composer: FilterComposer = Depends(get_filter_composer),
    grouper: TimeBucketGrouper = Depends(get_bucket_grouper),
):
    reference_now = resolve_now(now)
    snapshot = _load(board, place_id)
    bookings = snapshot.bookings
    if upcoming_only:
        bookings = composer.apply(bookings, BookingFilter(scope=BookingScope.upcoming), reference_now)
    return [
        BookingGroupSchema(
            kind=group.kind.value,
            label=group.label,
            anchor_date=group.anchor_date,
            bookings=[BookingSchema.from_entity(b) for b in group.bookings],
        )
        for group in grouper.group(bookings, reference_now)
    ]


@router.get("/places/{place_id}/day-grid", response_model=DayGridResponseSchema)
def day_grid(
    place_id: int,
    day: date | None = None,
    employee_ids: list[int] = Query(default=[]),
    now: datetime | None = None,
    board: BookingBoardUseCase = Depends(get_booking_board),
    composer: FilterComposer = Depends(get_filter_composer),
    grid: CalendarGridPositioner = Depends(get_day_grid),
):
    reference_now = resolve_now(now)
    selected_day = day or reference_now.date()
    snapshot = _load(board, place_id)
    selection = EmployeeSelection(frozenset(employee_ids))
    bookings = composer.apply(snapshot.bookings, BookingFilter(selection=selection), reference_now)
    try:
        placements = grid.layout_day(bookings, selected_day)
    except BookingDataError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return DayGridResponseSchema(
        day=selected_day,
        grid_height=grid.grid_height_px,
        current_time_offset=grid.current_time_offset(reference_now) if selected_day == reference_now.date() else None,
        time_slots=_time_slots(grid),
        placements=_placements(placements),
    )


@router.get("/places/{place_id}/week-grid", response_model=WeekGridResponseSchema)
def week_grid(
    place_id: int,
    week_start: date | None = None,
    employee_ids: list[int] = Query(default=[]),
    now: datetime | None = None,
    board: BookingBoardUseCase = Depends(get_booking_board),
    composer: FilterComposer = Depends(get_filter_composer),
    grid: CalendarGridPositioner = Depends(get_week_grid),
):
    reference_now = resolve_now(now)
    start = week_start_of(week_start or reference_now.date())
    snapshot = _load(board, place_id)
    selection = EmployeeSelection(frozenset(employee_ids))
    bookings = composer.apply(snapshot.bookings, BookingFilter(selection=selection), reference_now)
    try:
        placements = grid.layout_week(bookings, start)
    except BookingDataError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return WeekGridResponseSchema(
        week_start=start,
        label=week_label(start),
        days=[WeekDaySchema(day=d.date, label=d.label, is_today=d.is_today) for d in week_days(start, reference_now)],
        time_slots=_time_slots(grid),
        placements=_placements(placements),
    )


@router.get("/places/{place_id}/month-markers", response_model=MonthMarkersResponseSchema)
def month_markers(
    place_id: int,
    selected_date: date | None = None,
    employee_ids: list[int] = Query(default=[]),
    now: datetime | None = None,
    board: BookingBoardUseCase = Depends(get_booking_board),
    composer: FilterComposer = Depends(get_filter_composer),
    aggregator: MonthMarkerAggregator = Depends(get_marker_aggregator),
):
    reference_now = resolve_now(now)
    selected = selected_date or reference_now.date()
    snapshot = _load(board, place_id)
    selection = EmployeeSelection(frozenset(employee_ids))
    keep = composer.compose(BookingFilter(selection=selection), reference_now)
    bookings = [b for b in snapshot.bookings if keep(b)]
    markings = aggregator.aggregate(bookings, selected, snapshot.employees, selection.employee_ids)
    return MonthMarkersResponseSchema(
        mode=resolve_marker_mode(selection.employee_ids).value,
        marked_dates={
            date_key: DateMarkingSchema(
                dots=[DotSchema(color=d.color, selectedColor=d.selected_color) for d in marking.dots],
                marked=marking.marked,
                selected=marking.selected,
                selectedColor=marking.selected_color,
            )
            for date_key, marking in markings.items()
        },
        selected_date_bookings=[BookingSchema.from_entity(b) for b in bookings_on(bookings, selected)],
    )


@router.get("/places/{place_id}/stats", response_model=StatsResponseSchema)
def stats(
    place_id: int,
    now: datetime | None = None,
    board: BookingBoardUseCase = Depends(get_booking_board),
):
    reference_now = resolve_now(now)
    snapshot = _load(board, place_id)
    summary = summarize(snapshot.bookings, reference_now)
    return StatsResponseSchema(
        today_count=summary.today_count,
        pending_count=summary.pending_count,
        week_total=summary.week_total,
        employees={
            employee_id: {"today": load.today, "week": load.week}
            for employee_id, load in employee_load(snapshot.bookings, reference_now).items()
        },
    )


def _status_response(board: BookingBoardUseCase, change: StatusChange) -> StatusChangeResponseSchema:
    return StatusChangeResponseSchema(
        booking_id=change.booking_id,
        previous_status=change.previous_status,
        new_status=change.new_status,
        allowed_next=board.transition.allowed_targets(change.new_status),
    )


def _run_status_action(board: BookingBoardUseCase, place_id: int, booking_id: int, action) -> StatusChangeResponseSchema:
    snapshot = _load(board, place_id)
    try:
        booking = snapshot.find(booking_id)
        change = action(booking)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except BookingDataError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except BookingApiError as e:
        logger.exception("Failed to persist status change", extra={"booking_id": booking_id, "error": str(e)})
        raise HTTPException(status_code=502, detail=str(e))
    return _status_response(board, change)


@router.post("/places/{place_id}/bookings/{booking_id}/status", response_model=StatusChangeResponseSchema)
def change_status(
    place_id: int,
    booking_id: int,
    req: StatusChangeRequestSchema,
    board: BookingBoardUseCase = Depends(get_booking_board),
):
    return _run_status_action(
        board, place_id, booking_id, lambda booking: board.commit_status_change(booking, req.status)
    )


@router.post("/places/{place_id}/bookings/{booking_id}/accept", response_model=StatusChangeResponseSchema)
def accept_booking(
    place_id: int,
    booking_id: int,
    board: BookingBoardUseCase = Depends(get_booking_board),
):
    return _run_status_action(board, place_id, booking_id, board.accept)


@router.post("/places/{place_id}/bookings/{booking_id}/decline", response_model=StatusChangeResponseSchema)
def decline_booking(
    place_id: int,
    booking_id: int,
    board: BookingBoardUseCase = Depends(get_booking_board),
):
    return _run_status_action(board, place_id, booking_id, board.decline)
