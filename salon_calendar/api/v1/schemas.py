from datetime import date

from pydantic import BaseModel, Field

from salon_calendar.domain.entities.booking import BookingRecord, BookingStatus


class BookingSchema(BaseModel):
    id: int
    booking_date: date
    booking_time: str
    status: BookingStatus
    employee_id: int | None = None
    place_id: int | None = None
    customer_name: str = ""
    service_name: str = ""
    employee_name: str | None = None
    total_price: float | None = None

    @classmethod
    def from_entity(cls, booking: BookingRecord) -> "BookingSchema":
        return cls(
            id=booking.id,
            booking_date=booking.booking_date,
            booking_time=booking.booking_time,
            status=booking.status,
            employee_id=booking.employee_id,
            place_id=booking.place_id,
            customer_name=booking.customer_name,
            service_name=booking.service_name,
            employee_name=booking.employee_name,
            total_price=booking.total_price,
        )


class BookingGroupSchema(BaseModel):
    kind: str
    label: str
    anchor_date: date
    bookings: list[BookingSchema]


class GridPlacementSchema(BaseModel):
    booking: BookingSchema
    top: float
    height: float
    column: int


class TimeSlotSchema(BaseModel):
    hour: int
    label: str
    top: float


class WeekDaySchema(BaseModel):
    day: date
    label: str
    is_today: bool


class DayGridResponseSchema(BaseModel):
    day: date
    grid_height: float
    current_time_offset: float | None = None
    time_slots: list[TimeSlotSchema]
    placements: list[GridPlacementSchema]


class WeekGridResponseSchema(BaseModel):
    week_start: date
    label: str
    days: list[WeekDaySchema]
    time_slots: list[TimeSlotSchema]
    placements: list[GridPlacementSchema]


class DotSchema(BaseModel):
    color: str
    selectedColor: str


class DateMarkingSchema(BaseModel):
    dots: list[DotSchema] = Field(default_factory=list)
    marked: bool = False
    selected: bool = False
    selectedColor: str | None = None


class MonthMarkersResponseSchema(BaseModel):
    mode: str
    marked_dates: dict[str, DateMarkingSchema]
    selected_date_bookings: list[BookingSchema]


class StatsResponseSchema(BaseModel):
    today_count: int
    pending_count: int
    week_total: int
    employees: dict[int, dict[str, int]] = Field(default_factory=dict)


class StatusChangeRequestSchema(BaseModel):
    status: str


class StatusChangeResponseSchema(BaseModel):
    booking_id: int
    previous_status: BookingStatus
    new_status: BookingStatus
    allowed_next: list[BookingStatus]
