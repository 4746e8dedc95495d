import logging

from fastapi import FastAPI

from salon_calendar.api.v1.calendar import router as calendar_router
from salon_calendar.core.config import settings

CONTEXT_KEYS = (
    "place_id",
    "booking_id",
    "status",
    "target_status",
    "count",
    "mode",
    "category",
    "scope",
    "week_start",
    "dates",
    "groups",
    "skipped",
    "path",
    "error",
)


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Salon Booking Calendar", version="1.0.0")

app.include_router(calendar_router, prefix="/api/v1", tags=["calendar"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
