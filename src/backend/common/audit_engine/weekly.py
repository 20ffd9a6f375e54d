"""Weekly delivery status from a document-management folder export.

Deliverables are identified by the third and fourth segments of their folder
path (``Project/Models/<building>/<deliverable>/...``). A deliverable is OK
when its newest file was updated inside the current delivery window, which
opens at 00:00 on the most recent anchor weekday (Friday by default) and
closes at the end of the sixth day after it.

All datetimes are naive local wall-clock times; timezone-aware values parsed
from text are reduced to their wall-clock reading.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, time, timedelta
from typing import Any, Dict, Optional, Tuple

from dateutil import parser as date_parser

from .config import WeeklyConfig
from .dataset import Dataset, cell_text
from .models import DeliverableStatus, DeliveryState, DeliveryWindow, WeeklyReport

logger = logging.getLogger(__name__)

EXCEL_EPOCH = datetime(1899, 12, 30)
NO_VALID_DATE = "No valid date found"
UNKNOWN_FILE = "Unknown"

_NUMERIC = re.compile(r"^\d+(\.\d+)?$")

# Any date part dateutil has to fill in differs between these two.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2011, 12, 28)


def delivery_window(now: datetime, anchor_weekday: int = 4) -> DeliveryWindow:
    days_back = (now.weekday() - anchor_weekday) % 7
    start = datetime.combine((now - timedelta(days=days_back)).date(), time.min)
    end = datetime.combine((start + timedelta(days=6)).date(), time.max)
    return DeliveryWindow(start=start, end=end)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Read a "Last Updated" cell.

    Numbers (and purely numeric text) are Excel serial day counts; other text
    is handed to dateutil. Returns ``None`` for blanks, anything unparseable,
    and text without a full date ("2:24 PM", "Friday", "Jan 5").
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, (int, float)):
        return _from_serial(float(value))
    text = cell_text(value).strip()
    if not text:
        return None
    if _NUMERIC.match(text):
        return _from_serial(float(text))
    try:
        parsed = date_parser.parse(text, default=_DEFAULT_A)
        check = date_parser.parse(text, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return None
    if parsed.date() != check.date():
        return None
    return parsed.replace(tzinfo=None)


def _from_serial(serial: float) -> Optional[datetime]:
    if serial != serial or serial <= 0:
        return None
    try:
        return EXCEL_EPOCH + timedelta(days=serial)
    except OverflowError:
        return None


def deliverable_key(path: Any, config: Optional[WeeklyConfig] = None) -> Optional[Tuple[str, str]]:
    cfg = config or WeeklyConfig()
    segments = cell_text(path).split("/")
    needed = max(cfg.building_segment, cfg.deliverable_segment) + 1
    if len(segments) < needed:
        return None
    building = segments[cfg.building_segment].strip()
    deliverable = segments[cfg.deliverable_segment].strip()
    if not building or not deliverable:
        return None
    return building, deliverable


def weekly_status(dataset: Dataset, now: datetime, config: Optional[WeeklyConfig] = None) -> WeeklyReport:
    cfg = config or WeeklyConfig()
    path_col = dataset.require_column([cfg.path_column], dimension="folder path")
    name_col = dataset.require_column([cfg.name_column], dimension="file name")
    updated_col = dataset.require_column([cfg.updated_column], dimension="last updated")

    window = delivery_window(now, cfg.anchor_weekday)
    groups: Dict[Tuple[str, str], Tuple[Optional[datetime], str]] = {}
    skipped = 0
    for row in dataset.rows:
        key = deliverable_key(row.get(path_col), cfg)
        if key is None:
            skipped += 1
            continue
        stamp = parse_timestamp(row.get(updated_col))
        current = groups.get(key)
        if stamp is not None:
            if current is None or current[0] is None or stamp > current[0]:
                groups[key] = (stamp, cell_text(row.get(name_col)).strip() or UNKNOWN_FILE)
        elif current is None:
            groups[key] = (None, NO_VALID_DATE)

    if skipped:
        logger.debug("Skipped %d row(s) without a building/deliverable path", skipped)

    deliverables = []
    for (building, deliverable), (latest, file_name) in sorted(
        groups.items(), key=lambda kv: (kv[0][0].casefold(), kv[0][1].casefold(), kv[0])
    ):
        state = DeliveryState.OK if window.contains(latest) else DeliveryState.LATE
        deliverables.append(
            DeliverableStatus(
                building=building,
                deliverable=deliverable,
                latest_update=latest,
                latest_file_name=file_name,
                status=state,
            )
        )

    ok = sum(1 for d in deliverables if d.status == DeliveryState.OK)
    logger.info(
        "Weekly window %s..%s: %d deliverable(s), %d late",
        window.start.date(),
        window.end.date(),
        len(deliverables),
        len(deliverables) - ok,
    )
    return WeeklyReport(
        window=window,
        deliverables=deliverables,
        total=len(deliverables),
        ok=ok,
        late=len(deliverables) - ok,
    )
