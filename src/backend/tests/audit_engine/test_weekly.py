from datetime import datetime

import pytest

from common.audit_engine.config import WeeklyConfig
from common.audit_engine.errors import MissingColumnError
from common.audit_engine.models import DeliveryState
from common.audit_engine.weekly import delivery_window, parse_timestamp, weekly_status

WEDNESDAY = datetime(2026, 1, 14, 10, 0)


def test_window_starts_on_most_recent_friday():
    window = delivery_window(WEDNESDAY)
    assert window.start == datetime(2026, 1, 9, 0, 0)
    assert window.end == datetime(2026, 1, 15, 23, 59, 59, 999999)


def test_window_on_friday_and_thursday():
    assert delivery_window(datetime(2026, 1, 16, 8, 0)).start == datetime(2026, 1, 16)
    thursday = delivery_window(datetime(2026, 1, 15, 23, 59))
    assert thursday.start == datetime(2026, 1, 9)
    assert thursday.contains(datetime(2026, 1, 15, 23, 59, 59))
    assert not thursday.contains(datetime(2026, 1, 8, 23, 59, 59))
    assert not thursday.contains(None)


def test_window_anchor_is_configurable():
    assert delivery_window(WEDNESDAY, anchor_weekday=0).start == datetime(2026, 1, 12)


def test_parse_timestamp_variants():
    assert parse_timestamp("Jan 15, 2026 2:24 PM") == datetime(2026, 1, 15, 14, 24)
    assert parse_timestamp(46023) == datetime(2026, 1, 1)
    assert parse_timestamp("46035.5") == datetime(2026, 1, 13, 12, 0)
    assert parse_timestamp("2026-01-12T10:00:00+05:00") == datetime(2026, 1, 12, 10, 0)
    assert parse_timestamp("") is None
    assert parse_timestamp("not a date") is None
    assert parse_timestamp(None) is None
    assert parse_timestamp(0) is None


def test_text_without_a_full_date_is_rejected():
    assert parse_timestamp("2:24 PM") is None
    assert parse_timestamp("Friday") is None
    assert parse_timestamp("Jan 5") is None
    assert parse_timestamp("January 2026") is None
    assert parse_timestamp("Jan 5, 2026") == datetime(2026, 1, 5)


@pytest.fixture
def folder_export(make_dataset):
    return make_dataset(
        [
            {"Folder name and path": "Project/Models/Building A/Architecture/WIP", "Name": "old.rvt", "Last Updated": "Jan 2, 2026 9:00 AM"},
            {"Folder name and path": "Project/Models/Building A/Architecture/WIP", "Name": "new.rvt", "Last Updated": "Jan 12, 2026 2:24 PM"},
            {"Folder name and path": "Project/Models/Building A/Structure", "Name": "str.rvt", "Last Updated": "Jan 5, 2026"},
            {"Folder name and path": "Project/Models/Building B/MEP", "Name": "mep.rvt", "Last Updated": "46035.5"},
            {"Folder name and path": "Project/Models/Building B/Landscape", "Name": "ls.rvt", "Last Updated": "not a date"},
            {"Folder name and path": "Project/Models/Building B/Civil", "Name": "c0.rvt", "Last Updated": ""},
            {"Folder name and path": "Project/Models/Building B/Civil", "Name": "c1.rvt", "Last Updated": "Jan 9, 2026 0:00"},
            {"Folder name and path": "Project/Models", "Name": "root.rvt", "Last Updated": "Jan 12, 2026"},
            {"Folder name and path": "Project/Models/ /Arch", "Name": "blank.rvt", "Last Updated": "Jan 12, 2026"},
        ],
        name="folders.csv",
    )


def test_weekly_status(folder_export):
    report = weekly_status(folder_export, WEDNESDAY)
    rows = [(d.building, d.deliverable, d.latest_file_name, d.status) for d in report.deliverables]
    assert rows == [
        ("Building A", "Architecture", "new.rvt", DeliveryState.OK),
        ("Building A", "Structure", "str.rvt", DeliveryState.LATE),
        ("Building B", "Civil", "c1.rvt", DeliveryState.OK),
        ("Building B", "Landscape", "No valid date found", DeliveryState.LATE),
        ("Building B", "MEP", "mep.rvt", DeliveryState.OK),
    ]
    assert report.deliverables[3].latest_update is None
    assert (report.total, report.ok, report.late) == (5, 3, 2)


def test_every_row_with_a_path_key_lands_in_one_group(folder_export):
    report = weekly_status(folder_export, WEDNESDAY)
    keys = [(d.building, d.deliverable) for d in report.deliverables]
    assert len(keys) == len(set(keys))


def test_segment_positions_are_configurable(make_dataset):
    data = make_dataset(
        [{"Folder name and path": "Building A/Architecture", "Name": "a.rvt", "Last Updated": "Jan 12, 2026"}]
    )
    report = weekly_status(data, WEDNESDAY, WeeklyConfig(building_segment=0, deliverable_segment=1))
    assert report.deliverables[0].building == "Building A"


def test_required_columns(make_dataset):
    data = make_dataset([{"Folder name and path": "a/b/c/d", "Name": "x"}])
    with pytest.raises(MissingColumnError):
        weekly_status(data, WEDNESDAY)


def test_undated_text_reports_no_valid_date(make_dataset):
    data = make_dataset(
        [
            {"Folder name and path": "Project/Models/Building A/Architecture", "Name": "a.rvt", "Last Updated": "Friday"},
            {"Folder name and path": "Project/Models/Building A/Structure", "Name": "s.rvt", "Last Updated": "2:24 PM"},
        ]
    )
    report = weekly_status(data, WEDNESDAY)
    rows = [(d.deliverable, d.latest_update, d.latest_file_name, d.status) for d in report.deliverables]
    assert rows == [
        ("Architecture", None, "No valid date found", DeliveryState.LATE),
        ("Structure", None, "No valid date found", DeliveryState.LATE),
    ]


def test_saturday_in_window_is_ok_and_eight_days_old_is_late(make_dataset):
    data = make_dataset(
        [
            {"Folder name and path": "Project/Models/Building A/Architecture", "Name": "sat.rvt", "Last Updated": "Jan 10, 2026 4:00 PM"},
            {"Folder name and path": "Project/Models/Building A/Structure", "Name": "old.rvt", "Last Updated": "Jan 6, 2026 10:00 AM"},
        ]
    )
    report = weekly_status(data, WEDNESDAY)
    rows = [(d.deliverable, d.latest_update, d.status) for d in report.deliverables]
    assert rows == [
        ("Architecture", datetime(2026, 1, 10, 16, 0), DeliveryState.OK),
        ("Structure", datetime(2026, 1, 6, 10, 0), DeliveryState.LATE),
    ]
    assert (report.ok, report.late) == (1, 1)
