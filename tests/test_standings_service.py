"""Tests for standings shape detection and W/L/T extraction."""

from __future__ import annotations

import pytest

from commanders_hub.models import RecordSource, StandingsRecord
from commanders_hub.services.standings_service import (
    NestedTreeShape,
    RecordItemsShape,
    RecordsShape,
    StandingsService,
    record_from_stats,
    record_from_summary,
)


@pytest.fixture
def service() -> StandingsService:
    return StandingsService(team_id="28", team_name="Washington Commanders")


def _nested(entries_by_division):
    return {
        "children": [
            {
                "name": "National Football Conference",
                "children": [
                    {"name": name, "standings": {"entries": entries}}
                    for name, entries in entries_by_division.items()
                ],
            }
        ]
    }


def test_record_items_summary(service):
    payload = {"record": {"items": [
        {"type": "home", "summary": "6-2"},
        {"type": "total", "summary": "11-5-1"},
    ]}}

    assert service.normalize(payload) == StandingsRecord(11, 5, 1, RecordSource.SUMMARY)
    assert service.transform(payload) == "<p>Washington Commanders: 11V - 5D - 1E</p>"


def test_summary_without_ties_defaults_to_zero(service):
    payload = {"record": {"items": [{"description": "Overall", "summary": "10-6"}]}}

    assert service.transform(payload) == "<p>Washington Commanders: 10V - 6D - 0E</p>"


def test_stats_array_only(service):
    payload = {"records": [{"type": "total", "stats": [
        {"name": "wins", "value": 7},
        {"name": "losses", "value": 9},
    ]}]}

    record = service.normalize(payload)

    assert record == StandingsRecord(7, 9, 0, RecordSource.STATS)
    assert "7V - 9D - 0E" in service.transform(payload)


def test_records_matched_by_name_overall(service):
    payload = {"records": [{"name": "Home", "summary": "1-0"}, {"name": "Overall", "summary": "3-2"}]}

    assert service.normalize(payload).wins == 3


def test_nested_tree_finds_tracked_team_in_any_division(service):
    payload = _nested({
        "NFC North": [{"team": {"id": "9"}, "stats": [{"name": "wins", "value": 12}]}],
        "NFC East": [
            {"team": {"id": "6"}, "stats": [{"name": "wins", "value": 14}]},
            {"team": {"id": 28}, "stats": [
                {"abbreviation": "W", "value": "12"},
                {"abbreviation": "L", "value": "5.0"},
                {"abbreviation": "T", "value": None},
            ]},
        ],
    })

    assert service.normalize(payload) == StandingsRecord(12, 5, 0, RecordSource.STATS)


def test_nested_tree_takes_priority_over_flat_shapes(service):
    payload = _nested({"NFC East": [{"team": {"id": "28"}, "stats": [{"name": "wins", "value": 2}]}]})
    payload["record"] = {"items": [{"type": "total", "summary": "9-9"}]}

    assert service.normalize(payload).wins == 2


def test_records_tried_when_record_items_has_no_total(service):
    payload = {
        "record": {"items": [{"type": "home", "summary": "4-4"}]},
        "records": [{"type": "total", "summary": "8-8-1"}],
    }

    assert service.normalize(payload) == StandingsRecord(8, 8, 1, RecordSource.SUMMARY)


def test_malformed_summary_falls_back_to_stats(service):
    payload = {"record": {"items": [{"type": "total", "summary": "11 wins", "stats": [
        {"name": "wins", "value": 11}, {"name": "losses", "value": "six"},
    ]}]}}

    assert service.normalize(payload) == StandingsRecord(11, 0, 0, RecordSource.STATS)


def test_zero_wins_entry_still_counts(service):
    payload = {"records": [{"type": "total", "stats": [{"name": "wins", "value": 0}]}]}

    assert service.transform(payload) == "<p>Washington Commanders: 0V - 0D - 0E</p>"


def test_stats_without_meaningful_values_is_empty(service):
    payload = {"records": [{"type": "total", "stats": [{"name": "pointsFor", "value": 300}]}]}

    assert service.normalize(payload) is None


@pytest.mark.parametrize("payload", [
    None,
    [],
    {},
    {"children": [{"standings": {"entries": [{"team": {"id": "1"}}]}}]},
    {"record": {"items": []}},
    {"records": [{"type": "home", "summary": "1-0"}]},
    {"standings": "whatever"},
])
def test_unrecognized_shapes_signal_empty(service, payload):
    assert service.normalize(payload) is None
    assert service.transform(payload) is None


def test_shapes_individually():
    assert NestedTreeShape().find_record({"children": "bad"}, "28") is None
    assert RecordItemsShape().find_record({"record": {"items": [{"type": "total"}]}}, "28") == {"type": "total"}
    assert RecordsShape().find_record({"records": ["x", {"type": "total"}]}, "28") == {"type": "total"}


def test_strategy_helpers():
    assert record_from_summary({"summary": " 3-1 "}) == StandingsRecord(3, 1, 0, RecordSource.SUMMARY)
    assert record_from_summary({"summary": 31}) is None
    assert record_from_stats({"stats": "nope"}) is None
