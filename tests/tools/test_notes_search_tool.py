"""Tests for the search_notes and structure_search_notes tool logic."""

import json

from notes_mcp.models.search import SearchSettings, WeightOverrides
from notes_mcp.tools.formatters import NOT_CONFIGURED_ERROR
from notes_mcp.tools.notes_search import run_search_notes, run_structure_search
from tests.samples import NOW

NO_RECENCY = SearchSettings(include_recency_bonus=False)


class TestStructureSearch:
    def test_returns_ranked_payload(self, memory_path):
        data = json.loads(run_structure_search(memory_path, NO_RECENCY, "経費", now=NOW))
        assert data["query"] == "経費"
        assert data["queryTokens"] == ["経費"]
        assert data["expandedTokens"] == ["経費", "精算", "交通費", "出張費"]
        assert data["totalMatches"] == 1
        result = data["results"][0]
        assert result["score"] == 13
        assert result["matchedTokenCount"] == 3
        assert result["entry"]["timestamp"] == "2026-02-10 09:30"
        assert "position" not in result["entry"]
        assert "reminderDate" not in result["entry"]

    def test_empty_query_is_an_error_payload(self, memory_path):
        data = json.loads(run_structure_search(memory_path, NO_RECENCY, "  "))
        assert data == {"error": "query is empty"}

    def test_not_configured(self):
        data = json.loads(run_structure_search(None, NO_RECENCY, "todo"))
        assert data == {"error": NOT_CONFIGURED_ERROR}

    def test_missing_file_behaves_like_empty_log(self, tmp_path):
        data = json.loads(run_structure_search(tmp_path / "memory.md", NO_RECENCY, "todo"))
        assert data["totalMatches"] == 0
        assert data["results"] == []

    def test_weight_overrides_from_camel_case(self, memory_path):
        weights = WeightOverrides.model_validate({"tagExact": 10})
        data = json.loads(
            run_structure_search(memory_path, NO_RECENCY, "経費", weights=weights, now=NOW)
        )
        assert data["results"][0]["score"] == 10 + 2 + 2 + 3

    def test_custom_synonyms(self, memory_path):
        data = json.loads(
            run_structure_search(memory_path, NO_RECENCY, "sync", synonyms=["sync:roadmap"])
        )
        assert data["expandedTokens"] == ["sync", "roadmap"]
        assert data["results"][0]["entry"]["timestamp"] == "2026-02-03"

    def test_limit(self, memory_path):
        data = json.loads(run_structure_search(memory_path, NO_RECENCY, "2026", limit=2))
        assert data["totalMatches"] == 2
        # the reminder date in the 2026-01-20 body adds a content match
        assert [r["entry"]["timestamp"] for r in data["results"]] == [
            "2026-01-20",
            "2026-02-10 09:30",
        ]


class TestSearchNotes:
    def test_by_tag(self, memory_path):
        data = json.loads(run_search_notes(memory_path, tag="todo"))
        assert data == [
            {
                "timestamp": "2026-01-20",
                "tags": ["#todo"],
                "body": "Renew passport @2026-02-04",
                "reminderDate": "2026-02-04",
            }
        ]

    def test_by_date_range(self, memory_path):
        data = json.loads(run_search_notes(memory_path, date="2026-01-01 to 2026-02-05"))
        assert [e["timestamp"] for e in data] == ["2026-02-03", "2026-01-20"]

    def test_by_keyword_with_limit(self, memory_path):
        data = json.loads(run_search_notes(memory_path, query="e", limit=2))
        assert len(data) == 2

    def test_not_configured(self):
        assert json.loads(run_search_notes(None)) == {"error": NOT_CONFIGURED_ERROR}
