"""Tests for the structured relevance ranker."""

from notes_mcp.memory.parser import parse_entries
from notes_mcp.models.search import SearchSettings, WeightOverrides
from notes_mcp.search.ranker import EMPTY_QUERY_ERROR, rank_entries, search
from tests.samples import NOW, RICH_DOC, SAMPLE_DOC

NO_RECENCY = SearchSettings(include_recency_bonus=False)


def _timestamps(response):
    return [r.entry.timestamp for r in response.results]


class TestScenarios:
    def test_exact_tag_query(self):
        response = search(SAMPLE_DOC, "#todo", now=NOW)
        assert response.total_matches == 1
        (result,) = response.results
        assert result.entry.timestamp == "2026-02-01"
        assert "tag:#todo" in result.reasons
        # tag-exact + all-tokens bonus + recency (11 days old)
        assert result.score == 6 + 4 + 3

    def test_month_query_fires_date_and_month(self):
        response = search(SAMPLE_DOC, "2026-02", settings=NO_RECENCY)
        (result,) = response.results
        assert result.entry.timestamp == "2026-02-01"
        assert result.reasons == ["date:2026-02", "month:2026-02", "bonus:all-tokens"]
        assert result.score >= 7
        assert result.score == 4 + 3 + 4

    def test_whitespace_query_rejected(self):
        response = search(SAMPLE_DOC, "   \t ")
        assert not response.ok
        assert response.error == EMPTY_QUERY_ERROR
        assert response.results == []
        assert response.query_tokens == []

    def test_synonym_expands_query_not_entries(self):
        text = "## 2026-01-05 #経費\nreceipt\n"
        response = search(text, "精算", settings=NO_RECENCY)
        assert response.ok
        assert response.results == []

    def test_synonym_matches_body_through_expanded_token(self):
        text = "## 2026-01-05 #misc\n精算を提出\n"
        response = search(text, "経費", synonyms=["経費:精算"], settings=NO_RECENCY)
        assert response.expanded_tokens == ["経費", "精算", "交通費", "出張費"]
        (result,) = response.results
        assert result.reasons == ["content:精算"]

    def test_ties_broken_by_later_timestamp(self):
        text = "## 2026-01-01 #x\nfoo\n## 2026-03-01 #x\nfoo\n## 2026-02-01 #x\nfoo\n"
        response = search(text, "foo", settings=NO_RECENCY)
        assert {r.score for r in response.results} == {6}
        assert _timestamps(response) == ["2026-03-01", "2026-02-01", "2026-01-01"]


def test_response_reports_tokens():
    response = search(RICH_DOC, "#会議  Roadmap", settings=NO_RECENCY)
    assert response.query == "#会議  Roadmap"
    assert response.query_tokens == ["#会議", "roadmap"]
    assert response.expanded_tokens == ["#会議", "roadmap", "mtg", "ミーティング"]


def test_rich_document_ranking():
    response = search(RICH_DOC, "経費", settings=NO_RECENCY)
    (result,) = response.results
    assert result.entry.timestamp == "2026-02-10 09:30"
    assert result.reasons == ["tag:#経費", "content:精算", "content:交通費", "bonus:multi-token"]
    assert result.score == 6 + 2 + 2 + 3
    assert result.matched_token_count == 3


def test_higher_scores_rank_first():
    response = search(RICH_DOC, "roadmap meeting", settings=NO_RECENCY)
    assert _timestamps(response)[0] == "2026-02-03"


def test_zero_scores_filtered(rich_entries):
    response = rank_entries(rich_entries, "passport", settings=NO_RECENCY)
    assert _timestamps(response) == ["2026-01-20"]
    assert all(r.score > 0 for r in response.results)


def test_limit_truncates_and_reports_truncated_count():
    text = "".join(f"## 2026-01-{day:02d}\nfoo\n" for day in range(1, 16))
    response = search(text, "foo", limit=3, settings=NO_RECENCY)
    assert _timestamps(response) == ["2026-01-15", "2026-01-14", "2026-01-13"]
    assert response.total_matches == 3


def test_limit_is_clamped():
    text = "".join(f"## 2026-01-{day:02d}\nfoo\n" for day in range(1, 16))
    assert len(search(text, "foo", limit=0, settings=NO_RECENCY).results) == 1
    assert len(search(text, "foo", limit=1000, settings=NO_RECENCY).results) == 15


def test_configured_ceiling_applies_without_limit():
    text = "".join(f"## 2026-01-{day:02d}\nfoo\n" for day in range(1, 16))
    settings = SearchSettings(max_results=10, include_recency_bonus=False)
    assert len(search(text, "foo", settings=settings).results) == 10
    assert len(search(text, "foo", limit=12, settings=settings).results) == 12


def test_weight_overrides_are_clamped():
    response = search(SAMPLE_DOC, "#todo", weights=WeightOverrides(tag_exact=50), settings=NO_RECENCY)
    assert response.results[0].score == 20 + 4


def test_call_weights_layer_over_configured_weights():
    settings = SearchSettings(
        include_recency_bonus=False,
        weights=WeightOverrides(tag_exact=8, content_match=1),
    )
    response = search(RICH_DOC, "経費", weights=WeightOverrides(content_match=5), settings=settings)
    assert response.results[0].score == 8 + 5 + 5 + 3


def test_configured_and_call_synonyms_merge():
    settings = SearchSettings(synonyms=["milk:dairy"], include_recency_bonus=False)
    response = search(SAMPLE_DOC, "milk", synonyms=["milk:lait"], settings=settings)
    assert response.expanded_tokens == ["milk", "dairy", "lait"]


def test_recency_follows_settings_unless_overridden():
    off = search(SAMPLE_DOC, "#todo", settings=NO_RECENCY, now=NOW)
    assert not any(r.startswith("bonus:recent") for r in off.results[0].reasons)
    on = search(SAMPLE_DOC, "#todo", include_recency_bonus=True, settings=NO_RECENCY, now=NOW)
    assert "bonus:recent+3" in on.results[0].reasons


def test_exact_tag_never_ranks_below_same_entry_without_it():
    text = "## 2026-01-01\ntodo list\n## 2026-01-01 #todo\ntodo list\n"
    response = search(text, "todo", settings=NO_RECENCY)
    first, second = response.results
    assert first.entry.tags == ["#todo"]
    assert first.score > second.score


def test_idempotent():
    first = search(RICH_DOC, "#todo roadmap 2026-02 経費", now=NOW)
    second = search(RICH_DOC, "#todo roadmap 2026-02 経費", now=NOW)
    assert first.model_dump_json() == second.model_dump_json()


def test_input_not_mutated(rich_entries):
    before = [e.model_copy() for e in rich_entries]
    rank_entries(rich_entries, "roadmap", now=NOW)
    assert rich_entries == before


def test_empty_document():
    response = search("", "anything")
    assert response.ok
    assert response.results == []
    assert response.total_matches == 0


def test_reasons_unique_for_every_result():
    entries = parse_entries(RICH_DOC)
    response = rank_entries(entries, "a e i o u 2026 # -", settings=NO_RECENCY)
    assert response.results
    for result in response.results:
        assert len(result.reasons) == len(set(result.reasons))


def test_huge_limit_and_weight_are_clamped():
    weights = WeightOverrides.model_validate({"tagExact": 10**400})
    response = search(SAMPLE_DOC, "#todo", limit=10**400, weights=weights, settings=NO_RECENCY)
    (result,) = response.results
    assert result.score == 20 + 4
