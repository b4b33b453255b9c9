"""
Unit tests for the task classification rules.
"""
import json
import logging

import pytest

from smarttask.classify.rules import (
    CATEGORY_KEYWORDS,
    DEFAULT_ACTIONS,
    PRIORITY_KEYWORDS,
    SUGGESTED_ACTIONS,
    Category,
    ClassificationResult,
    ExtractedEntities,
    Priority,
    classify,
    detect_category,
    detect_priority,
    extract_dates,
    extract_people,
    get_keyword_tables,
    normalize_text,
    suggested_actions_for,
)


class TestScenarios:
    """End-to-end classification of typical task titles."""

    def test_urgent_meeting_is_scheduling_high(self):
        result = classify("Urgent team meeting today about budget", "")

        assert result.category == Category.SCHEDULING
        assert result.priority == Priority.HIGH
        assert result.suggested_actions == (
            "Block calendar", "Send invite", "Prepare agenda", "Set reminder",
        )

    def test_invoice_payment_is_finance_medium(self):
        result = classify("Process invoice payment this week", "")

        assert result.category == Category.FINANCE
        assert result.priority == Priority.MEDIUM
        assert result.extracted_entities.dates == ("this week",)

    def test_simple_bug_is_technical_low(self):
        result = classify("Fix login bug", "")

        assert result.category == Category.TECHNICAL
        assert result.priority == Priority.LOW

    def test_entity_extraction(self):
        result = classify("Fix bug with John by tomorrow", "")

        assert result.category == Category.TECHNICAL
        assert "john" in result.extracted_entities.people
        assert "tomorrow" in result.extracted_entities.dates

    def test_empty_input_uses_defaults(self):
        result = classify("", "")

        assert result.category == Category.GENERAL
        assert result.priority == Priority.LOW
        assert result.extracted_entities.people == ()
        assert result.extracted_entities.dates == ()
        assert result.suggested_actions == ("Review task",)

    def test_deadline_beats_safety_keywords(self):
        """'deadline' is a scheduling keyword and scheduling is checked first."""
        result = classify("Safety inspection needed, assign to Maria, 3/15 deadline")

        assert result.category == Category.SCHEDULING
        assert result.priority == Priority.LOW
        assert result.extracted_entities.people == ("maria",)
        assert result.extracted_entities.dates == ("3/15",)


class TestCategoryDetection:
    """Tests for first-match-wins category detection."""

    def test_table_order(self):
        assert list(CATEGORY_KEYWORDS) == [
            Category.SCHEDULING,
            Category.FINANCE,
            Category.TECHNICAL,
            Category.SAFETY,
        ]

    def test_earlier_category_wins_regardless_of_position(self):
        assert classify("Check safety compliance invoice").category == Category.FINANCE
        assert classify("Hazard near the server, fix asap").category == Category.TECHNICAL

    def test_keyword_order_within_category(self):
        category, keyword = detect_category("pay the bill and the invoice")

        assert category == Category.FINANCE
        assert keyword == "invoice"

    def test_substring_match(self):
        """Keywords match inside longer words."""
        category, keyword = detect_category("recall the shipment")

        assert category == Category.SCHEDULING
        assert keyword == "call"

    def test_case_insensitive(self):
        assert classify("PPE RESTOCK").category == Category.SAFETY

    def test_no_match(self):
        assert detect_category("water the plants") == (Category.GENERAL, None)

    def test_description_is_used(self):
        assert classify("Weekly item", "Prepare the budget").category == Category.FINANCE


class TestPriorityDetection:
    """Tests for priority detection."""

    def test_high_checked_before_medium(self):
        priority, keyword = detect_priority("important but critical")

        assert priority == Priority.HIGH
        assert keyword == "critical"

    def test_medium(self):
        assert detect_priority("needs doing soon") == (Priority.MEDIUM, "soon")

    def test_default_low(self):
        assert detect_priority("whenever") == (Priority.LOW, None)

    def test_priority_independent_of_category(self):
        assert classify("Fix bug asap").priority == Priority.HIGH
        assert classify("Schedule meeting asap").priority == Priority.HIGH
        assert classify("Pay invoice asap").priority == Priority.HIGH

    def test_category_independent_of_priority(self):
        assert classify("Fix bug asap").category == Category.TECHNICAL
        assert classify("Fix bug soon").category == Category.TECHNICAL
        assert classify("Fix bug").category == Category.TECHNICAL

    def test_priority_table_order(self):
        assert list(PRIORITY_KEYWORDS) == [Priority.HIGH, Priority.MEDIUM]


class TestPeopleExtraction:
    """Tests for person name extraction."""

    def test_only_first_word_is_kept(self):
        assert extract_people("meeting with sarah connor ") == ["sarah"]

    def test_multiple_matches_in_order(self):
        assert extract_people("call with bob, then review by alice ") == ["bob", "alice"]

    def test_duplicates_preserved(self):
        assert extract_people("sync with ann, lunch with ann ") == ["ann", "ann"]

    def test_assign_to(self):
        assert extract_people("assign to maria") == ["maria"]

    def test_no_letters_after_trigger(self):
        assert extract_people("meet with 5 people") == []

    def test_whitespace_only_capture_is_dropped(self):
        assert extract_people("meet with  5 people") == []

    def test_no_trigger(self):
        assert extract_people("fix login bug") == []

    def test_tab_and_newline_after_trigger(self):
        assert extract_people("sync with\tjohn") == ["john"]
        assert extract_people("notes for\nbob") == ["bob"]
        assert classify("Sync with\tJohn").extracted_entities.people == ("john",)


class TestDateExtraction:
    """Tests for date reference extraction."""

    def test_all_forms_in_order(self):
        assert extract_dates("deploy 12-31 or 1/5, tomorrow") == ["12-31", "1/5", "tomorrow"]

    def test_duplicates_preserved(self):
        assert extract_dates("reports due 3/15 and 3/15") == ["3/15", "3/15"]

    def test_matched_text_is_returned_as_found(self):
        assert extract_dates("Due TODAY") == ["TODAY"]

    def test_classify_lowercases_before_extraction(self):
        assert classify("Due TODAY").extracted_entities.dates == ("today",)

    def test_no_dates(self):
        assert extract_dates("fix login bug") == []

    def test_only_ascii_digits_are_dates(self):
        assert extract_dates("due \u0663/\u0661\u0665") == []

    def test_non_ascii_letter_is_a_word_boundary(self):
        assert classify("caf\u00e93/15").extracted_entities.dates == ("3/15",)


class TestSuggestedActions:
    """Tests for the action table."""

    def test_every_category_has_four_actions(self):
        for category in CATEGORY_KEYWORDS:
            assert len(SUGGESTED_ACTIONS[category]) == 4
            assert suggested_actions_for(category) == SUGGESTED_ACTIONS[category]

    def test_general_gets_default(self):
        assert suggested_actions_for(Category.GENERAL) == DEFAULT_ACTIONS == ("Review task",)

    def test_result_actions_match_category(self):
        for text in ["Book appointment", "Submit expense", "Install printer", "Hazard report", "Water plants"]:
            result = classify(text)
            assert result.suggested_actions == suggested_actions_for(result.category)


class TestResult:
    """Tests for ClassificationResult and the engine's contract."""

    def test_deterministic(self):
        assert classify("Fix bug with John by tomorrow") == classify("Fix bug with John by tomorrow")

    def test_none_inputs(self):
        assert classify(None).category == Category.GENERAL
        assert classify("Fix bug", None).category == Category.TECHNICAL

    def test_normalize_text(self):
        assert normalize_text("Fix Bug", "ASAP") == "fix bug asap"
        assert normalize_text("Fix Bug") == "fix bug "

    def test_result_is_frozen(self):
        result = classify("Fix bug")
        with pytest.raises(AttributeError):
            result.category = Category.FINANCE

    def test_to_dict(self):
        data = classify("Fix bug with John by tomorrow").to_dict()

        assert data == {
            "category": "technical",
            "priority": "low",
            "extracted_entities": {"people": ["john"], "dates": ["tomorrow"]},
            "suggested_actions": [
                "Diagnose issue", "Check resources", "Assign technician", "Document fix",
            ],
        }
        assert json.loads(json.dumps(data)) == data

    def test_enum_values_compare_as_strings(self):
        result = classify("Fix bug")
        assert result.category == "technical"
        assert result.priority == "low"

    def test_defaults(self):
        result = ClassificationResult(category=Category.GENERAL, priority=Priority.LOW)
        assert result.extracted_entities == ExtractedEntities()
        assert result.suggested_actions == ()

    def test_debug_trace(self, caplog):
        caplog.set_level(logging.DEBUG, logger="smarttask.classify.rules")

        classify("Urgent meeting")

        assert "keyword='meeting'" in caplog.text
        assert "keyword='urgent'" in caplog.text


class TestKeywordTables:
    """Tests for the fixed keyword tables."""

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            CATEGORY_KEYWORDS[Category.GENERAL] = ("anything",)
        with pytest.raises(TypeError):
            PRIORITY_KEYWORDS[Priority.LOW] = ("anything",)

    def test_get_keyword_tables_returns_copies(self):
        tables = get_keyword_tables()
        tables["categories"]["scheduling"].append("standup")

        assert "standup" not in CATEGORY_KEYWORDS[Category.SCHEDULING]
        assert classify("Daily standup").category == Category.GENERAL

    def test_get_keyword_tables_contents(self):
        tables = get_keyword_tables()

        assert list(tables["categories"]) == ["scheduling", "finance", "technical", "safety"]
        assert tables["priorities"]["medium"] == ["soon", "this week", "important"]
        assert tables["actions"]["general"] == ["Review task"]
