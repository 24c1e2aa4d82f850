"""
Tests for objectives/target.py — best-value tracking and compliance.
"""
import json
import logging
from decimal import Decimal

import pytest

from quant_optimizer.objectives import (
    Extremum,
    InvalidArgumentError,
    ParseError,
    Target,
)


def _feed(target, values, make_document):
    return [target.move_ahead(make_document(Sharpe_Ratio=value)) for value in values]


class TestMoveAhead:
    """Monotonic improvement in the configured direction."""

    def test_maximize_sequence(self, result_document):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        results = _feed(target, ["5", "3", "9", "9", "12"], result_document)
        assert results == [True, False, True, False, True]
        assert target.current == Decimal("12")

    def test_minimize_sequence(self, result_document):
        target = Target("Sharpe Ratio", "min")
        results = _feed(target, ["5", "3", "9", "1"], result_document)
        assert results == [True, True, False, True]
        assert target.current == Decimal("1")

    def test_first_value_is_always_an_improvement(self, result_document):
        target = Target("Sharpe Ratio", Extremum.MINIMIZE)
        assert target.current is None
        assert target.move_ahead(result_document(Sharpe_Ratio="1000000"))
        assert target.current == Decimal("1000000")

    def test_mixed_formats_compare_exactly(self):
        target = Target("Statistics.Drawdown", Extremum.MINIMIZE)
        assert target.move_ahead({"Statistics": {"Drawdown": "12.5%"}})
        assert target.move_ahead({"Statistics": {"Drawdown": "0.12"}})
        assert not target.move_ahead({"Statistics": {"Drawdown": "0.120"}})
        assert target.current == Decimal("0.12")

    def test_json_text_document(self):
        target = Target("Net Profit", Extremum.MAXIMIZE)
        text = json.dumps({"Statistics": {"Net Profit": "$1,234.56"}})
        assert target.move_ahead(text)
        assert target.current == Decimal("1234.56")

    def test_numeric_leaf(self):
        target = Target("['Statistics'].['Total Orders']", Extremum.MAXIMIZE)
        assert target.move_ahead({"Statistics": {"Total Orders": 17}})
        assert target.current == Decimal("17")

    def test_missing_field_leaves_state_unchanged(self, result_document):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        target.move_ahead(result_document(Sharpe_Ratio="2"))
        assert target.move_ahead(result_document(Sortino_Ratio="4")) is False
        assert target.current == Decimal("2")

    def test_missing_field_before_any_value(self, result_document):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        assert target.move_ahead(result_document(Sortino_Ratio="4")) is False
        assert target.current is None

    @pytest.mark.parametrize("document", [None, "", "   ", {}, "{}"])
    def test_empty_document_raises(self, document):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        with pytest.raises(InvalidArgumentError):
            target.move_ahead(document)

    @pytest.mark.parametrize("document", ["not json", "[1, 2]", "42"])
    def test_document_must_be_a_json_object(self, document):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        with pytest.raises(InvalidArgumentError):
            target.move_ahead(document)

    def test_parse_failure_propagates_without_update(self, result_document):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        target.move_ahead(result_document(Sharpe_Ratio="1"))
        with pytest.raises(ParseError):
            target.move_ahead(result_document(Sharpe_Ratio="abc"))
        assert target.current == Decimal("1")

    def test_reset_forgets_best(self, result_document):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        target.move_ahead(result_document(Sharpe_Ratio="3"))
        target.reset()
        assert target.current is None
        assert target.move_ahead(result_document(Sharpe_Ratio="1"))

    def test_improvement_logged_with_metrics(self, result_document, caplog):
        caplog.set_level(logging.DEBUG, logger="quant_optimizer.objectives.target")
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        target.move_ahead(result_document(Sharpe_Ratio="0.75"))
        records = [r for r in caplog.records if "moved ahead" in r.getMessage()]
        assert len(records) == 1
        assert records[0].metrics == {"previous": None, "current": "0.75", "extremum": "max"}


class TestConstruction:
    """Field path and target value handling."""

    def test_bare_name_resolves_under_statistics(self):
        assert Target("Sharpe Ratio", "max").target == "['Statistics'].['Sharpe Ratio']"

    def test_nested_path_kept(self):
        target = Target("RuntimeStatistics.Equity", "max")
        assert target.target == "['RuntimeStatistics'].['Equity']"

    @pytest.mark.parametrize("path", ["", "  ", None])
    def test_empty_path_rejected(self, path):
        with pytest.raises(InvalidArgumentError):
            Target(path, Extremum.MAXIMIZE)

    def test_target_value_from_text(self):
        assert Target("Sharpe Ratio", "max", "15%").target_value == Decimal("0.15")

    def test_target_value_from_int(self):
        assert Target("Sharpe Ratio", "max", 10).target_value == Decimal("10")

    def test_float_target_value_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Target("Sharpe Ratio", "max", 1.5)

    def test_unknown_extremum_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Target("Sharpe Ratio", "best")


class TestCompliance:
    """Compliance requires a target value and a best value."""

    def test_no_target_value_never_complied(self, result_document):
        fired = []
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        target.subscribe(lambda: fired.append(True))
        target.move_ahead(result_document(Sharpe_Ratio="100"))
        target.check_compliance()
        assert not target.is_complied
        assert fired == []

    def test_no_best_value_never_complied(self):
        fired = []
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE, Decimal("-100"))
        target.subscribe(lambda: fired.append(True))
        target.check_compliance()
        assert not target.is_complied
        assert fired == []

    def test_maximize_boundary(self, result_document):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE, Decimal("10"))
        target.move_ahead(result_document(Sharpe_Ratio="9.999"))
        assert not target.is_complied
        target.move_ahead(result_document(Sharpe_Ratio="10"))
        assert target.is_complied

    def test_minimize_boundary(self, result_document):
        target = Target("Sharpe Ratio", Extremum.MINIMIZE, Decimal("0.5"))
        target.move_ahead(result_document(Sharpe_Ratio="0.5001"))
        assert not target.is_complied
        target.move_ahead(result_document(Sharpe_Ratio="0.4"))
        assert target.is_complied

    def test_equality_across_scales(self, result_document):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE, "10.000")
        target.move_ahead(result_document(Sharpe_Ratio="10"))
        assert target.is_complied

    def test_notification_fires_every_check(self, result_document):
        fired = []
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE, Decimal("10"))
        target.subscribe(lambda: fired.append(target.current))
        target.move_ahead(result_document(Sharpe_Ratio="11"))
        target.check_compliance()
        target.check_compliance()
        assert fired == [Decimal("11"), Decimal("11")]

    def test_check_without_listeners_is_noop(self, result_document):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE, Decimal("1"))
        target.move_ahead(result_document(Sharpe_Ratio="2"))
        assert target.check_compliance() is None
        assert target.current == Decimal("2")

    def test_unsubscribe_stops_notifications(self, result_document):
        fired = []

        def listener():
            fired.append(True)

        target = Target("Sharpe Ratio", Extremum.MAXIMIZE, Decimal("1"))
        target.subscribe(listener)
        target.move_ahead(result_document(Sharpe_Ratio="2"))
        target.check_compliance()
        target.unsubscribe(listener)
        target.unsubscribe(listener)
        target.check_compliance()
        assert fired == [True]

    def test_non_callable_listener_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Target("Sharpe Ratio", "max").subscribe("not callable")


class TestSerialization:
    """String and dict forms of a target."""

    def test_str_with_target_value(self, result_document):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE, Decimal("1.5"))
        target.move_ahead(result_document(Sharpe_Ratio="0.8"))
        assert str(target) == "Target: ['Statistics'].['Sharpe Ratio'] TargetValue: 1.5 at: 0.8"

    def test_str_without_target_value(self):
        assert str(Target("Sharpe Ratio", "min")) == "Target: ['Statistics'].['Sharpe Ratio'] at: None"

    def test_to_dict(self):
        target = Target("Sharpe Ratio", Extremum.MINIMIZE, Decimal("0.25"))
        assert target.to_dict() == {
            "target": "['Statistics'].['Sharpe Ratio']",
            "extremum": "min",
            "target-value": "0.25",
        }

    def test_from_dict_round_trip_excludes_current(self, result_document):
        original = Target("Sharpe Ratio", Extremum.MAXIMIZE, Decimal("2"))
        original.move_ahead(result_document(Sharpe_Ratio="1"))
        restored = Target.from_dict(original.to_dict())
        assert restored.target == original.target
        assert restored.extremum is Extremum.MAXIMIZE
        assert restored.target_value == Decimal("2")
        assert restored.current is None

    def test_from_dict_accepts_aliases(self):
        target = Target.from_dict({"target": "Drawdown", "extremum": "minimize", "target-value": "10%"})
        assert target.extremum is Extremum.MINIMIZE
        assert target.target_value == Decimal("0.10")

    @pytest.mark.parametrize(
        "data",
        [
            {"extremum": "max"},
            {"target": "Sharpe Ratio", "extremum": "up"},
            {"target": "Sharpe Ratio", "extremum": "max", "target-value": "abc"},
            {"target": "Sharpe Ratio", "extremum": "max", "target-value": 1.5},
            {"target": "Sharpe Ratio", "extremum": "max", "current": "1"},
        ],
    )
    def test_from_dict_rejects_invalid(self, data):
        with pytest.raises(InvalidArgumentError):
            Target.from_dict(data)


class TestDocumentDecoding:
    """Raw JSON text and bytes are decoded without losing precision."""

    def test_json_float_keeps_full_precision(self):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        assert target.move_ahead('{"Statistics": {"Sharpe Ratio": 0.12345678901234567890123}}')
        assert target.current == Decimal("0.12345678901234567890123")

    def test_json_bytes_keep_full_precision(self):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        assert target.move_ahead(b'{"Statistics": {"Sharpe Ratio": 1.0000000000000000000001}}')
        assert target.current == Decimal("1.0000000000000000000001")

    def test_invalid_utf8_rejected(self):
        target = Target("Sharpe Ratio", Extremum.MAXIMIZE)
        with pytest.raises(InvalidArgumentError):
            target.move_ahead(b'{"Statistics": {"Sharpe Ratio": "\xff"}}')
        assert target.current is None

    def test_non_ascii_digit_index_is_absent(self):
        target = Target("trades.²", Extremum.MAXIMIZE)
        assert target.move_ahead({"trades": ["1", "2"]}) is False
        assert target.current is None
