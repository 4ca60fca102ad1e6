"""Tests for eru.validation: fail-fast and harvest-all reduction."""

import logging
from types import SimpleNamespace

import pytest
import structlog
from hypothesis import given, strategies as st

from eru import validation
from eru.core.enums import ReductionStrategy
from eru.core.errors import UsageError, ValidationError, error_from_message, error_from_messages
from eru.core.result import Err, Ok, alternative, success
from eru.validation import (
    Rule,
    check,
    check_chained,
    check_quick,
    check_quick_chained,
    check_quick_rule,
    check_quick_rule_chained,
    check_rule,
    check_rule_chained,
    validate,
    validate_chained,
)


def counting_rule(calls: list, index: int, passes: bool, message: str | None = None) -> Rule:
    """Rule that records its evaluation in *calls*."""
    error = error_from_message(message or f"rule {index} failed")

    def predicate(value):
        calls.append(index)
        return passes

    return Rule(predicate, error)


class TestRule:
    def test_passing_rule_returns_original_value(self):
        value = {"age": 30}
        outcome = Rule(lambda v: v["age"] >= 18, ValidationError("too young"))(value)
        assert outcome.is_ok()
        assert outcome.value is value

    def test_failing_rule_returns_its_error(self):
        error = ValidationError("too young")
        assert Rule(lambda v: v >= 18, error)(11) == Err(error)

    def test_truthiness_of_predicate_result(self):
        assert Rule(lambda v: v, ValidationError("empty"))("").is_err()
        assert Rule(lambda v: v, ValidationError("empty"))("x").is_ok()

    def test_string_error_rejected(self):
        with pytest.raises(UsageError, match="error_from_message"):
            Rule(lambda v: True, "Must have a name")

    def test_non_callable_predicate_rejected(self):
        with pytest.raises(UsageError):
            Rule(True, ValidationError("x"))


class TestPersonScenario:
    """age=11, name="" fails both rules."""

    def test_harvest_all_reports_both_messages_in_order(self, minor_without_name, person_rules):
        result = check(minor_without_name, person_rules)
        assert result.is_err()
        assert result.error.messages == ("Must have a valid age", "Must have a name")

    def test_harvest_all_is_not_last_message_only(self, minor_without_name, person_rules):
        """An older usage example expected only the second message; the aggregate keeps both."""
        result = check(minor_without_name, person_rules)
        assert result.error != error_from_message("Must have a name")

    def test_fail_fast_reports_first_message_only(self, minor_without_name, person_rules):
        result = check_quick(minor_without_name, person_rules)
        assert result.error.messages == ("Must have a valid age",)

    def test_valid_person_passes_both_strategies(self, valid_adult, person_rules):
        assert check(valid_adult, person_rules).value is valid_adult
        assert check_quick(valid_adult, person_rules).value is valid_adult

    def test_fold_renders_messages(self, minor_without_name, person_rules):
        rendered = check(minor_without_name, person_rules).fold(
            lambda person: "ok", lambda error: "\n".join(error.messages)
        )
        assert rendered == "Must have a valid age\nMust have a name"


class TestHarvestAll:
    def test_no_rules_is_success(self):
        value = object()
        assert check(value, []).value is value

    def test_success_returns_identical_value(self):
        value = [1, 2, 3]
        result = check(value, [(lambda v: len(v) == 3, error_from_message("len"))])
        assert result.value is value
        assert value == [1, 2, 3]

    def test_every_rule_evaluated_even_after_failure(self):
        calls = []
        rules = [counting_rule(calls, i, passes=i % 2 == 1) for i in range(5)]
        check("value", rules)
        assert calls == [0, 1, 2, 3, 4]

    def test_all_rules_see_original_value(self):
        seen = []

        def transforming_rule(value):
            seen.append(value)
            return Ok(value * 100)

        result = check(2, [transforming_rule, transforming_rule])
        assert seen == [2, 2]
        assert result == Ok(2)

    def test_multi_message_errors_are_flattened_in_order(self):
        rules = [
            (lambda v: False, error_from_messages(["a1", "a2"])),
            (lambda v: True, error_from_message("skipped")),
            (lambda v: False, error_from_messages(["c1", "c2"])),
        ]
        assert check(0, rules).error.messages == ("a1", "a2", "c1", "c2")

    def test_single_failure_keeps_rule_error(self):
        error = error_from_message("only")
        result = check(0, [(lambda v: True, error_from_message("x")), (lambda v: False, error)])
        assert result == Err(error)

    def test_generator_of_rules(self):
        rules = ((lambda v, n=n: v > n, error_from_message(f"> {n}")) for n in range(3))
        assert check(1, rules).error.messages == ("> 1", "> 2")

    @given(outcomes=st.lists(st.booleans(), max_size=12))
    def test_failures_reported_in_rule_order(self, outcomes):
        rules = [
            (lambda v, ok=ok: ok, error_from_message(f"m{i}"))
            for i, ok in enumerate(outcomes)
        ]
        expected = tuple(f"m{i}" for i, ok in enumerate(outcomes) if not ok)
        result = check("value", rules)
        if expected:
            assert result.error.messages == expected
        else:
            assert result == Ok("value")


class TestFailFast:
    def test_stops_at_first_failure(self):
        calls = []
        rules = [
            counting_rule(calls, 0, passes=True),
            counting_rule(calls, 1, passes=False, message="first failure"),
            counting_rule(calls, 2, passes=False),
            counting_rule(calls, 3, passes=True),
        ]
        result = check_quick("value", rules)
        assert result.error.messages == ("first failure",)
        assert calls == [0, 1]

    def test_returns_failing_rules_err_instance(self):
        failure = Err(error_from_message("boom"))
        assert check_quick(1, [lambda v: failure]) is failure

    def test_success_returns_original_not_rule_value(self):
        value = 5
        result = check_quick(value, [lambda v: Ok(v + 1), lambda v: Ok("other")])
        assert result == Ok(5)

    def test_no_rules_is_success(self):
        assert check_quick("x", []) == Ok("x")

    @given(outcomes=st.lists(st.booleans(), min_size=1, max_size=12))
    def test_short_circuit_property(self, outcomes):
        calls = []
        rules = [counting_rule(calls, i, passes=ok) for i, ok in enumerate(outcomes)]
        result = check_quick("value", rules)
        if all(outcomes):
            assert result == Ok("value")
            assert calls == list(range(len(outcomes)))
        else:
            first = outcomes.index(False)
            assert result.error.messages == (f"rule {first} failed",)
            assert calls == list(range(first + 1))


class TestRuleShapes:
    def test_prebuilt_rule_functions(self):
        def adult(person):
            return success(person) if person["age"] >= 18 else alternative(error_from_message("adult"))

        def named(person):
            return success(person) if person["name"] else alternative(error_from_message("named"))

        result = check({"age": 1, "name": ""}, [adult, named])
        assert result.error.messages == ("adult", "named")

    def test_mixed_descriptors(self):
        rules = [
            Rule(lambda v: v > 10, error_from_message("rule")),
            (lambda v: v > 20, error_from_message("pair")),
            lambda v: Err(error_from_message("function")) if v < 30 else Ok(v),
        ]
        assert check(5, rules).error.messages == ("rule", "pair", "function")

    def test_check_rule_single_pair(self):
        error = error_from_message("negative")
        assert check_rule(-1, lambda v: v >= 0, error) == Err(error)
        assert check_rule(1, lambda v: v >= 0, error) == Ok(1)

    def test_check_quick_rule_single_pair(self):
        error = error_from_message("negative")
        assert check_quick_rule(-1, lambda v: v >= 0, error) == Err(error)


class TestChained:
    def test_prior_failure_propagates_unchanged(self):
        calls = []
        prior = alternative(error_from_message("earlier"))
        rules = [counting_rule(calls, 0, passes=False), counting_rule(calls, 1, passes=True)]
        assert check_chained(prior, rules) is prior
        assert check_quick_chained(prior, rules) is prior
        assert calls == []

    def test_prior_success_is_revalidated(self, minor_without_name, person_rules):
        result = check_chained(success(minor_without_name), person_rules)
        assert result.error.messages == ("Must have a valid age", "Must have a name")
        quick = check_quick_chained(success(minor_without_name), person_rules)
        assert quick.error.messages == ("Must have a valid age",)

    def test_fluent_chaining_stops_after_first_failed_stage(self, minor_without_name):
        calls = []
        result = check_chained(
            check(minor_without_name, [(lambda p: p.age >= 18, error_from_message("age"))]),
            [counting_rule(calls, 0, passes=False, message="name")],
        )
        assert result.error.messages == ("age",)
        assert calls == []

    def test_raw_value_rejected(self):
        with pytest.raises(UsageError, match="Ok or Err"):
            check_chained(5, [])

    def test_single_pair_on_prior_success(self):
        error = error_from_message("positive")
        assert check_rule_chained(success(-1), lambda v: v > 0, error) == Err(error)
        assert check_quick_rule_chained(success(-1), lambda v: v > 0, error) == Err(error)
        assert check_rule_chained(success(3), lambda v: v > 0, error) == Ok(3)

    def test_single_pair_on_prior_failure(self):
        calls = []
        prior = alternative(error_from_message("earlier"))

        def predicate(value):
            calls.append(value)
            return True

        assert check_rule_chained(prior, predicate, error_from_message("x")) is prior
        assert check_quick_rule_chained(prior, predicate, error_from_message("x")) is prior
        assert calls == []

    def test_single_pair_chained_rejects_raw_value(self):
        with pytest.raises(UsageError, match="Ok or Err"):
            check_rule_chained(5, lambda v: True, error_from_message("x"))

    def test_lone_pair_hint_names_chained_entry_point(self):
        with pytest.raises(UsageError, match="check_rule_chained"):
            check_chained(success(-1), (lambda v: v > 0, error_from_message("positive")))


class TestValidateDispatch:
    def test_default_strategy_is_harvest_all(self, minor_without_name, person_rules):
        result = validate(minor_without_name, person_rules)
        assert len(result.error.messages) == 2

    def test_default_strategy_ignores_environment(self, monkeypatch, minor_without_name, person_rules):
        monkeypatch.setenv("ERU_DEFAULT_STRATEGY", "fail_fast")
        result = validate(minor_without_name, person_rules)
        assert result.error.messages == ("Must have a valid age", "Must have a name")

    def test_bad_logging_settings_do_not_affect_validation(self, monkeypatch, valid_adult, person_rules):
        monkeypatch.setenv("ERU_LOG_LEVEL", "LOUD")
        assert validate(valid_adult, person_rules).is_ok()
        assert validate_chained(success(valid_adult), person_rules).is_ok()

    @pytest.mark.parametrize(
        "strategy, expected",
        [
            (ReductionStrategy.FAIL_FAST, 1),
            (ReductionStrategy.HARVEST_ALL, 2),
            ("fail_fast", 1),
            ("harvest_all", 2),
        ],
    )
    def test_explicit_strategy(self, strategy, expected, minor_without_name, person_rules):
        result = validate(minor_without_name, person_rules, strategy=strategy)
        assert len(result.error.messages) == expected

    def test_unknown_strategy(self, person_rules):
        with pytest.raises(UsageError, match="Unknown reduction strategy"):
            validate(1, person_rules, strategy="eventually")

    def test_validate_chained(self, minor_without_name, person_rules):
        prior = alternative(error_from_message("earlier"))
        assert validate_chained(prior, person_rules, strategy="fail_fast") is prior
        result = validate_chained(success(minor_without_name), person_rules, strategy="fail_fast")
        assert result.error.messages == ("Must have a valid age",)


class TestMisuse:
    def test_single_pair_instead_of_list(self):
        with pytest.raises(UsageError, match="check_rule"):
            check(1, (lambda v: True, error_from_message("x")))

    def test_string_error_in_pair_reports_rule_index(self):
        with pytest.raises(UsageError) as exc_info:
            check(1, [(lambda v: True, error_from_message("ok")), (lambda v: True, "plain str")])
        assert exc_info.value.context.rule_index == 1

    def test_wrong_tuple_arity(self):
        with pytest.raises(UsageError, match="3-tuple"):
            check(1, [(lambda v: True, error_from_message("x"), "extra")])

    def test_non_rule_descriptor(self):
        with pytest.raises(UsageError):
            check(1, [42])

    def test_rules_must_be_iterable(self):
        with pytest.raises(UsageError):
            check(1, Rule(lambda v: True, error_from_message("x")))
        with pytest.raises(UsageError):
            check(1, "rules")

    def test_rule_function_returning_bool(self):
        with pytest.raises(UsageError, match="must return Ok or Err"):
            check(1, [lambda v: True])

    def test_rule_function_failing_with_plain_exception(self):
        with pytest.raises(UsageError, match="expected a ValidationError"):
            check_quick(1, [lambda v: Err(ValueError("nope"))])

    def test_predicate_fault_propagates(self):
        rules = [(lambda v: v.missing_attribute > 0, error_from_message("never"))]
        with pytest.raises(AttributeError):
            check(object(), rules)
        with pytest.raises(AttributeError):
            check_quick(object(), rules)


class TestValidationLogging:
    def test_harvest_all_emits_debug_events(self, minor_without_name, person_rules):
        with structlog.testing.capture_logs() as logs:
            check(minor_without_name, person_rules)
        events = [entry["event"] for entry in logs]
        assert events == ["validation_rule_failed", "validation_rule_failed", "validation_failed"]
        assert logs[-1]["messages"] == 2
        assert all(entry["log_level"] == "debug" for entry in logs)

    def test_fail_fast_emits_short_circuit(self, minor_without_name, person_rules):
        with structlog.testing.capture_logs() as logs:
            check_quick(minor_without_name, person_rules)
        assert logs[-1]["event"] == "validation_short_circuited"
        assert logs[-1]["skipped"] == 1

    def test_success_is_silent(self, valid_adult, person_rules):
        with structlog.testing.capture_logs() as logs:
            check(valid_adult, person_rules)
        assert logs == []

    def test_unconfigured_logging_skips_debug_events(self, monkeypatch, caplog, minor_without_name, person_rules):
        caplog.set_level(logging.WARNING, logger="eru.validation")
        events = []
        recorder = SimpleNamespace(debug=lambda event, **kw: events.append(event))
        monkeypatch.setattr(validation, "logger", recorder)
        check(minor_without_name, person_rules)
        check_quick(minor_without_name, person_rules)
        assert events == []
