"""Unit tests for content-quality rules (assertions, pacing, extraction, feeders)."""

from __future__ import annotations

import pytest

from gatling_scaffold.validator import ProjectTree, Severity
from gatling_scaffold.validator.content_rules import (
    AssertionsRule,
    DynamicExtractionRule,
    FeedersRule,
    PacingRule,
)

ALL_CONTENT_RULES = [AssertionsRule, PacingRule, DynamicExtractionRule, FeedersRule]


class TestContentRules:
    @pytest.mark.unit
    @pytest.mark.parametrize("rule", ALL_CONTENT_RULES)
    def test_complete_simulation_passes(self, maven_project, rule):
        assert rule().evaluate(ProjectTree(maven_project)).severity is Severity.PASS

    @pytest.mark.unit
    @pytest.mark.parametrize("rule", ALL_CONTENT_RULES)
    def test_bare_simulation_warns(self, tmp_path, write_files, rule):
        write_files(
            tmp_path,
            {"src/test/java/p/A.java": 'public class A extends Simulation { http("x"); }'},
        )
        result = rule().evaluate(ProjectTree(tmp_path))
        assert result.severity is Severity.WARN
        assert result.rule_id == rule.id

    @pytest.mark.unit
    @pytest.mark.parametrize("rule", ALL_CONTENT_RULES)
    def test_not_applicable_without_sources(self, tmp_path, rule):
        assert rule().evaluate(ProjectTree(tmp_path)) is None

    @pytest.mark.unit
    def test_markers_may_span_files(self, tmp_path, write_files):
        write_files(
            tmp_path,
            {
                "src/test/java/p/A.java": "class A extends Simulation { setUp(x).assertions(y); }",
                "src/test/java/p/Steps.java": "class Steps { chain.pause(2); }",
            },
        )
        tree = ProjectTree(tmp_path)
        assert AssertionsRule().evaluate(tree).severity is Severity.PASS
        assert PacingRule().evaluate(tree).severity is Severity.PASS

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "snippet", ['csv("a.csv")', 'jsonFile("a.json")', "arrayFeeder(items)", 'tsv ("a.tsv")']
    )
    def test_feeder_forms(self, tmp_path, write_files, snippet):
        write_files(tmp_path, {"src/simulations/a.gatling.ts": f"const f = {snippet};"})
        assert FeedersRule().evaluate(ProjectTree(tmp_path)).severity is Severity.PASS

    @pytest.mark.unit
    def test_pace_counts_as_pacing(self, tmp_path, write_files):
        write_files(tmp_path, {"src/test/scala/A.scala": "scn.pace(5)"})
        assert PacingRule().evaluate(ProjectTree(tmp_path)).severity is Severity.PASS

    @pytest.mark.unit
    def test_identifier_containing_marker_does_not_count(self, tmp_path, write_files):
        write_files(tmp_path, {"src/test/java/A.java": "int mySaveAs(int x) { return x; }"})
        result = DynamicExtractionRule().evaluate(ProjectTree(tmp_path))
        assert result.severity is Severity.WARN
