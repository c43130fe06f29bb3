"""Unit tests for the configuration matrix (gatling_scaffold.scaffolder.matrix).

Tests cover:
- Supported combos and their order
- resolve() for every combo, case-insensitivity
- Unsupported languages and build tools, with valid alternatives listed
- Default build tool per language
"""

from __future__ import annotations

import pytest

from gatling_scaffold.errors import UnsupportedComboError
from gatling_scaffold.scaffolder import matrix


class TestSupportedCombos:
    @pytest.mark.unit
    def test_eight_combos(self):
        combos = [str(combo) for combo in matrix.supported_combos()]
        assert combos == [
            "java/maven",
            "java/gradle",
            "kotlin/maven",
            "kotlin/gradle",
            "scala/maven",
            "scala/gradle",
            "typescript/npm",
            "javascript/npm",
        ]

    @pytest.mark.unit
    def test_every_combo_resolves_to_a_registered_set(self):
        for combo in matrix.supported_combos():
            set_id = matrix.resolve(combo.language, combo.build_tool)
            assert matrix.template_set(set_id).id == set_id


class TestResolve:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "language, build_tool, expected",
        [
            ("java", "maven", "jvm-maven"),
            ("kotlin", "gradle", "jvm-gradle"),
            ("scala", "maven", "jvm-maven"),
            ("typescript", "npm", "js-npm"),
            ("javascript", "npm", "js-npm"),
        ],
    )
    def test_resolve(self, language, build_tool, expected):
        assert matrix.resolve(language, build_tool) == expected

    @pytest.mark.unit
    def test_case_insensitive(self):
        assert matrix.resolve("Java", "MAVEN") == "jvm-maven"

    @pytest.mark.unit
    def test_js_with_maven_is_rejected(self):
        with pytest.raises(UnsupportedComboError) as exc_info:
            matrix.resolve("typescript", "maven")
        assert exc_info.value.valid == ["npm"]
        assert "npm" in str(exc_info.value)

    @pytest.mark.unit
    def test_jvm_with_npm_lists_jvm_tools(self):
        with pytest.raises(UnsupportedComboError) as exc_info:
            matrix.resolve("java", "npm")
        assert exc_info.value.valid == ["maven", "gradle"]
        assert "maven, gradle" in str(exc_info.value)

    @pytest.mark.unit
    def test_unknown_language(self):
        with pytest.raises(UnsupportedComboError) as exc_info:
            matrix.resolve("cobol", "maven")
        assert "Unsupported language" in str(exc_info.value)
        assert "java" in exc_info.value.valid


class TestProfiles:
    @pytest.mark.unit
    def test_default_build_tools(self):
        assert matrix.default_build_tool("java") == "maven"
        assert matrix.default_build_tool("kotlin") == "maven"
        assert matrix.default_build_tool("typescript") == "npm"

    @pytest.mark.unit
    def test_jvm_languages_are_namespaced(self):
        for language in ("java", "kotlin", "scala"):
            lang = matrix.profile(language)
            assert lang.family == "jvm"
            assert lang.namespaced is True
            assert lang.source_root == f"src/test/{language}"

    @pytest.mark.unit
    def test_js_languages_are_flat(self):
        for language, extension in (("typescript", "ts"), ("javascript", "js")):
            lang = matrix.profile(language)
            assert lang.family == "js"
            assert lang.namespaced is False
            assert lang.file_extension == extension

    @pytest.mark.unit
    def test_tsconfig_only_for_typescript(self):
        tsconfig = [
            entry
            for entry in matrix.template_set("js-npm").templates
            if entry.path == "tsconfig.json"
        ][0]
        assert tsconfig.applies_to("typescript")
        assert not tsconfig.applies_to("javascript")
