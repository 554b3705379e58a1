"""Tests for templates, matchers and render contexts (scarff.domain.template)."""

from __future__ import annotations

import pytest

from scarff.domain import (
    AbsolutePathNotAllowedError,
    Architecture,
    DirectorySpec,
    DuplicatePathError,
    EmptyTemplateError,
    FileSpec,
    Framework,
    InvalidTemplateError,
    Language,
    PathTraversalError,
    ProjectKind,
    ProjectStructure,
    RenderContext,
    TargetMatcher,
    TemplateContent,
    TemplateId,
)
from scarff.domain.template import split_words, to_kebab_case, to_pascal_case, to_snake_case


pytestmark = pytest.mark.unit


class TestTemplateId:
    def test_parse_and_display(self):
        tid = TemplateId.parse("rust-cli@1.0.0")
        assert tid == TemplateId("rust-cli", "1.0.0")
        assert str(tid) == "rust-cli@1.0.0"

    @pytest.mark.parametrize("text", ["rust-cli", "a@b@c"])
    def test_parse_rejects_bad_format(self, text):
        with pytest.raises(InvalidTemplateError):
            TemplateId.parse(text)


class TestTargetMatcher:
    def test_empty_matcher_matches_everything(self, rust_cli_target, python_backend_target):
        matcher = TargetMatcher()
        assert matcher.matches(rust_cli_target)
        assert matcher.matches(python_backend_target)
        assert matcher.specificity() == 0

    def test_all_fields_must_agree(self, python_backend_target):
        assert TargetMatcher(
            language=Language.PYTHON, framework=Framework.FASTAPI
        ).matches(python_backend_target)
        assert not TargetMatcher(
            language=Language.PYTHON, framework=Framework.DJANGO
        ).matches(python_backend_target)

    def test_framework_field_does_not_match_target_without_framework(self, rust_cli_target):
        assert not TargetMatcher(framework=Framework.AXUM).matches(rust_cli_target)

    def test_specificity_counts_fields(self):
        assert TargetMatcher(language=Language.RUST).specificity() == 1
        assert TargetMatcher(kind=ProjectKind.CLI).specificity() == 1
        assert TargetMatcher(framework=Framework.AXUM).specificity() == 1
        full = TargetMatcher(
            language=Language.RUST,
            kind=ProjectKind.WEB_BACKEND,
            framework=Framework.AXUM,
            architecture=Architecture.LAYERED,
        )
        assert full.specificity() == 4


class TestTemplate:
    def test_valid_template(self, rust_cli_template):
        rust_cli_template.validate()
        assert [f.path for f in rust_cli_template.files()] == [
            "src/main.rs",
            "Cargo.toml",
            "scripts/run.sh",
        ]
        assert [d.path for d in rust_cli_template.directories()] == ["src"]

    def test_empty_tree_rejected(self, make_template):
        template = make_template("empty")
        template.nodes = []
        with pytest.raises(EmptyTemplateError):
            template.validate()

    def test_duplicate_paths_rejected(self, make_template):
        template = make_template(
            "dupes",
            nodes=[DirectorySpec("src"), DirectorySpec("src")],
        )
        with pytest.raises(DuplicatePathError):
            template.validate()

    @pytest.mark.parametrize("path", ["/etc/passwd", "C:\\temp\\x"])
    def test_absolute_paths_rejected(self, path):
        with pytest.raises(AbsolutePathNotAllowedError):
            FileSpec(path, TemplateContent.literal(""))

    @pytest.mark.parametrize("path", ["../x", "src/../../etc", "..\\x", ".."])
    def test_parent_segments_rejected(self, path):
        with pytest.raises(PathTraversalError):
            FileSpec(path, TemplateContent.literal(""))
        with pytest.raises(PathTraversalError):
            DirectorySpec(path)

    def test_dots_inside_names_allowed(self):
        assert FileSpec("a..b/..config", TemplateContent.literal("")).path == "a..b/..config"

    def test_template_id_rejects_at_sign(self):
        with pytest.raises(InvalidTemplateError):
            TemplateId("bad@name", "1.0")


class TestCaseConversion:
    @pytest.mark.parametrize(
        "text,words",
        [
            ("my-app", ["my", "app"]),
            ("my_app", ["my", "app"]),
            ("my app", ["my", "app"]),
            ("myApp", ["my", "app"]),
            ("MyApp", ["my", "app"]),
            ("myHTTPServer", ["my", "http", "server"]),
        ],
    )
    def test_split_words(self, text, words):
        assert split_words(text) == words

    def test_conversions(self):
        assert to_snake_case("My-Cool App") == "my_cool_app"
        assert to_kebab_case("myCoolApp") == "my-cool-app"
        assert to_pascal_case("my_cool_app") == "MyCoolApp"


class TestRenderContext:
    def test_standard_variables(self):
        ctx = RenderContext.for_project("my-app")
        assert ctx.get("PROJECT_NAME") == "my-app"
        assert ctx.get("PROJECT_NAME_SNAKE") == "my_app"
        assert ctx.get("PROJECT_NAME_KEBAB") == "my-app"
        assert ctx.get("PROJECT_NAME_PASCAL") == "MyApp"
        assert ctx.get("YEAR") == "2026"

    def test_render_substitutes_known_placeholders(self):
        ctx = RenderContext.for_project("my-app")
        assert ctx.render("name = {{PROJECT_NAME_SNAKE}}") == "name = my_app"

    def test_unknown_placeholders_left_in_place(self):
        ctx = RenderContext.for_project("x")
        assert ctx.render("{{UNKNOWN}} and {{PROJECT_NAME}}") == "{{UNKNOWN}} and x"

    def test_with_variable_returns_new_context(self):
        ctx = RenderContext.for_project("x")
        extended = ctx.with_variable("AUTHOR", "Ada")
        assert extended.render("{{AUTHOR}}") == "Ada"
        assert ctx.get("AUTHOR") is None


class TestProjectStructure:
    def test_empty_structure_invalid(self, tmp_path):
        with pytest.raises(InvalidTemplateError):
            ProjectStructure(root=tmp_path).validate()

    def test_duplicate_entries_invalid(self, tmp_path):
        structure = ProjectStructure(root=tmp_path)
        structure.add_file("a.txt", "1")
        structure.add_file("a.txt", "2")
        with pytest.raises(DuplicatePathError):
            structure.validate()

    @pytest.mark.parametrize("path", ["../outside", "src/../../x"])
    def test_parent_segments_invalid(self, tmp_path, path):
        structure = ProjectStructure(root=tmp_path)
        structure.add_directory("src")
        structure.add_file(path, "x")
        with pytest.raises(PathTraversalError):
            structure.validate()

    def test_files_and_directories(self, tmp_path):
        structure = ProjectStructure(root=tmp_path)
        structure.add_directory("src")
        structure.add_file("src/main.py", "print()\n", executable=True)
        structure.validate()
        assert len(structure) == 2
        assert structure.files()[0].executable
        assert structure.files()[0].size == len("print()\n")
        assert structure.directories()[0].path == "src"
