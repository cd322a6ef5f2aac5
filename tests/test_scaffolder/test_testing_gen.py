"""Tests for the generated Go test scaffolding."""

from __future__ import annotations

import pytest

from go_template_sh.scaffolder.testing_gen import TestSuiteGenerator

pytestmark = pytest.mark.unit


@pytest.fixture
def testing_gen(mock_renderer) -> TestSuiteGenerator:
    return TestSuiteGenerator(mock_renderer)


class TestTargets:
    def test_always_handlers_and_guide(self, testing_gen, basic_context):
        outputs = [t.output for t in testing_gen.targets(basic_context)]
        assert outputs == ["internal/handlers/handlers_test.go", "docs/TESTING.md"]

    def test_postgres(self, testing_gen, make_context):
        outputs = [t.output for t in testing_gen.targets(make_context(databases=["postgres"]))]
        assert outputs == [
            "internal/handlers/handlers_test.go",
            "internal/mocks/interfaces.go",
            "internal/database/database_test.go",
            "docs/TESTING.md",
        ]

    def test_mongodb_has_no_mocks(self, testing_gen, make_context):
        outputs = [t.output for t in testing_gen.targets(make_context(databases=["mongodb"]))]
        assert "internal/mocks/interfaces.go" not in outputs
        assert "internal/database/database_test.go" in outputs

    async def test_generate(self, testing_gen, tmp_path, basic_context):
        written = await testing_gen.generate(tmp_path, basic_context)
        assert written[-1] == tmp_path / "docs" / "TESTING.md"


class TestRenderedContent:
    @pytest.mark.parametrize("framework", ["stdlib", "chi", "gin", "echo", "fiber"])
    def test_handler_suite_per_framework(self, renderer, make_context, framework):
        out = renderer.render("testing/handlers_test.go.j2", make_context(framework=framework))
        assert "package handlers" in out
        assert "suite.Run(t, new(HandlerSuite))" in out

    def test_fiber_registers_routes(self, renderer, make_context):
        out = renderer.render("testing/handlers_test.go.j2", make_context(framework="fiber"))
        assert 'app.Get("/health", s.handler.HealthFiber)' in out
        assert "app.Test(req)" in out

    def test_environment_assertion_uses_resolver(self, renderer, make_context):
        env_out = renderer.render("testing/handlers_test.go.j2", make_context())
        yaml_out = renderer.render("testing/handlers_test.go.j2", make_context(config_format="yaml"))
        assert "s.Equal(cfg.Environment, " in env_out
        assert "s.Equal(cfg.GetEnvironment(), " in yaml_out
        assert "cfg.App.Environment = \"test\"" in yaml_out

    @pytest.mark.parametrize(
        ("logger", "expected"),
        [("slog", "slog.NewTextHandler(io.Discard, nil)"), ("zap", "zap.NewNop()"), ("zerolog", "zerolog.Nop()")],
    )
    def test_noop_logger(self, renderer, make_context, logger, expected):
        assert expected in renderer.render("testing/handlers_test.go.j2", make_context(logger=logger))

    def test_interfaces_have_go_generate(self, renderer, make_context):
        out = renderer.render("testing/interfaces.go.j2", make_context(databases=["postgres", "redis"]))
        assert "//go:generate go run go.uber.org/mock/mockgen@v0.4.0" in out
        assert "type Database interface" in out
        assert "type Cache interface" in out

    def test_database_tests_per_store(self, renderer, make_context):
        out = renderer.render("testing/database_test.go.j2", make_context(databases=["mysql", "mongodb"]))
        assert "func TestMySQLIntegration" in out
        assert "func TestMongoIntegration" in out
        assert "TestPostgresIntegration" not in out
        assert "internal/mocks" not in out

    def test_testing_guide_lists_env_vars(self, renderer, make_context):
        out = renderer.render("testing/TESTING.md.j2", make_context(databases=["postgres"]))
        assert "TEST_POSTGRES_URL" in out
        assert "make generate-mocks" in out
