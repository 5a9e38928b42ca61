# tests/unit/syncgraph/classifiers/test_classifiers.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Unit tests for the framework classifiers.

Units are built by hand so entry-point and connection detection can be
tested without a parser.
"""

import pytest

from syncgraph.classifiers import (
    ClassifierRegistry,
    InngestClassifier,
    NextJsClassifier,
    TriggerDevClassifier,
)
from syncgraph.classifiers.base import RuntimeConnection, connection_edge_type
from syncgraph.parsers.base import SymbolInfo
from syncgraph.parsers.typescript_parser import AVAILABLE


def unit(name: str, body: str = "{}", kind: str = "function", **kwargs) -> SymbolInfo:
    return SymbolInfo(
        name=name,
        kind=kind,
        file_path=kwargs.pop("file_path", "src/x.ts"),
        params="",
        body=body,
        full_text=body,
        start_line=1,
        end_line=5,
        **kwargs,
    )


class TestConnectionEdgeType:
    @pytest.mark.parametrize(
        "connection_type, edge_type",
        [
            ("inngest-send", "event-emit"),
            ("inngest-invoke", "async-dispatch"),
            ("task-trigger", "async-dispatch"),
            ("fetch", "http-request"),
            ("navigation", "http-request"),
            ("something-else", "async-dispatch"),
        ],
    )
    def test_mapping(self, connection_type, edge_type):
        assert connection_edge_type(connection_type) == edge_type


class TestNextJsClassifier:
    """Tests for Next.js entry points and connections."""

    @pytest.fixture
    def classifier(self) -> NextJsClassifier:
        return NextJsClassifier()

    def test_api_route_handler(self, classifier):
        match = classifier.detect_entry_point(unit("POST"), "/repo/src/app/api/analyze/route.ts")

        assert match.entry_type == "api-route"
        assert match.metadata.http_method == "POST"
        assert match.metadata.route == "/api/analyze"

    def test_nested_dynamic_route(self, classifier):
        match = classifier.detect_entry_point(unit("GET"), "app/api/users/[id]/route.tsx")
        assert match.metadata.route == "/api/users/[id]"

    def test_non_method_in_route_file(self, classifier):
        assert classifier.detect_entry_point(unit("helper"), "app/api/x/route.ts") is None

    def test_windows_separators(self, classifier):
        match = classifier.detect_entry_point(unit("GET"), "C:\\repo\\app\\api\\x\\route.ts")
        assert match.metadata.route == "/api/x"

    def test_page_default_export(self, classifier):
        page = unit("Dashboard", kind="component", is_default_export=True)
        match = classifier.detect_entry_point(page, "src/app/dashboard/page.tsx")

        assert match.entry_type == "page"
        assert match.metadata.route == "/dashboard"

    def test_root_page_and_anonymous_default(self, classifier):
        match = classifier.detect_entry_point(unit("default"), "app/page.tsx")
        assert match.metadata.route == "/"

    def test_page_helper_is_not_entry(self, classifier):
        assert classifier.detect_entry_point(unit("Card"), "app/page.tsx") is None

    def test_middleware(self, classifier):
        match = classifier.detect_entry_point(unit("middleware"), "src/middleware.ts")
        assert match.entry_type == "middleware"
        assert match.metadata.model_dump(exclude_none=True) == {}

    def test_server_action(self, classifier, tmp_path):
        actions = tmp_path / "actions.ts"
        actions.write_text("'use server';\n\nexport async function save() {}\n")
        plain = tmp_path / "plain.ts"
        plain.write_text("export async function save() {}\n")

        assert classifier.detect_entry_point(unit("save"), str(actions)).entry_type == "server-action"
        assert classifier.detect_entry_point(unit("Form", kind="class"), str(actions)) is None
        assert classifier.detect_entry_point(unit("save"), str(plain)) is None

    def test_reset_rereads_directive(self, classifier, tmp_path):
        actions = tmp_path / "actions.ts"
        actions.write_text("export async function save() {}\n")
        assert classifier.detect_entry_point(unit("save"), str(actions)) is None

        actions.write_text("'use server';\n\nexport async function save() {}\n")
        assert classifier.detect_entry_point(unit("save"), str(actions)) is None

        classifier.reset()
        assert classifier.detect_entry_point(unit("save"), str(actions)).entry_type == "server-action"

    def test_fetch_and_navigation(self, classifier):
        body = """{
            const res = await fetch('/api/analyze', { method: 'POST' });
            await fetch(`api/status`);
            await fetch('https://example.com/api/x');
            router.push('/dashboard');
            router.replace("/login");
        }"""
        connections = classifier.detect_connections(unit("submit", body), "src/form.ts")

        assert [(c.type, c.target_hint) for c in connections] == [
            ("fetch", "/api/analyze"),
            ("fetch", "/api/status"),
            ("navigation", "/dashboard"),
            ("navigation", "/login"),
        ]
        assert connections[0].source_location == (1, 5)


class TestInngestClassifier:
    """Tests for Inngest functions and dispatches."""

    @pytest.fixture
    def classifier(self) -> InngestClassifier:
        return InngestClassifier()

    def test_create_function(self, classifier):
        body = """inngest.createFunction(
            { id: "process-upload", retries: 3 },
            { event: "upload/created" },
            async ({ event, step }) => {}
        )"""
        match = classifier.detect_entry_point(unit("processUpload", body, kind="const"), "f.ts")

        assert match.entry_type == "inngest-function"
        assert match.metadata.event_trigger == "upload/created"
        assert match.metadata.task_id == "process-upload"

    def test_requires_const(self, classifier):
        body = "{ return inngest.createFunction({ id: 'x' }); }"
        assert classifier.detect_entry_point(unit("make", body), "f.ts") is None

    def test_identifier_boundaries(self, classifier):
        body = "inngest.createFunction({ uuid: 'nope', prevent: 'no' }, { cron: '* * * * *' }, fn)"
        match = classifier.detect_entry_point(unit("cron", body, kind="const"), "f.ts")

        assert match.metadata.task_id is None
        assert match.metadata.event_trigger is None

    def test_send_and_invoke(self, classifier):
        body = """{
            await inngest.send({ name: "upload/created", data: { id } });
            await step.invoke({ function: resizeImage, data: {} });
        }"""
        connections = classifier.detect_connections(unit("handler", body), "f.ts")

        assert [(c.type, c.target_hint) for c in connections] == [
            ("inngest-send", "upload/created"),
            ("inngest-invoke", "resizeImage"),
        ]

    def test_resolve_is_not_supported(self, classifier):
        connection = RuntimeConnection("inngest-send", "a/b", (1, 1))
        assert classifier.resolve_connection(connection, []) is None


class TestTriggerDevClassifier:
    """Tests for Trigger.dev tasks and triggers."""

    @pytest.fixture
    def classifier(self) -> TriggerDevClassifier:
        return TriggerDevClassifier()

    def test_task_definition(self, classifier):
        body = 'task({ id: "process-image", run: async (payload) => {} })'
        match = classifier.detect_entry_point(unit("processImage", body, kind="const"), "t.ts")

        assert match.entry_type == "trigger-task"
        assert match.metadata.task_id == "process-image"

    def test_schema_task_is_not_task(self, classifier):
        body = 'schemaTask({ id: "x" })'
        assert classifier.detect_entry_point(unit("x", body, kind="const"), "t.ts") is None

    def test_trigger_variants(self, classifier):
        body = """{
            await tasks.trigger("process-image", payload);
            await tasks.triggerAndWait<typeof resize>('resize', payload);
            await myTask.batchTrigger(`batch-job`, items);
        }"""
        connections = classifier.detect_connections(unit("run", body), "t.ts")

        assert [c.target_hint for c in connections] == ["process-image", "resize", "batch-job"]
        assert {c.type for c in connections} == {"task-trigger"}

    def test_resolve_ignores_other_types(self, classifier):
        connection = RuntimeConnection("fetch", "/api/x", (1, 1))
        assert classifier.resolve_connection(connection, []) is None

    @pytest.mark.skipif(not AVAILABLE, reason="tree-sitter-typescript not available")
    def test_resolve_scans_project_files(self, classifier, write_project):
        root = write_project(
            {
                "src/trigger/image.ts": """
                    export const processImage = task({
                        id: "process-image",
                        run: async (payload) => payload,
                    });
                """,
                "src/other.ts": "export function f() {}\n",
            }
        )
        files = [str(root / "src/other.ts"), str(root / "src/trigger/image.ts")]
        connection = RuntimeConnection("task-trigger", "process-image", (1, 1))

        resolved = classifier.resolve_connection(connection, files)

        assert resolved.target_symbol.name == "processImage"
        assert resolved.target_file_path == files[1]
        assert resolved.edge_type == "async-dispatch"
        missing = RuntimeConnection("task-trigger", "nope", (1, 1))
        assert classifier.resolve_connection(missing, files) is None

    @pytest.mark.skipif(not AVAILABLE, reason="tree-sitter-typescript not available")
    def test_reset_rescans_project_files(self, classifier, write_project):
        root = write_project({"src/t.ts": 'export const one = task({ id: "x", run: async () => 1 });\n'})
        files = [str(root / "src/t.ts")]
        connection = RuntimeConnection("task-trigger", "x", (1, 1))
        assert classifier.resolve_connection(connection, files).target_symbol.name == "one"

        (root / "src/t.ts").write_text(
            'export const renamed = task({ id: "x", run: async () => 1 });\n'
        )
        assert classifier.resolve_connection(connection, files).target_symbol.name == "one"

        classifier.reset()
        assert classifier.resolve_connection(connection, files).target_symbol.name == "renamed"


class TestClassifierRegistry:
    """Tests for ClassifierRegistry ordering."""

    def test_default_order(self):
        registry = ClassifierRegistry.default()
        assert registry.names() == ["nextjs", "inngest", "trigger-dev"]
        assert len(registry) == 3
        assert repr(registry) == "ClassifierRegistry(nextjs, inngest, trigger-dev)"

    def test_first_match_wins(self):
        class Everything(InngestClassifier):
            name = "everything"

            def detect_entry_point(self, symbol, file_path):
                as_function = unit(symbol.name, "createFunction(", "const")
                return super().detect_entry_point(as_function, file_path)

        registry = ClassifierRegistry.default()
        registry.register(Everything())

        match = registry.detect_entry_point(unit("GET"), "app/api/x/route.ts")
        assert match.entry_type == "api-route"

        match = registry.detect_entry_point(unit("plain"), "src/lib.ts")
        assert match.entry_type == "inngest-function"
        assert registry.names()[-1] == "everything"

    def test_empty_registry(self):
        registry = ClassifierRegistry()
        assert registry.detect_entry_point(unit("GET"), "app/api/x/route.ts") is None
        assert list(registry) == []

    def test_reset_reaches_every_classifier(self):
        calls = []

        class Recording(InngestClassifier):
            def reset(self):
                calls.append(self.name)

        registry = ClassifierRegistry([Recording(), Recording()])
        registry.reset()
        assert calls == ["inngest", "inngest"]
