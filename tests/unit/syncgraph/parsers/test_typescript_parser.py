# tests/unit/syncgraph/parsers/test_typescript_parser.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Unit tests for the TypeScript/TSX parser.

Tests unit extraction, guard chains on call sites, imports and re-exports.
"""

import textwrap

import pytest

from syncgraph.parsers.base import ConditionInfo
from syncgraph.parsers.typescript_parser import AVAILABLE, TSXParser, TypeScriptParser


def src(code: str) -> str:
    return textwrap.dedent(code).lstrip("\n")


@pytest.fixture
def parser() -> TypeScriptParser:
    """Create a TypeScript parser instance."""
    return TypeScriptParser()


@pytest.fixture
def tsx_parser() -> TSXParser:
    """Create a TSX parser instance."""
    return TSXParser()


@pytest.fixture
def sample_functions() -> str:
    """Sample TypeScript functions."""
    return src(
        """
        function greet(name: string): string {
            return `Hello, ${name}!`;
        }

        async function loadData(id: number): Promise<Data> {
            const data = await fetchById(id);
            return processData(data);
        }

        const multiply = (a: number, b: number): number => {
            return a * b;
        };

        const add = (a: number, b: number) => a + b;

        export const double = x => x * 2;

        export function divide(a: number, b: number): number {
            return a / b;
        }

        const settings = { retries: 3 };
        """
    )


@pytest.fixture
def sample_class() -> str:
    """Sample TypeScript class with methods."""
    return src(
        """
        /**
         * Persists records.
         */
        export class Store {
            private items: string[] = [];

            /** Saves one record. */
            async save(item: string) {
                this.validate(item);
                this.items.push(item);
            }

            validate(item: string) {
                return item.length > 0;
            }
        }
        """
    )


@pytest.mark.skipif(not AVAILABLE, reason="tree-sitter-typescript not available")
class TestTypeScriptParserAvailability:
    """Tests for parser availability."""

    def test_parser_loads(self, parser: TypeScriptParser):
        """Parser should load successfully when tree-sitter is available."""
        assert parser.is_available()
        assert parser.parser is not None
        assert parser.language is not None

    def test_get_language_name(self, parser: TypeScriptParser, tsx_parser: TSXParser):
        assert parser.get_language_name() == "typescript"
        assert tsx_parser.get_language_name() == "tsx"


@pytest.mark.skipif(not AVAILABLE, reason="tree-sitter-typescript not available")
class TestExtractSymbols:
    """Tests for unit extraction."""

    def test_function_declarations(self, parser: TypeScriptParser, sample_functions: str):
        result = parser.extract_symbols(sample_functions, "math.ts")
        by_name = {s.name: s for s in result.symbols}

        assert by_name["greet"].kind == "function"
        assert by_name["greet"].params == "name: string"
        assert by_name["greet"].body.startswith("{")
        assert "Hello" in by_name["greet"].body
        assert by_name["divide"].kind == "function"
        assert result.errors == []

    def test_arrow_functions_are_const(self, parser: TypeScriptParser, sample_functions: str):
        result = parser.extract_symbols(sample_functions, "math.ts")
        by_name = {s.name: s for s in result.symbols}

        assert by_name["multiply"].kind == "const"
        assert by_name["multiply"].params == "a: number, b: number"
        assert by_name["add"].kind == "const"
        assert by_name["add"].body == "{ return a + b }"

    def test_single_parameter_arrow(self, parser: TypeScriptParser, sample_functions: str):
        result = parser.extract_symbols(sample_functions, "math.ts")
        double = next(s for s in result.symbols if s.name == "double")

        assert double.params == "x"
        assert double.body == "{ return x * 2 }"

    def test_non_function_const_is_not_a_unit(self, parser: TypeScriptParser, sample_functions: str):
        result = parser.extract_symbols(sample_functions, "math.ts")
        assert "settings" not in {s.name for s in result.symbols}

    def test_async_flag(self, parser: TypeScriptParser, sample_functions: str):
        result = parser.extract_symbols(sample_functions, "math.ts")
        by_name = {s.name: s for s in result.symbols}

        assert by_name["loadData"].is_async is True
        assert by_name["greet"].is_async is False

    def test_line_range(self, parser: TypeScriptParser, sample_functions: str):
        result = parser.extract_symbols(sample_functions, "math.ts")
        greet = next(s for s in result.symbols if s.name == "greet")

        assert greet.start_line == 1
        assert greet.end_line == 3

    def test_document_order(self, parser: TypeScriptParser, sample_functions: str):
        result = parser.extract_symbols(sample_functions, "math.ts")
        names = [s.name for s in result.symbols]

        assert names == ["greet", "loadData", "multiply", "add", "double", "divide"]

    def test_class_and_methods(self, parser: TypeScriptParser, sample_class: str):
        result = parser.extract_symbols(sample_class, "store.ts")
        by_name = {s.name: s for s in result.symbols}

        assert by_name["Store"].kind == "class"
        assert by_name["Store"].full_text.startswith("class Store")
        assert by_name["Store.save"].kind == "method"
        assert by_name["Store.save"].parent == "Store"
        assert by_name["Store.save"].is_async is True
        assert by_name["Store.validate"].params == "item: string"

    def test_class_doc_comment_through_export(self, parser: TypeScriptParser, sample_class: str):
        result = parser.extract_symbols(sample_class, "store.ts")
        by_name = {s.name: s for s in result.symbols}

        assert by_name["Store"].jsdoc is not None
        assert by_name["Store"].jsdoc.description == "Persists records."
        assert by_name["Store.save"].jsdoc.description == "Saves one record."
        assert by_name["Store.validate"].jsdoc is None

    def test_doc_comment_on_variable_statement(self, parser: TypeScriptParser):
        code = src(
            """
            /**
             * Adds two numbers.
             * @param {number} a - first operand
             * @returns the sum
             */
            export const add = (a: number, b: number) => a + b;
            """
        )
        add = parser.extract_symbols(code, "add.ts").symbols[0]

        assert add.jsdoc.description == "Adds two numbers."
        assert add.jsdoc.params[0].name == "a"
        assert add.jsdoc.params[0].description == "first operand"
        assert add.jsdoc.returns == "the sum"

    def test_nested_functions_are_emitted(self, parser: TypeScriptParser):
        code = src(
            """
            function outer() {
                function inner() {
                    return 1;
                }
                const arrow = () => inner();
                return arrow();
            }
            """
        )
        names = [s.name for s in parser.extract_symbols(code, "nested.ts").symbols]
        assert names == ["outer", "inner", "arrow"]

    def test_duplicate_names_are_not_merged(self, parser: TypeScriptParser):
        code = src(
            """
            function run() {
                return 1;
            }
            function run() {
                return 2;
            }
            """
        )
        symbols = parser.extract_symbols(code, "dup.ts").symbols
        assert [s.name for s in symbols] == ["run", "run"]
        assert symbols[0].body != symbols[1].body

    def test_top_level_call_const(self, parser: TypeScriptParser):
        code = src(
            """
            export const processImage = task({
                id: "process-image",
                run: async (payload) => {
                    return payload;
                },
            });

            function setup() {
                const client = createClient();
                return client;
            }
            """
        )
        by_name = {s.name: s for s in parser.extract_symbols(code, "trigger.ts").symbols}

        assert by_name["processImage"].kind == "const"
        assert by_name["processImage"].params == ""
        assert by_name["processImage"].body.startswith("task(")
        assert "client" not in by_name

    def test_anonymous_default_export(self, parser: TypeScriptParser):
        code = src(
            """
            export default async function () {
                return render();
            }
            """
        )
        symbols = parser.extract_symbols(code, "page.ts").symbols

        assert len(symbols) == 1
        assert symbols[0].name == "default"
        assert symbols[0].is_default_export is True
        assert symbols[0].is_async is True

    def test_named_default_export(self, parser: TypeScriptParser):
        code = src(
            """
            export default function Dashboard() {
                return null;
            }

            export function helper() {}
            """
        )
        by_name = {s.name: s for s in parser.extract_symbols(code, "page.ts").symbols}

        assert by_name["Dashboard"].is_default_export is True
        assert by_name["helper"].is_default_export is False

    def test_reextraction_is_stable(self, parser: TypeScriptParser, sample_functions: str):
        first = parser.extract_symbols(sample_functions, "math.ts").symbols
        second = parser.extract_symbols(sample_functions, "math.ts").symbols

        assert [(s.name, s.kind, s.params, s.body) for s in first] == [
            (s.name, s.kind, s.params, s.body) for s in second
        ]


@pytest.mark.skipif(not AVAILABLE, reason="tree-sitter-typescript not available")
class TestComponents:
    """Tests for the component kind in markup-capable files."""

    def test_uppercase_with_markup_is_component(self, tsx_parser: TSXParser):
        code = src(
            """
            export function Button({ label }: Props) {
                return <button>{label}</button>;
            }

            export const Card = () => <div className="card" />;

            function helper() {
                return <span />;
            }

            function Plain() {
                return 1;
            }
            """
        )
        by_name = {s.name: s for s in tsx_parser.extract_symbols(code, "ui.tsx").symbols}

        assert by_name["Button"].kind == "component"
        assert by_name["Card"].kind == "component"
        assert by_name["helper"].kind == "function"
        assert by_name["Plain"].kind == "function"

    def test_no_components_in_plain_typescript(self, parser: TypeScriptParser):
        code = src(
            """
            export function Builder() {
                return build();
            }
            """
        )
        symbols = parser.extract_symbols(code, "builder.ts").symbols
        assert symbols[0].kind == "function"


@pytest.mark.skipif(not AVAILABLE, reason="tree-sitter-typescript not available")
class TestCallSites:
    """Tests for call-site extraction and guard chains."""

    def test_distinct_callees_in_order(self, parser: TypeScriptParser):
        code = src(
            """
            function handler(req) {
                validate(req);
                const result = transform(validate(req));
                this.store.save(result);
                return new Response(result);
            }
            """
        )
        calls = parser.extract_call_sites(code, "handler.ts", "handler")

        assert [c.name for c in calls] == ["validate", "transform", "save", "Response"]
        assert calls[2].expression == "this.store.save"
        assert all(c.conditions == [] for c in calls)

    def test_unknown_owner_has_no_calls(self, parser: TypeScriptParser):
        code = "function a() { b(); }\n"
        assert parser.extract_call_sites(code, "a.ts", "missing") == []

    def test_if_else_chain(self, parser: TypeScriptParser):
        code = src(
            """
            function handler(req) {
                if (req.type === 'image') {
                    processImage(req);
                } else if (req.type === 'video') {
                    processVideo(req);
                } else {
                    reject(req);
                }
            }
            """
        )
        calls = {c.name: c for c in parser.extract_call_sites(code, "h.ts", "handler")}

        assert calls["processImage"].conditions == [
            ConditionInfo("if (req.type === 'image')", "then", "branch:2")
        ]
        assert calls["processVideo"].conditions == [
            ConditionInfo("else if (req.type === 'video')", "else-if", "branch:2")
        ]
        assert calls["reject"].conditions == [ConditionInfo("else", "else", "branch:2")]

    def test_nested_guards_accumulate(self, parser: TypeScriptParser):
        code = src(
            """
            function run(a, b) {
                if (a) {
                    if (b) {
                        deep();
                    }
                }
            }
            """
        )
        deep = parser.extract_call_sites(code, "r.ts", "run")[0]

        assert [c.condition for c in deep.conditions] == ["if (a)", "if (b)"]
        assert [c.branch_group for c in deep.conditions] == ["branch:2", "branch:3"]

    def test_switch_cases(self, parser: TypeScriptParser):
        code = src(
            """
            function route(kind) {
                switch (kind) {
                    case 'a':
                        doA();
                        break;
                    default:
                        doDefault();
                }
            }
            """
        )
        calls = {c.name: c for c in parser.extract_call_sites(code, "s.ts", "route")}

        assert calls["doA"].conditions == [
            ConditionInfo("switch (kind) case 'a'", "case 'a'", "branch:2")
        ]
        assert calls["doDefault"].conditions == [
            ConditionInfo("switch (kind) default", "default", "branch:2")
        ]

    def test_ternary_and_logical(self, parser: TypeScriptParser):
        code = src(
            """
            function pick(ok, ready) {
                const r = ok ? onOk() : onFail();
                ready && start();
                return r;
            }
            """
        )
        calls = {c.name: c for c in parser.extract_call_sites(code, "p.ts", "pick")}

        assert calls["onOk"].conditions == [ConditionInfo("ok ?", "then", "branch:2")]
        assert calls["onFail"].conditions == [ConditionInfo("ok :", "else", "branch:2")]
        assert calls["start"].conditions == [ConditionInfo("ready", "&&", "branch:3")]

    def test_first_occurrence_keeps_its_guards(self, parser: TypeScriptParser):
        code = src(
            """
            function f(x) {
                if (x) {
                    log();
                }
                log();
            }
            """
        )
        calls = parser.extract_call_sites(code, "f.ts", "f")

        assert len(calls) == 1
        assert calls[0].conditions[0].condition == "if (x)"

    def test_method_owner(self, parser: TypeScriptParser, sample_class: str):
        calls = parser.extract_call_sites(sample_class, "store.ts", "Store.save")

        assert [c.name for c in calls] == ["validate", "push"]
        assert calls[0].expression == "this.validate"

    def test_jsx_elements_are_call_sites(self, tsx_parser: TSXParser):
        code = src(
            """
            export function Page() {
                return (
                    <Layout>
                        <Header title="x" />
                        <div>{renderBody()}</div>
                    </Layout>
                );
            }
            """
        )
        calls = tsx_parser.extract_call_sites(code, "page.tsx", "Page")
        assert [c.name for c in calls] == ["Layout", "Header", "renderBody"]


@pytest.mark.skipif(not AVAILABLE, reason="tree-sitter-typescript not available")
class TestImportsAndReExports:
    """Tests for import and re-export extraction."""

    def test_imports(self, parser: TypeScriptParser):
        code = src(
            """
            import React from 'react';
            import { a, b as c } from './utils';
            import * as ns from './ns';
            import type { T } from './types';
            import { type U, v } from './mixed';
            """
        )
        imports = parser.extract_imports(code)
        summary = [(i.name, i.original_name, i.source, i.is_default, i.is_namespace) for i in imports]

        assert summary == [
            ("React", "React", "react", True, False),
            ("a", "a", "./utils", False, False),
            ("c", "b", "./utils", False, False),
            ("ns", "*", "./ns", False, True),
            ("v", "v", "./mixed", False, False),
        ]

    def test_default_and_named_together(self, parser: TypeScriptParser):
        imports = parser.extract_imports("import api, { get } from './api';\n")

        assert [(i.name, i.is_default) for i in imports] == [("api", True), ("get", False)]

    def test_nested_imports_ignored(self, parser: TypeScriptParser):
        code = src(
            """
            async function lazy() {
                const mod = await import('./heavy');
                return mod;
            }
            """
        )
        assert parser.extract_imports(code) == []

    def test_re_exports(self, parser: TypeScriptParser):
        code = src(
            """
            export { f } from './a';
            export { g as h } from './b';
            export * from './c';
            export type { T } from './t';
            export * as ns from './d';
            export { local };
            """
        )
        re_exports = parser.extract_re_exports(code)
        summary = [(r.local_name, r.original_name, r.source) for r in re_exports]

        assert summary == [
            ("f", "f", "./a"),
            ("h", "g", "./b"),
            ("*", "*", "./c"),
        ]
