# syncgraph/parsers/typescript_parser.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
TypeScript/JavaScript parser using tree-sitter.

Extracts units, call sites with their enclosing guards, imports and
re-exports. TypeScriptParser uses the plain TypeScript grammar; TSXParser
uses the TSX grammar, which also covers JavaScript and JSX files and is the
only one where the "component" kind can apply.
"""

import warnings
from typing import Optional

from .base import (
    BaseParser,
    CallSite,
    ConditionInfo,
    ExtractionResult,
    ImportInfo,
    ReExportInfo,
    SymbolInfo,
)
from .jsdoc import parse_jsdoc

try:
    import tree_sitter_typescript
    from tree_sitter import Language, Parser

    AVAILABLE = True
except ImportError:
    AVAILABLE = False


FUNCTION_DECLARATION_TYPES = ("function_declaration", "generator_function_declaration")
FUNCTION_VALUE_TYPES = ("arrow_function", "function_expression", "function")
CLASS_TYPES = ("class_declaration", "abstract_class_declaration")
VARIABLE_TYPES = ("lexical_declaration", "variable_declaration")
JSX_ELEMENT_TYPES = ("jsx_element", "jsx_self_closing_element")
JSX_TAG_TYPES = ("jsx_opening_element", "jsx_self_closing_element")


class TypeScriptParser(BaseParser):
    """Parser for TypeScript source (.ts, .mts, .cts)."""

    # Whether files handled by this parser may contain inline markup (JSX)
    markup = False

    def _load_parser(self) -> None:
        """Load the tree-sitter grammar for this parser."""
        if not AVAILABLE:
            warnings.warn("tree-sitter-typescript not available")
            return

        try:
            self.language = Language(self._grammar())
            self.parser = Parser(self.language)
        except Exception as e:
            warnings.warn(f"Failed to load {self.get_language_name()} parser: {e}")

    def _grammar(self):
        return tree_sitter_typescript.language_typescript()

    # ------------------------------------------------------------------
    # Units
    # ------------------------------------------------------------------

    def extract_symbols(self, content: str, file_path: str) -> ExtractionResult:
        """Extract every unit in the file.

        Walks the whole tree and keeps descending into children after a
        unit is emitted, so nested declarations are returned too and names
        may repeat. A failure on one node is recorded and its subtree is
        skipped; the rest of the walk continues.
        """
        tree = self.parse(content)
        if tree is None:
            return ExtractionResult(symbols=[], errors=[])

        units, errors = self._collect_units(tree.root_node, file_path)
        return ExtractionResult(symbols=[symbol for symbol, _ in units], errors=errors)

    def _collect_units(self, root, file_path: str) -> tuple[list[tuple], list[str]]:
        """Return (SymbolInfo, body node) pairs in document order plus errors."""
        units: list[tuple[SymbolInfo, object]] = []
        errors: list[str] = []

        stack = [root]
        while stack:
            node = stack.pop()
            try:
                unit = self._unit_from_node(node, file_path)
            except Exception as e:
                errors.append(
                    f"Error extracting from node at line {self._get_node_line(node)}: {e}"
                )
                continue

            if unit is not None:
                units.append(unit)
            stack.extend(reversed(node.children))

        return units, errors

    def _unit_from_node(self, node, file_path: str) -> Optional[tuple]:
        """Build a unit for ``node`` if it declares one."""
        if node.type in FUNCTION_DECLARATION_TYPES:
            name_node = node.child_by_field_name("name")
            if name_node is None:
                return None
            return self._function_unit(
                name=self._get_node_text(name_node),
                func_node=node,
                anchor=node,
                text_node=node,
                file_path=file_path,
                kind="function",
                is_default=self._is_default_export(node),
            )

        if node.type in VARIABLE_TYPES:
            return self._variable_unit(node, file_path)

        if node.type in CLASS_TYPES:
            name_node = node.child_by_field_name("name")
            if name_node is None:
                return None
            text = self._get_node_text(node)
            symbol = SymbolInfo(
                name=self._get_node_text(name_node),
                kind="class",
                file_path=file_path,
                params="",
                body=text,
                full_text=text,
                start_line=self._get_node_line(node),
                end_line=self._get_node_end_line(node),
                is_default_export=self._is_default_export(node),
                jsdoc=self._extract_jsdoc(node),
            )
            return symbol, node

        if node.type == "method_definition":
            return self._method_unit(node, file_path)

        if node.type == "export_statement" and self._has_child(node, "default"):
            # export default function () {} / export default () => {}
            value = node.child_by_field_name("value")
            if value is not None and value.type in FUNCTION_VALUE_TYPES:
                return self._function_unit(
                    name="default",
                    func_node=value,
                    anchor=node,
                    text_node=node,
                    file_path=file_path,
                    kind="function",
                    is_default=True,
                )

        return None

    def _variable_unit(self, node, file_path: str) -> Optional[tuple]:
        """Handle const/let/var statements; only the first declarator counts.

        - const foo = () => {} / const foo = function () {}
        - const foo = task({...}) at the top level of the file
        """
        declarators = [c for c in node.named_children if c.type == "variable_declarator"]
        if not declarators:
            return None

        declarator = declarators[0]
        name_node = declarator.child_by_field_name("name")
        value = declarator.child_by_field_name("value")
        if name_node is None or value is None or name_node.type != "identifier":
            return None

        name = self._get_node_text(name_node)

        if value.type in FUNCTION_VALUE_TYPES:
            return self._function_unit(
                name=name,
                func_node=value,
                anchor=node,
                text_node=declarator,
                file_path=file_path,
                kind="const",
            )

        if value.type == "call_expression" and self._is_top_level(node):
            symbol = SymbolInfo(
                name=name,
                kind="const",
                file_path=file_path,
                params="",
                body=self._get_node_text(value),
                full_text=self._get_node_text(declarator),
                start_line=self._get_node_line(node),
                end_line=self._get_node_end_line(node),
                jsdoc=self._extract_jsdoc(node),
            )
            return symbol, value

        return None

    def _method_unit(self, node, file_path: str) -> Optional[tuple]:
        """Methods of named classes become units named ``Class.method``."""
        class_body = node.parent
        if class_body is None or class_body.type != "class_body":
            return None
        class_node = class_body.parent
        class_name_node = class_node.child_by_field_name("name") if class_node else None
        name_node = node.child_by_field_name("name")
        if class_name_node is None or name_node is None:
            return None

        class_name = self._get_node_text(class_name_node)
        return self._function_unit(
            name=f"{class_name}.{self._get_node_text(name_node)}",
            func_node=node,
            anchor=node,
            text_node=node,
            file_path=file_path,
            kind="method",
            parent=class_name,
        )

    def _function_unit(
        self,
        name: str,
        func_node,
        anchor,
        text_node,
        file_path: str,
        kind: str,
        is_default: bool = False,
        parent: Optional[str] = None,
    ) -> tuple:
        """Build a unit from a function-like node.

        Args:
            name: Unit name.
            func_node: The function, arrow, or method node itself.
            anchor: Node whose position gives the line range and whose
                preceding comment is the doc comment (the statement for
                variable declarations).
            text_node: Node whose text is the unit's full declaration text.
            file_path: Owning file.
            kind: Base kind before the component check.
            is_default: Whether this is the file's default export.
            parent: Owning class for methods.
        """
        body_node = func_node.child_by_field_name("body")
        if body_node is None:
            body = ""
        elif func_node.type == "arrow_function" and body_node.type != "statement_block":
            body = f"{{ return {self._get_node_text(body_node)} }}"
        else:
            body = self._get_node_text(body_node)

        if kind in ("function", "const") and self._is_component(name, body_node):
            kind = "component"

        symbol = SymbolInfo(
            name=name,
            kind=kind,
            file_path=file_path,
            params=self._get_params_text(func_node),
            body=body,
            full_text=self._get_node_text(text_node),
            start_line=self._get_node_line(anchor),
            end_line=self._get_node_end_line(anchor),
            is_async=self._has_child(func_node, "async"),
            is_default_export=is_default,
            parent=parent,
            jsdoc=self._extract_jsdoc(anchor),
        )
        return symbol, body_node

    def _get_params_text(self, func_node) -> str:
        """Parameter texts joined by ", ", without the surrounding parentheses."""
        params_node = func_node.child_by_field_name("parameters")
        if params_node is not None:
            return ", ".join(
                self._get_node_text(p)
                for p in params_node.named_children
                if p.type != "comment"
            )
        # Single parameter without parens: x => x + 1
        param_node = func_node.child_by_field_name("parameter")
        if param_node is not None:
            return self._get_node_text(param_node)
        return ""

    def _is_component(self, name: str, body_node) -> bool:
        """Uppercase name plus inline markup in the body, in markup files only."""
        if not self.markup or not name[:1].isupper() or body_node is None:
            return False
        return any(n.type in JSX_ELEMENT_TYPES for n in self._walk_tree(body_node))

    def _is_top_level(self, node) -> bool:
        parent = node.parent
        if parent is not None and parent.type == "export_statement":
            parent = parent.parent
        return parent is not None and parent.type == "program"

    def _is_default_export(self, node) -> bool:
        parent = node.parent
        return (
            parent is not None
            and parent.type == "export_statement"
            and self._has_child(parent, "default")
        )

    def _has_child(self, node, child_type: str) -> bool:
        return any(child.type == child_type for child in node.children)

    def _extract_jsdoc(self, node):
        """Parse the /** */ comment directly preceding a declaration.

        Comments attach to the outermost statement, so the anchor climbs
        out of any enclosing export statement first.
        """
        anchor = node
        while anchor.parent is not None and anchor.parent.type == "export_statement":
            anchor = anchor.parent

        prev_sibling = anchor.prev_sibling
        if prev_sibling is None or prev_sibling.type != "comment":
            return None
        return parse_jsdoc(self._get_node_text(prev_sibling))

    # ------------------------------------------------------------------
    # Call sites
    # ------------------------------------------------------------------

    def extract_call_sites(
        self, content: str, file_path: str, owner_name: str
    ) -> list[CallSite]:
        """Extract distinct call sites from the first unit named ``owner_name``.

        Each callee name is recorded once, at its first occurrence in
        document order, with the chain of guards enclosing that occurrence.
        """
        tree = self.parse(content)
        if tree is None:
            return []

        units, _ = self._collect_units(tree.root_node, file_path)
        body_node = next((body for symbol, body in units if symbol.name == owner_name), None)
        if body_node is None:
            return []

        call_sites: list[CallSite] = []
        seen: set[str] = set()

        stack: list[tuple[object, list[ConditionInfo]]] = [(body_node, [])]
        while stack:
            node, conditions = stack.pop()

            callee = self._get_callee(node)
            if callee is not None:
                name, expression = callee
                if name not in seen:
                    seen.add(name)
                    call_sites.append(
                        CallSite(name=name, expression=expression, conditions=list(conditions))
                    )

            stack.extend(reversed(self._guarded_children(node, conditions)))

        return call_sites

    def _get_callee(self, node) -> Optional[tuple[str, str]]:
        """Return (name, expression) when ``node`` invokes something.

        ``foo()`` gives "foo", ``this.bar()`` and ``obj.bar()`` give "bar",
        ``new Foo()`` gives "Foo" and ``<Foo />`` gives "Foo".
        """
        if node.type == "call_expression":
            target = node.child_by_field_name("function")
        elif node.type == "new_expression":
            target = node.child_by_field_name("constructor")
        elif node.type in JSX_TAG_TYPES:
            target = node.child_by_field_name("name")
            if target is None or not self._get_node_text(target)[:1].isupper():
                return None
        else:
            return None

        if target is None:
            return None

        if target.type == "identifier":
            return self._get_node_text(target), self._get_node_text(target)
        if target.type == "member_expression":
            prop = target.child_by_field_name("property")
            if prop is not None:
                return self._get_node_text(prop), self._get_node_text(target)
        return None

    def _guarded_children(
        self, node, conditions: list[ConditionInfo]
    ) -> list[tuple[object, list[ConditionInfo]]]:
        """Pair each child of ``node`` with the guard chain in force inside it."""
        node_type = node.type

        if node_type == "if_statement":
            head = self._if_chain_head(node)
            group = f"branch:{self._get_node_line(head)}"
            condition_text = self._get_node_text(node.child_by_field_name("condition"))
            consequence = node.child_by_field_name("consequence")
            if node.parent is not None and node.parent.type == "else_clause":
                guard = ConditionInfo(f"else if {condition_text}", "else-if", group)
            else:
                guard = ConditionInfo(f"if {condition_text}", "then", group)
            return [
                (child, conditions + [guard] if child == consequence else conditions)
                for child in node.children
            ]

        if node_type == "else_clause":
            head = self._if_chain_head(node.parent) if node.parent is not None else node
            group = f"branch:{self._get_node_line(head)}"
            guard = ConditionInfo("else", "else", group)
            # else if: the nested if_statement carries its own guard
            return [
                (child, conditions if child.type == "if_statement" else conditions + [guard])
                for child in node.children
            ]

        if node_type in ("switch_case", "switch_default"):
            switch = node.parent.parent if node.parent is not None else None
            if switch is None or switch.type != "switch_statement":
                return [(child, conditions) for child in node.children]
            group = f"branch:{self._get_node_line(switch)}"
            discriminant = self._get_node_text(switch.child_by_field_name("value"))
            value = node.child_by_field_name("value")
            if value is not None:
                label = self._get_node_text(value)
                guard = ConditionInfo(f"switch {discriminant} case {label}", f"case {label}", group)
            else:
                guard = ConditionInfo(f"switch {discriminant} default", "default", group)
            return [
                (child, conditions if child == value else conditions + [guard])
                for child in node.children
            ]

        if node_type == "ternary_expression":
            group = f"branch:{self._get_node_line(node)}"
            condition_text = self._get_node_text(node.child_by_field_name("condition"))
            consequence = node.child_by_field_name("consequence")
            alternative = node.child_by_field_name("alternative")
            result = []
            for child in node.children:
                if child == consequence:
                    result.append(
                        (child, conditions + [ConditionInfo(f"{condition_text} ?", "then", group)])
                    )
                elif child == alternative:
                    result.append(
                        (child, conditions + [ConditionInfo(f"{condition_text} :", "else", group)])
                    )
                else:
                    result.append((child, conditions))
            return result

        if node_type == "binary_expression":
            operator = node.child_by_field_name("operator")
            if operator is not None and operator.type in ("&&", "||"):
                left = node.child_by_field_name("left")
                right = node.child_by_field_name("right")
                guard = ConditionInfo(
                    self._get_node_text(left),
                    operator.type,
                    f"branch:{self._get_node_line(node)}",
                )
                return [
                    (child, conditions + [guard] if child == right else conditions)
                    for child in node.children
                ]

        return [(child, conditions) for child in node.children]

    def _if_chain_head(self, if_node):
        """Outermost if_statement of an if / else if / else chain."""
        head = if_node
        while (
            head.parent is not None
            and head.parent.type == "else_clause"
            and head.parent.parent is not None
            and head.parent.parent.type == "if_statement"
        ):
            head = head.parent.parent
        return head

    # ------------------------------------------------------------------
    # Imports and re-exports
    # ------------------------------------------------------------------

    def extract_imports(self, content: str) -> list[ImportInfo]:
        """Extract top-level imports, skipping type-only declarations.

        Handles:
        - import Foo from 'module'
        - import { Foo, Bar as B } from 'module'
        - import * as foo from 'module'
        - import type { Foo } from 'module' (skipped)
        - import { type Foo, Bar } from 'module' (Foo skipped)
        """
        tree = self.parse(content)
        if tree is None:
            return []

        imports: list[ImportInfo] = []
        for node in tree.root_node.children:
            if node.type != "import_statement":
                continue
            if self._has_child(node, "type") or self._has_child(node, "typeof"):
                continue

            source_node = node.child_by_field_name("source")
            if source_node is None:
                continue
            module = self._string_value(source_node)

            for clause in node.children:
                if clause.type == "import_clause":
                    imports.extend(self._extract_from_import_clause(clause, module))

        return imports

    def _extract_from_import_clause(self, clause, module: str) -> list[ImportInfo]:
        imports: list[ImportInfo] = []

        for child in clause.children:
            if child.type == "identifier":
                name = self._get_node_text(child)
                imports.append(
                    ImportInfo(name=name, original_name=name, source=module, is_default=True)
                )

            elif child.type == "named_imports":
                for specifier in child.named_children:
                    if specifier.type != "import_specifier":
                        continue
                    if self._has_child(specifier, "type") or self._has_child(specifier, "typeof"):
                        continue
                    name_node = specifier.child_by_field_name("name")
                    alias_node = specifier.child_by_field_name("alias")
                    if name_node is None:
                        continue
                    original_name = self._string_value(name_node)
                    local_name = (
                        self._get_node_text(alias_node) if alias_node else original_name
                    )
                    imports.append(
                        ImportInfo(
                            name=local_name,
                            original_name=original_name,
                            source=module,
                            is_default=False,
                        )
                    )

            elif child.type == "namespace_import":
                for identifier in child.named_children:
                    if identifier.type == "identifier":
                        imports.append(
                            ImportInfo(
                                name=self._get_node_text(identifier),
                                original_name="*",
                                source=module,
                                is_default=False,
                                is_namespace=True,
                            )
                        )
                        break

        return imports

    def extract_re_exports(self, content: str) -> list[ReExportInfo]:
        """Extract top-level re-exports.

        Handles:
        - export { Foo } from './foo'
        - export { Foo as Bar } from './foo'
        - export * from './foo' (recorded with local_name "*")
        - export type { Foo } from './foo' (skipped)
        """
        tree = self.parse(content)
        if tree is None:
            return []

        re_exports: list[ReExportInfo] = []
        for node in tree.root_node.children:
            if node.type != "export_statement":
                continue
            source_node = node.child_by_field_name("source")
            if source_node is None or self._has_child(node, "type"):
                continue
            module = self._string_value(source_node)

            clause = next((c for c in node.children if c.type == "export_clause"), None)
            if clause is not None:
                for specifier in clause.named_children:
                    if specifier.type != "export_specifier":
                        continue
                    if self._has_child(specifier, "type"):
                        continue
                    name_node = specifier.child_by_field_name("name")
                    alias_node = specifier.child_by_field_name("alias")
                    if name_node is None:
                        continue
                    original_name = self._string_value(name_node)
                    local_name = (
                        self._string_value(alias_node) if alias_node else original_name
                    )
                    re_exports.append(
                        ReExportInfo(
                            local_name=local_name,
                            original_name=original_name,
                            source=module,
                        )
                    )
            elif self._has_child(node, "*") and not self._has_child(node, "namespace_export"):
                re_exports.append(ReExportInfo(local_name="*", original_name="*", source=module))

        return re_exports

    def _string_value(self, node) -> str:
        """Text of an identifier, or the contents of a string literal."""
        text = self._get_node_text(node)
        if node.type == "string" and len(text) >= 2 and text[0] in "'\"" and text[-1] == text[0]:
            return text[1:-1]
        return text


class TSXParser(TypeScriptParser):
    """Parser for markup-capable files (.tsx, .jsx) and plain JavaScript."""

    markup = True

    def _grammar(self):
        return tree_sitter_typescript.language_tsx()
