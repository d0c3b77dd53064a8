"""Rule: no-empty-statement

Detects stray statement terminators (';' with no statement body) in Java
code and removes them.

A stray ';' inside a block, a class body or at the top level is a no-op, so
deleting it cannot change control or data flow. A ';' that is itself the
body of an if/else, loop or labeled statement is not deleted, since the next
statement would become the body; it is rewritten to an empty block instead.

Semicolons that terminate a real statement, the separators in a for header,
and the ';' that ends the constant list of an enum are left alone.
"""

from typing import Iterator, List, Tuple

from jfmt.engine.types import Diagnostic, Edit, RuleContext, RuleMeta, Span

# Parents in which a bare ';' child is an empty statement or declaration
STATEMENT_CONTAINERS = {
    'program',
    'block',
    'class_body',
    'interface_body',
    'annotation_type_body',
    'constructor_body',
    'switch_block_statement_group',
    'enum_body_declarations',
}

# Statements whose last child is their nested body
LOOP_STATEMENTS = {'while_statement', 'for_statement', 'enhanced_for_statement'}

# Tokens directly preceding the nested statement of an if or do statement
BODY_PREDECESSORS = {
    'if_statement': ('parenthesized_expression', 'else'),
    'do_statement': ('do',),
}


class NoEmptyStatementRule:
    """Flag and remove empty statements."""

    meta = RuleMeta(
        id="no-empty-statement",
        description="Remove unnecessary empty statements",
        autofix_safety="safe",
    )

    def check(self, ctx: RuleContext) -> Iterator[Diagnostic]:
        for span, _ in self._find_empty_statements(ctx):
            yield Diagnostic(
                rule_id=self.meta.id,
                severity="warning",
                span=span,
                message="Remove unnecessary empty statement",
            )

    def fix(self, ctx: RuleContext) -> Iterator[Edit]:
        for span, is_body in self._find_empty_statements(ctx):
            yield Edit(span=span, replacement="{}" if is_body else "", rule_id=self.meta.id)

    def _find_empty_statements(self, ctx: RuleContext) -> List[Tuple[Span, bool]]:
        """Return (span, is_nested_body) for every empty statement."""
        found = []
        for node in ctx.walk_nodes():
            if node.type == 'empty_statement':
                target = node
            elif node.type == ';' and self._is_bare_terminator(node):
                target = node
            else:
                continue
            found.append((ctx.node_span(target), self._is_nested_body(target)))
        return found

    def _is_bare_terminator(self, node) -> bool:
        """Check whether an anonymous ';' stands on its own as a statement."""
        parent = node.parent
        if parent is None:
            return False
        parent_type = parent.type

        if parent_type == 'empty_statement':
            # Reported through the empty_statement node itself
            return False
        if parent_type == 'enum_body_declarations':
            # The first ';' ends the enum constant list
            return not _same_node(parent.children[0], node)
        if parent_type in STATEMENT_CONTAINERS:
            return True
        if parent_type == 'labeled_statement':
            return True
        return self._is_nested_body(node)

    def _is_nested_body(self, node) -> bool:
        """Check whether the node is the nested statement of a control statement."""
        parent = node.parent
        if parent is None:
            return False
        if parent.type == 'labeled_statement':
            return True

        siblings = parent.children
        if parent.type in LOOP_STATEMENTS:
            return _same_node(siblings[-1], node)
        predecessors = BODY_PREDECESSORS.get(parent.type)
        if predecessors is None:
            return False
        for prev, cur in zip(siblings, siblings[1:]):
            if _same_node(cur, node):
                return prev.type in predecessors
        return False


def _same_node(a, b) -> bool:
    return (a.start_byte, a.end_byte, a.type) == (b.start_byte, b.end_byte, b.type)
