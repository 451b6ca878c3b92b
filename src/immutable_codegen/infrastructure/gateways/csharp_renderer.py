"""C# source renderer - Infrastructure implementation of SourceRendererProtocol."""

from typing import Optional

from immutable_codegen.domain.config import CodegenConfig
from immutable_codegen.domain.protocols import SourceRendererProtocol
from immutable_codegen.domain.syntax import (
    Accessor,
    AnyMember,
    AssignmentStatement,
    BaseReference,
    BinaryExpression,
    Block,
    CastExpression,
    CompilationUnit,
    Conditional,
    ConstructorMember,
    Expression,
    ExpressionStatement,
    IdentifierName,
    IfStatement,
    Invocation,
    Literal,
    LocalDeclaration,
    MemberAccess,
    MethodMember,
    Modifier,
    NullLiteral,
    ObjectCreation,
    OtherMember,
    Parameter,
    Parenthesized,
    PropertyMember,
    RawStatement,
    ReturnStatement,
    Statement,
    TypeDeclaration,
    UncheckedBlock,
)


class CSharpSourceRenderer(SourceRendererProtocol):
    """Emits C# text for the value tree. Formatting lives here and nowhere else."""

    def __init__(self, config: Optional[CodegenConfig] = None) -> None:
        self.config = config or CodegenConfig()
        self._indent_unit = " " * self.config.indent_size

    def render(self, root: CompilationUnit) -> str:
        """Render a whole document."""
        lines: list[str] = [f"using {u.name};" for u in root.usings]
        depth = 0
        if root.namespace:
            if lines:
                lines.append("")
            lines.extend([f"namespace {root.namespace}", "{"])
            depth = 1
        for index, decl in enumerate(root.members):
            if lines and (index > 0 or not root.namespace):
                lines.append("")
            lines.extend(self.render_member(decl, depth))
        if root.namespace:
            lines.append("}")
        return self.config.newline.join(lines) + self.config.newline

    def render_member(self, member: AnyMember, depth: int = 0) -> list[str]:
        """Render one member, preceded by its leading trivia, as indented lines."""
        pad = self._pad(depth)
        lines = [pad + t for t in member.leading_trivia]
        if isinstance(member, PropertyMember):
            lines.extend(self._render_property(member, depth))
        elif isinstance(member, ConstructorMember):
            header = f"{pad}{self._modifiers(member.modifiers)}{member.name}({self._parameters(member.parameters)})"
            if member.initializer is not None:
                arguments = ", ".join(self.render_expression(a) for a in member.initializer.arguments)
                header += f" : {member.initializer.keyword}({arguments})"
            lines.append(header)
            lines.extend(self.render_statement(member.body, depth))
        elif isinstance(member, MethodMember):
            header = (
                f"{pad}{self._modifiers(member.modifiers)}{member.return_type} "
                f"{member.name}({self._parameters(member.parameters)})"
            )
            if member.expression_body is not None:
                lines.append(f"{header} => {self.render_expression(member.expression_body)};")
            elif member.body is None:
                lines.append(f"{header};")
            else:
                lines.append(header)
                lines.extend(self.render_statement(member.body, depth))
        elif isinstance(member, OtherMember):
            lines.extend(pad + line if line else line for line in member.text.splitlines())
        elif isinstance(member, TypeDeclaration):
            lines.extend(self._render_type(member, depth))
        else:
            raise TypeError(f"Cannot render member of type {type(member).__name__}")
        return lines

    def render_statement(self, statement: Statement, depth: int = 0) -> list[str]:
        pad = self._pad(depth)
        if isinstance(statement, Block):
            inner = [line for s in statement.statements for line in self.render_statement(s, depth + 1)]
            return [f"{pad}{{", *inner, f"{pad}}}"]
        if isinstance(statement, UncheckedBlock):
            return [f"{pad}unchecked", *self.render_statement(statement.block, depth)]
        if isinstance(statement, IfStatement):
            condition = f"{pad}if ({self.render_expression(statement.condition)})"
            if isinstance(statement.statement, Block):
                return [condition, *self.render_statement(statement.statement, depth)]
            return [f"{condition} {self.render_statement(statement.statement, 0)[0]}"]
        if isinstance(statement, ReturnStatement):
            if statement.expression is None:
                return [f"{pad}return;"]
            return [f"{pad}return {self.render_expression(statement.expression)};"]
        if isinstance(statement, AssignmentStatement):
            target = self.render_expression(statement.target)
            return [f"{pad}{target} = {self.render_expression(statement.value)};"]
        if isinstance(statement, LocalDeclaration):
            return [f"{pad}{statement.type} {statement.name} = {self.render_expression(statement.value)};"]
        if isinstance(statement, ExpressionStatement):
            return [f"{pad}{self.render_expression(statement.expression)};"]
        if isinstance(statement, RawStatement):
            return [pad + line if line else line for line in statement.text.splitlines()]
        raise TypeError(f"Cannot render statement of type {type(statement).__name__}")

    def render_expression(self, expression: Expression) -> str:
        """Render an expression. Grouping comes only from explicit Parenthesized nodes."""
        if isinstance(expression, IdentifierName):
            return expression.name
        if isinstance(expression, Literal):
            return expression.text
        if isinstance(expression, NullLiteral):
            return "null"
        if isinstance(expression, BaseReference):
            return "base"
        if isinstance(expression, MemberAccess):
            return f"{self.render_expression(expression.expression)}.{expression.name}"
        if isinstance(expression, Invocation):
            return f"{self.render_expression(expression.expression)}({self._arguments(expression.arguments)})"
        if isinstance(expression, ObjectCreation):
            return f"new {expression.type}({self._arguments(expression.arguments)})"
        if isinstance(expression, CastExpression):
            return f"({expression.type}){self.render_expression(expression.expression)}"
        if isinstance(expression, BinaryExpression):
            left = self.render_expression(expression.left)
            return f"{left} {expression.operator} {self.render_expression(expression.right)}"
        if isinstance(expression, Conditional):
            return (
                f"{self.render_expression(expression.condition)} ? "
                f"{self.render_expression(expression.when_true)} : "
                f"{self.render_expression(expression.when_false)}"
            )
        if isinstance(expression, Parenthesized):
            return f"({self.render_expression(expression.expression)})"
        raise TypeError(f"Cannot render expression of type {type(expression).__name__}")

    def _render_type(self, decl: TypeDeclaration, depth: int) -> list[str]:
        pad = self._pad(depth)
        header = f"{pad}{self._modifiers(decl.modifiers)}{decl.kind.value} {decl.full_name}"
        if decl.base_list:
            header += " : " + ", ".join(str(t) for t in decl.base_list)
        lines = [header, f"{pad}{{"]
        for index, member in enumerate(decl.members):
            if index:
                lines.append("")
            lines.extend(self.render_member(member, depth + 1))
        lines.append(f"{pad}}}")
        return lines

    def _render_property(self, prop: PropertyMember, depth: int) -> list[str]:
        pad = self._pad(depth)
        header = f"{pad}{self._modifiers(prop.modifiers)}{prop.type} {prop.name}"
        if prop.expression_body is not None:
            return [f"{header} => {self.render_expression(prop.expression_body)};"]
        if not any(a.body is not None for a in prop.accessors):
            accessors = " ".join(self._accessor_inline(a) for a in prop.accessors)
            return [f"{header} {{ {accessors} }}"]
        lines = [header, f"{pad}{{"]
        inner_pad = self._pad(depth + 1)
        for accessor in prop.accessors:
            if accessor.body is not None:
                lines.append(f"{inner_pad}{self._modifiers(accessor.modifiers)}{accessor.kind.value}")
                lines.extend(self.render_statement(accessor.body, depth + 1))
            else:
                lines.append(inner_pad + self._accessor_inline(accessor))
        lines.append(f"{pad}}}")
        return lines

    def _accessor_inline(self, accessor: Accessor) -> str:
        prefix = f"{self._modifiers(accessor.modifiers)}{accessor.kind.value}"
        if accessor.expression_body is not None:
            return f"{prefix} => {self.render_expression(accessor.expression_body)};"
        return f"{prefix};"

    def _parameters(self, parameters: tuple[Parameter, ...]) -> str:
        rendered = []
        for p in parameters:
            text = f"{p.type} {p.name}"
            if p.default is not None:
                text += f" = {self.render_expression(p.default)}"
            rendered.append(text)
        return ", ".join(rendered)

    def _arguments(self, arguments: tuple[Expression, ...]) -> str:
        return ", ".join(self.render_expression(a) for a in arguments)

    @staticmethod
    def _modifiers(modifiers: tuple[Modifier, ...]) -> str:
        return "".join(f"{m.value} " for m in modifiers)

    def _pad(self, depth: int) -> str:
        return self._indent_unit * depth
