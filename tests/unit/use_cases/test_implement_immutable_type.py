"""Unit tests for ImplementImmutableTypeUseCase."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from immutable_codegen.domain.config import CodegenConfig
from immutable_codegen.domain.errors import SymbolResolutionError
from immutable_codegen.domain.symbols import MethodSymbol, NamedTypeSymbol, ParameterSymbol, TypeSymbol
from immutable_codegen.domain.syntax import (
    Accessor,
    AccessorKind,
    Block,
    ConstructorInitializer,
    ConstructorMember,
    IdentifierName,
    Literal,
    MethodMember,
    Modifier,
    OtherMember,
    Parameter,
    PropertyMember,
    RawStatement,
    TextSpan,
    TypeDeclaration,
    TypeDeclarationKind,
    TypeRef,
)
from immutable_codegen.infrastructure.gateways.in_memory_host import InMemoryDocument
from immutable_codegen.use_cases.implement_immutable_type import ImplementImmutableTypeUseCase

PERSON_OUTPUT = """\
using Righthand.Immutable;

public class Person
{
    public int A { get; }

    public string B { get; }

    public Person(int a, string b)
    {
        A = a;
        B = b;
    }

    public Person Clone(Param<int>? a = null, Param<string>? b = null)
    {
        return new Person(a.HasValue ? a.Value.Value : A, b.HasValue ? b.Value.Value : B);
    }

    public override bool Equals(object obj)
    {
        if (obj == null || GetType() != obj.GetType()) return false;
        var o = (Person)obj;
        return Equals(A, o.A) && Equals(B, o.B);
    }

    public override int GetHashCode()
    {
        unchecked
        {
            int hash = 23;
            hash = hash * 37 + A.GetHashCode();
            hash = hash * 37 + (B != null ? B.GetHashCode() : 0);
            return hash;
        }
    }
}
"""


@pytest.fixture
def use_case() -> ImplementImmutableTypeUseCase:
    return ImplementImmutableTypeUseCase(CodegenConfig())


@pytest.fixture
def person(
    make_declaration: Callable, make_symbol: Callable, make_document: Callable,
    int_type: TypeSymbol, string_type: TypeSymbol,
) -> InMemoryDocument:
    params = [("a", int_type), ("b", string_type)]
    return make_document(make_declaration("Person", params), symbols=[make_symbol("Person", params)])


def _run(use_case: ImplementImmutableTypeUseCase, document: InMemoryDocument, name: str) -> InMemoryDocument:
    decl = document.find_declaration(name)
    assert decl is not None
    result = use_case.transform(document, decl, use_case.find_constructor(decl))
    assert result is not None
    return result


class TestIsApplicable:
    """Test applicability checks."""

    def test_class_with_parameterized_constructor(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable, int_type: TypeSymbol
    ) -> None:
        assert use_case.is_applicable(make_declaration("P", [("a", int_type)])) is True

    def test_struct_is_supported(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable, int_type: TypeSymbol
    ) -> None:
        decl = make_declaration("P", [("a", int_type)], kind=TypeDeclarationKind.STRUCT)
        assert use_case.is_applicable(decl) is True

    def test_interface_is_not_applicable(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable, int_type: TypeSymbol
    ) -> None:
        decl = make_declaration("IP", [("a", int_type)], kind=TypeDeclarationKind.INTERFACE)
        assert use_case.is_applicable(decl) is False

    def test_non_declaration_is_not_applicable(self, use_case: ImplementImmutableTypeUseCase) -> None:
        assert use_case.is_applicable(OtherMember(kind="field", text="int x;")) is False
        assert use_case.is_applicable(None) is False

    def test_needs_exactly_one_constructor(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_constructor: Callable, int_type: TypeSymbol,
    ) -> None:
        no_ctor = TypeDeclaration(kind=TypeDeclarationKind.CLASS, name="P")
        two = make_declaration("P", [("a", int_type)], members=[make_constructor("P", [])])

        assert use_case.is_applicable(no_ctor) is False
        assert use_case.is_applicable(two) is False

    def test_parameterless_constructor_needs_base_list(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable
    ) -> None:
        assert use_case.is_applicable(make_declaration("P", [])) is False
        assert use_case.is_applicable(make_declaration("P", [], base_list=["Base"])) is True


class TestTransform:
    """Test the end-to-end rewrite."""

    def test_person_example(self, use_case: ImplementImmutableTypeUseCase, person: InMemoryDocument) -> None:
        result = _run(use_case, person, "Person")

        assert result.get_text() == PERSON_OUTPUT

    def test_input_document_is_unchanged(
        self, use_case: ImplementImmutableTypeUseCase, person: InMemoryDocument
    ) -> None:
        before = person.get_syntax_root()

        _run(use_case, person, "Person")

        assert person.get_syntax_root() is before

    def test_idempotent(self, use_case: ImplementImmutableTypeUseCase, person: InMemoryDocument) -> None:
        once = _run(use_case, person, "Person")
        twice = _run(use_case, once, "Person")

        assert twice.get_syntax_root() == once.get_syntax_root()
        assert twice.get_text() == once.get_text()

    def test_using_is_not_duplicated(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable, int_type: TypeSymbol,
    ) -> None:
        params = [("a", int_type)]
        document = make_document(
            make_declaration("P", params),
            symbols=[make_symbol("P", params)],
            usings=["System", "Righthand.Immutable"],
        )

        result = _run(use_case, document, "P")

        assert [u.name for u in result.get_syntax_root().usings] == ["System", "Righthand.Immutable"]

    def test_custom_namespace_from_config(
        self, make_declaration: Callable, make_symbol: Callable, make_document: Callable, int_type: TypeSymbol
    ) -> None:
        params = [("a", int_type)]
        document = make_document(make_declaration("P", params), symbols=[make_symbol("P", params)])
        use_case = ImplementImmutableTypeUseCase(CodegenConfig(override_namespace="Acme.Values"))

        result = _run(use_case, document, "P")

        assert result.get_syntax_root().has_using("Acme.Values")
        assert not result.get_syntax_root().has_using("Righthand.Immutable")

    def test_custom_members_follow_generated_ones_in_order(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable, int_type: TypeSymbol,
    ) -> None:
        do_work = MethodMember(
            name="DoWork", return_type=TypeRef("void"), modifiers=(Modifier.PUBLIC,),
            body=Block((RawStatement("Console.WriteLine(A);"),)),
        )
        doubled = PropertyMember(
            name="Doubled", type=TypeRef("int"), modifiers=(Modifier.PUBLIC,),
            expression_body=IdentifierName("A * 2"),
        )
        stale_clone = MethodMember(name="Clone", return_type=TypeRef("object"), body=Block())
        params = [("a", int_type)]
        decl = make_declaration("P", params, members=[do_work, stale_clone, doubled])
        document = make_document(decl, symbols=[make_symbol("P", params)])

        result = _run(use_case, document, "P")

        members = result.find_declaration("P").members
        assert [m.name for m in members] == ["A", "P", "Clone", "Equals", "GetHashCode", "DoWork", "Doubled"]
        assert members[-2] is do_work
        assert members[-1] is doubled

    def test_doc_comment_survives_on_regenerated_property(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable, int_type: TypeSymbol,
    ) -> None:
        doc = ("/// <summary>Amount in cents.</summary>",)
        existing = PropertyMember(
            name="Amount", type=TypeRef("int"), modifiers=(Modifier.PUBLIC,),
            accessors=(Accessor(AccessorKind.GET), Accessor(AccessorKind.SET)),
            leading_trivia=doc,
        )
        params = [("amount", int_type)]
        document = make_document(
            make_declaration("Money", params, members=[existing]), symbols=[make_symbol("Money", params)]
        )

        result = _run(use_case, document, "Money")

        amount = result.find_declaration("Money").members[0]
        assert isinstance(amount, PropertyMember)
        assert amount.leading_trivia == doc
        assert amount.setter is None
        assert "    /// <summary>Amount in cents.</summary>\n    public int Amount { get; }" in result.get_text()

    def test_abstract_class_gets_no_clone(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable, int_type: TypeSymbol,
    ) -> None:
        params = [("a", int_type)]
        decl = make_declaration("Shape", params, modifiers=(Modifier.PUBLIC, Modifier.ABSTRACT))
        document = make_document(decl, symbols=[make_symbol("Shape", params)])

        result = _run(use_case, document, "Shape")

        assert [m.name for m in result.find_declaration("Shape").members] == ["A", "Shape", "Equals", "GetHashCode"]

    def test_inherits_base_constructor_parameters(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable, int_type: TypeSymbol,
    ) -> None:
        base = NamedTypeSymbol(
            name="Base",
            base_type=NamedTypeSymbol.system_object(),
            constructors=(MethodSymbol((ParameterSymbol("x", int_type),)),),
        )
        decl = make_declaration("Derived", [], base_list=["Base"])
        document = make_document(decl, symbols=[make_symbol("Derived", [], base_type=base)])

        result = _run(use_case, document, "Derived")

        rebuilt = result.find_declaration("Derived")
        assert [m.name for m in rebuilt.members] == ["Derived", "Clone", "Equals"]
        text = result.get_text()
        assert "    public Derived(int x) : base(x)" in text
        assert "        return new Derived(x.HasValue ? x.Value.Value : X);" in text
        assert "        return Equals(X, o.X);" in text
        assert "GetHashCode" not in text

    def test_inherited_then_own_with_base_hash_seed(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable, int_type: TypeSymbol, string_type: TypeSymbol,
    ) -> None:
        base = NamedTypeSymbol(
            name="Base",
            base_type=NamedTypeSymbol.system_object(),
            constructors=(MethodSymbol((ParameterSymbol("x", int_type),)),),
        )
        params = [("x", int_type), ("name", string_type)]
        decl = make_declaration("Derived", params, base_list=["Base"])
        document = make_document(decl, symbols=[make_symbol("Derived", params, base_type=base)])

        once = _run(use_case, document, "Derived")
        twice = _run(use_case, once, "Derived")

        text = once.get_text()
        assert "    public string Name { get; }" in text
        assert "    public int X { get; }" not in text
        assert "    public Derived(int x, string name) : base(x)" in text
        assert "            int hash = base.GetHashCode();" in text
        assert "            hash = hash * 37 + (Name != null ? Name.GetHashCode() : 0);" in text
        assert twice.get_text() == text

    def test_ambiguous_base_keeps_written_initializer_and_defaults(
        self, use_case: ImplementImmutableTypeUseCase, make_symbol: Callable,
        make_document: Callable, int_type: TypeSymbol,
    ) -> None:
        base = NamedTypeSymbol(
            name="Base",
            constructors=(MethodSymbol(), MethodSymbol((ParameterSymbol("x", int_type),))),
        )
        ctor = ConstructorMember(
            name="Derived",
            parameters=(Parameter("x", TypeRef("int")), Parameter("y", TypeRef("int"), Literal("5"))),
            initializer=ConstructorInitializer("base", (IdentifierName("x"),)),
            modifiers=(Modifier.PUBLIC,),
        )
        decl = TypeDeclaration(
            kind=TypeDeclarationKind.CLASS, name="Derived", base_list=(TypeRef("Base"),),
            members=(ctor,), modifiers=(Modifier.PUBLIC,),
        )
        params = [("x", int_type), ("y", int_type)]
        document = make_document(decl, symbols=[make_symbol("Derived", params, base_type=base)])

        once = _run(use_case, document, "Derived")
        twice = _run(use_case, once, "Derived")

        text = once.get_text()
        assert "    public Derived(int x, int y = 5) : base(x)" in text
        assert "    public int X { get; }" in text
        assert "            int hash = 23;" in text
        assert twice.get_text() == text

    def test_struct_never_chains_to_base(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable, int_type: TypeSymbol,
    ) -> None:
        params = [("cents", int_type)]
        decl = make_declaration("Money", params, kind=TypeDeclarationKind.STRUCT)
        document = make_document(decl, symbols=[make_symbol("Money", params, is_struct=True)])

        result = _run(use_case, document, "Money")

        ctor = result.find_declaration("Money").members[1]
        assert isinstance(ctor, ConstructorMember)
        assert ctor.initializer is None
        assert "public struct Money" in result.get_text()

    def test_rewrites_nested_declaration_only(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable, int_type: TypeSymbol,
    ) -> None:
        params = [("a", int_type)]
        inner = make_declaration("Inner", params)
        outer = TypeDeclaration(kind=TypeDeclarationKind.CLASS, name="Outer", members=(inner,))
        document = make_document(outer, symbols=[make_symbol("Inner", params)])

        result = _run(use_case, document, "Inner")

        assert [m.name for m in result.find_declaration("Inner").members][:2] == ["A", "Inner"]
        assert result.find_declaration("Outer").members[0] is result.find_declaration("Inner")

    def test_not_applicable_returns_none(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable,
    ) -> None:
        decl = make_declaration("Unit", [])
        document = make_document(decl, symbols=[make_symbol("Unit", [])])

        assert use_case.transform(document, decl) is None

    def test_base_list_without_eligible_base_is_a_no_op(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable,
    ) -> None:
        """Declared base that turns out to be object: applicable syntactically, nothing to collect."""
        decl = make_declaration("Unit", [], base_list=["IMarker"])
        document = make_document(decl, symbols=[make_symbol("Unit", [])])

        assert use_case.transform(document, decl) is None

    def test_foreign_constructor_is_rejected(
        self, use_case: ImplementImmutableTypeUseCase, person: InMemoryDocument, make_constructor: Callable
    ) -> None:
        decl = person.find_declaration("Person")

        assert use_case.transform(person, decl, make_constructor("Person", [])) is None

    def test_missing_symbol_propagates(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_document: Callable, int_type: TypeSymbol,
    ) -> None:
        decl = make_declaration("Ghost", [("a", int_type)])
        document = make_document(decl)

        with pytest.raises(SymbolResolutionError, match="Ghost"):
            use_case.transform(document, decl)

    def test_uses_host_protocols_only(self, use_case: ImplementImmutableTypeUseCase, person: InMemoryDocument) -> None:
        """Works against any host implementing the document protocol."""
        decl = person.find_declaration("Person")
        host = MagicMock()
        host.get_syntax_root.return_value = person.get_syntax_root()
        host.get_semantic_model.return_value = person.get_semantic_model()

        use_case.transform(host, decl)

        host.with_syntax_root.assert_called_once()
        new_root = host.with_syntax_root.call_args.args[0]
        assert new_root.has_using("Righthand.Immutable")


class TestComputeRefactorings:
    """Test action discovery from a selection."""

    def test_offers_action_for_selected_declaration(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable, int_type: TypeSymbol,
    ) -> None:
        params = [("a", int_type)]
        decl = make_declaration("P", params, span=TextSpan(0, 100))
        document = make_document(decl, symbols=[make_symbol("P", params)])

        actions = use_case.compute_refactorings(document, TextSpan(10, 2))

        assert len(actions) == 1
        assert actions[0].title == "Implement immutable type"
        assert actions[0].declaration_name == "P"
        result = actions[0].apply()
        assert result is not None
        assert [m.name for m in result.find_declaration("P").members] == ["A", "P", "Clone", "Equals", "GetHashCode"]

    def test_no_action_outside_any_declaration(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable,
        make_symbol: Callable, make_document: Callable, int_type: TypeSymbol,
    ) -> None:
        params = [("a", int_type)]
        document = make_document(
            make_declaration("P", params, span=TextSpan(0, 50)), symbols=[make_symbol("P", params)]
        )

        assert use_case.compute_refactorings(document, TextSpan(60, 1)) == []

    def test_no_action_for_inapplicable_declaration(
        self, use_case: ImplementImmutableTypeUseCase, make_declaration: Callable, make_document: Callable
    ) -> None:
        document = make_document(make_declaration("Unit", [], span=TextSpan(0, 50)))

        assert use_case.compute_refactorings(document, TextSpan(5, 1)) == []

    def test_title_is_configurable(
        self, make_declaration: Callable, make_symbol: Callable, make_document: Callable, int_type: TypeSymbol
    ) -> None:
        params = [("a", int_type)]
        document = make_document(
            make_declaration("P", params, span=TextSpan(0, 50)), symbols=[make_symbol("P", params)]
        )
        use_case = ImplementImmutableTypeUseCase(CodegenConfig(refactoring_title="Make immutable"))

        assert use_case.compute_refactorings(document, TextSpan(1, 1))[0].title == "Make immutable"
