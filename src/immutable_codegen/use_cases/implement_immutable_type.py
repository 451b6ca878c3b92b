"""Use Case: Implement an immutable type in place."""

import logging
from typing import Optional

from immutable_codegen.domain.config import CodegenConfig
from immutable_codegen.domain.entities import RefactoringAction, TargetType
from immutable_codegen.domain.protocols import HostDocumentProtocol
from immutable_codegen.domain.services.member_classifier import MemberClassifier
from immutable_codegen.domain.services.member_synthesizer import MemberSynthesizer
from immutable_codegen.domain.services.signature_collector import SignatureCollector
from immutable_codegen.domain.symbols import NamedTypeSymbol
from immutable_codegen.domain.syntax import (
    AnyMember,
    ConstructorMember,
    TextSpan,
    TypeDeclaration,
    TypeDeclarationKind,
)

logger = logging.getLogger(__name__)

_SUPPORTED_KINDS = (TypeDeclarationKind.CLASS, TypeDeclarationKind.STRUCT)


class ImplementImmutableTypeUseCase:
    """Orchestrate signature collection, classification and synthesis for one declaration."""

    def __init__(
        self,
        config: Optional[CodegenConfig] = None,
        collector: Optional[SignatureCollector] = None,
        classifier: Optional[MemberClassifier] = None,
        synthesizer: Optional[MemberSynthesizer] = None,
    ) -> None:
        self.config = config or CodegenConfig()
        self.collector = collector or SignatureCollector()
        self.classifier = classifier or MemberClassifier()
        self.synthesizer = synthesizer or MemberSynthesizer(self.config)

    def is_applicable(self, node: object) -> bool:
        """
        Class or struct with exactly one constructor, which has parameters
        or whose declaration names a base type.
        """
        if not isinstance(node, TypeDeclaration) or node.kind not in _SUPPORTED_KINDS:
            return False
        constructor = self.find_constructor(node)
        if constructor is None:
            return False
        return bool(constructor.parameters) or bool(node.base_list)

    @staticmethod
    def find_constructor(declaration: TypeDeclaration) -> Optional[ConstructorMember]:
        """The declaration's constructor, or None unless there is exactly one."""
        constructors = declaration.constructors
        return constructors[0] if len(constructors) == 1 else None

    def compute_refactorings(
        self, document: HostDocumentProtocol, span: TextSpan
    ) -> list[RefactoringAction]:
        """Offer the action for the declaration under the selection, if it qualifies."""
        node = document.find_declaration_at(span)
        if node is None or not self.is_applicable(node):
            return []
        constructor = self.find_constructor(node)
        if constructor is None:
            return []

        def apply() -> Optional[HostDocumentProtocol]:
            return self.transform(document, node, constructor)

        return [RefactoringAction(title=self.config.refactoring_title, declaration_name=node.name, apply=apply)]

    def transform(
        self,
        document: HostDocumentProtocol,
        type_decl: TypeDeclaration,
        constructor: Optional[ConstructorMember] = None,
    ) -> Optional[HostDocumentProtocol]:
        """
        Replace ``type_decl`` with its immutable rewrite and make sure the
        override wrapper's namespace is imported.

        Returns None when the declaration does not qualify.
        """
        if not self.is_applicable(type_decl):
            return None
        if constructor is not None and self.find_constructor(type_decl) is not constructor:
            logger.debug("Constructor passed for %s is not its only constructor", type_decl.name)
            return None

        symbol = document.get_semantic_model().get_declared_symbol(type_decl)
        new_decl = self.rebuild_declaration(type_decl, symbol)
        if new_decl is None:
            return None

        root = document.get_syntax_root().replace_node(type_decl, new_decl)
        if not root.has_using(self.config.override_namespace):
            root = root.add_using(self.config.override_namespace)
        return document.with_syntax_root(root)

    def rebuild_declaration(
        self, type_decl: TypeDeclaration, symbol: NamedTypeSymbol
    ) -> Optional[TypeDeclaration]:
        """Pure core: the declaration with generated members rebuilt and custom ones kept."""
        target = TargetType.from_declaration(type_decl, symbol)
        signature = self.collector.collect(target)
        if signature is None:
            return None

        classification = self.classifier.classify(type_decl.members)
        synthesized = self.synthesizer.synthesize(signature, target, classification.generated_trivia)
        members: tuple[AnyMember, ...] = (*synthesized.ordered(), *classification.custom_members)
        logger.debug(
            "Rebuilt %s: %d parameters (%d inherited), %d custom members kept",
            target.full_name,
            len(signature.parameters),
            len(signature.inherited),
            len(classification.custom_members),
        )
        return type_decl.with_members(members)
