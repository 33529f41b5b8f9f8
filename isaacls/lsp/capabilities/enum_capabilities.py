"""
Enum-related LSP capabilities.

Provides completion (and completion resolve) for Isaac API enum
namespaces and their members.
"""

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    LogMessageParams,
    MessageType,
)

from isaacls.completion.candidates import Candidate, CandidateKind, produce_candidates
from isaacls.completion.resolver import resolve_candidate
from isaacls.context.context_detector import NamespaceContextDetector, line_prefix
from isaacls.lsp.capabilities.capabilities import CompletionCapability
from isaacls.lsp.isaac_language_server import IsaacLanguageServer


ITEM_KINDS = {
    CandidateKind.NAMESPACE: CompletionItemKind.Enum,
    CandidateKind.MEMBER: CompletionItemKind.EnumMember,
}

CANDIDATE_KINDS = {kind: candidate_kind for candidate_kind, kind in ITEM_KINDS.items()}


def to_completion_item(candidate: Candidate) -> CompletionItem:
    """Convert a candidate to an LSP item; the payload travels in `data`."""
    return CompletionItem(
        label=candidate.label,
        kind=ITEM_KINDS[candidate.kind],
        detail=candidate.detail,
        data=candidate.payload,
    )


def from_completion_item(item: CompletionItem) -> Candidate:
    """Rebuild the candidate a client sent back for resolve."""
    return Candidate(
        label=item.label,
        kind=CANDIDATE_KINDS.get(item.kind, CandidateKind.MEMBER),
        payload=item.data,
    )


class EnumCompletionCapability(CompletionCapability):
    """Provides completion for enum namespaces and `Namespace.` members."""

    def __init__(self, server: IsaacLanguageServer) -> None:
        super().__init__(server)
        self.detector = NamespaceContextDetector(self.registry)

    @property
    def name(self) -> str:
        return "enum_completion"

    @property
    def description(self) -> str:
        return "Autocomplete Isaac API enum names, and their members after `Enum.`"

    async def can_handle(self, params: CompletionParams) -> bool:
        """Enum names are valid anywhere in a mod script."""
        return True

    async def complete(self, params: CompletionParams) -> CompletionList:
        """Provide namespace or member completions depending on the text before the cursor."""
        context = self.detector.detect(self._get_line_prefix(params))
        candidates = produce_candidates(self.registry, context)

        return CompletionList(
            is_incomplete=False,
            items=[to_completion_item(c) for c in candidates],
        )

    async def resolve(self, item: CompletionItem) -> CompletionItem:
        """Attach the member value (or namespace name) as detail."""
        candidate = resolve_candidate(from_completion_item(item))
        item.detail = candidate.detail

        namespace = (
            self.registry.get_namespace(candidate.payload)
            if candidate.kind is CandidateKind.NAMESPACE
            else None
        )
        if namespace is not None and namespace.description:
            item.documentation = namespace.description

        return item

    def _get_line_prefix(self, params: CompletionParams) -> str:
        """Text from the start of the cursor line up to the cursor, or ""."""
        try:
            doc = self.server.workspace.get_text_document(params.text_document.uri)
            return line_prefix(doc.lines, params.position, doc.position_codec)
        except Exception as e:
            # Unknown document: fall back to the global list
            self.server.window_log_message(
                LogMessageParams(
                    type=MessageType.Log,
                    message=f"No text for {params.text_document.uri}: {e}",
                )
            )
            return ""
