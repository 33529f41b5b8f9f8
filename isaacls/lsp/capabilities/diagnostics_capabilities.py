"""
Diagnostics-related LSP capabilities.

Reports all-uppercase words, limited by the maxNumberOfProblems setting.
"""

import re
from collections.abc import Sequence

from lsprotocol.types import (
    Diagnostic,
    DiagnosticRelatedInformation,
    DiagnosticSeverity,
    Location,
    Position,
    Range,
)
from pygls.workspace.position_codec import PositionCodec

from isaacls.lsp.capabilities.capabilities import DiagnosticsCapability

UPPERCASE_WORD_PATTERN = re.compile(r"\b[A-Z]{2,}\b", re.ASCII)

DIAGNOSTIC_SOURCE = "isaacls"


class UppercaseDiagnosticsCapability(DiagnosticsCapability):
    """Warns about words written entirely in uppercase."""

    @property
    def name(self) -> str:
        return "uppercase_diagnostics"

    @property
    def description(self) -> str:
        return "Warn about all-uppercase words"

    async def can_handle(self, uri: str) -> bool:
        return True

    async def diagnose(self, uri: str) -> list[Diagnostic]:
        settings = await self.session.get_document_settings(uri)
        doc = self.server.workspace.get_text_document(uri)

        with_related = self.session.has_diagnostic_related_information_capability
        diagnostics: list[Diagnostic] = []

        lines = doc.lines
        for line_number, line in enumerate(lines):
            for match in UPPERCASE_WORD_PATTERN.finditer(line):
                if len(diagnostics) >= settings.max_number_of_problems:
                    return diagnostics

                diagnostics.append(
                    _uppercase_diagnostic(
                        uri, lines, doc.position_codec, line_number, match, with_related
                    )
                )

        return diagnostics


def _uppercase_diagnostic(
    uri: str,
    lines: Sequence[str],
    position_codec: PositionCodec,
    line_number: int,
    match: re.Match,
    with_related: bool,
) -> Diagnostic:
    # Match offsets are code points; the client counts its own units
    word_range = position_codec.range_to_client_units(
        lines,
        Range(
            start=Position(line=line_number, character=match.start()),
            end=Position(line=line_number, character=match.end()),
        ),
    )

    related_information = None
    if with_related:
        related_information = [
            DiagnosticRelatedInformation(
                location=Location(uri=uri, range=word_range),
                message="Spelling matters",
            ),
            DiagnosticRelatedInformation(
                location=Location(uri=uri, range=word_range),
                message="Particularly for names",
            ),
        ]

    return Diagnostic(
        range=word_range,
        severity=DiagnosticSeverity.Warning,
        message=f"{match.group(0)} is all uppercase.",
        source=DIAGNOSTIC_SOURCE,
        related_information=related_information,
    )
