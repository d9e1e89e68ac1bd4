from __future__ import annotations

"""
Directive Extraction Service.

Recovers ``library``, ``import``, ``export``, ``part`` and ``part of``
directives from Dart source text without a full Dart parser. Two tiers
are applied with a fixed precedence:

1. A structured scanner that tokenizes the directive prologue (comments,
   annotations, string literals, conditional URIs, combinators) and stops
   at the first declaration.
2. A liberal line-based regex scan, used only when the structured tier
   recovers nothing (e.g. the prologue is broken from its first token).

Neither tier raises on malformed input; a file yielding nothing is a leaf.
"""

import logging
import re
from typing import List, Optional, Tuple

from dartsweep.domain.models import Directive, DirectiveKind

logger = logging.getLogger(__name__)

_QUOTES = ("'", '"')
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "b": "\b", "f": "\f", "v": "\v"}

_IDENT_START_RX = re.compile(r"[A-Za-z_$]")
_IDENT_RX = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

_FALLBACK_URI_RX = re.compile(
    r"""^[ \t]*(import|export|part(?:[ \t]+of)?)[ \t]+[rR]?(['"])([^'"\n]*)\2""",
    re.MULTILINE,
)
_FALLBACK_NAMED_RX = re.compile(
    r"^[ \t]*(library|part[ \t]+of)[ \t]+([A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*)[ \t]*;",
    re.MULTILINE,
)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def extract_directives(content: Optional[str], origin: str = "<string>") -> Tuple[Directive, ...]:
    """
    Extract the ordered directive list of a Dart source file.

    Args:
        content: Source text, or None when the file could not be read.
        origin: Label used in diagnostics (usually the file path).

    Returns:
        Tuple[Directive, ...]: Directives in source order; empty when
        nothing could be recovered.
    """
    if not content:
        return ()

    structured = parse_directives(content, origin)
    if structured:
        return tuple(structured)

    fallback = scan_directives(content)
    if fallback:
        logger.debug(f"Recovered {len(fallback)} directive(s) from {origin} via text scan")
    return tuple(fallback)


def parse_directives(content: str, origin: str = "<string>") -> List[Directive]:
    """
    Structured tier: scan the directive prologue token by token.

    Args:
        content: Source text.
        origin: Label used in diagnostics.

    Returns:
        List[Directive]: Directives recovered before the first declaration
        or the first syntax error.
    """
    scanner = _PrologueScanner(content)
    directives: List[Directive] = []
    try:
        scanner.run(directives)
    except _DirectiveSyntaxError as e:
        logger.debug(f"Directive prologue of {origin} is malformed at offset {e.offset}: {e}")
    return directives


def scan_directives(content: str) -> List[Directive]:
    """
    Fallback tier: liberal line-oriented pattern scan.

    Only quoted URIs closed on the same line are accepted, plus the
    name-based ``library x.y;`` and ``part of x.y;`` forms.

    Args:
        content: Source text.

    Returns:
        List[Directive]: Directives ordered by their position in the text.
    """
    found: List[Tuple[int, Directive]] = []

    for match in _FALLBACK_URI_RX.finditer(content):
        keyword = " ".join(match.group(1).split())
        uri = match.group(3)
        if "$" in uri:
            continue
        found.append((match.start(), Directive(kind=DirectiveKind(keyword), uri=uri)))

    for match in _FALLBACK_NAMED_RX.finditer(content):
        keyword = " ".join(match.group(1).split())
        found.append((
            match.start(),
            Directive(kind=DirectiveKind(keyword), library_name=match.group(2)),
        ))

    found.sort(key=lambda item: item[0])
    return [d for _, d in found]


# -----------------------------------------------------------------------------
# STRUCTURED SCANNER
# -----------------------------------------------------------------------------

class _DirectiveSyntaxError(Exception):
    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


class _PrologueScanner:
    """
    Hand-written scanner for the part of a Dart file that holds directives.

    Grammar covered (a simplified Dart directive grammar):

        prologue   := scriptTag? (metadata* directive)*
        directive  := 'library' dottedName? ';'
                    | ('import' | 'export') uri configuration* modifier* ';'
                    | 'part' uri ';'
                    | 'part' 'of' (uri | dottedName) ';'
        configuration := 'if' '(' ... ')' uri
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    # -- driver ---------------------------------------------------------------

    def run(self, out: List[Directive]) -> None:
        if self.text.startswith("\ufeff"):
            self.pos = 1
        if self.text.startswith("#!", self.pos):
            self._skip_line()

        while True:
            self.skip_trivia()
            if self.at_end():
                return
            if self.peek() == "@":
                self.skip_annotation()
                continue

            word = self.peek_identifier()
            if word == "library":
                self.read_identifier()
                self._library(out)
            elif word in ("import", "export"):
                self.read_identifier()
                self._import_or_export(DirectiveKind(word), out)
            elif word == "part":
                self.read_identifier()
                self._part(out)
            else:
                return

    def _library(self, out: List[Directive]) -> None:
        self.skip_trivia()
        name = None
        if self.peek() != ";":
            name = self.read_dotted_name()
        self.expect(";")
        out.append(Directive(kind=DirectiveKind.LIBRARY, library_name=name))

    def _import_or_export(self, kind: DirectiveKind, out: List[Directive]) -> None:
        uri = self.read_uri()
        if uri is not None:
            out.append(Directive(kind=kind, uri=uri))

        while True:
            self.skip_trivia()
            ch = self.peek()
            if ch == ";":
                self.pos += 1
                return
            if ch == ",":
                self.pos += 1
                continue

            word = self.peek_identifier()
            if word is None:
                raise _DirectiveSyntaxError(f"unexpected {ch!r} in {kind.value} directive", self.pos)
            self.read_identifier()

            if word == "if":
                self.skip_trivia()
                self.expect("(")
                self.skip_balanced("(", ")")
                alternative = self.read_uri()
                if alternative is not None:
                    out.append(Directive(kind=kind, uri=alternative))
            # 'deferred', 'as', 'show', 'hide' and the names they introduce are
            # consumed as plain identifiers.

    def _part(self, out: List[Directive]) -> None:
        self.skip_trivia()
        if self.peek_identifier() == "of":
            self.read_identifier()
            self.skip_trivia()
            if self.at_string():
                uri = self.read_uri()
                self.expect(";")
                if uri is not None:
                    out.append(Directive(kind=DirectiveKind.PART_OF, uri=uri))
            else:
                name = self.read_dotted_name()
                self.expect(";")
                out.append(Directive(kind=DirectiveKind.PART_OF, library_name=name))
            return

        uri = self.read_uri()
        self.expect(";")
        if uri is not None:
            out.append(Directive(kind=DirectiveKind.PART, uri=uri))

    # -- tokens ---------------------------------------------------------------

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, ch: str) -> None:
        self.skip_trivia()
        if self.peek() != ch:
            found = self.peek() or "end of file"
            raise _DirectiveSyntaxError(f"expected {ch!r}, found {found!r}", self.pos)
        self.pos += 1

    def skip_trivia(self) -> None:
        """Skip whitespace, line comments and (nested) block comments."""
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch.isspace():
                self.pos += 1
            elif text.startswith("//", self.pos):
                self._skip_line()
            elif text.startswith("/*", self.pos):
                self._skip_block_comment()
            else:
                return

    def _skip_line(self) -> None:
        end = self.text.find("\n", self.pos)
        self.pos = len(self.text) if end == -1 else end + 1

    def _skip_block_comment(self) -> None:
        start = self.pos
        depth = 0
        text = self.text
        while self.pos < len(text):
            if text.startswith("/*", self.pos):
                depth += 1
                self.pos += 2
            elif text.startswith("*/", self.pos):
                depth -= 1
                self.pos += 2
                if depth == 0:
                    return
            else:
                self.pos += 1
        raise _DirectiveSyntaxError("unterminated block comment", start)

    def peek_identifier(self) -> Optional[str]:
        match = _IDENT_RX.match(self.text, self.pos)
        return match.group(0) if match else None

    def read_identifier(self) -> str:
        match = _IDENT_RX.match(self.text, self.pos)
        if not match:
            raise _DirectiveSyntaxError("expected identifier", self.pos)
        self.pos = match.end()
        return match.group(0)

    def read_dotted_name(self) -> str:
        self.skip_trivia()
        parts = [self.read_identifier()]
        while True:
            self.skip_trivia()
            if self.peek() != ".":
                return ".".join(parts)
            self.pos += 1
            self.skip_trivia()
            parts.append(self.read_identifier())

    def skip_annotation(self) -> None:
        self.pos += 1  # '@'
        self.read_dotted_name()
        self.skip_trivia()
        if self.peek() == "(":
            self.pos += 1
            self.skip_balanced("(", ")")

    def skip_balanced(self, open_ch: str, close_ch: str) -> None:
        """Skip up to and including the bracket closing an already opened one."""
        start = self.pos
        depth = 1
        while True:
            self.skip_trivia()
            if self.at_end():
                raise _DirectiveSyntaxError(f"unbalanced {open_ch!r}", start)
            if self.at_string():
                self.read_string()
                continue
            ch = self.text[self.pos]
            self.pos += 1
            if ch == open_ch:
                depth += 1
            elif ch == close_ch:
                depth -= 1
                if depth == 0:
                    return

    def at_string(self) -> bool:
        ch = self.peek()
        if ch in _QUOTES:
            return True
        return ch in ("r", "R") and self.text[self.pos + 1:self.pos + 2] in _QUOTES

    def read_uri(self) -> Optional[str]:
        """
        Read a URI made of one or more adjacent string literals.

        Returns:
            Optional[str]: The URI, or None when it uses interpolation and
            therefore is not a compile-time constant.
        """
        self.skip_trivia()
        if not self.at_string():
            raise _DirectiveSyntaxError("expected string literal", self.pos)

        pieces: List[str] = []
        constant = True
        while self.at_string():
            value, is_constant = self.read_string()
            pieces.append(value)
            constant = constant and is_constant
            self.skip_trivia()

        if not constant:
            logger.debug(f"Ignoring interpolated directive URI {''.join(pieces)!r}")
            return None
        return "".join(pieces)

    def read_string(self) -> Tuple[str, bool]:
        """Read a single string literal; returns (value, is_constant)."""
        text = self.text
        start = self.pos
        raw = False
        if text[self.pos] in ("r", "R"):
            raw = True
            self.pos += 1

        quote = text[self.pos]
        triple = text.startswith(quote * 3, self.pos)
        terminator = quote * 3 if triple else quote
        self.pos += len(terminator)

        chars: List[str] = []
        constant = True
        while True:
            if self.pos >= len(text):
                raise _DirectiveSyntaxError("unterminated string literal", start)
            if text.startswith(terminator, self.pos):
                self.pos += len(terminator)
                return "".join(chars), constant

            ch = text[self.pos]
            if ch == "\n" and not triple:
                raise _DirectiveSyntaxError("unterminated string literal", start)

            if ch == "\\" and not raw:
                escaped = text[self.pos + 1:self.pos + 2]
                chars.append(_SIMPLE_ESCAPES.get(escaped, escaped))
                self.pos += 2
                continue

            if ch == "$" and not raw:
                constant = False
                self.pos += 1
                if self.peek() == "{":
                    self.pos += 1
                    self.skip_balanced("{", "}")
                elif _IDENT_START_RX.match(self.peek()):
                    self.read_identifier()
                continue

            chars.append(ch)
            self.pos += 1
