# lunatex/latex_converter.py
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .schemas import UNSUPPORTED, AsciiWord, ConversionRule, ScriptAttachment, UnicodeGlyph
from .symbol_tables import FRACTION_PREFIX, SUBSCRIPTS, SUPERSCRIPTS, SYMBOL_TABLE

# Groups nested deeper than this are copied through verbatim.
MAX_GROUP_DEPTH = 64


# --- 1. Tokens ---
class TokenKind(Enum):
    LITERAL = 'literal'
    COMMAND = 'command'
    GROUP_START = 'group_start'
    GROUP_END = 'group_end'
    SUPERSCRIPT = 'superscript'
    SUBSCRIPT = 'subscript'


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str

    @property
    def source(self) -> str:
        """The input text this token was scanned from."""
        return '\\' + self.value if self.kind is TokenKind.COMMAND else self.value


MARKERS = {'^': TokenKind.SUPERSCRIPT, '_': TokenKind.SUBSCRIPT}
SCRIPT_KINDS = {TokenKind.SUPERSCRIPT: 'superscript', TokenKind.SUBSCRIPT: 'subscript'}
SCRIPT_TABLES = {'superscript': SUPERSCRIPTS, 'subscript': SUBSCRIPTS}


# --- 2. Scanner ---
def _read_command_name(text: str, start: int) -> Tuple[Optional[str], int]:
    """
    Reads the command name that follows a backslash.

    Returns the name and the position just past it. A backslash followed by a
    non-letter names a one-character command (`\\,`, `\\{`). A backslash at the
    end of the input has no name.
    """
    if start >= len(text):
        return None, start
    end = start
    while end < len(text) and text[end].isascii() and text[end].isalpha():
        end += 1
    if end == start:
        return text[start], start + 1
    name = text[start:end]
    if name == FRACTION_PREFIX:
        fraction = name + text[end:end + 2]
        if fraction in SYMBOL_TABLE:
            return fraction, end + 2
    return name, end


def _match_braces(text: str) -> Dict[int, int]:
    """
    Maps the index of every `{` to the index of its closing `}` in one pass.
    Escaped braces are skipped. Braces that never close are left out.
    """
    matches: Dict[int, int] = {}
    open_braces: List[int] = []
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char == '\\':
            pos += 2
            continue
        if char == '{':
            open_braces.append(pos)
        elif char == '}' and open_braces:
            matches[open_braces.pop()] = pos
        pos += 1
    return matches


def scan(latex_string: str) -> Iterator[Token]:
    """
    Lazily splits the input into tokens. Brace pairs are matched up front, so
    each character is visited a bounded number of times.

    An opening brace without a matching close brace turns itself and the rest
    of the input into literal characters.
    """
    matches = _match_braces(latex_string)
    closers: List[int] = []
    pos = 0
    while pos < len(latex_string):
        char = latex_string[pos]
        if char == '\\':
            name, pos = _read_command_name(latex_string, pos + 1)
            if name is None:
                yield Token(TokenKind.LITERAL, char)
            else:
                yield Token(TokenKind.COMMAND, name)
            continue
        if char == '{':
            end = matches.get(pos)
            if end is None:
                for rest in latex_string[pos:]:
                    yield Token(TokenKind.LITERAL, rest)
                return
            closers.append(end)
            yield Token(TokenKind.GROUP_START, char)
        elif char == '}' and closers and closers[-1] == pos:
            closers.pop()
            yield Token(TokenKind.GROUP_END, char)
        elif char in MARKERS:
            yield Token(MARKERS[char], char)
        else:
            yield Token(TokenKind.LITERAL, char)
        pos += 1


# --- 3. Resolver ---
def resolve(command_name: str) -> ConversionRule:
    return SYMBOL_TABLE.get(command_name, UNSUPPORTED)


def render_rule(rule: ConversionRule, command_name: str) -> str:
    if isinstance(rule, UnicodeGlyph):
        return rule.text
    if isinstance(rule, AsciiWord):
        return rule.text
    # Unknown commands stay visible as typed.
    return '\\' + command_name


def render_command(command_name: str) -> str:
    return render_rule(resolve(command_name), command_name)


# --- 4. Script composer ---
def compose(base: str, attachments: Iterable[ScriptAttachment]) -> str:
    """
    Appends each attachment to the rendered base, left to right.

    Content whose every character has a super/subscript glyph is written with
    those glyphs. Anything else is written whole inside one pair of parentheses,
    because `^` and `_` do not render on the handheld.
    """
    parts = [base]
    for attachment in attachments:
        table = SCRIPT_TABLES[attachment.kind]
        if all(char in table for char in attachment.content):
            parts.append(''.join(table[char] for char in attachment.content))
        else:
            parts.append(f"({attachment.content})")
    return ''.join(parts)


# --- 5. Emitter ---
class Emitter:
    def __init__(self):
        self._stream: List[str] = []

    def append(self, text: str):
        self._stream.append(text)

    def getvalue(self) -> str:
        return ''.join(self._stream)


# --- 6. Parser ---
class ParserState:
    def __init__(self, tokens: Iterable[Token], depth: int = 0):
        self._tokens = iter(tokens)
        self._current = next(self._tokens, None)
        self.depth = depth

    def has_tokens(self) -> bool: return self._current is not None
    def current_token(self) -> Optional[Token]: return self._current

    def advance(self) -> Optional[Token]:
        token = self._current
        self._current = next(self._tokens, None)
        return token


def _collect_group(state: ParserState) -> List[Token]:
    """Consumes tokens up to the GROUP_END matching an already consumed GROUP_START."""
    tokens: List[Token] = []
    depth = 1
    while state.has_tokens():
        token = state.advance()
        if token.kind is TokenKind.GROUP_START:
            depth += 1
        elif token.kind is TokenKind.GROUP_END:
            depth -= 1
            if depth == 0:
                break
        tokens.append(token)
    return tokens


def _parse_group(state: ParserState) -> str:
    """
    Parses up to and including the GROUP_END matching an already consumed
    GROUP_START. Groups are parsed in place on the shared state, so every
    token is consumed exactly once whatever the nesting.
    """
    if state.depth >= MAX_GROUP_DEPTH:
        return ''.join(token.source for token in _collect_group(state))
    state.depth += 1
    content = _parse_tokens(state, stop_at_group_end=True)
    state.depth -= 1
    state.advance()  # GROUP_END
    return content


def _parse_single_element(state: ParserState) -> str:
    token = state.current_token()
    if token.kind in SCRIPT_KINDS:
        return ''  # script with nothing before it
    state.advance()
    if token.kind is TokenKind.COMMAND:
        return render_command(token.value)
    if token.kind is TokenKind.GROUP_START:
        return '{' + _parse_group(state) + '}'
    return token.value


def _parse_script_content(state: ParserState) -> Optional[str]:
    token = state.current_token()
    if token is None or token.kind is TokenKind.GROUP_END:
        return None
    if token.kind is TokenKind.LITERAL and token.value == '{':
        return None  # unbalanced brace, the rest of the input is literal
    state.advance()
    if token.kind is TokenKind.GROUP_START:
        return _parse_group(state)
    if token.kind is TokenKind.COMMAND:
        return render_command(token.value)
    return token.value


def _parse_scripts(state: ParserState) -> Tuple[List[ScriptAttachment], str]:
    """
    Gathers the run of `^`/`_` attachments after a base.

    Returns the attachments and, if the run ended on a marker with no content,
    that marker as literal text.
    """
    attachments: List[ScriptAttachment] = []
    while state.has_tokens() and state.current_token().kind in SCRIPT_KINDS:
        marker = state.advance()
        content = _parse_script_content(state)
        if content is None:
            return attachments, marker.value
        attachments.append(ScriptAttachment(kind=SCRIPT_KINDS[marker.kind], content=content))
    return attachments, ''


def _parse_tokens(state: ParserState, stop_at_group_end: bool = False) -> str:
    emitter = Emitter()
    while state.has_tokens():
        if stop_at_group_end and state.current_token().kind is TokenKind.GROUP_END:
            break
        base = _parse_single_element(state)
        attachments, trailing = _parse_scripts(state)
        emitter.append(compose(base, attachments))
        emitter.append(trailing)
    return emitter.getvalue()


def latex_to_device_text(latex_string: str) -> str:
    """
    Rewrites LaTeX-style math markup into text the TI-Nspire font can show.

    Args:
        latex_string (str): Plain text, possibly containing `\\commands`, `^` and `_`.

    Returns:
        str: The same text with commands substituted and scripts composed.
    """
    return _parse_tokens(ParserState(scan(latex_string)))
