from typing import List, Optional, Tuple

from cityscript.errors import ScriptSyntaxError
from cityscript.ir import ParsedArgs, RawCall
from cityscript.values import Value

from .constants import (
    BOOL_LITERALS,
    CALL_PATTERN,
    CLOSE_BRACKETS,
    COMMENT_CHAR,
    INT_PATTERN,
    NULL_LITERALS,
    NUMBER_PATTERN,
    OPEN_BRACKETS,
    QUOTE_CHARS,
)


def strip_comment(line: str) -> str:
    """Drop everything from the first unquoted ``#`` and trim the rest."""
    quote: Optional[str] = None
    for index, ch in enumerate(line):
        if quote is not None:
            if ch == quote:
                quote = None
            continue
        if ch in QUOTE_CHARS:
            quote = ch
        elif ch == COMMENT_CHAR:
            return line[:index].strip()
    return line.strip()


def split_call(line: str, source_line: int, original_text: Optional[str] = None) -> RawCall:
    """Split ``[name =] head(args)`` into its head and raw argument text.

    ``line`` must already be comment-stripped. The argument body runs up to the
    last closing parenthesis on the line.

    Raises:
        ScriptSyntaxError: If the line does not have the call shape.
    """
    original = line if original_text is None else original_text
    match = CALL_PATTERN.match(line.strip())
    if match is None:
        raise ScriptSyntaxError(f'Cannot parse line: "{original.strip()}"')
    return RawCall(
        head=match.group(1),
        args_text=match.group(2),
        source_line=source_line,
        original_text=original.strip(),
    )


def split_arguments(text: str) -> List[str]:
    """Split on commas outside quotes and brackets.

    Unbalanced brackets or an unterminated quote do not raise; the remaining
    text simply keeps accumulating into the current token.
    """
    if not text.strip():
        return []

    tokens: List[str] = []
    current: List[str] = []
    depth = 0
    quote: Optional[str] = None
    for ch in text:
        if quote is not None:
            if ch == quote:
                quote = None
            current.append(ch)
        elif ch in QUOTE_CHARS:
            quote = ch
            current.append(ch)
        elif ch in OPEN_BRACKETS:
            depth += 1
            current.append(ch)
        elif ch in CLOSE_BRACKETS:
            depth -= 1
            current.append(ch)
        elif ch == "," and depth == 0:
            tokens.append("".join(current).strip())
            current = []
        else:
            current.append(ch)

    tail = "".join(current).strip()
    if tail:
        tokens.append(tail)
    return tokens


def _is_quoted(token: str) -> bool:
    return len(token) >= 2 and token[0] in QUOTE_CHARS and token[-1] == token[0]


def parse_value(token: str) -> Value:
    token = token.strip()
    if token in NULL_LITERALS:
        return None
    if token in BOOL_LITERALS:
        return BOOL_LITERALS[token]
    # Quotes first, so '5' stays a string.
    if _is_quoted(token):
        return token[1:-1]
    if INT_PATTERN.match(token):
        try:
            return int(token)
        except ValueError:
            # Past the interpreter's digit limit; read it as a float instead.
            return float(token)
    if NUMBER_PATTERN.match(token):
        return float(token)
    return token


def _keyword_split(token: str) -> Optional[Tuple[str, str]]:
    eq_index = token.find("=")
    if eq_index <= 0:
        return None
    key = token[:eq_index]
    if any(quote in key for quote in QUOTE_CHARS):
        return None
    return key.strip(), token[eq_index + 1 :]


def parse_arguments(text: str) -> ParsedArgs:
    parsed = ParsedArgs()
    for token in split_arguments(text):
        keyword = _keyword_split(token)
        if keyword is None:
            parsed.positional.append(parse_value(token))
            continue
        key, raw_value = keyword
        parsed.keyword[key] = parse_value(raw_value)
    return parsed
