"""Go source reader producing package-level type declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .declaration_models import (
    DeclarationKind,
    FieldDeclaration,
    SourceParseError,
    TypeDeclaration,
    TypeReference,
    is_exported_name,
)

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<line_comment>//[^\n]*)
    | (?P<block_comment>/\*.*?\*/)
    | (?P<open_comment>/\*)
    | (?P<raw_string>`[^`]*`)
    | (?P<string>"(?:\\.|[^"\\\n])*")
    | (?P<rune>'(?:\\.|[^'\\\n])*')
    | (?P<newline>\n)
    | (?P<space>[ \t\r\f]+)
    | (?P<ident>[^\W\d]\w*)
    | (?P<number>\d[\w.]*)
    | (?P<op><-|\.\.\.|\S)
    """,
    re.VERBOSE | re.DOTALL,
)

_OPENING = {"{": "}", "(": ")", "[": "]"}
_CLOSING = frozenset(_OPENING.values())
_TYPE_START_OPS = frozenset({"*", "[", "(", "<-"})
_LINE_END_OPS = frozenset({";", "}"})


@dataclass(frozen=True)
class _Token:
    kind: str
    value: str
    start: int
    end: int
    line: int
    end_line: int


def parse_go_source(text: str, *, filename: str = "<source>") -> tuple[TypeDeclaration, ...]:
    """Return the package-level type declarations found in Go source text."""
    tokens = _tokenize(text, filename)
    return _DeclarationParser(text, tokens, filename).parse()


def read_go_file(path: Path | str) -> tuple[TypeDeclaration, ...]:
    """Read one Go source file into type declarations."""
    source_path = Path(path)
    try:
        text = source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceParseError(f"Cannot read source file {source_path}: {exc}") from exc
    return parse_go_source(text, filename=str(source_path))


def comment_text(raw_comments: list[str]) -> str:
    """Strip comment markers from a comment group and join its lines."""
    lines: list[str] = []
    for raw in raw_comments:
        if raw.startswith("//"):
            body = raw[2:]
            if body.startswith("go:") or body.startswith("line "):
                continue
            lines.append(body[1:] if body.startswith(" ") else body)
        else:
            lines.extend(line.strip() for line in raw[2:-2].splitlines())
    stripped = [line.rstrip() for line in lines]
    while stripped and not stripped[0]:
        stripped.pop(0)
    while stripped and not stripped[-1]:
        stripped.pop()
    return "\n".join(stripped)


def _tokenize(text: str, filename: str) -> list[_Token]:
    tokens: list[_Token] = []
    line = 1
    for match in _TOKEN_PATTERN.finditer(text):
        kind = match.lastgroup or "op"
        value = match.group()
        end_line = line + value.count("\n")
        if kind == "open_comment":
            raise SourceParseError(f"{filename}:{line}: comment not terminated")
        if kind == "op" and value in {'"', "'", "`"}:
            raise SourceParseError(f"{filename}:{line}: literal not terminated")
        if kind in {"line_comment", "block_comment"}:
            kind = "comment"
        elif kind in {"raw_string", "rune"}:
            kind = "string"
        if kind != "space":
            tokens.append(_Token(kind, value, match.start(), match.end(), line, end_line))
        line = end_line
    return tokens


class _DeclarationParser:
    """Recursive-descent reader over the token stream of one file."""

    def __init__(self, text: str, tokens: list[_Token], filename: str) -> None:
        self._text = text
        self._tokens = tokens
        self._filename = filename
        self._pos = 0

    def parse(self) -> tuple[TypeDeclaration, ...]:
        declarations: list[TypeDeclaration] = []
        depth = 0
        while self._pos < len(self._tokens):
            token = self._tokens[self._pos]
            if depth == 0 and token.kind == "ident" and token.value == "type":
                declarations.extend(self._parse_type_declaration())
                continue
            if token.kind == "op" and token.value in _OPENING:
                depth += 1
            elif token.kind == "op" and token.value in _CLOSING:
                depth -= 1
                if depth < 0:
                    raise self._error(token, f"unexpected '{token.value}'")
            self._pos += 1
        if depth > 0:
            raise SourceParseError(f"{self._filename}: unbalanced brackets at end of file")
        return tuple(declarations)

    def _parse_type_declaration(self) -> list[TypeDeclaration]:
        doc = self._leading_doc(self._pos)
        self._advance()
        if not self._is_op(self._peek(), "("):
            return [self._parse_type_spec(doc)]

        self._advance()
        specs: list[TypeDeclaration] = []
        while True:
            self._skip_separators()
            token = self._peek()
            if token is None:
                raise SourceParseError(f"{self._filename}: unexpected end of file in type group")
            if self._is_op(token, ")"):
                self._advance()
                return specs
            specs.append(self._parse_type_spec(self._leading_doc(self._pos)))

    def _parse_type_spec(self, doc: str) -> TypeDeclaration:
        name_token = self._expect_ident()
        if self._starts_type_parameters():
            self._advance()
            self._skip_balanced("[")
        if self._is_op(self._peek(), "="):
            self._advance()

        token = self._peek()
        fields: tuple[FieldDeclaration, ...] = ()
        if self._is_keyword_block(token, "struct"):
            self._advance()
            self._advance()
            fields = self._parse_struct_body()
            kind = DeclarationKind.STRUCT
        elif self._is_keyword_block(token, "interface"):
            self._parse_type()
            kind = DeclarationKind.INTERFACE
        else:
            self._parse_type()
            kind = DeclarationKind.OTHER

        trailing = self._trailing_comment()
        return TypeDeclaration(
            name=name_token.value,
            kind=kind,
            doc=trailing or doc,
            fields=fields,
            source_path=self._filename,
        )

    def _parse_struct_body(self) -> tuple[FieldDeclaration, ...]:
        fields: list[FieldDeclaration] = []
        while True:
            self._skip_separators()
            token = self._peek()
            if token is None:
                raise SourceParseError(f"{self._filename}: unexpected end of file in struct")
            if self._is_op(token, "}"):
                self._advance()
                return tuple(fields)

            doc = self._leading_doc(self._pos)
            names = self._field_names()
            type_ref = self._parse_type()
            if not names:
                names = [type_ref.leaf_name]
            tag = self._peek()
            if tag is not None and tag.kind == "string":
                self._advance()
            description = self._trailing_comment() or doc
            for name in names:
                fields.append(
                    FieldDeclaration(
                        name=name,
                        type_ref=type_ref,
                        doc=description,
                        exported=is_exported_name(name),
                    )
                )

            token = self._peek()
            if token is not None and not (
                token.kind == "newline" or (token.kind == "op" and token.value in _LINE_END_OPS)
            ):
                raise self._error(token, f"unexpected '{token.value}' after field")

    def _field_names(self) -> list[str]:
        """Consume an identifier list, or nothing for an embedded field."""
        token = self._peek()
        if token is None or token.kind != "ident":
            return []
        index = self._pos
        names = [token.value]
        while self._is_op(self._at(index + 1), ","):
            name_token = self._at(index + 2)
            if name_token is None or name_token.kind != "ident":
                raise self._error(self._at(index + 1), "expected field name")
            names.append(name_token.value)
            index += 2
        following = self._at(index + 1)
        if len(names) == 1 and not self._starts_type(following):
            return []
        if len(names) == 1 and self._is_op(following, "[") and self._embeds_generic(index + 1):
            return []
        self._pos = index + 1
        return names

    def _parse_type(self) -> TypeReference:
        first = self._peek()
        if first is None:
            raise SourceParseError(f"{self._filename}: unexpected end of file, expected type")
        is_pointer = self._is_op(first, "*")
        if is_pointer:
            self._advance()
        name, package = self._parse_type_body()
        last = self._tokens[self._pos - 1]
        expression = " ".join(self._text[first.start : last.end].split())
        return TypeReference(
            expression=expression, name=name, package=package, is_pointer=is_pointer
        )

    def _parse_type_body(self) -> tuple[str | None, str | None]:
        """Consume one type expression, returning its leaf name when it is a named type."""
        token = self._peek()
        if token is None:
            raise SourceParseError(f"{self._filename}: unexpected end of file, expected type")
        if token.kind == "op":
            self._advance()
            if token.value == "*":
                self._parse_type_body()
                return None, None
            if token.value == "(":
                name, package = self._parse_type_body()
                self._expect_op(")")
                return name, package
            if token.value == "[":
                self._skip_balanced("[")
                self._parse_type_body()
                return None, None
            if token.value == "<-":
                self._expect_ident("chan")
                self._parse_type_body()
                return None, None
            raise self._error(token, f"unexpected '{token.value}', expected type")
        if token.kind != "ident":
            raise self._error(token, f"unexpected '{token.value}', expected type")

        self._advance()
        if token.value == "map":
            self._expect_op("[")
            self._skip_balanced("[")
            self._parse_type_body()
            return None, None
        if token.value == "chan":
            if self._is_op(self._peek(), "<-"):
                self._advance()
            self._parse_type_body()
            return None, None
        if token.value == "func":
            self._expect_op("(")
            self._skip_balanced("(")
            result = self._peek()
            if self._is_op(result, "("):
                self._advance()
                self._skip_balanced("(")
            elif self._starts_type(result):
                self._parse_type_body()
            return None, None
        if token.value in {"struct", "interface"} and self._is_op(self._peek(), "{"):
            self._advance()
            self._skip_balanced("{")
            return None, None

        name, package = token.value, None
        selector = self._at(self._pos + 1)
        if self._is_op(self._peek(), ".") and selector is not None and selector.kind == "ident":
            package, name = name, selector.value
            self._pos += 2
        if self._is_op(self._peek(), "["):
            self._advance()
            self._skip_balanced("[")
        return name, package

    def _skip_balanced(self, opening: str) -> None:
        """Skip tokens up to the bracket closing an already consumed ``opening``."""
        stack = [_OPENING[opening]]
        while stack:
            token = self._peek()
            if token is None:
                raise SourceParseError(
                    f"{self._filename}: unexpected end of file, missing '{stack[-1]}'"
                )
            self._advance()
            if token.kind != "op":
                continue
            if token.value in _OPENING:
                stack.append(_OPENING[token.value])
            elif token.value in _CLOSING:
                if token.value != stack[-1]:
                    raise self._error(token, f"unexpected '{token.value}'")
                stack.pop()

    def _leading_doc(self, index: int) -> str:
        """Return the comment group ending on the line directly above ``index``."""
        target = self._tokens[index]
        expected_line = target.line - 1
        comments: list[str] = []
        cursor = index - 1
        while cursor >= 0:
            token = self._tokens[cursor]
            if token.kind == "newline":
                cursor -= 1
                continue
            if token.kind != "comment" or token.end_line != expected_line:
                break
            previous = self._at(cursor - 1) if cursor > 0 else None
            if previous is not None and previous.kind != "newline":
                break
            comments.insert(0, token.value)
            expected_line = token.line - 1
            cursor -= 1
        return comment_text(comments)

    def _trailing_comment(self) -> str:
        last = self._tokens[self._pos - 1]
        token = self._peek()
        if token is not None and token.kind == "comment" and token.line == last.end_line:
            self._advance()
            return comment_text([token.value])
        return ""

    def _starts_type_parameters(self) -> bool:
        # "Name[T any]" declares type parameters; "Name [N]T" is an array type.
        if not self._is_op(self._peek(), "["):
            return False
        first = self._at(self._pos + 1)
        second = self._at(self._pos + 2)
        return (
            first is not None
            and first.kind == "ident"
            and second is not None
            and not self._is_op(second, "]")
        )

    def _embeds_generic(self, index: int) -> bool:
        """Return True when the brackets at ``index`` close a field line, as in ``List[int]``."""
        depth = 0
        for cursor in range(index, len(self._tokens)):
            token = self._tokens[cursor]
            if token.kind == "op" and token.value in _OPENING:
                depth += 1
            elif token.kind == "op" and token.value in _CLOSING:
                depth -= 1
                if depth == 0:
                    return not self._starts_type(self._at(cursor + 1))
        return False

    def _starts_type(self, token: _Token | None) -> bool:
        if token is None:
            return False
        if token.kind == "ident":
            return True
        return token.kind == "op" and token.value in _TYPE_START_OPS

    def _is_keyword_block(self, token: _Token | None, keyword: str) -> bool:
        return (
            token is not None
            and token.kind == "ident"
            and token.value == keyword
            and self._is_op(self._at(self._pos + 1), "{")
        )

    def _skip_separators(self) -> None:
        while True:
            token = self._peek()
            if token is None or not (
                token.kind in {"newline", "comment"} or self._is_op(token, ";")
            ):
                return
            self._advance()

    def _expect_ident(self, value: str | None = None) -> _Token:
        token = self._peek()
        if token is None:
            raise SourceParseError(f"{self._filename}: unexpected end of file, expected name")
        if token.kind != "ident" or (value is not None and token.value != value):
            raise self._error(token, f"unexpected '{token.value}', expected {value or 'name'}")
        self._advance()
        return token

    def _expect_op(self, value: str) -> None:
        token = self._peek()
        if not self._is_op(token, value):
            found = "end of file" if token is None else f"'{token.value}'"
            raise SourceParseError(f"{self._filename}: expected '{value}', found {found}")
        self._advance()

    def _is_op(self, token: _Token | None, value: str) -> bool:
        return token is not None and token.kind == "op" and token.value == value

    def _peek(self) -> _Token | None:
        return self._at(self._pos)

    def _at(self, index: int) -> _Token | None:
        if 0 <= index < len(self._tokens):
            return self._tokens[index]
        return None

    def _advance(self) -> None:
        self._pos += 1

    def _error(self, token: _Token | None, message: str) -> SourceParseError:
        line = token.line if token is not None else "?"
        return SourceParseError(f"{self._filename}:{line}: {message}")
