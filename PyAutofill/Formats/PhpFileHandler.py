from typing import Any

import regex

from PyAutofill.Catalog import Catalog
from PyAutofill.CatalogFileHandler import CatalogFileHandler, FlattenMessages
from PyAutofill.AutofillError import CatalogParseError
from PyAutofill.Helpers.Localization import _

_token_pattern = regex.compile(r"""
    (?P<space>\s+)
    | (?P<comment>//[^\n]*|\#[^\n]*|/\*.*?\*/)
    | (?P<open_tag><\?php|\?>)
    | (?P<single>'(?:[^'\\]|\\.)*')
    | (?P<double>"(?:[^"\\]|\\.)*")
    | (?P<arrow>=>)
    | (?P<number>-?\d+(?:\.\d+)?)
    | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<punct>[\[\]\(\),;=])
    """, regex.VERBOSE | regex.DOTALL)

_double_quote_escapes = { 'n': "\n", 't': "\t", 'r': "\r", 'v': "\v", 'f': "\f", '0': "\0", '\\': '\\', '"': '"', '$': '$' }

def _unquote_single(token : str) -> str:
    return regex.sub(r"\\([\\'])", r"\1", token[1:-1])

def _unquote_double(token : str) -> str:
    return regex.sub(r'\\(.)', lambda m: _double_quote_escapes.get(m.group(1), m.group(0)), token[1:-1], flags=regex.DOTALL)

def _export_string(text : str) -> str:
    return "'" + text.replace('\\', '\\\\').replace("'", "\\'") + "'"

class _PhpArrayParser:
    """
    Minimal reader for the `return [...]` / `return array(...)` files PHP translation catalogs use
    """
    def __init__(self, content : str):
        self.tokens : list[tuple[str,str]] = self._tokenize(content)
        self.position = 0

    def Parse(self) -> Any:
        while self.position < len(self.tokens):
            kind, value = self._next()
            if kind == 'name' and value.lower() == 'return':
                return self._parse_value()

        raise CatalogParseError(_("PHP catalog does not return an array"))

    def _tokenize(self, content : str) -> list[tuple[str,str]]:
        tokens = []
        position = 0
        while position < len(content):
            match = _token_pattern.match(content, position)
            if not match:
                raise CatalogParseError(_("Unexpected character in PHP catalog at offset {}").format(position))

            kind = match.lastgroup or ''
            if kind not in ('space', 'comment', 'open_tag'):
                tokens.append((kind, match.group()))
            position = match.end()

        return tokens

    def _peek(self) -> tuple[str,str]:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return ('end', '')

    def _next(self) -> tuple[str,str]:
        token = self._peek()
        if token[0] == 'end':
            raise CatalogParseError(_("Unexpected end of PHP catalog"))
        self.position += 1
        return token

    def _expect(self, value : str):
        kind, token = self._next()
        if token != value:
            raise CatalogParseError(_("Expected '{expected}' in PHP catalog, found '{found}'").format(expected=value, found=token))

    def _parse_value(self) -> Any:
        kind, token = self._next()
        if kind == 'single':
            return _unquote_single(token)
        if kind == 'double':
            return _unquote_double(token)
        if kind == 'number':
            return token
        if kind == 'punct' and token == '[':
            return self._parse_items(']')
        if kind == 'name':
            lowered = token.lower()
            if lowered == 'array':
                self._expect('(')
                return self._parse_items(')')
            if lowered in ('true', 'false'):
                return lowered == 'true'
            if lowered == 'null':
                return None

        raise CatalogParseError(_("Unsupported value '{}' in PHP catalog").format(token))

    def _parse_items(self, closing : str) -> dict[str,Any]:
        items : dict[str,Any] = {}
        index = 0
        while self._peek()[1] != closing:
            value = self._parse_value()
            if self._peek()[0] == 'arrow':
                self._next()
                key = str(value)
                value = self._parse_value()
            else:
                key = str(index)
                index += 1

            items[key] = value

            if self._peek()[1] == ',':
                self._next()
            elif self._peek()[1] != closing:
                raise CatalogParseError(_("Expected ',' or '{}' in PHP catalog").format(closing))

        self._next()
        return items

class PhpFileHandler(CatalogFileHandler):
    """
    File handler for PHP array catalogs, written in `var_export` style
    """
    def parse_string(self, content : str, locale : str, domain : str = 'messages') -> Catalog:
        messages = _PhpArrayParser(content).Parse()
        if not isinstance(messages, dict):
            raise CatalogParseError(_("PHP catalog must return an array of keys to messages"))

        catalog = Catalog(locale, domain)
        for key, text in FlattenMessages(messages).items():
            catalog.Set(key, text)

        return catalog

    def compose_catalog(self, catalog : Catalog, options : dict[str,Any]|None = None) -> str:
        lines = [ "<?php", "", "return array (" ]
        for key, text in catalog.items():
            lines.append(f"  {_export_string(key)} => {_export_string(text)},")
        lines.append(");")
        return "\n".join(lines) + "\n"

    def get_file_extensions(self) -> list[str]:
        return ['php']
