"""
Name mapping

Canonicalizes CEF C identifiers into Rust wrapper identifiers. The patterns
are compiled once by the caller and handed to ``NameMapper``.
"""

import re
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NamePatterns:
    """Compiled naming patterns for one generation run"""
    type_name: re.Pattern[str]
    global_fn: re.Pattern[str]
    # Word boundaries inside camelCase names
    acronym: re.Pattern[str]
    lower_upper: re.Pattern[str]
    type_prefix: str = 'cef_'
    type_suffix: str = '_t'
    reserved_prefix: str = 'String'
    disambiguator: str = 'Cef'

    @classmethod
    def default(cls) -> 'NamePatterns':
        return cls(
            type_name=re.compile(r'^_?cef_(\w+)_t$'),
            global_fn=re.compile(r'^cef_(\w+)$'),
            acronym=re.compile(r'([A-Z]+)([A-Z][a-z])'),
            lower_upper=re.compile(r'([a-z0-9])([A-Z])'),
        )


def snake_to_pascal(name: str) -> str:
    """Convert snake_case to PascalCase

    Examples:
        base_ref_counted -> BaseRefCounted
        string_utf16 -> StringUtf16
    """
    return ''.join(part.capitalize() for part in name.split('_') if part)


def camel_to_snake(name: str, patterns: NamePatterns) -> str:
    """Convert camelCase (or PascalCase) to snake_case

    Existing underscores are kept, so snake_case input is returned unchanged.

    Examples:
        browserId -> browser_id
        URLRequest -> url_request
        self_ -> self_
    """
    name = patterns.acronym.sub(r'\1_\2', name)
    name = patterns.lower_upper.sub(r'\1_\2', name)
    return name.lower()


class NameMapper:
    """Maps foreign identifiers to host identifiers"""

    def __init__(self, patterns: NamePatterns):
        self.patterns = patterns

    def type_name(self, foreign_name: str) -> Optional[str]:
        """Map a struct/type name, or None if it is not a CEF type name

        Examples:
            _cef_foo_bar_t -> FooBar
            cef_string_t -> CefString
            not_a_match -> None
        """
        match = self.patterns.type_name.match(foreign_name)
        if match is None:
            return None
        name = snake_to_pascal(match.group(1))
        if name.startswith(self.patterns.reserved_prefix):
            name = self.patterns.disambiguator + name
        return name

    def host_type_name(self, foreign_name: str) -> str:
        """Map a type name, keeping it as-is when it is not a CEF type name"""
        return self.type_name(foreign_name) or foreign_name

    def foreign_type_name(self, host_name: str) -> str:
        """Render a host type name back into CEF form

        Examples:
            FooBar -> cef_foo_bar_t
            CefStringUtf16 -> cef_string_utf16_t
        """
        reserved = self.patterns.disambiguator + self.patterns.reserved_prefix
        if host_name.startswith(reserved):
            host_name = host_name[len(self.patterns.disambiguator):]
        return f'{self.patterns.type_prefix}{camel_to_snake(host_name, self.patterns)}{self.patterns.type_suffix}'

    def value_name(self, foreign_name: str) -> str:
        """Map an argument or field name to snake_case"""
        return camel_to_snake(foreign_name, self.patterns)

    def global_fn_name(self, foreign_name: str) -> tuple[str, Optional[str]]:
        """Map a global function name

        Returns (host_name, original_name). original_name is None when the
        name is used unchanged.

        Examples:
            cef_do_something -> ('do_something', 'cef_do_something')
            other_fn -> ('other_fn', None)
        """
        match = self.patterns.global_fn.match(foreign_name)
        if match is None:
            return foreign_name, None
        return match.group(1), foreign_name
