"""
Error types

Recoverable recognition failures (``Unrecognized`` and its subclasses) are
raised while classifying a single field, argument or block and caught by the
caller, which drops that declaration. ``ParseFailure`` and
``CyclicBaseChain`` abort the whole run.
"""

from typing import Optional, Sequence


class BindingError(Exception):
    """Base class for all generator errors"""


class Unrecognized(BindingError):
    """A declaration did not match any recognized shape"""

    description = 'Unrecognized declaration'

    def __init__(self, detail: str = ''):
        self.detail = detail
        message = f'{self.description}: {detail}' if detail else self.description
        super().__init__(message)


class UnrecognizedFieldType(Unrecognized):
    description = 'Unrecognized Field Type'


class UnrecognizedFnArg(Unrecognized):
    description = 'Unrecognized Function Argument'


class UnrecognizedGenericType(Unrecognized):
    description = 'Unrecognized Generic Type'


class UnrecognizedInterfaceDeclaration(Unrecognized):
    description = 'Unrecognized Interface Declaration'


class ParseFailure(BindingError):
    """The declaration file could not be read or parsed into a syntax tree"""

    def __init__(self, error: Exception, source_name: str = '<bindings>'):
        self.error = error
        self.source_name = source_name
        self.line: Optional[int] = getattr(error, 'line', None)
        self.column: Optional[int] = getattr(error, 'column', None)
        where = source_name
        # lark reports -1 for positions at end of input
        if self.line is not None and self.line > 0:
            where = f'{source_name}:{self.line}:{self.column}'
        super().__init__(f'Failed to Parse Bindings ({where}): {error}')


class CyclicBaseChain(BindingError):
    """Following ``base`` fields revisited a type"""

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__('Cyclic base chain: ' + ' -> '.join(self.chain))
