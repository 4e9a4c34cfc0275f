"""
Generator configuration
"""

from dataclasses import dataclass, field

from .names import NamePatterns

DEFAULT_PRELUDE = (
    '#![allow(dead_code, non_camel_case_types, unused_variables)]',
    'use crate::{',
    '    rc::{RcImpl, RefGuard},',
    '    wrapper,',
    '};',
    'use cef_sys::*;',
)


@dataclass
class GeneratorConfig:
    """Conventions of the foreign object model and output settings"""
    # Root of every ref-counted polymorphic hierarchy (host name)
    marker_type: str = 'BaseRefCounted'
    # Field name that encodes "inherits from"
    base_field: str = 'base'
    # Placeholder field of structs without accessible fields
    sentinel_field: str = '_unused'
    # Name of the receiver argument of every vtable slot
    receiver: str = 'self_'
    abi: str = 'C'
    # Crate the prelude glob-imports foreign declarations from
    sys_crate: str = 'cef_sys'
    output_name: str = 'bindings.rs'
    # Empty tuple disables formatting
    formatter: tuple[str, ...] = ('rustfmt',)
    prelude: tuple[str, ...] = DEFAULT_PRELUDE
    patterns: NamePatterns = field(default_factory=NamePatterns.default)
