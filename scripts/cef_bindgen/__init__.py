"""
cef_bindgen - Rust wrapper generation for the CEF C API

Reads the declarations bindgen produces for the CEF headers and generates
idiomatic Rust wrappers: newtypes and records for plain structs, traits with
C-ABI trampolines for ref-counted polymorphic structs, and safe wrappers for
global functions.
"""

from .errors import (
    BindingError, Unrecognized, UnrecognizedFieldType, UnrecognizedFnArg,
    UnrecognizedGenericType, UnrecognizedInterfaceDeclaration,
    ParseFailure, CyclicBaseChain,
)
from .names import NameMapper, NamePatterns
from .config import GeneratorConfig
from .ir import IR, TypeAlias, FieldDecl, Argument, MethodDecl, StructDecl, EnumDecl, GlobalFnDecl
from .bases import BaseTypes, Ancestor
from .types import TypeRenderer
from .classify import StructClassifier
from .parser import DeclarationParser
from .codegen import CodeGen
from .struct import StructGenerator, StructStrategy, select_strategy
from .callback import TrampolineGenerator
from .enum import EnumGenerator
from .func import FuncGenerator
from .generator import Generator, GenerationResult, FormatResult, format_file

__all__ = [
    'BindingError', 'Unrecognized', 'UnrecognizedFieldType', 'UnrecognizedFnArg',
    'UnrecognizedGenericType', 'UnrecognizedInterfaceDeclaration',
    'ParseFailure', 'CyclicBaseChain',
    'NameMapper', 'NamePatterns',
    'GeneratorConfig',
    'IR', 'TypeAlias', 'FieldDecl', 'Argument', 'MethodDecl', 'StructDecl', 'EnumDecl',
    'GlobalFnDecl',
    'BaseTypes', 'Ancestor',
    'TypeRenderer',
    'StructClassifier',
    'DeclarationParser',
    'CodeGen',
    'StructGenerator', 'StructStrategy', 'select_strategy',
    'TrampolineGenerator',
    'EnumGenerator',
    'FuncGenerator',
    'Generator', 'GenerationResult', 'FormatResult', 'format_file',
]
