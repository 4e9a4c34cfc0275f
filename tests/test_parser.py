import logging
from pathlib import Path

import pytest

from cef_bindgen import (
    IR, DeclarationParser, EnumDecl, MethodDecl, ParseFailure, TypeAlias,
)


def test_parse_sample(parser: DeclarationParser, sample_file: Path) -> None:
    ir = IR.load(str(sample_file), parser)

    assert [s.name for s in ir.structs] == [
        '_cef_string_utf16_t',
        '_cef_base_ref_counted_t',
        '_cef_rect_t',
        '_cef_browser_t',
        '_cef_main_args_t',
        '_cef_sandbox_t',
    ]
    assert ir.enums == (EnumDecl('cef_log_severity_t'), EnumDecl('cef_errorcode_t'))
    assert [f.name for f in ir.globals] == ['execute_process', 'shutdown']


def test_aliases_are_sorted_by_name(parser: DeclarationParser, sample_file: Path) -> None:
    ir = IR.load(str(sample_file), parser)

    names = [a.name for a in ir.aliases]
    assert names == sorted(names)
    assert TypeAlias('cef_color_t', 'u32') in ir.aliases
    assert TypeAlias('cef_string_t', 'CefStringUtf16') in ir.aliases
    assert TypeAlias('cef_browser_t', 'Browser') in ir.aliases


def test_later_alias_wins(parser: DeclarationParser) -> None:
    ir = parser.parse('pub type cef_color_t = u32;\npub type cef_color_t = u64;\n')
    assert ir.aliases == (TypeAlias('cef_color_t', 'u64'),)


def test_struct_fields_and_slots(parser: DeclarationParser, sample_file: Path) -> None:
    ir = IR.load(str(sample_file), parser)

    browser = ir.get_struct('Browser')
    assert browser.name == '_cef_browser_t'
    assert browser.field_names == ['base']
    assert browser.fields[0].type == 'BaseRefCounted'
    assert [m.name for m in browser.methods] == ['is_valid', 'stop_load']

    is_valid = browser.methods[0]
    assert isinstance(is_valid, MethodDecl)
    assert is_valid.receiver.name == 'self_'
    assert is_valid.receiver.foreign_type == '*mut _cef_browser_t'
    assert is_valid.output == '::std::os::raw::c_int'
    assert is_valid.foreign_output == '::std::os::raw::c_int'
    assert browser.methods[1].output is None


def test_field_types(parser: DeclarationParser, sample_file: Path) -> None:
    ir = IR.load(str(sample_file), parser)

    main_args = ir.get_struct('MainArgs')
    assert [(f.host_name, f.type) for f in main_args.fields] == [
        ('argc', '::std::os::raw::c_int'),
        ('argv', '*mut *mut ::std::os::raw::c_char'),
    ]
    sandbox = ir.get_struct('Sandbox')
    assert sandbox.field_names == ['_unused']
    assert sandbox.fields[0].type == '[u8; 0]'


def test_base_types_collected(parser: DeclarationParser, sample_file: Path) -> None:
    ir = IR.load(str(sample_file), parser)

    assert ir.base_types.base('Browser') == 'BaseRefCounted'
    assert ir.base_types.root('Browser') == 'BaseRefCounted'
    assert ir.base_types.base('Rect') is None


def test_global_fn_arguments(parser: DeclarationParser, sample_file: Path) -> None:
    ir = IR.load(str(sample_file), parser)

    execute = ir.globals[0]
    assert execute.original_name == 'cef_execute_process'
    assert [(a.host_name, a.type) for a in execute.args] == [
        ('args', 'MainArgs'),
        ('windows_sandbox_info', '*mut ::std::os::raw::c_void'),
    ]
    assert execute.args[0].foreign_type == '*const cef_main_args_t'
    assert execute.output == '::std::os::raw::c_int'


def test_keyword_prefixed_identifiers(parser: DeclarationParser) -> None:
    source = '''
pub struct _cef_key_t {
    pub public_key: u32,
    pub mutable_flag: u32,
    pub constness: u32,
}
'''
    ir = parser.parse(source)
    assert ir.structs[0].field_names == ['public_key', 'mutable_flag', 'constness']


def test_multi_field_tuple_struct_ignored(parser: DeclarationParser) -> None:
    ir = parser.parse('pub struct cef_pair_t(pub u32, pub u32);\npub struct cef_unit_t;\n')
    assert ir.enums == ()
    assert ir.structs == ()


def test_extern_block_without_unsafe_ignored(parser: DeclarationParser) -> None:
    ir = parser.parse('extern "C" {\n    pub fn cef_shutdown();\n}\n')
    assert ir.globals == ()


def test_extern_block_other_abi_ignored(parser: DeclarationParser) -> None:
    ir = parser.parse('unsafe extern "system" {\n    pub fn cef_shutdown();\n}\n')
    assert ir.globals == ()


def test_variadic_global_fn_excluded(parser: DeclarationParser,
                                     caplog: pytest.LogCaptureFixture) -> None:
    source = (
        'unsafe extern "C" {\n'
        '    pub fn cef_log(fmt: *const ::std::os::raw::c_char, ...);\n'
        '    pub fn cef_shutdown();\n'
        '}\n'
    )
    with caplog.at_level(logging.INFO, logger='cef_bindgen'):
        ir = parser.parse(source)

    assert [f.name for f in ir.globals] == ['shutdown']
    assert 'cef_log excluded: variadic' in caplog.text


def test_parse_failure(parser: DeclarationParser) -> None:
    with pytest.raises(ParseFailure) as excinfo:
        parser.parse('pub struct _cef_broken_t {\n    pub x: u32\n', source_name='broken.rs')
    assert excinfo.value.source_name == 'broken.rs'
    assert 'broken.rs' in str(excinfo.value)


def test_parse_failure_reports_position(parser: DeclarationParser) -> None:
    with pytest.raises(ParseFailure) as excinfo:
        parser.parse('pub type cef_color_t = ;\n')
    assert excinfo.value.line == 1


def test_load_missing_file(parser: DeclarationParser, tmp_path: Path) -> None:
    missing = tmp_path / 'missing.rs'
    with pytest.raises(ParseFailure) as excinfo:
        IR.load(str(missing), parser)
    assert excinfo.value.source_name == str(missing)
    assert isinstance(excinfo.value.error, FileNotFoundError)


def test_load_undecodable_file(parser: DeclarationParser, tmp_path: Path) -> None:
    source = tmp_path / 'bindings.rs'
    source.write_bytes(b'pub type cef_color_t = u32;\n\xff\n')
    with pytest.raises(ParseFailure) as excinfo:
        IR.load(str(source), parser)
    assert isinstance(excinfo.value.error, UnicodeDecodeError)
    assert excinfo.value.line is None
