from pathlib import Path

import pytest

from cef_bindgen import DeclarationParser, GeneratorConfig, NameMapper, NamePatterns

SAMPLE = '''\
/* automatically generated by rust-bindgen 0.71.1 */

#![allow(non_upper_case_globals)]

pub const CEF_VERSION_MAJOR: u32 = 130;
pub type char16_t = u16;
pub type cef_color_t = u32;
pub type cef_string_t = cef_string_utf16_t;
pub type cef_base_ref_counted_t = _cef_base_ref_counted_t;
pub type cef_browser_t = _cef_browser_t;
pub type cef_rect_t = _cef_rect_t;
#[doc = " CEF string type definitions."]
#[repr(C)]
#[derive(Debug, Copy, Clone)]
pub struct _cef_string_utf16_t {
    pub str_: *mut char16_t,
    pub length: usize,
    pub dtor: ::std::option::Option<unsafe extern "C" fn(str_: *mut char16_t)>,
}
#[allow(clippy::unnecessary_operation, clippy::identity_op)]
const _: () = {
    ["Size of _cef_string_utf16_t"][::std::mem::size_of::<_cef_string_utf16_t>() - 24usize];
    ["Offset of field: _cef_string_utf16_t::length"]
        [::std::mem::offset_of!(_cef_string_utf16_t, length) - 8usize];
};
pub type cef_string_utf16_t = _cef_string_utf16_t;
#[repr(C)]
#[derive(Debug, Copy, Clone)]
pub struct _cef_base_ref_counted_t {
    pub size: usize,
    pub add_ref: ::std::option::Option<unsafe extern "C" fn(self_: *mut _cef_base_ref_counted_t)>,
    pub release: ::std::option::Option<
        unsafe extern "C" fn(self_: *mut _cef_base_ref_counted_t) -> ::std::os::raw::c_int,
    >,
}
#[repr(C)]
#[derive(Debug, Copy, Clone)]
pub struct _cef_rect_t {
    pub x: ::std::os::raw::c_int,
    pub y: ::std::os::raw::c_int,
}
#[repr(C)]
#[derive(Debug, Copy, Clone)]
pub struct _cef_browser_t {
    pub base: cef_base_ref_counted_t,
    pub is_valid: ::std::option::Option<
        unsafe extern "C" fn(self_: *mut _cef_browser_t) -> ::std::os::raw::c_int,
    >,
    pub stop_load: ::std::option::Option<unsafe extern "C" fn(self_: *mut _cef_browser_t)>,
}
#[repr(C)]
#[derive(Debug, Copy, Clone)]
pub struct _cef_main_args_t {
    pub argc: ::std::os::raw::c_int,
    pub argv: *mut *mut ::std::os::raw::c_char,
}
pub type cef_main_args_t = _cef_main_args_t;
impl Default for _cef_main_args_t {
    fn default() -> Self {
        let mut s = ::std::mem::MaybeUninit::<Self>::uninit();
        unsafe {
            ::std::ptr::write_bytes(s.as_mut_ptr(), 0, 1);
            s.assume_init()
        }
    }
}
#[repr(C)]
#[derive(Debug, Copy, Clone)]
pub struct _cef_sandbox_t {
    pub _unused: [u8; 0],
}
#[repr(C)]
#[derive(Copy, Clone)]
pub union _cef_value_u {
    pub a: u32,
    pub b: f32,
}
impl cef_log_severity_t {
    pub const LOGSEVERITY_DEFAULT: cef_log_severity_t = cef_log_severity_t(0);
}
#[repr(transparent)]
#[derive(Debug, Copy, Clone, Hash, PartialEq, Eq)]
pub struct cef_log_severity_t(pub ::std::os::raw::c_uint);
#[repr(i32)]
#[derive(Debug, Copy, Clone, Hash, PartialEq, Eq)]
pub enum cef_errorcode_t {
    ERR_NONE = 0,
    ERR_FAILED = -2,
}
unsafe extern "C" {
    pub fn cef_execute_process(
        args: *const cef_main_args_t,
        windows_sandbox_info: *mut ::std::os::raw::c_void,
    ) -> ::std::os::raw::c_int;
    pub fn cef_shutdown();
}
'''


@pytest.fixture
def config() -> GeneratorConfig:
    return GeneratorConfig(formatter=())


@pytest.fixture
def mapper() -> NameMapper:
    return NameMapper(NamePatterns.default())


@pytest.fixture
def parser(mapper: NameMapper, config: GeneratorConfig) -> DeclarationParser:
    return DeclarationParser(mapper, config)


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / 'bindings.rs'
    path.write_text(SAMPLE, encoding='utf-8')
    return path


@pytest.fixture
def sample_source() -> str:
    return SAMPLE
