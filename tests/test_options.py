"""Consistency checks for the static option catalog and presets."""
from __future__ import annotations

from robackup.models.job import MULTILINE_FLAGS, SIMULATE_FLAG
from robackup.models.options import (
    CATALOG,
    OPTIONS_BY_FLAG,
    PRESETS,
    SECTIONS,
    OptionKind,
    destructive_flags,
    options_in_section,
)


def test_flags_are_unique() -> None:
    flags = [o.flag for o in CATALOG]
    assert len(flags) == len(set(flags))


def test_every_option_belongs_to_a_known_section() -> None:
    known = {key for key, _title in SECTIONS}
    assert {o.section for o in CATALOG} <= known
    assert sum(len(options_in_section(key)) for key in known) == len(CATALOG)


def test_special_flags_are_in_catalog() -> None:
    assert OPTIONS_BY_FLAG[SIMULATE_FLAG].kind is OptionKind.TOGGLE
    for flag in MULTILINE_FLAGS:
        assert OPTIONS_BY_FLAG[flag].kind is OptionKind.MULTILINE


def test_numeric_bounds_and_charsets() -> None:
    for opt in CATALOG:
        if opt.kind is OptionKind.NUMBER:
            assert opt.minimum is not None and opt.maximum is not None
            assert 0 < opt.minimum <= opt.maximum
        if opt.kind is OptionKind.CHARSET:
            assert opt.charset and len(set(opt.charset)) == len(opt.charset)


def test_presets_only_use_catalog_flags() -> None:
    for preset in PRESETS:
        for flag, value in preset.options.items():
            opt = OPTIONS_BY_FLAG[flag]
            if opt.kind is OptionKind.TOGGLE:
                assert value is True
            elif opt.kind is OptionKind.NUMBER:
                assert opt.minimum <= value <= opt.maximum


def test_destructive_flags_only_reports_enabled_options() -> None:
    options = {"/MIR": True, "/PURGE": False, "/E": True, "/R": 3, "/MOVE": True}
    assert destructive_flags(options) == ["/MIR", "/MOVE"]
