import pytest

from strata.locale import Locale, get_sublocales, resolve_chain, get_loc_files


def test_chain_for_language_and_region():
    assert get_sublocales("en-US") == ["root", "en", "und-US", "en-US"]


def test_chain_is_deterministic():
    first = resolve_chain("en-US")
    second = resolve_chain("en-US")
    assert first == second
    assert first is not second


def test_chain_for_language_only():
    assert get_sublocales("xx") == ["root", "xx"]


@pytest.mark.parametrize("spec", ["", "root", None])
def test_chain_for_root_locale(spec):
    assert get_sublocales(spec) == ["root"]


@pytest.mark.parametrize("spec", ["en-U$", "--", "en--US", "日本語", 42])
def test_malformed_input_yields_root_only(spec):
    assert get_sublocales(spec) == ["root"]


def test_region_only_uses_undetermined_language():
    assert get_sublocales("US") == ["root", "und-US"]
    assert get_sublocales("und-US") == ["root", "und-US"]


def test_underscore_separator_is_accepted():
    assert get_sublocales("de_DE") == ["root", "de", "und-DE", "de-DE"]


def test_chain_with_script():
    assert get_sublocales("zh-Hans-CN") == [
        "root",
        "zh",
        "und-CN",
        "zh-Hans",
        "zh-CN",
        "zh-Hans-CN",
    ]


def test_full_chain_with_script_region_and_variant():
    assert get_sublocales("sr-Latn-RS-POSIX") == [
        "root",
        "sr",
        "und-RS",
        "sr-Latn",
        "sr-RS",
        "sr-POSIX",
        "und-RS-POSIX",
        "sr-Latn-RS",
        "sr-Latn-POSIX",
        "sr-RS-POSIX",
        "sr-Latn-RS-POSIX",
    ]


def test_chain_never_repeats_entries():
    chain = get_sublocales("es-419")
    assert chain == ["root", "es", "und-419", "es-419"]
    assert len(chain) == len(set(chain))


def test_chain_accepts_locale_objects():
    assert get_sublocales(Locale.parse("fr-CA")) == ["root", "fr", "und-CA", "fr-CA"]


def test_loc_files_follow_chain_order():
    assert get_loc_files("en-US", "info.json") == [
        "info.json",
        "en/info.json",
        "und/US/info.json",
        "en/US/info.json",
    ]
