from strata.locale import Locale


def test_parse_splits_subtags_by_shape():
    loc = Locale.parse("zh-Hant-TW")

    assert loc.language == "zh"
    assert loc.script == "Hant"
    assert loc.region == "TW"
    assert loc.variant is None
    assert loc.spec == "zh-Hant-TW"


def test_numeric_region_and_variant():
    loc = Locale.parse("es-419-VALENCIA")

    assert loc.region == "419"
    assert loc.variant == "VALENCIA"


def test_region_without_language_normalizes_to_und():
    loc = Locale.parse("DE")

    assert loc.language is None
    assert loc.spec == "und-DE"
    assert not loc.has_language()


def test_root_and_empty_are_root():
    assert Locale.parse("root").is_root()
    assert Locale.parse("").is_root()
    assert str(Locale.parse(None)) == "root"


def test_malformed_locale_has_no_subtags():
    loc = Locale.parse("en-#")

    assert loc.is_malformed()
    assert loc.language is None
    assert loc.spec == "root"


def test_parse_returns_locale_instances_unchanged():
    loc = Locale.parse("it-CH")
    assert Locale.parse(loc) is loc
