from vendor_seo.etl import keywords


def test_strip_code_fences_case_insensitive():
    assert keywords.strip_code_fences('```JSON\n["a"]\n```') == '["a"]'


def test_parse_strict_json_array():
    result = keywords.parse_keywords('[" best tailor Yaba ", "aso ebi Lagos"]')
    assert result.keywords == ["best tailor Yaba", "aso ebi Lagos"]
    assert result.strict is True


def test_parse_falls_back_for_mixed_array():
    result = keywords.parse_keywords('["bridal gowns Owerri", 5]')
    assert result.strict is False
    assert result.keywords == ["bridal gowns Owerri"]


def test_parse_fallback_strips_quotes_and_short_fragments():
    result = keywords.parse_keywords('"buy ankara online", \'cheap lace\'\nok;\n')
    assert result.keywords == ["buy ankara online", "cheap lace"]
    assert result.raw.startswith('"buy')


def test_parse_empty_reply():
    result = keywords.parse_keywords("")
    assert result.keywords == []
    assert result.strict is False
