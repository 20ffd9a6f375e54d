from common.audit_engine.text import (
    build_vocabulary,
    count_keywords,
    detect_delimiter,
    determine_units_standard,
    extract_segment_labels,
    normalize,
    split_segments,
    strip_extension,
)


def test_normalize_strips_control_and_format_characters():
    assert normalize("ARCH\u202a-L01\u200b\x00") == "ARCH-L01"


def test_normalize_keeps_ordinary_whitespace_and_non_strings():
    assert normalize("a\tb\nc\r\n") == "a\tb\nc\r\n"
    assert normalize(12.5) == 12.5
    assert normalize(None) is None
    assert normalize(True) is True


def test_vocabulary_contains_whole_tokens_and_hyphen_parts():
    vocab = build_vocabulary("ARCH-L01-001 Rev A")
    assert {"ARCH-L01-001", "ARCH", "L01", "001", "REV", "A"} <= vocab


def test_vocabulary_splits_on_separators_and_strips_brackets():
    vocab = build_vocabulary("codes: (ZZ), [B1]; {XX}|m3")
    assert {"CODES:", "ZZ", "B1", "XX", "M3"} <= vocab
    assert all(t == t.upper() for t in vocab)


def test_vocabulary_skips_single_character_hyphen_parts():
    vocab = build_vocabulary("A-B-CD")
    assert "A-B-CD" in vocab
    assert "CD" in vocab
    assert "B" not in vocab


def test_codes_only_vocabulary_keeps_code_shaped_tokens():
    vocab = build_vocabulary("RMC rules ABC-01 Level", codes_only=True)
    assert vocab == frozenset({"RMC", "ABC-01"})


def test_empty_corpus_gives_empty_vocabulary():
    assert build_vocabulary("") == frozenset()
    assert build_vocabulary("   \n\t") == frozenset()


def test_units_standard_counts_and_tie_goes_to_metric():
    units = determine_units_standard("Imperial units, feet and inch. Metric annex.")
    assert units.standard == "Imperial"
    assert units.imperial_count == 3
    assert units.metric_count == 1

    assert determine_units_standard("no units mentioned").standard == "Metric"
    assert determine_units_standard("metric or imperial").standard == "Metric"


def test_count_keywords_is_case_insensitive():
    assert count_keywords("Millimeter METER meter", ["meter"]) == 3


def test_name_helpers():
    assert strip_extension("RMC-ABC-000001.rvt") == "RMC-ABC-000001"
    assert strip_extension("folder.v2/model") == "folder.v2/model"
    assert detect_delimiter("A-B_C") == "-"
    assert detect_delimiter("A_B") == "_"
    assert detect_delimiter("AB") is None
    assert split_segments("RMC_ABC_01") == ["RMC", "ABC", "01"]
    assert split_segments("PLAIN") == ["PLAIN"]


def test_segment_labels_come_from_first_bracket_structure():
    text = "Naming: [Project]-[Originator]_[Number]\nOther: [X]-[Y]"
    assert extract_segment_labels(text) == ["Project", "Originator", "Number"]
    assert extract_segment_labels("no structure [here]") == []
