import pytest

from mnemosyne.signature import (
    SigElement,
    Signature,
    parse_byte,
    parse_nibble,
    parse_signature,
)


def test_parse_each_hex_letter():
    sig = parse_signature("01 23 45 67 89 AB CD EF")
    expected = [0x01, 0x23, 0x45, 0x67, 0x89, 0xAB, 0xCD, 0xEF]
    assert [element.byte for element in sig] == expected
    assert all(element.mask == 0xFF for element in sig)


def test_wildcards_and_syntax_edge_cases():
    sig = parse_signature("1 2? ?4 ? ?? 9A BCDE F")
    pairs = [(element.byte, element.mask) for element in sig]
    assert pairs == [
        (0x01, 0xFF),
        (0x20, 0xF0),
        (0x04, 0x0F),
        (0x00, 0x00),
        (0x00, 0x00),
        (0x9A, 0xFF),
        (0xBC, 0xFF),
        (0xDE, 0xFF),
        (0x0F, 0xFF),
    ]


def test_lower_case_hex_is_accepted():
    assert parse_signature("ab cd") == parse_signature("AB CD")


def test_extra_spaces_are_ignored():
    assert parse_signature("  01   02 ") == parse_signature("01 02")


def test_empty_text_gives_empty_signature():
    assert len(parse_signature("")) == 0
    assert len(parse_signature("    ")) == 0


def test_odd_length_run_ends_with_single_digit():
    sig = parse_signature("BCDEF")
    assert [element.byte for element in sig] == [0xBC, 0xDE, 0x0F]


def test_parse_nibble_values():
    assert parse_nibble("0") == 0
    assert parse_nibble("9") == 9
    assert parse_nibble("A") == 0xA
    assert parse_nibble("f") == 0xF
    assert parse_nibble("x") == 0


def test_parse_byte_double_wildcard():
    assert parse_byte("??") == SigElement(0, 0)


def test_parse_byte_empty_raises():
    with pytest.raises(ValueError):
        parse_byte("")


def test_element_clears_masked_bits():
    element = SigElement(0xAB, 0xF0)
    assert element.byte == 0xA0
    assert element.mask == 0xF0


def test_element_default_mask_is_full():
    assert SigElement(0x42).mask == 0xFF


@pytest.mark.parametrize("value", [-1, 256])
def test_element_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        SigElement(value)
    with pytest.raises(ValueError):
        SigElement(0, value)


def test_element_matches():
    element = SigElement(0x20, 0xF0)
    assert element.matches(0x2F)
    assert element.matches(0x20)
    assert not element.matches(0x30)
    assert SigElement(0, 0).matches(0xFF)


def test_subsig_offset_and_count():
    sig = parse_signature("01 02 03 04")
    assert sig.subsig(1) == parse_signature("02 03 04")
    assert sig.subsig(1, 2) == parse_signature("02 03")
    assert len(sig.subsig(4)) == 0


def test_subsig_out_of_range():
    sig = parse_signature("01 02")
    with pytest.raises(IndexError):
        sig.subsig(3)
    with pytest.raises(IndexError):
        sig.subsig(1, 2)


def test_slicing_returns_signature():
    sig = parse_signature("01 02 03")
    assert sig[1:] == parse_signature("02 03")
    assert sig[-1] == SigElement(0x03)


def test_signature_rejects_non_elements():
    with pytest.raises(TypeError):
        Signature([1, 2])


@pytest.mark.parametrize("text", ["01 2? ?4 ?? 9A", "FF EE", ""])
def test_text_round_trip(text):
    sig = parse_signature(text)
    assert parse_signature(str(sig)) == sig


def test_single_wildcard_formats_as_double():
    assert str(parse_signature("?")) == "??"


def test_signatures_hash_equal_when_equal():
    assert hash(parse_signature("01 ??")) == hash(parse_signature("1 ?"))