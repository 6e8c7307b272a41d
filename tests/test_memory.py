import pytest

from mnemosyne.memory import MemorySpan


def test_length_matches_data():
    data = bytes(range(10))
    span = MemorySpan(data, 0x1000)
    assert len(span) == len(data)


def test_end_address_is_one_past_last_byte():
    data = bytes(32)
    span = MemorySpan(data, 0x4000)
    assert span.end_address() == 0x4000 + len(data)


def test_default_address_is_zero():
    span = MemorySpan(b"abc")
    assert span.address == 0
    assert span.end_address() == len(b"abc")


def test_empty_span_ends_where_it_starts():
    span = MemorySpan(b"", 0x20)
    assert span.end_address() == span.address


def test_data_is_viewable_as_bytes():
    data = b"\x00\x01\x02\x03"
    span = MemorySpan(data)
    assert bytes(span.data) == data


def test_bytes_input_is_readonly():
    assert MemorySpan(b"xy").readonly is True


def test_writable_buffer_stays_writable():
    buffer = bytearray(4)
    span = MemorySpan(buffer)
    assert span.readonly is False
    span.data[2] = 0x7F
    assert buffer[2] == 0x7F


def test_multibyte_format_is_flattened():
    words = memoryview(bytearray(8)).cast("I")
    span = MemorySpan(words)
    assert len(span) == words.nbytes
    assert span.data.format == "B"


def test_negative_address_rejected():
    with pytest.raises(ValueError):
        MemorySpan(b"a", -1)


def test_non_integer_address_rejected():
    with pytest.raises(TypeError):
        MemorySpan(b"a", "0")