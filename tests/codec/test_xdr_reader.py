"""
Tests for the XDR cursor reader.

Covers big-endian integer widths, padding, length sanity bounds, and the
guarantee that a short buffer fails instead of wrapping or padding.
"""

import pytest

from stellar_client.codec.reader import XdrReader
from stellar_client.codec.writer import XdrWriter
from stellar_client.runtime.errors import (
    DecodeError,
    ErrorCode,
    MalformedCountError,
    TruncatedInputError,
    UnknownDiscriminantError,
)


class TestIntegers:
    """Fixed-width integer reads"""

    def test_int32_big_endian_signed(self):
        reader = XdrReader(b"\xff\xff\xff\xfe\x00\x00\x01\x00")
        assert reader.read_int32() == -2
        assert reader.read_int32() == 256
        assert reader.eof

    def test_uint32_high_bit(self):
        assert XdrReader(b"\xff\xff\xff\xff").read_uint32() == 2 ** 32 - 1

    def test_int64_extremes(self):
        data = XdrWriter().int64(2 ** 63 - 1).int64(-(2 ** 63)).to_bytes()
        reader = XdrReader(data)
        assert reader.read_int64() == 9223372036854775807
        assert reader.read_int64() == -9223372036854775808

    def test_uint64(self):
        assert XdrReader(b"\xff" * 8).read_uint64() == 2 ** 64 - 1

    @pytest.mark.parametrize("method,size", [
        ("read_int32", 4),
        ("read_uint32", 4),
        ("read_int64", 8),
        ("read_uint64", 8),
    ])
    def test_short_buffer_raises_truncated(self, method, size):
        for n in range(size):
            reader = XdrReader(b"\x01" * n)
            with pytest.raises(TruncatedInputError) as exc:
                getattr(reader, method)()
            assert exc.value.needed == size
            assert exc.value.available == n
            # failed read does not move the cursor
            assert reader.offset == 0


class TestCursor:
    """Offset bookkeeping"""

    def test_starting_offset(self):
        reader = XdrReader(b"\x00\x00\x00\x01\x00\x00\x00\x02", offset=4)
        assert reader.read_int32() == 2

    def test_offset_out_of_range(self):
        with pytest.raises(ValueError):
            XdrReader(b"\x00" * 4, offset=5)
        with pytest.raises(ValueError):
            XdrReader(b"\x00" * 4, offset=-1)

    def test_remaining_and_eof(self):
        reader = XdrReader(b"\x00" * 12)
        assert reader.remaining == 12
        reader.read_int64()
        assert reader.offset == 8
        assert reader.remaining == 4
        assert not reader.eof
        reader.read_int32()
        assert reader.eof

    def test_expect_eof(self):
        reader = XdrReader(b"\x00" * 8)
        reader.read_int32()
        with pytest.raises(DecodeError, match="trailing bytes"):
            reader.expect_eof()
        reader.read_int32()
        reader.expect_eof()

    def test_buffer_is_copied(self):
        buf = bytearray(b"\x00\x00\x00\x05")
        reader = XdrReader(buf)
        buf[3] = 9
        assert reader.read_int32() == 5

    def test_accepts_memoryview(self):
        assert XdrReader(memoryview(b"\x00\x00\x00\x07")).read_int32() == 7

    def test_rejects_non_bytes(self):
        with pytest.raises(TypeError):
            XdrReader("not bytes")


class TestBool:

    def test_true_false(self):
        reader = XdrReader(XdrWriter().bool(True).bool(False).to_bytes())
        assert reader.read_bool() is True
        assert reader.read_bool() is False

    def test_invalid_bool(self):
        with pytest.raises(UnknownDiscriminantError) as exc:
            XdrReader(b"\x00\x00\x00\x02").read_bool()
        assert exc.value.tag == 2


class TestOpaque:
    """Fixed and variable opaque data, strings"""

    def test_fixed_opaque_consumes_padding(self):
        reader = XdrReader(b"abc\x00\x00\x00\x00\x09")
        assert reader.read_fixed_opaque(3) == b"abc"
        assert reader.offset == 4
        assert reader.read_int32() == 9

    @pytest.mark.parametrize("data,n", [
        (b"abc\x01", 3),
        (b"ab\x00\x07", 2),
        (b"a\xff\x00\x00", 1),
    ])
    def test_fixed_opaque_non_zero_padding_rejected(self, data, n):
        with pytest.raises(DecodeError) as exc:
            XdrReader(data).read_fixed_opaque(n)
        assert exc.value.code == ErrorCode.INVALID_PADDING

    def test_var_opaque_non_zero_padding_rejected(self):
        data = XdrWriter().uint32(1).raw(b"x\x00\x00\x01").to_bytes()
        with pytest.raises(DecodeError, match="padding"):
            XdrReader(data).read_var_opaque()

    def test_fixed_opaque_missing_padding_is_truncated(self):
        with pytest.raises(TruncatedInputError):
            XdrReader(b"abc").read_fixed_opaque(3)

    def test_var_opaque(self):
        data = XdrWriter().var_opaque(b"hello").to_bytes()
        assert len(data) == 12
        reader = XdrReader(data)
        assert reader.read_var_opaque() == b"hello"
        assert reader.eof

    def test_var_opaque_declared_length_beyond_buffer(self):
        data = XdrWriter().uint32(100).raw(b"short").to_bytes()
        with pytest.raises(TruncatedInputError):
            XdrReader(data).read_var_opaque()

    def test_var_opaque_length_above_bound_rejected_before_read(self):
        data = XdrWriter().uint32(0x7FFFFFF0).to_bytes()
        with pytest.raises(MalformedCountError) as exc:
            XdrReader(data).read_var_opaque()
        assert exc.value.count == 0x7FFFFFF0

    def test_var_opaque_explicit_max(self):
        data = XdrWriter().var_opaque(b"toolong").to_bytes()
        with pytest.raises(MalformedCountError):
            XdrReader(data).read_var_opaque(max_len=4)

    def test_length_with_high_bit_is_malformed(self):
        with pytest.raises(MalformedCountError) as exc:
            XdrReader(b"\xff\xff\xff\xff").read_var_opaque()
        assert exc.value.count == -1

    def test_string(self):
        data = XdrWriter().string("héllo").to_bytes()
        assert XdrReader(data).read_string() == "héllo"

    def test_string_invalid_utf8(self):
        data = XdrWriter().var_opaque(b"\xff\xfe").to_bytes()
        with pytest.raises(DecodeError):
            XdrReader(data).read_string()


class TestComposite:

    def test_optional_present_and_absent(self):
        data = XdrWriter().bool(True).int32(42).bool(False).to_bytes()
        reader = XdrReader(data)
        assert reader.read_optional(XdrReader.read_int32) == 42
        assert reader.read_optional(XdrReader.read_int32) is None
        assert reader.eof

    def test_array(self):
        data = XdrWriter().int32(3).int32(1).int32(2).int32(3).to_bytes()
        assert XdrReader(data).read_array(XdrReader.read_int32, max_count=10) == [1, 2, 3]

    def test_array_count_above_limit(self):
        data = XdrWriter().int32(11).to_bytes()
        with pytest.raises(MalformedCountError) as exc:
            XdrReader(data).read_array(XdrReader.read_int32, max_count=10)
        assert exc.value.limit == 10

    def test_array_negative_count(self):
        data = XdrWriter().int32(-1).to_bytes()
        with pytest.raises(MalformedCountError):
            XdrReader(data).read_array(XdrReader.read_int32, max_count=10)
