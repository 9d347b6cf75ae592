import math
import struct

import pytest

from helpers import pack_binary_stl
from stlcodec.binary import DATA_OFFSET, RECORD_DTYPE, RECORD_SIZE, decode_binary, encode_binary
from stlcodec.errors import CountOverflowError, DecodeError, TruncatedError
from stlcodec.geometry import Triangle
from stlcodec.mesh import AsciiHeader, BinaryHeader, Mesh

TRI = ((0.0, 0.0, 1.0), ((0.0, 0.0, 5.0), (1.0, 0.0, 5.0), (0.0, 1.0, 5.0)), 0)


def test_decode_hand_built_buffer():
    data = pack_binary_stl(b"OpenSCAD Model\n", [TRI, ((0, 0, -1), ((1, 1, 1), (2, 2, 2), (3, 3, 3)), 42)])
    mesh = decode_binary(data)
    assert mesh.header == BinaryHeader(b"OpenSCAD Model\n")
    assert mesh.name == "OpenSCAD Model"
    assert len(mesh) == 2
    assert mesh.triangles[0] == Triangle((0, 0, 1), ((0, 0, 5), (1, 0, 5), (0, 1, 5)))
    assert mesh.triangles[1].attribute == 42
    assert mesh.triangles[1].vertices[2] == (3, 3, 3)


def test_decode_keeps_header_bytes_verbatim():
    header = bytes(range(80))
    mesh = decode_binary(pack_binary_stl(header, []))
    assert mesh.header.data == header
    assert encode_binary(mesh)[:80] == header


def test_decode_empty_mesh():
    mesh = decode_binary(bytes(84))
    assert len(mesh) == 0
    assert mesh.header == BinaryHeader()


def test_decode_is_bit_exact():
    value = struct.unpack("<f", struct.pack("<f", 0.1))[0]
    data = pack_binary_stl(b"", [((value, -0.0, 1e-40), ((value, value, value),) * 3, 0)])
    mesh = decode_binary(data)
    assert mesh.triangles[0].normal.x == value
    assert math.copysign(1.0, mesh.triangles[0].normal.y) == -1.0
    assert encode_binary(mesh) == data


def test_decode_passes_non_finite_through():
    nan, inf = float("nan"), float("inf")
    data = pack_binary_stl(b"", [((nan, inf, -inf), ((0, 0, 0), (1, 0, 0), (0, 1, 0)), 0)])
    n = decode_binary(data).triangles[0].normal
    assert math.isnan(n.x)
    assert n.y == inf and n.z == -inf


def test_nan_payloads_survive_round_trip():
    data = bytearray(pack_binary_stl(b"", [TRI]))
    # signalling NaN, then a quiet NaN with payload
    struct.pack_into("<II", data, DATA_OFFSET, 0x7F800001, 0xFFC12345)
    data = bytes(data)
    mesh = decode_binary(data)
    assert math.isnan(mesh.triangles[0].normal.x)
    assert encode_binary(mesh) == data


def test_record_dtype_matches_layout():
    assert RECORD_DTYPE.itemsize == RECORD_SIZE
    assert [RECORD_DTYPE.fields[name][1] for name in RECORD_DTYPE.names] == [0, 12, 48]


def test_decode_accepts_memoryview_and_bytearray():
    data = pack_binary_stl(b"mv", [TRI])
    assert decode_binary(memoryview(data)) == decode_binary(bytearray(data)) == decode_binary(data)


@pytest.mark.parametrize("size", [0, 1, 80, 83])
def test_decode_short_header_is_truncated(size):
    with pytest.raises(TruncatedError) as info:
        decode_binary(bytes(size))
    assert info.value.offset == size
    assert info.value.expected == DATA_OFFSET
    assert info.value.kind == "Truncated"


def test_truncation_anywhere_in_records():
    data = pack_binary_stl(b"", [TRI] * 3)
    for cut in range(DATA_OFFSET + 1, len(data)):
        with pytest.raises(TruncatedError):
            decode_binary(data[:cut])


def test_truncated_error_points_at_incomplete_record():
    data = pack_binary_stl(b"", [TRI] * 3)
    with pytest.raises(TruncatedError) as info:
        decode_binary(data[:DATA_OFFSET + RECORD_SIZE + 10])
    err = info.value
    assert err.offset == DATA_OFFSET + RECORD_SIZE
    assert err.expected == len(data)
    assert err.available == DATA_OFFSET + RECORD_SIZE + 10
    assert "byte 134" in str(err)
    assert isinstance(err, DecodeError)
    assert isinstance(err, ValueError)


def test_declared_count_larger_than_records():
    data = pack_binary_stl(b"", [TRI] * 2, count=3)
    with pytest.raises(TruncatedError):
        decode_binary(data)


def test_trailing_bytes_are_ignored():
    data = pack_binary_stl(b"", [TRI] * 2, count=1)
    mesh = decode_binary(data + b"padding")
    assert len(mesh) == 1
    assert encode_binary(mesh) == data[:DATA_OFFSET + RECORD_SIZE]


def test_encode_layout(single_triangle):
    mesh = Mesh([Triangle(single_triangle.normal, single_triangle.vertices, 0xBEEF)], BinaryHeader(b"hdr"))
    data = encode_binary(mesh)
    assert len(data) == DATA_OFFSET + RECORD_SIZE
    assert data[:80] == b"hdr" + bytes(77)
    assert struct.unpack_from("<I", data, 80) == (1,)
    assert struct.unpack_from("<12f", data, 84) == (0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0)
    assert struct.unpack_from("<H", data, 132) == (0xBEEF,)


def test_encode_ascii_header_uses_name(single_triangle):
    data = encode_binary(Mesh([single_triangle], AsciiHeader("cube")))
    assert data[:80] == b"cube" + bytes(76)


def test_round_trip(binary_cube):
    assert decode_binary(encode_binary(binary_cube)) == binary_cube


def test_round_trip_odd_values(odd_mesh):
    mesh = Mesh(odd_mesh.triangles, BinaryHeader(b"\xff\x00solid odd"))
    assert decode_binary(encode_binary(mesh)) == mesh


def test_encode_count_overflow(single_triangle):
    class Huge(list):
        def __len__(self):
            return 2 ** 32

    with pytest.raises(CountOverflowError) as info:
        encode_binary(Mesh(Huge([single_triangle])))
    assert info.value.count == 2 ** 32
    assert info.value.kind == "CountOverflow"
