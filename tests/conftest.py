import pytest

from stlcodec import AsciiHeader, BinaryHeader, Mesh, Triangle

CUBE_VERTICES = [
    (0, 0, 0), (10, 0, 0), (10, 10, 0), (0, 10, 0),
    (0, 0, 10), (10, 0, 10), (10, 10, 10), (0, 10, 10),
]
CUBE_FACES = [
    (0, 2, 1), (0, 3, 2),   # bottom
    (4, 5, 6), (4, 6, 7),   # top
    (0, 1, 5), (0, 5, 4),   # front
    (2, 3, 7), (2, 7, 6),   # back
    (1, 2, 6), (1, 6, 5),   # right
    (0, 4, 7), (0, 7, 3),   # left
]


@pytest.fixture
def single_triangle():
    return Triangle((0, 0, 1), ((0, 0, 0), (1, 0, 0), (0, 1, 0)))


@pytest.fixture
def cube_mesh():
    return Mesh.from_faces(CUBE_VERTICES, CUBE_FACES, name="cube")


@pytest.fixture
def odd_mesh():
    # values that are not short decimals, negative zero, attributes
    return Mesh(
        [
            Triangle((0.1, -0.0, 1e-7), ((1 / 3, 2 / 3, -1e20), (3.4e38, -1.17549435e-38, 7), (0, 0, 0)), 0),
            Triangle((0, 0, -1), ((-5.5, 1e-45, 123456.789), (0.3, 0.2, 0.1), (1, 2, 3)), 0),
        ],
        AsciiHeader("odd values"),
    )


@pytest.fixture
def binary_cube(cube_mesh):
    header = b"OpenSCAD Model\n"
    return Mesh([Triangle(t.normal, t.vertices, i) for i, t in enumerate(cube_mesh)],
                BinaryHeader(header))
