import pytest

from tinmesh.predicates import (
    orient2d, incircle, orient2d_sign, incircle_sign, strictly_between,
)


def test_orient2d_signs():
    assert orient2d_sign((0, 0), (1, 0), (0, 1)) == 1
    assert orient2d_sign((0, 0), (0, 1), (1, 0)) == -1
    assert orient2d_sign((0, 0), (1, 1), (2, 2)) == 0
    assert orient2d((0, 0), (1, 0), (0, 1)) == pytest.approx(1.0)


def test_incircle_signs():
    a, b, c = (0, 0), (1, 0), (0, 1)
    assert incircle_sign(a, b, c, (0.5, 0.5)) == 1
    assert incircle_sign(a, b, c, (2.0, 2.0)) == -1
    # (1, 1) лежить на колі через три кути квадрата
    assert incircle_sign(a, b, c, (1, 1)) == 0
    assert incircle(a, b, c, (0.5, 0.5)) > 0


def test_orient2d_near_collinear_is_exact():
    # точки біля прямої y = x з кроком в один ulp: наївний float тут плутає знаки
    q, r = (12.0, 12.0), (24.0, 24.0)
    eps = 2.0 ** -53
    for i in range(16):
        for j in range(16):
            x = 0.5 + i * eps
            y = 0.5 + j * eps
            expected = (j > i) - (j < i)  # ліворуч від q->r, якщо y > x
            assert orient2d_sign(q, r, (x, y)) == expected
            assert orient2d_sign((x, y), q, r) == expected


def test_incircle_rectangle_far_from_origin_is_cocircular():
    # кути прямокутника завжди на одному колі, хоч би як округлились координати
    ox, oy = 1e6 + 0.1, 2e6 + 0.3
    a, b, c, d = (ox, oy), (ox + 1, oy), (ox + 1, oy + 1), (ox, oy + 1)
    assert incircle_sign(a, b, c, d) == 0
    assert incircle_sign(b, c, d, a) == 0


def test_incircle_exact_integer_cocircular():
    a, b, c, d = (0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)
    assert incircle_sign(a, b, c, d) == 0
    assert incircle_sign(b, c, d, a) == 0


@pytest.mark.parametrize("p, expected", [
    ((0.5, 0.0), True),
    ((0.0, 0.0), False),
    ((1.5, 0.0), False),
    ((-0.5, 0.0), False),
])
def test_strictly_between_horizontal(p, expected):
    assert strictly_between((0.0, 0.0), (1.0, 0.0), p) is expected


def test_strictly_between_vertical():
    assert strictly_between((2.0, 0.0), (2.0, 3.0), (2.0, 1.0))
    assert not strictly_between((2.0, 0.0), (2.0, 3.0), (2.0, 4.0))
