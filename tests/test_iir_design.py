import cmath
import math

import pytest

from npukit.iir_design import (
    ZeroPolePair,
    Zpk,
    bilinear,
    butterworth,
    count_real,
    cplxreal,
    is_real,
    lp2lp_zpk,
    nearest_real_or_complex,
    to_sos,
    warp_freq,
    zpk2tf,
    zpk2tf_poly,
)


def _dc_gain_zpk(f):
    num = f.k * math.prod((1 - z for z in f.z), start=complex(1))
    den = math.prod((1 - p for p in f.p), start=complex(1))
    return (num / den).real


def _dc_gain_sos(sos):
    return math.prod(sum(row[:3]) / sum(row[3:]) for row in sos)


def test_butterworth_order_two_matches_table():
    f = butterworth(2)
    assert f.z == []
    assert f.k == 1
    assert f.p[0] == pytest.approx(complex(-0.7071067811865476, -0.7071067811865476))
    assert f.p[1] == pytest.approx(complex(-0.7071067811865476, 0.7071067811865476))


def test_butterworth_order_five_middle_pole_is_minus_one():
    f = butterworth(5)
    assert f.p[2] == pytest.approx(complex(-1.0, 0.0))
    assert f.p[0] == pytest.approx(complex(-0.30901699437494745, -0.9510565162951535))


@pytest.mark.parametrize("order", range(1, 13))
def test_butterworth_poles_on_left_unit_circle(order):
    f = butterworth(order)
    assert len(f.p) == order
    for p in f.p:
        assert abs(p) == pytest.approx(1.0)
        assert p.real < 0
    for a, b in zip(f.p, reversed(f.p)):
        assert a == pytest.approx(b.conjugate())


@pytest.mark.parametrize("order", [0, 13, -1])
def test_butterworth_unsupported_order_is_empty(order):
    f = butterworth(order)
    assert f.z == [] and f.p == [] and f.k == 1


def test_bilinear_pads_zeros_and_keeps_stability():
    digital = bilinear(lp2lp_zpk(butterworth(4), 0.8), 2.0)
    assert len(digital.z) == len(digital.p) == 4
    assert all(z == -1 for z in digital.z)
    assert all(abs(p) < 1 for p in digital.p)


def test_bilinear_preserves_dc_gain():
    digital = bilinear(butterworth(3), 2.0)
    assert _dc_gain_zpk(digital) == pytest.approx(1.0)


def test_zpk2tf_poly_conjugate_pair():
    assert zpk2tf_poly(1 + 2j, 1 - 2j) == pytest.approx([1.0, -2.0, 5.0])


def test_zpk2tf_scales_numerator_only():
    pair = ZeroPolePair(p1=0.5 + 0.5j, p2=0.5 - 0.5j, z1=-1 + 0j, z2=-1 + 0j)
    unit = zpk2tf(pair, 1.0)
    scaled = zpk2tf(pair, 3.0)
    assert len(scaled) == 6
    assert scaled[:3] == pytest.approx([3 * c for c in unit[:3]])
    assert scaled[3:] == unit[3:]
    assert unit[3] == 1.0


def test_is_real_and_count_real():
    assert is_real(2 + 0j)
    assert not is_real(2 + 1e-300j)
    assert count_real([1 + 0j, 1j, -3 + 0j, 2 - 1j]) == 2


def test_cplxreal_merges_conjugates():
    assert cplxreal([1 - 1j, -2 + 0j, 1 + 1j]) == [-2 + 0j, 1 + 1j]


def test_cplxreal_keeps_unpaired_values():
    values = [3 + 0j, 0.5 + 2j, -1 + 0j]
    result = cplxreal(values)
    assert sorted(result, key=lambda c: c.real) == result
    assert set(result) == set(values)


def test_nearest_real_or_complex():
    values = [0j, 2 + 0j, 1 + 1j]
    assert nearest_real_or_complex(values, 1.9 + 0j, True) == 1
    assert nearest_real_or_complex(values, 1.9 + 0j, False) == 2


def test_nearest_real_or_complex_without_candidates():
    with pytest.raises(ValueError):
        nearest_real_or_complex([1 + 0j, 2 + 0j], 0j, False)


def test_warp_freq_quarter_rate():
    assert warp_freq(1000.0, 4000.0) == pytest.approx(4.0)


def test_warp_freq_is_monotonic():
    values = [warp_freq(f, 8000.0) for f in (100.0, 500.0, 1000.0, 3000.0)]
    assert values == sorted(values)


def test_lp2lp_round_trip():
    original = butterworth(3)
    back = lp2lp_zpk(lp2lp_zpk(original, 2.0), 0.5)
    assert back.k == pytest.approx(original.k)
    assert back.p == pytest.approx(original.p)


def test_lp2lp_scales_pole_magnitude():
    moved = lp2lp_zpk(butterworth(4), 2.5)
    assert [abs(p) for p in moved.p] == pytest.approx([2.5] * 4)


def test_to_sos_of_empty_filter():
    assert to_sos(Zpk([], [], 2.0)) == [[2.0, 0.0, 0.0, 1.0, 0.0, 0.0]]


@pytest.mark.parametrize("order", [1, 2, 3, 4, 5, 8])
def test_to_sos_sections_and_dc_gain(order):
    digital = bilinear(lp2lp_zpk(butterworth(order), 0.5), 2.0)
    sos = to_sos(digital)
    assert len(sos) == (order + 1) // 2
    assert all(len(row) == 6 and row[3] == 1.0 for row in sos)
    assert _dc_gain_sos(sos) == pytest.approx(1.0)


def test_to_sos_preserves_poles():
    digital = bilinear(lp2lp_zpk(butterworth(4), 0.5), 2.0)
    sos = to_sos(digital)
    roots = []
    for row in sos:
        a0, a1, a2 = row[3:]
        disc = cmath.sqrt(a1 * a1 - 4 * a0 * a2)
        roots += [(-a1 + disc) / 2, (-a1 - disc) / 2]
    for p in digital.p:
        assert min(abs(p - r) for r in roots) < 1e-9