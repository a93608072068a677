import math

import pytest
import torch

from shoeboxrir import compute_rir

C = 343.0
FS = 2000.0
ROOM = [3.0, 2.5, 2.0]
BETA = [0.9, 0.7, 0.8, 0.6, 0.75, 0.5]
SOURCE = [1.9, 1.2, 1.1]
MICS = [[1.0, 0.8, 0.7], [2.2, 1.7, 1.3]]
NSAMPLE = 128
PATTERNS = {
    "o": (1.0, 0.0),
    "s": (0.75, 0.25),
    "c": (0.5, 0.5),
    "h": (0.25, 0.75),
    "b": (0.0, 1.0),
}


def _sinc(x):
    return 1.0 if x == 0 else math.sin(x) / x


def _reference_rir(mic, *, order, pattern, angle, dim, lp, hp, window_seconds=0.008):
    """Scalar image-source loop, one path at a time."""
    cts = C / FS
    r = [v / cts for v in mic]
    s = [v / cts for v in SOURCE]
    size = [v / cts for v in ROOM]
    p_coef, pg_coef = PATTERNS[pattern[0]]
    tw = max(1, math.floor(window_seconds * FS + 0.5))
    hann = [0.5 * (1 + math.cos(2 * math.pi * (n + tw // 2) / tw)) for n in range(tw + 1)]
    bound = [math.ceil(NSAMPLE / (2 * size[i])) * dim[i] for i in range(3)]
    h = [0.0] * NSAMPLE

    for mx in range(-bound[0], bound[0] + 1):
        for my in range(-bound[1], bound[1] + 1):
            for mz in range(-bound[2], bound[2] + 1):
                for q in range(dim[0] + 1):
                    hx = s[0] - r[0] + 2 * q * r[0] + 2 * mx * size[0]
                    rx = BETA[0] ** abs(mx) * BETA[1] ** abs(mx + q)
                    for j in range(dim[1] + 1):
                        hy = s[1] - r[1] + 2 * j * r[1] + 2 * my * size[1]
                        ry = BETA[2] ** abs(my) * BETA[3] ** abs(my + j)
                        for k in range(dim[2] + 1):
                            hz = s[2] - r[2] + 2 * k * r[2] + 2 * mz * size[2]
                            rz = BETA[4] ** abs(mz) * BETA[5] ** abs(mz + k)
                            bounces = abs(2 * mx + q) + abs(2 * my + j) + abs(2 * mz + k)
                            if order != -1 and bounces > order:
                                continue
                            dist = math.sqrt(hx * hx + hy * hy + hz * hz)
                            fdist = math.floor(dist)
                            if fdist >= NSAMPLE:
                                continue
                            gain = p_coef + pg_coef * math.cos(math.atan2(hy, hx) - angle)
                            strength = gain * rx * ry * rz / (4 * math.pi * dist * cts)
                            if lp:
                                pos = fdist - tw // 2
                                for n in range(tw + 1):
                                    if 0 <= pos + n < NSAMPLE:
                                        h[pos + n] += strength * hann[n] * _sinc(
                                            math.pi * (n - (dist - fdist) - tw // 2)
                                        )
                            else:
                                h[fdist] += strength

    if hp:
        w = 2 * math.pi * 100 / FS
        rr = math.exp(-w)
        b1, b2 = 2 * rr * math.cos(w), -rr * rr
        a1, a2 = -(1 + rr), rr
        y0 = y1 = y2 = 0.0
        for idx in range(NSAMPLE):
            y2, y1 = y1, y0
            y0 = b1 * y1 + b2 * y2 + h[idx]
            h[idx] = y0 + a1 * y1 + a2 * y2
    return torch.tensor(h, dtype=torch.float64)


@pytest.mark.parametrize(
    "order, pattern, angle, dim, lp, hp",
    [
        (-1, "omnidirectional", 0.0, (1, 1, 1), True, True),
        (2, "omnidirectional", 0.0, (1, 1, 1), False, False),
        (3, "cardioid", math.pi / 3, (1, 1, 1), True, False),
        (-1, "hypercardioid", -0.7, (1, 1, 0), False, True),
        (-1, "bidirectional", -math.pi / 2, (1, 0, 1), True, True),
        (4, "subcardioid", 2.0, (0, 1, 1), True, True),
    ],
)
def test_compute_rir_matches_scalar_image_loop(order, pattern, angle, dim, lp, hp):
    h, _ = compute_rir(
        C,
        FS,
        MICS,
        [SOURCE],
        ROOM,
        beta=BETA,
        nsample=NSAMPLE,
        mic_pattern=pattern,
        max_order=order,
        dim=dim,
        orientation=angle,
        high_pass=hp,
        low_pass_interp=lp,
        max_workers=2,
    )
    assert h.shape == (NSAMPLE, len(MICS), 1)
    for mic_idx, mic in enumerate(MICS):
        expected = _reference_rir(
            mic, order=order, pattern=pattern, angle=angle, dim=dim, lp=lp, hp=hp
        )
        assert torch.count_nonzero(expected) > 0
        assert torch.allclose(h[:, mic_idx, 0], expected, rtol=1e-9, atol=1e-12)
