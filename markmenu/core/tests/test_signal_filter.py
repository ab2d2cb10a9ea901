from markmenu.core.config import TraceSettings
from markmenu.core.one_euro import LowPass, OneEuro, PointFilter, smoothing_factor
from markmenu.core.signal import Signal
from markmenu.core.types import Point


def test_signal_delivers_in_order_and_unsubscribes():
    sig = Signal()
    seen = []
    sig.subscribe(lambda v: seen.append(("a", v)))
    off = sig.subscribe(lambda v: seen.append(("b", v)))
    sig.emit(1)
    off()
    sig.emit(2)
    assert seen == [("a", 1), ("b", 1), ("a", 2)]
    assert len(sig) == 1


def test_one_euro_first_sample_passes_through():
    f = OneEuro()
    assert f.apply(10.0, 0.0) == 10.0


def test_one_euro_damps_jitter():
    f = OneEuro(min_cutoff=1.0, beta=0.0)
    f.apply(0.0, 0.0)
    out = [f.apply(5.0 if i % 2 else -5.0, (i + 1) * 0.016) for i in range(20)]
    assert max(abs(v) for v in out) < 5.0


def test_point_filter_reset():
    pf = PointFilter(TraceSettings())
    pf.apply(Point(0, 0), 0)
    pf.apply(Point(100, 100), 16)
    pf.reset()
    assert pf.apply(Point(50, 60), 32) == Point(50, 60)


def test_smoothing_factor_grows_with_cutoff():
    slow = smoothing_factor(1.0, 0.016)
    fast = smoothing_factor(50.0, 0.016)
    assert 0.0 < slow < fast < 1.0


def test_low_pass_starts_at_first_sample():
    lp = LowPass()
    assert lp(4.0, 0.5) == 4.0
    assert lp(8.0, 0.5) == 6.0
    lp.reset()
    assert lp(1.0, 0.5) == 1.0


def test_one_euro_follows_fast_motion_closer():
    slow, fast = OneEuro(beta=0.06), OneEuro(beta=0.06)
    slow.apply(0.0, 0.0)
    fast.apply(0.0, 0.0)
    # same step, but the fast channel is already moving quickly
    for i in range(1, 6):
        fast.apply(i * 40.0, i * 0.016)
    slow_out = slow.apply(2.0, 0.016)
    fast_out = fast.apply(240.0, 6 * 0.016)
    assert (2.0 - slow_out) / 2.0 > (240.0 - fast_out) / 40.0
