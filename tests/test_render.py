import numpy as np
import pytest
import torch

from ringfdtd import ScanlineRenderer, RenderConfig, ConfigurationError, YeeRing, RingConfig


def test_zero_field_sits_on_midline():
    r = ScanlineRenderer(height=200)
    assert r.pixel_rows(np.zeros(10)).tolist() == [100] * 10


def test_row_mapping():
    r = ScanlineRenderer(height=200, draw_scale=0.7)
    rows = r.pixel_rows([1.0, -1.0, 0.5])
    # round(100 - 0.7*v*100)
    assert rows.tolist() == [30, 170, 65]


def test_rows_clipped_to_display():
    r = ScanlineRenderer(height=100, draw_scale=1.0)
    assert r.pixel_rows([5.0, -5.0]).tolist() == [0, 99]


def test_zero_snap_keeps_single_baseline():
    # odd height puts the midline on a rounding boundary
    r = ScanlineRenderer(height=201, epsilon=1e-6)
    noise = np.array([1e-9, -1e-9, 3e-8, -2e-10, 0.0])
    rows = r.pixel_rows(noise)
    assert len(set(rows.tolist())) == 1

    unsnapped = ScanlineRenderer(height=201, epsilon=0.0)
    assert len(set(unsnapped.pixel_rows(noise).tolist())) == 2


def test_display_values_snap():
    r = ScanlineRenderer(draw_scale=0.5, epsilon=1e-3)
    assert r.display_values([1e-3, 4e-3, -1.0]).tolist() == [0.0, 2e-3, -0.5]


def test_renderer_never_touches_simulation():
    sim = YeeRing(RingConfig(n_cells=50))
    sim.run(40)
    before = sim.store.E.clone()
    r = ScanlineRenderer(height=64)
    r.rasterize(sim.store.E)
    r.display_values(sim.store.E)
    assert torch.equal(sim.store.E, before)


def test_rasterize_draws_connected_trace():
    r = ScanlineRenderer(height=20, draw_scale=1.0)
    img = r.rasterize([0.0, 0.9, 0.0])
    assert img.shape == (20, 3)
    assert img.dtype == np.uint8
    assert img[10, 0] == 255
    # column 1 spans from the previous row (10) up to its own row (1)
    assert np.all(img[1:11, 1] == 255)
    assert np.all(img[1:11, 2] == 255)
    assert img[0, 1] == 0


def test_rasterize_reuses_buffer():
    r = ScanlineRenderer(height=8)
    buf = np.full((8, 4), 7, dtype=np.uint8)
    out = r.rasterize(np.zeros(4), image=buf)
    assert out is buf
    assert set(np.unique(buf).tolist()) == {0, 255}


def test_from_config():
    r = ScanlineRenderer.from_config(RenderConfig(height=50, draw_scale=0.2, epsilon=0.0))
    assert r.height == 50 and r.mid == 25.0


def test_negative_epsilon_rejected():
    with pytest.raises(ConfigurationError):
        ScanlineRenderer(epsilon=-1.0)


def test_plot_returns_line():
    import matplotlib.pyplot as plt
    r = ScanlineRenderer(height=40)
    line = r.plot(np.zeros(12), title="trace")
    assert len(line.get_ydata()) == 12
    plt.close("all")
