import torch

from ringfdtd import ClockDriver, YeeRing, RingConfig


def test_paused_driver_withholds_steps():
    sim = YeeRing(RingConfig(n_cells=40))
    driver = ClockDriver(sim)
    assert driver.run(5) == 5
    assert driver.toggle() is False
    assert driver.run(10) == 0
    assert sim.next_tick == 5
    assert driver.toggle() is True
    assert driver.tick()
    assert sim.next_tick == 6


def test_pause_resume_matches_continuous_run():
    continuous = YeeRing(RingConfig())
    ClockDriver(continuous).run(200)

    paused = YeeRing(RingConfig())
    driver = ClockDriver(paused)
    driver.run(80)
    snapshot = paused.snapshot()
    driver.toggle()
    driver.run(25)
    assert torch.equal(paused.snapshot(), snapshot)
    driver.toggle()
    driver.run(120)

    assert paused.next_tick == continuous.next_tick == 200
    assert torch.equal(paused.store.E, continuous.store.E)
    assert torch.equal(paused.store.H, continuous.store.H)


def test_starts_paused():
    sim = YeeRing(RingConfig(n_cells=8))
    driver = ClockDriver(sim, running=False)
    assert not driver.tick()
    assert sim.next_tick == 0
