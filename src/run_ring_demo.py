from __future__ import annotations
import argparse
import logging
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from ringfdtd import RingConfig, YeeRing, ScanlineRenderer, ClockDriver

# Interactive demo: one simulation step per animation frame, space toggles pause.

def main():
    parser = argparse.ArgumentParser(description="Animated 1D FDTD ring (space = pause/resume)")
    parser.add_argument('--cells', type=int, default=600)
    parser.add_argument('--height', type=int, default=200)
    parser.add_argument('--interval-ms', type=int, default=16)
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    sim = YeeRing(RingConfig(n_cells=args.cells))
    renderer = ScanlineRenderer(height=args.height)
    driver = ClockDriver(sim)

    fig, ax = plt.subplots(figsize=(10, 3))
    line = renderer.plot(sim.snapshot(), ax=ax, title='E field, tick 0')

    def on_key(event):
        if event.key == ' ':
            driver.toggle()

    def update(_frame):
        if driver.tick():
            line.set_ydata(renderer.pixel_rows(sim.snapshot()))
            ax.set_title(f'E field, tick {sim.next_tick - 1}')
        return line,

    fig.canvas.mpl_connect('key_press_event', on_key)
    anim = FuncAnimation(fig, update, interval=args.interval_ms, cache_frame_data=False)
    plt.tight_layout()
    plt.show()
    return anim

if __name__ == '__main__':
    main()
