import sys
import os
import argparse
import logging
import torch
import numpy as np
import matplotlib.pyplot as plt

proj_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(proj_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)
from ringfdtd import RingConfig, YeeRing, ScanlineRenderer

parser = argparse.ArgumentParser(description="Run the 1D periodic FDTD ring headless and save snapshots")
parser.add_argument('--cells', type=int, default=600)
parser.add_argument('--dx', type=float, default=1.0)
parser.add_argument('--courant', type=float, default=1.0)
parser.add_argument('--source-index', type=int, default=None)
parser.add_argument('--peak-tick', type=int, default=30)
parser.add_argument('--width', type=float, default=8.0)
parser.add_argument('--steps', type=int, default=2000, help='Number of ticks to run (at least 1)')
parser.add_argument('--float32', action='store_true', help='Use float32 fields instead of float64')
parser.add_argument('--check-finite', action='store_true', help='Raise on NaN/Inf after each step')
parser.add_argument('--height', type=int, default=200)
parser.add_argument('--draw-scale', type=float, default=0.7)
parser.add_argument('--epsilon', type=float, default=1e-6)
parser.add_argument('--every', type=int, default=10, help='Record a space-time row every k steps')
parser.add_argument('--gif', action='store_true', help='Also write the rasterised trace frames as an animated GIF')
parser.add_argument('--gif-path', type=str, default='ring_anim.gif', help='GIF file name; relative paths land in --out-dir')
parser.add_argument('--gif-fps', type=int, default=30, help='GIF playback rate')
parser.add_argument('--out-dir', type=str, default=None)
parser.add_argument('-v', '--verbose', action='store_true')


def _save_gif(frames, out_gif, fps):
    from PIL import Image
    imgs = [Image.fromarray(255 - f) for f in frames]
    imgs[0].save(out_gif, save_all=True, append_images=imgs[1:], duration=int(1000/max(1, fps)), loop=0)
    print(f"Saved GIF to {out_gif} ({len(imgs)} frames)")


def main(argv=None):
    args = parser.parse_args(argv)
    if args.steps < 1:
        parser.error('--steps must be at least 1')
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    out_dir = args.out_dir or proj_root

    cfg = RingConfig(n_cells=args.cells, dx=args.dx, courant=args.courant,
                     source_index=args.source_index, peak_tick=args.peak_tick, width=args.width,
                     dtype=torch.float32 if args.float32 else torch.float64,
                     check_finite=args.check_finite)
    renderer = ScanlineRenderer(height=args.height, draw_scale=args.draw_scale, epsilon=args.epsilon)
    sim = YeeRing(cfg)
    print(f"grid: N={cfg.n_cells}, dx={cfg.dx:g}, dt={cfg.dt:g}, source at {cfg.source_index}")

    every = max(1, args.every)
    history = []
    gif_frames = []
    for n in range(args.steps):
        sim.step(n)
        if n % every == 0:
            e = sim.snapshot().cpu()
            history.append(e.numpy().copy())
            if args.gif:
                gif_frames.append(renderer.rasterize(e))
        if n % max(1, args.steps // 10) == 0:
            e = sim.snapshot()
            mean_e, mean_h = sim.store.means()
            print(f"step {n}: min={float(e.min()):.3e} max={float(e.max()):.3e} "
                  f"meanE={mean_e:.1e} meanH={mean_h:.1e} energy={sim.energy():.4e}")

    print(f"final energy: {sim.energy():.6e}")
    torch.save({'E': sim.snapshot('E'), 'H': sim.snapshot('H'), 'tick': sim.next_tick},
               os.path.join(out_dir, 'ring_fields_final.pt'))

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 4))
    renderer.plot(sim.snapshot(), ax=ax1, title=f'scan-line trace, tick {sim.next_tick - 1}')
    hist = np.array(history)
    vmax = max(float(np.abs(hist).max()), 1e-12)
    im = ax2.imshow(hist, aspect='auto', origin='lower', cmap='RdBu', vmin=-vmax, vmax=vmax,
                    extent=[0, cfg.n_cells, 0, len(history) * every])
    ax2.set_xlabel('cell')
    ax2.set_ylabel('tick')
    ax2.set_title('Space-Time Diagram')
    plt.colorbar(im, ax=ax2, label='E (a.u.)')
    plt.tight_layout()
    out_png = os.path.join(out_dir, 'ring_snapshot.png')
    plt.savefig(out_png, dpi=150)
    plt.close(fig)
    print(f"Saved {out_png}")

    if args.gif and gif_frames:
        out_gif = args.gif_path
        if not os.path.isabs(out_gif):
            out_gif = os.path.join(out_dir, out_gif)
        _save_gif(gif_frames, out_gif, args.gif_fps)


if __name__ == '__main__':
    main()
