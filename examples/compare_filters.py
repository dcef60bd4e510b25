import time

import numpy as np
import taichi as ti

import pyfastresample as pfr

ti.init(ti.cpu)

# Synthetic test card: radial rings (aliasing-prone) over a colour ramp
nx, ny = 1024, 768
y, x = np.mgrid[0:ny, 0:nx]
r = np.hypot(x - nx / 2, y - ny / 2)
img = np.empty((ny, nx, 4), dtype=np.uint8)
img[..., 0] = (127.5 + 127.5 * np.sin(r * r / 2000)).astype(np.uint8)
img[..., 1] = (x * 255 // nx).astype(np.uint8)
img[..., 2] = (y * 255 // ny).astype(np.uint8)
img[..., 3] = 255
src = pfr.PixelBuffer.from_array(img)

w, h = 256, 192

for name in pfr.filters.FILTERS:
	st = time.time()
	raw = pfr.rastermanip.resize_float(src, w, h, filter=name)
	dt = time.time() - st
	over = np.logical_or(raw[..., :3] < 0, raw[..., :3] > 255).mean()
	print(f"{name:10s} {dt * 1000:8.1f} ms  out-of-range samples: {over:.2%}")

for sharp in (0.0, 0.3, 0.6):
	st = time.time()
	out = pfr.reduce(src, w, h, sharp=sharp)
	print(f"reduce sharp={sharp:.1f} {(time.time() - st) * 1000:8.1f} ms  mean R: {out.to_array()[..., 0].mean():.2f}")

pfr.misc.save_buffer(pfr.resize(src, w, h), "testcard_lanczos3.png")
pfr.misc.save_buffer(pfr.reduce(src, w, h), "testcard_reduce.png")
