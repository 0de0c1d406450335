import logging

import numpy as np

from ctphantom import generate_phantom, image_geometry, setup_logging


def main():
    setup_logging(logging.INFO)

    ig = image_geometry(512, nz=128, dz=0.625, fov=500).down(8)
    print(f"grid {ig.dims}, spacing {ig.spacing}, fov {ig.fovs}")

    for mode in ("slow", "fast", "lowmem"):
        phantom = generate_phantom(ig, "zhu", mode=mode, oversample=2,
                                   density_scale=1000, check_fov=True, show_mem=mode == "fast")
        print(f"{mode:>6}: min {phantom.min().item():8.2f}  max {phantom.max().item():8.2f}  "
              f"mean {phantom.mean().item():8.3f}")

    spheroid, params = generate_phantom(ig, "spheroid", return_params=True)
    print("spheroid radii", params[0, 3:6], "filled voxels", int(np.count_nonzero(spheroid.numpy())))


if __name__ == "__main__":
    main()
