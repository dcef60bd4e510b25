"""CLI commands for image resizing using PyFastResample's rastermanip utilities."""

import sys

import click
import taichi as ti

import pyfastresample as pfr

_ARCHS = {"cpu": ti.cpu, "gpu": ti.gpu}

_dimension_options = [
    click.option("--width", "-W", type=int, default=None, help="Destination width in pixels"),
    click.option("--height", "-H", type=int, default=None, help="Destination height in pixels"),
    click.option(
        "--overflow",
        type=click.Choice(list(pfr.constants.OVERFLOW_POLICIES)),
        default=pfr.constants.DEFAULT_OVERFLOW,
        show_default=True,
        help="How values outside [0, 255] are stored",
    ),
    click.option(
        "--arch",
        type=click.Choice(sorted(_ARCHS)),
        default="cpu",
        show_default=True,
        help="Taichi backend",
    ),
    click.option("--verbose", "-v", is_flag=True, help="Enable verbose output"),
]


def _add_options(options):
    def decorator(func):
        for option in reversed(options):
            func = option(func)
        return func

    return decorator


def _load(input_image, width, height, arch, verbose):
    """Initialise taichi, load the input and complete the target size."""
    pfr.log.set_verbosity(verbose)
    ti.init(arch=_ARCHS[arch], offline_cache=False)
    buf = pfr.misc.load_buffer(input_image)
    dst_w, dst_h = pfr.rastermanip.fit_dimensions(buf.width, buf.height, width, height)
    return buf, dst_w, dst_h


@click.command()
@click.argument("input_image", type=click.Path(exists=True))
@click.argument("output_image", type=click.Path())
@_add_options(_dimension_options)
@click.option(
    "--filter",
    "-f",
    "filter_name",
    type=click.Choice(sorted(pfr.filters.FILTERS)),
    default=pfr.constants.DEFAULT_FILTER_NAME,
    show_default=True,
    help="Resampling filter",
)
@click.option(
    "--filter-scale",
    type=float,
    default=pfr.constants.DEFAULT_FILTER_SCALE,
    show_default=True,
    help="Kernel widening factor when downsampling",
)
@click.option("--no-linearize", is_flag=True, help="Resample sRGB values directly")
@click.option("--keep-alpha", is_flag=True, help="Resample alpha instead of forcing it opaque")
@click.option("--clamp", is_flag=True, help="Clamp resampled values to [0, 255]")
def image_resize(
    input_image,
    output_image,
    width,
    height,
    overflow,
    arch,
    verbose,
    filter_name,
    filter_scale,
    no_linearize,
    keep_alpha,
    clamp,
):
    """Resize INPUT_IMAGE with a separable filter and save to OUTPUT_IMAGE.

    Either --width or --height may be omitted to keep the aspect ratio.
    """
    try:
        buf, dst_w, dst_h = _load(input_image, width, height, arch, verbose)
        if verbose:
            click.echo(
                f"Resizing '{input_image}' {buf.width}x{buf.height} -> {dst_w}x{dst_h} "
                f"with filter={filter_name}"
            )
        options = pfr.ResizeOptions(
            filter=filter_name,
            filter_scale=filter_scale,
            linearize=not no_linearize,
            skip_alpha=not keep_alpha,
            clamp=clamp,
            overflow=overflow,
        )
        result = pfr.rastermanip.resize(buf, dst_w, dst_h, options)
        pfr.misc.save_buffer(result, output_image)
        if verbose:
            click.echo("Resizing completed successfully!")
    except Exception as e:  # pragma: no cover - error handling path
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.command()
@click.argument("input_image", type=click.Path(exists=True))
@click.argument("output_image", type=click.Path())
@_add_options(_dimension_options)
@click.option(
    "--sharp",
    "-s",
    type=float,
    default=pfr.constants.DEFAULT_SHARP,
    show_default=True,
    help="Sharpening strength, 0 <= sharp < 1",
)
def image_reduce(input_image, output_image, width, height, overflow, arch, verbose, sharp):
    """Reduce INPUT_IMAGE by box averaging and save to OUTPUT_IMAGE.

    Either --width or --height may be omitted to keep the aspect ratio.
    """
    try:
        buf, dst_w, dst_h = _load(input_image, width, height, arch, verbose)
        if verbose:
            click.echo(
                f"Reducing '{input_image}' {buf.width}x{buf.height} -> {dst_w}x{dst_h} "
                f"with sharp={sharp}"
            )
        result = pfr.rastermanip.reduce(buf, dst_w, dst_h, sharp=sharp, overflow=overflow)
        pfr.misc.save_buffer(result, output_image)
        if verbose:
            click.echo("Reduction completed successfully!")
    except Exception as e:  # pragma: no cover - error handling path
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


__all__ = ["image_resize", "image_reduce"]
