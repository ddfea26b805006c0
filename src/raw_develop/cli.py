"""Command-line interface for developing packed sensor dumps."""

from pathlib import Path

import click
from click.core import ParameterSource
from dotenv import load_dotenv
from rich.console import Console

# Load environment variables from .env file
# Searches current directory and parents
load_dotenv()

console = Console()


@click.command()
@click.argument("input_path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output directory for developed images. Defaults to './developed'"
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file"
)
@click.option("--width", "-W", type=click.IntRange(min=1), default=None, help="Image width in samples")
@click.option("--height", "-H", type=click.IntRange(min=1), default=None, help="Image height in rows")
@click.option(
    "--bits",
    type=click.Choice(["12", "14", "16"]),
    default=None,
    help="Packed sample bit depth (default: 12)"
)
@click.option("--black", type=click.IntRange(min=0), default=None, help="Sensor black level")
@click.option("--white", type=click.IntRange(min=0), default=None, help="Sensor white level")
@click.option(
    "--swap/--no-swap",
    default=False,
    help="Exchange the bytes of each 16-bit word before unpacking"
)
@click.option("--offset", type=click.IntRange(min=0), default=None, help="Header bytes to skip")
@click.option(
    "--intensity", "-i",
    type=click.FloatRange(min=0.0),
    default=None,
    help="Intensity multiplier (default: 1.0)"
)
@click.option("--flip-y/--no-flip-y", default=True, help="Flip rows vertically (default: on)")
@click.option("--gamma", type=click.FloatRange(min=0.0, min_open=True), default=None, help="Display gamma")
@click.option("--pseudo-color", is_flag=True, default=False, help="Render a false-color heat map")
@click.option(
    "--output-bits",
    type=click.Choice(["8", "16"]),
    default=None,
    help="PNG bits per channel (default: 8)"
)
@click.option(
    "--workers", "-j",
    type=click.IntRange(min=1),
    default=None,
    envvar="RAW_DEVELOP_WORKERS",
    help="Decode/develop threads (default: all CPUs)"
)
def main(
    input_path: Path,
    output: Path | None,
    config: Path | None,
    width: int | None,
    height: int | None,
    bits: str | None,
    black: int | None,
    white: int | None,
    swap: bool,
    offset: int | None,
    intensity: float | None,
    flip_y: bool,
    gamma: float | None,
    pseudo_color: bool,
    output_bits: str | None,
    workers: int | None,
) -> None:
    """Decode packed 12/14/16-bit sensor dumps and export display PNGs.

    INPUT_PATH can be a single packed file or a directory of .raw files.
    """
    from .config import Config, load_config
    from .pipeline import ProcessingPipeline

    if output is None:
        output = Path("./developed")

    cfg = load_config(config) if config else Config()

    # Apply CLI overrides to config (only options given on the command line or env)
    ctx = click.get_current_context()
    overrides = {
        "width": ("width", width),
        "height": ("height", height),
        "bits": ("bit_depth", int(bits) if bits else None),
        "black": ("black_level", black),
        "white": ("white_level", white),
        "swap": ("swap_endian", swap),
        "offset": ("header_offset", offset),
        "intensity": ("intensity", intensity),
        "flip_y": ("flip_y", flip_y),
        "gamma": ("display_gamma", gamma),
        "pseudo_color": ("pseudo_color", pseudo_color),
        "output_bits": ("output_bits", int(output_bits) if output_bits else None),
        "workers": ("workers", workers),
    }
    update = {
        field: value
        for param, (field, value) in overrides.items()
        if ctx.get_parameter_source(param) is not ParameterSource.DEFAULT and value is not None
    }
    cfg = cfg.model_copy(update=update)

    if cfg.width is None or cfg.height is None:
        raise click.UsageError("Image width and height are required (--width/--height or config)")

    output.mkdir(parents=True, exist_ok=True)

    console.print(f"[bold blue]RAW Develop[/bold blue]")
    console.print(f"Input: {input_path}")
    console.print(f"Output: {output}")
    console.print(
        f"Format: {cfg.width}x{cfg.height} {cfg.bit_depth}-bit"
        f"{' (word-swapped)' if cfg.swap_endian else ''}, "
        f"levels {cfg.black_level}..{cfg.white_level}"
    )

    pipeline = ProcessingPipeline(output_dir=output, config=cfg)

    if input_path.is_file():
        if pipeline.process_single(input_path) is None:
            raise click.ClickException(f"Failed to develop {input_path}")
    else:
        pipeline.process_batch(input_path)


if __name__ == "__main__":
    main()
