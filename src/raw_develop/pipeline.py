"""Main processing pipeline orchestration."""

from pathlib import Path
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from .config import Config, load_config
from .errors import RawDevelopError
from .partition import resolve_workers
from .raw_handler import is_raw_file

console = Console()


class ProcessingPipeline:
    """Orchestrates load -> decode -> develop -> export for packed dumps."""

    def __init__(
        self,
        output_dir: Path,
        config: Config | None = None,
        config_path: Path | None = None,
    ):
        self.output_dir = output_dir
        if config is None:
            config = load_config(config_path) if config_path else Config()
        self.config = config

    def process_single(self, raw_path: Path) -> Path | None:
        """Process a single packed dump through the full pipeline."""
        console.print(f"\n[cyan]Processing:[/cyan] {raw_path.name}")

        cfg = self.config
        if cfg.width is None or cfg.height is None:
            console.print("[red]Image width and height must be set[/red]")
            return None

        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                # Step 1: Load packed bytes
                task = progress.add_task("Loading packed data...", total=None)
                data = self._load(raw_path)
                progress.update(task, description=f"[green]✓[/green] Loaded {data.size} bytes")

                # Step 2: Decode to linear samples
                task = progress.add_task(f"Decoding {cfg.bit_depth}-bit samples...", total=None)
                session = self._decode(data)
                progress.update(task, description="[green]✓[/green] Decoded")

                # Step 3: Develop
                task = progress.add_task("Developing...", total=None)
                buffer = session.develop()
                progress.update(task, description="[green]✓[/green] Developed")

                # Step 4: Export
                task = progress.add_task("Exporting...", total=None)
                output_path = self._export(buffer, raw_path)
                progress.update(task, description="[green]✓[/green] Exported")
        except RawDevelopError as e:
            console.print(f"[red]Failed:[/red] {e}")
            return None

        console.print(f"[green]✓ Saved:[/green] {output_path}")
        return output_path

    def process_batch(self, input_dir: Path) -> list[Path]:
        """Process all packed dumps in a directory."""
        dumps = sorted(f for f in input_dir.iterdir() if is_raw_file(f))

        console.print(f"\nFound [bold]{len(dumps)}[/bold] packed files to process")

        results = []
        for i, raw_path in enumerate(dumps, 1):
            console.print(f"\n[dim]({i}/{len(dumps)})[/dim]")
            result = self.process_single(raw_path)
            if result:
                results.append(result)

        console.print(f"\n[bold green]Complete![/bold green] Processed {len(results)}/{len(dumps)} files")
        return results

    def _load(self, path: Path):
        """Read packed bytes, skipping the configured header."""
        from .raw_handler import load_packed
        return load_packed(path, offset=self.config.header_offset)

    def _decode(self, data):
        """Decode once and keep the linear image in a develop session."""
        from .session import DevelopSession
        cfg = self.config
        return DevelopSession.from_buffer(
            data,
            cfg.width,
            cfg.height,
            cfg.bit_depth,
            cfg.calibration(),
            swap=cfg.swap_endian,
            params=cfg.display_params(),
            workers=resolve_workers(cfg.workers),
        )

    def _export(self, buffer, original_path: Path) -> Path:
        """Write the display PNG and settings sidecar."""
        from .exporter import export_image
        cfg = self.config
        return export_image(
            buffer,
            original_path,
            self.output_dir,
            settings=cfg.model_dump(
                include={
                    "width", "height", "bit_depth", "swap_endian", "header_offset",
                    "black_level", "white_level", "intensity", "flip_y",
                }
            ),
            gamma=cfg.display_gamma,
            false_color=cfg.pseudo_color,
            bits=cfg.output_bits,
        )
