import json

import numpy as np
import pytest
from click.testing import CliRunner
from PIL import Image

import raw_develop.pipeline as pipeline_module
from raw_develop.cli import main

from packing import pack12, pack14


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def recorded_configs(monkeypatch):
    configs = []

    class RecordingPipeline(pipeline_module.ProcessingPipeline):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            configs.append(self.config)

    monkeypatch.setattr(pipeline_module, "ProcessingPipeline", RecordingPipeline)
    return configs


def read_png(path):
    with Image.open(path) as img:
        return np.array(img)


class TestCli:
    def test_single_file(self, runner, tmp_path):
        raw = tmp_path / "frame.raw"
        raw.write_bytes(pack12([0, 4095]))
        out = tmp_path / "out"

        result = runner.invoke(main, [str(raw), "-o", str(out), "-W", "2", "-H", "1", "--bits", "12"])

        assert result.exit_code == 0, result.output
        pixels = read_png(out / "frame_developed.png")
        assert pixels[0, :, 0].tolist() == [0, 255]

    def test_requires_dimensions(self, runner, tmp_path):
        raw = tmp_path / "frame.raw"
        raw.write_bytes(bytes(3))
        result = runner.invoke(main, [str(raw), "-o", str(tmp_path / "out")])
        assert result.exit_code == 2
        assert "width and height" in result.output

    def test_invalid_calibration_fails(self, runner, tmp_path):
        raw = tmp_path / "frame.raw"
        raw.write_bytes(bytes(3))
        result = runner.invoke(
            main,
            [str(raw), "-o", str(tmp_path / "out"), "-W", "2", "-H", "1", "--black", "50", "--white", "50"],
        )
        assert result.exit_code == 1
        assert "Failed to develop" in result.output

    def test_unsupported_bits_rejected(self, runner, tmp_path):
        raw = tmp_path / "frame.raw"
        raw.write_bytes(bytes(3))
        result = runner.invoke(main, [str(raw), "-W", "2", "-H", "1", "--bits", "10"])
        assert result.exit_code == 2

    def test_config_file_with_overrides(self, runner, tmp_path):
        raw = tmp_path / "frame.raw"
        raw.write_bytes(pack14([0, 16383, 16383, 0]))
        config = tmp_path / "config.yaml"
        config.write_text("width: 2\nheight: 2\nbit_depth: 14\nwhite_level: 16383\nflip_y: true\n")
        out = tmp_path / "out"

        result = runner.invoke(
            main, [str(raw), "-o", str(out), "-c", str(config), "--no-flip-y", "--intensity", "0.5"]
        )

        assert result.exit_code == 0, result.output
        pixels = read_png(out / "frame_developed.png")
        assert pixels[:, :, 2].tolist() == [[0, 128], [128, 0]]
        sidecar = json.loads((out / "frame_developed.json").read_text())
        assert sidecar["flip_y"] is False
        assert sidecar["intensity"] == 0.5

    def test_config_values_kept_without_flags(self, runner, tmp_path):
        raw = tmp_path / "frame.raw"
        raw.write_bytes(pack12([4095, 4095, 0, 0]))
        config = tmp_path / "config.yaml"
        config.write_text("width: 2\nheight: 2\nflip_y: true\n")
        out = tmp_path / "out"

        result = runner.invoke(main, [str(raw), "-o", str(out), "-c", str(config)])

        assert result.exit_code == 0, result.output
        pixels = read_png(out / "frame_developed.png")
        assert pixels[:, :, 0].tolist() == [[0, 0], [255, 255]]

    def test_swap_and_workers_env(self, runner, tmp_path, recorded_configs):
        raw = tmp_path / "frame.raw"
        raw.write_bytes(bytes([0x34, 0x12, 0x00, 0x00]))
        out = tmp_path / "out"

        result = runner.invoke(
            main,
            [str(raw), "-o", str(out), "-W", "2", "-H", "1", "--bits", "16", "--swap", "--white", "65535"],
            env={"RAW_DEVELOP_WORKERS": "2"},
        )

        assert result.exit_code == 0, result.output
        sidecar = json.loads((out / "frame_developed.json").read_text())
        assert sidecar["swap_endian"] is True
        assert [cfg.workers for cfg in recorded_configs] == [2]

    def test_workers_option_overrides_env(self, runner, tmp_path, recorded_configs):
        raw = tmp_path / "frame.raw"
        raw.write_bytes(pack12([1, 2]))

        result = runner.invoke(
            main,
            [str(raw), "-o", str(tmp_path / "out"), "-W", "2", "-H", "1", "-j", "3"],
            env={"RAW_DEVELOP_WORKERS": "2"},
        )

        assert result.exit_code == 0, result.output
        assert [cfg.workers for cfg in recorded_configs] == [3]

    def test_batch_directory(self, runner, tmp_path):
        src = tmp_path / "in"
        src.mkdir()
        for name in ("a", "b", "c"):
            (src / f"{name}.raw").write_bytes(pack12([1, 2, 3, 4]))
        out = tmp_path / "out"

        result = runner.invoke(main, [str(src), "-o", str(out), "-W", "2", "-H", "2"])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.glob("*.png")) == [
            "a_developed.png",
            "b_developed.png",
            "c_developed.png",
        ]
