"""
Tests for the command-line interface.
"""

from PIL import Image
import pytest
from typer.testing import CliRunner

from ico2img.ui.cli import app


@pytest.fixture
def runner():
    return CliRunner()


class TestConvert:
    """`ico2img convert`."""

    def test_default_is_first_entry_as_png(self, runner, sample_ico, tmp_path):
        output = tmp_path / "first.png"
        result = runner.invoke(app, ["convert", str(sample_ico), "-o", str(output)])

        assert result.exit_code == 0, result.output
        with Image.open(output) as image:
            assert image.format == "PNG"
            assert image.size == (16, 16)

    def test_range_to_webp(self, runner, sample_ico, tmp_path):
        out_dir = tmp_path / "out"
        result = runner.invoke(
            app, ["convert", str(sample_ico), "-o", str(out_dir), "--range", "0-1", "--format", "webp"]
        )

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out_dir.iterdir()) == ["sample_0.webp", "sample_1.webp"]

    def test_config_overrides_format(self, runner, sample_ico, tmp_path):
        config = tmp_path / "ico2img.toml"
        config.write_text('[ico2img]\nformat = "bmp"\n', encoding="utf-8")
        output = tmp_path / "icon.png"

        result = runner.invoke(
            app, ["convert", str(sample_ico), "-o", str(output), "-f", "png", "-c", str(config), "-i", "2"]
        )

        assert result.exit_code == 0, result.output
        with Image.open(output) as image:
            assert image.format == "BMP"
            assert image.size == (48, 48)

    def test_empty_container(self, runner, empty_ico, tmp_path):
        output = tmp_path / "out.png"
        result = runner.invoke(app, ["convert", str(empty_ico), "-o", str(output)])

        assert result.exit_code == 1
        assert "не содержит изображений" in result.output
        assert not output.exists()

    def test_unsupported_format(self, runner, sample_ico, tmp_path):
        output = tmp_path / "out.gif"
        result = runner.invoke(app, ["convert", str(sample_ico), "-o", str(output), "-f", "gif"])

        assert result.exit_code == 1
        assert "'gif'" in result.output
        assert not output.exists()

    def test_conflicting_selection(self, runner, sample_ico, tmp_path):
        result = runner.invoke(app, ["convert", str(sample_ico), "-o", str(tmp_path / "x"), "-i", "0", "--all"])
        assert result.exit_code == 1

    def test_index_out_of_bounds(self, runner, sample_ico, tmp_path):
        result = runner.invoke(app, ["convert", str(sample_ico), "-o", str(tmp_path / "x.png"), "-i", "3"])
        assert result.exit_code == 1
        assert "3" in result.output

    def test_output_is_existing_directory(self, runner, sample_ico, tmp_path):
        """Write failures end with one error line and status 1."""
        result = runner.invoke(app, ["convert", str(sample_ico), "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, OSError)
        assert "Ошибка:" in result.output

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(app, ["convert", str(tmp_path / "nope.ico"), "-o", str(tmp_path / "x.png")])
        assert result.exit_code == 1

    def test_keep_going_exit_status(self, runner, corrupt_ico, tmp_path):
        out_dir = tmp_path / "out"
        result = runner.invoke(app, ["convert", str(corrupt_ico), "-o", str(out_dir), "--all", "--keep-going"])

        assert result.exit_code == 1
        assert sorted(p.name for p in out_dir.iterdir()) == ["corrupt_0.png", "corrupt_2.png"]

    def test_verbose_prints_details(self, runner, sample_ico, tmp_path):
        result = runner.invoke(
            app, ["convert", str(sample_ico), "-o", str(tmp_path / "x.png"), "-i", "1", "-v"]
        )

        assert result.exit_code == 0, result.output
        assert "Number of entries in ICO file: 3" in result.output
        assert "32x32 - 32 bits per pixel" in result.output


class TestInfo:
    """`ico2img info`."""

    def test_lists_entries(self, runner, sample_ico):
        result = runner.invoke(app, ["info", str(sample_ico)])

        assert result.exit_code == 0, result.output
        assert "Number of entries in ICO file: 3" in result.output
        assert "48x48" in result.output

    def test_not_an_icon(self, runner, tmp_path):
        path = tmp_path / "bad.ico"
        path.write_bytes(b"GIF89a")
        result = runner.invoke(app, ["info", str(path)])
        assert result.exit_code == 1
