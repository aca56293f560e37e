"""Tests for the nuclidesim command-line interface."""

import json

import pytest

from nuclidesim.cli.app import build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_simulate_defaults(self):
        args = build_parser().parse_args(["simulate"])
        assert args.steps == 100
        assert args.seed is None
        assert args.particles == 1500


class TestCommands:
    """Tests for running each subcommand."""

    def test_info_tabulated(self, capsys):
        assert main(["info", "0", "1"]) == 0
        out = capsys.readouterr().out
        assert "n (Z=0, N=1, A=1)" in out
        assert "613.90 s" in out
        assert "tabulated" in out
        assert "β-" in out

    def test_info_classified(self, capsys):
        assert main(["info", "40", "100"]) == 0
        out = capsys.readouterr().out
        assert "Zr-140" in out
        assert "classified" in out
        assert "< 1 µs" in out

    def test_info_longest_lived_isotope(self, capsys):
        assert main(["info", "82", "128"]) == 0
        assert "Longest-lived isotope: Pb-204" in capsys.readouterr().out

    def test_info_off_chart(self, capsys):
        assert main(["info", "5", "-3"]) == 0
        out = capsys.readouterr().out
        assert "off the chart" in out
        assert "Channels: none" in out

    def test_classify(self, capsys):
        assert main(["classify", "92", "200"]) == 0
        assert "SF" in capsys.readouterr().out

    def test_validate(self, capsys):
        assert main(["validate"]) == 0
        out = capsys.readouterr().out
        assert "Np-236" in out
        assert "[known]" in out

    def test_build_map(self, tmp_path, capsys):
        output = tmp_path / "chart.png"
        figure = tmp_path / "chart_figure.png"
        assert main(["build-map", "--output", str(output), "--figure", str(figure)]) == 0
        assert output.exists()
        assert figure.exists()
        assert "318x430" in capsys.readouterr().out

    def test_simulate_with_output(self, tmp_path, capsys):
        output = tmp_path / "population.json"
        code = main([
            "simulate", "--steps", "3", "--seed", "1", "--particles", "50",
            "--output", str(output),
        ])
        assert code == 0
        payload = json.loads(output.read_text())
        assert payload["steps"] == 3
        assert payload["seed"] == 1
        assert sum(entry["count"] for entry in payload["population"]) > 0
        assert "Ran 3 steps" in capsys.readouterr().out

    def test_config_file(self, tmp_path, capsys):
        config = tmp_path / "engine.json"
        config.write_text(json.dumps({"normalize_branching": True, "log_level": "WARNING"}))
        assert main(["--config", str(config), "validate"]) == 0
        assert "All branching ratios consistent" in capsys.readouterr().out
