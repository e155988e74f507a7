"""Tests for the command-line interface."""

import json
import os


class TestCli:
    """Tests for the arcspline command."""

    def test_no_command_prints_help(self, capsys):
        from arcspline.cli import main

        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_samples(self, capsys):
        from arcspline.cli import main

        assert main(["samples"]) == 0
        out = capsys.readouterr().out
        assert "dream" in out
        assert "skewed" in out

    def test_init_config(self, temp_dir):
        from arcspline.cli import main
        from arcspline.config import ArcSplineConfig, load_config

        path = os.path.join(temp_dir, "arcspline.yaml")
        assert main(["init-config", "--out", path]) == 0
        assert load_config(path) == ArcSplineConfig()

    def test_fit_curve(self, temp_dir, capsys):
        from arcspline.cli import main

        code = main([
            "fit", "--curve", "0", "0", "0", "100", "100", "0", "100", "100",
            "--out", temp_dir, "--tolerance", "1",
        ])

        assert code == 0
        assert "Fit completed successfully" in capsys.readouterr().out
        with open(os.path.join(temp_dir, "arcs.json")) as f:
            data = json.load(f)
        assert data["tolerance"] == 1.0
        assert len(data["splines"]) == 1

    def test_fit_sample(self, temp_dir):
        from arcspline.cli import main

        assert main(["fit", "--sample", "skewed", "--out", temp_dir]) == 0
        assert os.path.exists(os.path.join(temp_dir, "arcs.svg"))

    def test_fit_path_data(self, temp_dir):
        from arcspline.cli import main

        code = main(["fit", "--path", "M 0 0 L 5 0 C 5 50 55 50 55 0", "--out", temp_dir])

        assert code == 0
        with open(os.path.join(temp_dir, "arcs.json")) as f:
            assert json.load(f)["skipped_segments"] == 1

    def test_fit_input_file(self, temp_dir):
        from arcspline.cli import main

        path = os.path.join(temp_dir, "curves.json")
        with open(path, "w") as f:
            json.dump({"curves": [[0, 0, 0, 100, 100, 0, 100, 100]]}, f)

        assert main(["fit", "--input", path, "--out", os.path.join(temp_dir, "out")]) == 0

    def test_fit_failure_returns_one(self, temp_dir, capsys):
        from arcspline.cli import main

        code = main(["fit", "--sample", "dream", "--out", temp_dir, "--tolerance", "0"])

        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_unknown_sample_returns_one(self, temp_dir):
        from arcspline.cli import main

        assert main(["fit", "--sample", "spiral", "--out", temp_dir]) == 1

    def test_trace_output(self, temp_dir, capsys):
        from arcspline.cli import main

        code = main(["fit", "--sample", "skewed", "--out", temp_dir, "--trace"])

        assert code == 0
        err = capsys.readouterr().err
        assert "cli_fit" in err
        assert "fit_arcs" in err
        assert "bisect" not in err

    def test_trace_file(self, temp_dir):
        from arcspline.cli import main

        trace_path = os.path.join(temp_dir, "trace.log")
        code = main([
            "fit", "--sample", "skewed", "--out", temp_dir,
            "--trace", "--trace-level", "DEBUG", "--trace-file", trace_path,
        ])

        assert code == 0
        with open(trace_path) as f:
            assert "bisect" in f.read()
