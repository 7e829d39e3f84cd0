"""Tests for the command line entry point."""

import json

import pytest

from clusterphobia.cli import build_parser, main

from conftest import CLUSTER_COUNT, SEPARATED_BITS


def run_json(capsys, argv):
    assert main(argv) == 0
    return json.loads(capsys.readouterr().out)


class TestLinkageCommand:
    def test_sorting(self, capsys, separated_csv):
        output = run_json(capsys, ["linkage", str(separated_csv), "--bits", str(SEPARATED_BITS)])

        assert output["linkage_square_distance"] == 900
        assert output["large_cluster_count"] == CLUSTER_COUNT
        assert output["num_points"] == 144
        assert output["gold_cluster_count"] == CLUSTER_COUNT
        assert output["config"]["sort_distances_completely"] is True

    def test_binning(self, capsys, separated_csv):
        output = run_json(capsys, ["linkage", str(separated_csv), "--binning"])

        assert output["linkage_square_distance"] == 900
        assert output["large_cluster_count"] == CLUSTER_COUNT
        assert output["config"]["bits_per_dimension"] == SEPARATED_BITS
        assert output["config"]["sort_distances_completely"] is False

    def test_options_reach_config(self, capsys, separated_csv):
        output = run_json(capsys, [
            "linkage", str(separated_csv), "--sort-by-curve",
            "--noise-skip-by", "3", "--outlier-cluster-size", "2",
            "--minimum-cluster-count", "8",
        ])

        config = output["config"]
        assert config["need_to_sort_by_hilbert_curve"] is True
        assert config["noise_skip_by"] == 3
        assert config["outlier_cluster_size"] == 2
        assert config["minimum_cluster_count"] == 8

    def test_growth_ratio_options_reach_config(self, capsys, separated_csv):
        output = run_json(capsys, [
            "linkage", str(separated_csv), "--binning",
            "--lowest-index-for-checking-growth-ratio", "40",
            "--early-exit-ratio", "50",
        ])

        assert output["config"]["lowest_index_for_checking_growth_ratio"] == 40
        assert output["config"]["early_exit_ratio"] == 50.0
        assert output["linkage_square_distance"] == 900

    def test_invalid_early_exit_ratio(self, separated_csv):
        assert main(["linkage", str(separated_csv), "--early-exit-ratio", "0.5"]) == 1

    def test_output_file(self, capsys, separated_csv, tmp_path):
        target = tmp_path / "out" / "result.json"

        assert main(["--output", str(target), "linkage", str(separated_csv)]) == 0

        assert "Saved:" in capsys.readouterr().out
        assert json.loads(target.read_text())["num_points"] == 144

    def test_missing_file(self, tmp_path):
        assert main(["linkage", str(tmp_path / "missing.csv")]) == 1

    def test_bad_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("id,x,category\n0,1.5,1\n1,2.5,1\n")
        assert main(["linkage", str(path)]) == 1


class TestBCubedCommand:
    def test_scores(self, capsys, tmp_path):
        solution = tmp_path / "solution.txt"
        gold = tmp_path / "gold.txt"
        solution.write_text("1,2,3;4,5\n")
        gold.write_text("1,2;3,4,5\n")

        output = run_json(capsys, ["bcubed", str(solution), str(gold)])

        assert output["precision"] == pytest.approx(11 / 15)
        assert output["recall"] == pytest.approx(11 / 15)
        assert output["similarity"] == pytest.approx(11 / 15)
        assert output["alpha"] == 0.5
        assert output["solution_clusters"] == 2
        assert output["gold_clusters"] == 2

    def test_malformed_partition(self, tmp_path):
        solution = tmp_path / "solution.txt"
        gold = tmp_path / "gold.txt"
        solution.write_text("1,,2\n")
        gold.write_text("1,2\n")
        assert main(["bcubed", str(solution), str(gold)]) == 1

    def test_mismatched_items(self, tmp_path):
        solution = tmp_path / "solution.txt"
        gold = tmp_path / "gold.txt"
        solution.write_text("1,2;3\n")
        gold.write_text("1,2\n")
        assert main(["bcubed", str(solution), str(gold)]) == 1


class TestParser:
    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_defaults(self):
        args = build_parser().parse_args(["bcubed", "a.txt", "b.txt"])
        assert args.alpha == 0.5
        assert args.output is None
        assert not args.verbose
