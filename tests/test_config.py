"""Tests for LinkageConfig."""

import pytest

from clusterphobia.config import LinkageConfig


class TestDefaults:
    def test_defaults(self):
        config = LinkageConfig(bits_per_dimension=20)
        assert config.need_to_sort_by_hilbert_curve is False
        assert config.minimum_cluster_count is None
        assert config.noise_skip_by == 5
        assert config.outlier_cluster_size == 10
        assert config.sort_distances_completely is True
        assert config.lowest_index_for_checking_growth_ratio is None
        assert config.bin_multiplier == 1.05
        assert config.early_exit_ratio == 5.0
        assert config.strategy_name == "sorting"

    def test_binning_strategy_name(self):
        config = LinkageConfig(bits_per_dimension=20, sort_distances_completely=False)
        assert config.strategy_name == "binning"


class TestValidation:
    @pytest.mark.parametrize("bits", [0, 63])
    def test_bits_out_of_range(self, bits):
        with pytest.raises(ValueError):
            LinkageConfig(bits_per_dimension=bits)

    def test_minimum_cluster_count_floored_at_six(self):
        assert LinkageConfig(bits_per_dimension=8, minimum_cluster_count=2).minimum_cluster_count == 6
        assert LinkageConfig(bits_per_dimension=8, minimum_cluster_count=7).minimum_cluster_count == 7

    def test_bin_multiplier_floored(self):
        assert LinkageConfig(bits_per_dimension=8, bin_multiplier=1.0).bin_multiplier == 1.001

    @pytest.mark.parametrize("field_name", ["noise_skip_by", "outlier_cluster_size",
                                            "lowest_index_for_checking_growth_ratio"])
    def test_negative_values_rejected(self, field_name):
        with pytest.raises(ValueError):
            LinkageConfig(bits_per_dimension=8, **{field_name: -1})

    def test_early_exit_ratio_must_exceed_one(self):
        with pytest.raises(ValueError):
            LinkageConfig(bits_per_dimension=8, early_exit_ratio=1.0)

    def test_noise_skip_by_zero_allowed(self):
        assert LinkageConfig(bits_per_dimension=8, noise_skip_by=0).noise_skip_by == 0


class TestResolve:
    def test_small_n_uses_ten_clusters(self):
        config = LinkageConfig(bits_per_dimension=8).resolve(100)
        assert config.minimum_cluster_count == 10
        assert config.lowest_index_for_checking_growth_ratio == 50

    def test_large_n_uses_half_square_root(self):
        config = LinkageConfig(bits_per_dimension=20).resolve(10_000)
        assert config.minimum_cluster_count == 50
        assert config.lowest_index_for_checking_growth_ratio == 5_000

    def test_explicit_values_kept(self):
        config = LinkageConfig(
            bits_per_dimension=20,
            minimum_cluster_count=8,
            lowest_index_for_checking_growth_ratio=3,
        )
        assert config.resolve(10_000) is config


class TestSerialization:
    def test_round_trip(self):
        config = LinkageConfig(bits_per_dimension=12, noise_skip_by=9)
        assert LinkageConfig.from_dict(config.to_dict()) == config

    def test_from_dict_ignores_unknown_keys(self):
        config = LinkageConfig.from_dict({"bits_per_dimension": 12, "colour": "blue"})
        assert config.bits_per_dimension == 12
