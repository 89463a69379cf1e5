from experiments.exp_1_load_balance import aggregate_loads, run_load_balance
from experiments.exp_2_path_length import run_path_length


def test_load_balance_counts_every_key():
    loads = run_load_balance(no_of_nodes=20, no_of_keys=500, no_of_replicates=3, seed=1, m=32)
    assert len(loads) == 3
    for per_node in loads:
        assert len(per_node) == 20
        assert sum(per_node) == 500

    agg = aggregate_loads(loads)
    assert agg.shape == (3, 20)
    assert agg.sum() == 1500


def test_path_length_hops_are_bounded():
    hops, fallbacks = run_path_length(no_of_nodes=32, no_of_keys=100, lookups_per_node=2,
                                      no_of_replicates=2, seed=1, m=32)
    assert len(hops) == 2 * 2 * 32
    assert fallbacks == 0
    assert all(0 <= h < 32 for h in hops)
