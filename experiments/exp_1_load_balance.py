import csv
import datetime
import os

import numpy as np
import pandas as pd

from chordsim.config import SEED, EXP_1_M, EXP_1_NO_OF_NODES, EXP_1_LIST_OF_NO_OF_KEYS, EXP_1_REPLICATES, DATA_PATH
from chordsim.environment import SimEnvironment
from chordsim.logging_config import get_logger
from results import plot_figures

logger = get_logger(__name__)


def run_load_balance(no_of_nodes, no_of_keys, no_of_replicates, seed, m=EXP_1_M):
    """
    Place `no_of_keys` keys on a ring of `no_of_nodes` nodes and return, per replicate,
    the number of keys each node ended up storing (in topology order).
    """
    no_of_keys_for_each_node = []
    for r in range(no_of_replicates):
        env = SimEnvironment(m=m, seed=seed + r)
        env.add_nodes(no_of_nodes, prefix=f"R{r}_Node_")
        env.add_keys(no_of_keys, prefix=f"R{r}_Key_")

        # Key placement only needs the ring, not the finger tables.
        env.protocol.build_overlay_network()
        env.protocol.assign_keys()

        no_of_keys_for_each_node.append([len(node.keys) for node in env.nodes.values()])
    return no_of_keys_for_each_node


def aggregate_loads(no_of_keys_for_each_node):
    """
    Convert a list of per-node key counts into a (no_of_replicates x no_of_nodes) numpy array.
    """
    return np.array(no_of_keys_for_each_node, dtype=int)


def run():
    os.makedirs(DATA_PATH, exist_ok=True)
    figure_1a_data = []
    for no_of_keys in EXP_1_LIST_OF_NO_OF_KEYS:
        no_of_keys_for_each_node = run_load_balance(EXP_1_NO_OF_NODES, no_of_keys, EXP_1_REPLICATES, SEED)
        if no_of_keys == EXP_1_LIST_OF_NO_OF_KEYS[-1]:
            _df = pd.DataFrame({'number_of_keys': no_of_keys_for_each_node[0]})
            _df.to_csv(DATA_PATH + 'figure_1b_data.csv', index=False)

        _agg_array = aggregate_loads(no_of_keys_for_each_node)
        _mean = _agg_array.mean()
        figure_1a_data.append((
            no_of_keys,
            _mean,
            np.percentile(_agg_array, 1),
            np.percentile(_agg_array, 99),
        ))
        logger.info(f"{datetime.datetime.now().strftime('%H:%M:%S')}: no_of_keys = {no_of_keys}, "
                    f"Mean #keys/node = {_mean}")

    # Save results.
    with open(DATA_PATH + 'figure_1a_data.csv', 'w', newline='') as f:
        w = csv.writer(f)
        w.writerow(['K', 'mean', 'p1', 'p99'])
        w.writerows(figure_1a_data)

    plot_figures.plot_mean_and_percentile_1_and_99(fig_no='1a')
    plot_figures.plot_pdf(fig_no='1b')


if __name__ == '__main__':
    run()
