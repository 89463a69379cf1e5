import csv
import datetime
import os

import numpy as np

from chordsim.config import (SEED, EXP_2_M, EXP_2_LIST_OF_NO_OF_NODES, EXP_2_NO_OF_KEYS, EXP_2_LOOKUPS_PER_NODE,
                             EXP_2_REPLICATES, DATA_PATH)
from chordsim.environment import SimEnvironment
from chordsim.logging_config import get_logger
from results import plot_figures

logger = get_logger(__name__)


def run_path_length(no_of_nodes, no_of_keys, lookups_per_node, no_of_replicates, seed, m=EXP_2_M):
    """
    Route lookups for stored keys from random start nodes and return the hop count of every lookup.
    Lookups resolved by the fallback ring scan are counted separately.
    """
    all_hops = []
    fallbacks = 0
    for r in range(no_of_replicates):
        env = SimEnvironment(m=m, seed=seed + r)

        # Names carry the replicate number so each replicate places nodes and keys differently.
        env.add_nodes(no_of_nodes, prefix=f"R{r}_Node_")
        env.add_keys(no_of_keys, prefix=f"R{r}_Key_")
        env.build()

        for response in env.random_lookups(lookups_per_node * no_of_nodes):
            all_hops.append(response.hop_count)
            fallbacks += response.fallback
    return all_hops, fallbacks


def run():
    os.makedirs(DATA_PATH, exist_ok=True)
    results = []
    hops_for_fig_b = []

    for no_of_nodes in EXP_2_LIST_OF_NO_OF_NODES:
        hops, fallbacks = run_path_length(no_of_nodes, EXP_2_NO_OF_KEYS, EXP_2_LOOKUPS_PER_NODE,
                                          EXP_2_REPLICATES, SEED)
        mean_hops = np.mean(hops)
        p1_hops = np.percentile(hops, 1)
        p99_hops = np.percentile(hops, 99)
        results.append((no_of_nodes, mean_hops, p1_hops, p99_hops))
        if no_of_nodes == EXP_2_LIST_OF_NO_OF_NODES[-1]:
            hops_for_fig_b = list(hops)
        logger.info(f"{datetime.datetime.now().strftime('%H:%M:%S')}: no_of_nodes = {no_of_nodes}, "
                    f"mean hops = {mean_hops:.2f}, fallbacks = {fallbacks}")

    # Summary metrics for figure 2a
    with open(DATA_PATH + 'figure_2a_data.csv', 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['N', 'mean', 'p1', 'p99'])
        writer.writerows(results)

    # Raw hop counts of the largest network for figure 2b
    with open(DATA_PATH + 'figure_2b_data.csv', 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['hops'])
        for h in hops_for_fig_b:
            writer.writerow([h])

    plot_figures.plot_mean_and_percentile_1_and_99(fig_no='2a')
    plot_figures.plot_pdf(fig_no='2b')


if __name__ == '__main__':
    run()
