import os

import pandas as pd
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from chordsim.config import DATA_PATH, FIGURE_PATH, EXP_1_NO_OF_NODES


def plot_mean_and_percentile_1_and_99(fig_no):
    # Figure 1a
    if fig_no == '1a':
        x_col = 'K'
        x_label = 'Total number of keys'
        y_label = 'Number of keys per node'
        title = f'Load balance: keys per node with {EXP_1_NO_OF_NODES} nodes'
        legend_position = 'upper left'

    # Figure 2a
    elif fig_no == '2a':
        x_col = 'N'
        x_label = 'Number of nodes'
        y_label = 'Path Length'
        title = 'Path length as a function of network size'
        legend_position = 'upper left'

    else:
        raise NotImplementedError

    df = pd.read_csv(DATA_PATH + f'figure_{fig_no}_data.csv')
    x = df[x_col]
    y = df['mean']
    y_err = [y - df['p1'], df['p99'] - y]

    # Plot
    plt.figure(figsize=(10, 8))
    plt.errorbar(
        x,
        y,
        yerr=y_err,
        fmt='D',
        mfc='none',
        capsize=0,
        linestyle='none',
        label='1st and 99th percentiles'
    )

    # Labels and ticks
    if fig_no == '2a':
        plt.xscale('log', base=2)
    plt.title(title, fontsize=14)
    plt.xlabel(x_label, fontsize=12)
    plt.ylabel(y_label, fontsize=12)
    plt.legend(loc=legend_position, fontsize=12)

    plt.tight_layout()
    _save(fig_no)


def plot_pdf(fig_no):
    if fig_no == '1b':
        col_name = 'number_of_keys'
        x_label = 'Number of keys per node'
        title = 'PDF of the number of keys per node'

    elif fig_no == '2b':
        col_name = 'hops'
        x_label = 'Path Length'
        title = 'PDF of the path length in the largest network'

    else:
        raise NotImplementedError

    df = pd.read_csv(DATA_PATH + f'figure_{fig_no}_data.csv')
    data = df[col_name].values

    # Build a PMF: counts at each integer value, divided by total
    values, counts = np.unique(data, return_counts=True)
    pmf = counts / counts.sum()

    fig, ax = plt.subplots(figsize=(10, 8))

    ax.plot(values, pmf, linewidth=1)

    ax.set_xlabel(x_label, fontsize=12)
    ax.set_ylabel("PDF", fontsize=12)
    plt.title(title, fontsize=14)

    plt.tight_layout()
    _save(fig_no)


def _save(fig_no):
    os.makedirs(FIGURE_PATH, exist_ok=True)
    plt.savefig(FIGURE_PATH + f'figure_{fig_no}.png', dpi=300, bbox_inches="tight")
    plt.close('all')
