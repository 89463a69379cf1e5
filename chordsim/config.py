"""
Constants used.
"""
import logging

# Seed used for all experiments
SEED = 42

# Number of bits in the identifier/key space (m)
M = 16

# Level for every logger created through chordsim.logging_config
LOG_LEVEL = logging.INFO

# Prefixes used when the simulator names nodes and keys
NODE_NAME_PREFIX = 'Node_'
KEY_NAME_PREFIX = 'Key_'

# Where experiments write their csv files and figures
DATA_PATH = 'results/data/'
FIGURE_PATH = 'results/figures/'

# Experiment parameters
EXP_1_M = 32
EXP_1_NO_OF_NODES = 1_000
EXP_1_LIST_OF_NO_OF_KEYS = [10_000, 20_000, 50_000, 100_000]
EXP_1_REPLICATES = 10

EXP_2_M = 32
EXP_2_LIST_OF_NO_OF_NODES = [2 ** k for k in range(3, 11)]
EXP_2_NO_OF_KEYS = 1_000
EXP_2_LOOKUPS_PER_NODE = 2
EXP_2_REPLICATES = 5
