import numpy as np

TEMP_PATH = "./assets/temp"
RESULT_PATH = "./assets/result"
LOG_PATH = "./assets/log"

# NETWORK_NODES_LIST: list[int] = [10, 20, 50]
NETWORK_NODES_LIST: list[int] = [20]
NETWORK_AVERAGE_DEGREES: list[float] = [round(x, 1) for x in np.arange(1.0, 4.0 + 0.01, 0.5).tolist()]

# Number of greedy trials per maximum induced matching estimate.
RANDOM_REPETITIONS: int = 5
# None seeds from OS entropy.
RANDOM_SEED: int | None = None

LOGGING_LEVEL: str = "INFO"
