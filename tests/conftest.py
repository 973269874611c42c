import pathlib, sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import matplotlib
matplotlib.use("Agg")


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: spawns worker processes or runs large batches")
