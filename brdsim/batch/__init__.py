"""
Batch execution of the dynamics engine over many random games.
"""

from brdsim.batch.runner import BatchRunner, DEFAULT_SEED, make_generator, run_batch
