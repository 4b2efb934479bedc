"""Units of work, execution substrates and the groups that run them."""

from .group import ParallelGroup
from .model import Job, JobExecutor, JobFactory, JobSpec, NoopJob, UnitOfWork

__all__ = [
    "Job",
    "JobExecutor",
    "JobFactory",
    "JobSpec",
    "NoopJob",
    "ParallelGroup",
    "UnitOfWork",
]
