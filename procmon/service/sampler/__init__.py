from .cpu_sampler import CpuSampler

__all__ = ["CpuSampler"]
