"""stakekeeper: keeps stranded DPOS validators eligible by restoring a minimal delegation."""

__version__ = "0.1.0"
