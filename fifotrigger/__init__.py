"""Named-pipe triggers: pull, wait for and listen on FIFO doorbells."""

__version__ = "0.1.0"
__all__ = ["errors", "taia", "scan", "getopt", "pathexec", "sysio", "listen", "pull", "wait"]