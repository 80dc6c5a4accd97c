"""loadtarget: a controllable HTTP target for load and observability tests."""

__version__ = "0.1.0"
